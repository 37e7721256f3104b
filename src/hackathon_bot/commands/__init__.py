"""
Commandes slash du bot hackathon.

Chaque module de ce package (hors _*) expose `register(bot)`, qui attache ses
commandes ou groupes au `bot.tree`. `load_all_commands(bot)` les enregistre tous
dans l'ordre alphabétique ; un module en échec est journalisé sans bloquer les autres.
"""
from __future__ import annotations

import importlib
import pkgutil
import logging
import discord

logger = logging.getLogger(__name__)


def _command_modules() -> list[str]:
	return sorted(m.name for m in pkgutil.iter_modules(__path__) if not m.name.startswith('_'))  # type: ignore[name-defined]


async def load_all_commands(bot: discord.Client):
	failed: list[str] = []
	for name in _command_modules():
		full_name = f"{__name__}.{name}"
		try:
			register = getattr(importlib.import_module(full_name), 'register', None)
			if register is None:
				logger.debug("Module %s sans register(), ignoré", full_name)
				continue
			result = register(bot)
			if hasattr(result, '__await__'):
				await result
		except Exception:  # noqa: BLE001
			logger.exception("Echec chargement commande %s", full_name)
			failed.append(name)
	if failed:
		logger.warning("Commandes non chargées: %s", ", ".join(failed))
	logger.info("Commandes enregistrées: %s", ", ".join(c.name for c in bot.tree.get_commands()) or "(aucune)")

__all__ = ["load_all_commands"]
