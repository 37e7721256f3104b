"""
Réponse de composant attendable (menus `/join` et `/leave`).

`SelectPrompt` est une vue contenant un seul Select. `choice(stage)` attend la
prochaine sélection de l'utilisateur ayant lancé la commande :
- délai dépassé -> la vue est arrêtée et `SelectionFailed(stage)` est levée
- tâche annulée -> la vue est arrêtée, l'annulation se propage
- valeur non entière (ou nulle si `nonzero`) ou mauvais type de composant -> `SelectionFailed(stage)`

L'interaction de composant retournée n'a pas encore reçu de réponse : l'appelant
doit répondre (edit_message / defer).
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional, Tuple

import discord

from hackathon_bot.core.errors import SelectionFailed
from hackathon_bot.views.join import msg_not_for_you

logger = logging.getLogger(__name__)


def parse_choice(data: Optional[Mapping[str, Any]], stage: str, *, nonzero: bool = False) -> int:
    """Extrait la première valeur d'une interaction StringSelect sous forme d'entier."""
    if not data or data.get("component_type") != discord.ComponentType.string_select.value:
        raise SelectionFailed(stage)
    values = data.get("values") or []
    if not values:
        raise SelectionFailed(stage)
    try:
        value = int(values[0])
    except (TypeError, ValueError):
        raise SelectionFailed(stage) from None
    if value < 0 or (nonzero and value == 0):
        raise SelectionFailed(stage)
    return value


class SelectPrompt(discord.ui.View):
    def __init__(self, menu: discord.ui.Select, *, user_id: int, timeout: float):
        super().__init__(timeout=timeout)
        self.user_id = user_id
        self.menu = menu
        self._answer: asyncio.Future = asyncio.get_running_loop().create_future()
        menu.callback = self._on_select  # type: ignore[assignment]
        self.add_item(menu)

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id != self.user_id:
            await interaction.response.send_message(msg_not_for_you(), ephemeral=True)
            return False
        return True

    async def _on_select(self, interaction: discord.Interaction):
        if not self._answer.done():
            self._answer.set_result(interaction)
        self.stop()

    async def choice(self, stage: str, *, nonzero: bool = False) -> Tuple[discord.Interaction, int]:
        try:
            interaction = await asyncio.wait_for(self._answer, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.debug("Pas de réponse au menu %s (%s)", self.menu.custom_id, stage)
            raise SelectionFailed(stage) from None
        finally:
            self.stop()
        return interaction, parse_choice(interaction.data, stage, nonzero=nonzero)


__all__ = ["SelectPrompt", "parse_choice"]
