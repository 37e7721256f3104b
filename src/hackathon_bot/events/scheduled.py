"""
Handlers des événements programmés Discord.

La suppression d'un événement programmé détruit l'événement hackathon associé.
Les salons d'équipe sont conservés (suppression manuelle via /team delete).
"""
from __future__ import annotations

import logging
import discord

from hackathon_bot.core.errors import LookupFailed

logger = logging.getLogger(__name__)


def setup(bot: discord.Client):
    @bot.event
    async def on_scheduled_event_delete(event: discord.ScheduledEvent):
        registry = getattr(bot, "registry", None)
        if registry is None:
            return
        try:
            removed = await registry.remove_event(event.guild_id, event.id)
            if removed is not None:
                logger.info("Événement programmé supprimé -> retrait %s (%s)", removed.name, event.id)
        except Exception:
            logger.exception("Echec retrait de l'événement %s", event.id)

    @bot.event
    async def on_scheduled_event_update(before: discord.ScheduledEvent, after: discord.ScheduledEvent):
        registry = getattr(bot, "registry", None)
        if registry is None or before.name == after.name:
            return

        def rename(current):
            current.name = after.name

        try:
            await registry.update(after.guild, after.id, rename)
            logger.info("Événement renommé: %s -> %s (%s)", before.name, after.name, after.id)
        except LookupFailed:
            # Événement programmé non enregistré comme hackathon
            return
        except Exception:
            logger.exception("Echec maj nom de l'événement %s", after.id)
