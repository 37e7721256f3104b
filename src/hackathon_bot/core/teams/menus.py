"""Menus de sélection d'équipe (custom id `team`).

Chaque menu recharge l'événement depuis le registre : l'état a pu changer
depuis l'étape précédente de l'interaction.
"""
from __future__ import annotations

from typing import List, Optional

import discord

from hackathon_bot.core.errors import LookupFailed
from .registry import EventsRegistry


def _team_select(options: List[discord.SelectOption]) -> discord.ui.Select:
    return discord.ui.Select(custom_id="team", placeholder="Choisir une équipe", min_values=1, max_values=1, options=options)


async def _menu(registry: EventsRegistry, guild_id: int, event_id: int, *, exclude_user: Optional[int] = None, only_user: Optional[int] = None) -> discord.ui.Select:
    event = await registry.get(guild_id, event_id)
    if event is None:
        raise LookupFailed()
    options = event.teams.options(exclude_user=exclude_user, only_user=only_user)
    # Discord refuse un Select sans option
    if not options:
        raise LookupFailed()
    return _team_select(options)


async def menu(registry: EventsRegistry, guild_id: int, event_id: int) -> discord.ui.Select:
    return await _menu(registry, guild_id, event_id)


async def menu_without_user(registry: EventsRegistry, guild_id: int, event_id: int, user_id: int) -> discord.ui.Select:
    return await _menu(registry, guild_id, event_id, exclude_user=user_id)


async def menu_with_user(registry: EventsRegistry, guild_id: int, event_id: int, user_id: int) -> discord.ui.Select:
    return await _menu(registry, guild_id, event_id, only_user=user_id)


__all__ = ["menu", "menu_without_user", "menu_with_user"]
