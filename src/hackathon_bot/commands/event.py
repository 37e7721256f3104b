"""
Groupe de commandes slash `/event` (register, list, unregister).

Un événement hackathon est toujours adossé à un événement programmé Discord de la guilde.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import discord
from discord import app_commands

from hackathon_bot.commands._context import get_registry
from hackathon_bot.core.permissions import require_perms, MANAGE_EVENTS
from hackathon_bot.core.teams.models import Event, Teams
from hackathon_bot.views import events as events_view

logger = logging.getLogger(__name__)

event_group = app_commands.Group(name="event", description="Gestion des événements hackathon", guild_only=True)


def parse_id(raw: str | None) -> Optional[int]:
    try:
        value = int((raw or "").strip())
    except ValueError:
        return None
    return value if value > 0 else None


@event_group.command(name="register", description="Enregistrer un événement programmé")
@app_commands.describe(evenement="Événement programmé Discord", capacite="Nombre maximum de membres par équipe")
@require_perms(MANAGE_EVENTS, message="Permission « Gérer les événements » requise.")
async def event_register(interaction: discord.Interaction, evenement: str, capacite: int | None = None):
    registry = get_registry(interaction)
    await interaction.response.defer(ephemeral=True)
    event_id = parse_id(evenement)
    scheduled = interaction.guild.get_scheduled_event(event_id) if event_id else None
    if scheduled is None:
        await interaction.followup.send(events_view.msg_event_unknown(), ephemeral=True)
        return
    if capacite is not None and capacite <= 0:
        await interaction.followup.send(events_view.msg_capacity_invalid(), ephemeral=True)
        return
    if await registry.get(interaction.guild.id, scheduled.id) is not None:
        await interaction.followup.send(events_view.msg_event_already(scheduled.name), ephemeral=True)
        return
    event = Event(
        id=scheduled.id,
        guild_id=interaction.guild.id,
        name=scheduled.name,
        description=scheduled.description or "",
        teams=Teams(capacity=capacite),
    )
    await registry.add_event(event)
    await interaction.followup.send(events_view.msg_event_registered(scheduled.name), ephemeral=True)


@event_group.command(name="list", description="Lister les événements et leurs équipes")
async def event_list(interaction: discord.Interaction):
    registry = get_registry(interaction)
    events = await registry.events(interaction.guild.id)
    await interaction.response.send_message(events_view.render_event_list(events), ephemeral=True)


@event_group.command(name="unregister", description="Retirer un événement")
@app_commands.describe(evenement="Événement hackathon à retirer")
@require_perms(MANAGE_EVENTS, message="Permission « Gérer les événements » requise.")
async def event_unregister(interaction: discord.Interaction, evenement: str):
    registry = get_registry(interaction)
    event_id = parse_id(evenement)
    removed = await registry.remove_event(interaction.guild.id, event_id) if event_id else None
    if removed is None:
        await interaction.response.send_message(events_view.msg_event_unknown(), ephemeral=True)
        return
    await interaction.response.send_message(events_view.msg_event_unregistered(removed.name), ephemeral=True)


def scheduled_choices(guild: discord.Guild, current: str) -> List[app_commands.Choice[str]]:
    current_lower = (current or "").lower()
    choices: List[app_commands.Choice[str]] = []
    for scheduled in guild.scheduled_events:
        if current_lower and current_lower not in scheduled.name.lower():
            continue
        choices.append(app_commands.Choice(name=scheduled.name[:100], value=str(scheduled.id)))
        if len(choices) >= 25:
            break
    return choices


async def registered_choices(interaction: discord.Interaction, current: str) -> List[app_commands.Choice[str]]:
    try:
        registry = get_registry(interaction)
    except RuntimeError:
        return []
    if not interaction.guild:
        return []
    current_lower = (current or "").lower()
    return [
        app_commands.Choice(name=e.name[:100] or str(e.id), value=str(e.id))
        for e in await registry.events(interaction.guild.id)
        if not current_lower or current_lower in e.name.lower()
    ][:25]


@event_register.autocomplete("evenement")
async def event_register_ac(interaction: discord.Interaction, current: str):
    if not interaction.guild:
        return []
    return scheduled_choices(interaction.guild, current)


@event_unregister.autocomplete("evenement")
async def event_unregister_ac(interaction: discord.Interaction, current: str):
    return await registered_choices(interaction, current)


def register(bot: discord.Client):
    bot.tree.add_command(event_group)

__all__ = ["register", "parse_id", "registered_choices", "scheduled_choices"]
