"""
Groupe de commandes slash `/team` (create, delete).

La création provisionne un salon texte et un salon vocal privés dans la catégorie
hackathon ; les membres y gagnent la visibilité via `/join`.
"""
from __future__ import annotations

import logging
from typing import List

import discord
from discord import app_commands

from hackathon_bot.commands._context import get_preference, get_registry
from hackathon_bot.commands.event import parse_id, registered_choices
from hackathon_bot.core.errors import LookupFailed
from hackathon_bot.core.permissions import require_perms, MANAGE_CHANNELS
from hackathon_bot.core.teams.channels import delete_team_channels, provision_team_channels
from hackathon_bot.core.teams.models import Team, TeamId
from hackathon_bot.views import events as events_view
from hackathon_bot.views import teams as teams_view

logger = logging.getLogger(__name__)

MAX_TEAM_NAME = 80

team_group = app_commands.Group(name="team", description="Gestion des équipes", guild_only=True)


async def announce(guild: discord.Guild, channel_id: int | None, text: str):
    if not channel_id:
        return
    channel = guild.get_channel(channel_id)
    if not isinstance(channel, (discord.TextChannel, discord.Thread)):
        return
    try:
        await channel.send(text)
    except discord.HTTPException:
        logger.exception("Echec annonce dans %s", channel_id)


@team_group.command(name="create", description="Créer une équipe et ses salons")
@app_commands.describe(evenement="Événement hackathon", nom="Nom de l'équipe (1 à 80 caractères)", description="Description de l'équipe")
@require_perms(MANAGE_CHANNELS, message="Permission « Gérer les salons » requise.")
async def team_create(interaction: discord.Interaction, evenement: str, nom: str, description: str = ""):
    registry = get_registry(interaction)
    preference = get_preference(interaction)
    guild = interaction.guild
    await interaction.response.defer(ephemeral=True)

    nom = nom.strip()
    if not 1 <= len(nom) <= MAX_TEAM_NAME:
        await interaction.followup.send(teams_view.msg_team_name_invalid(MAX_TEAM_NAME), ephemeral=True)
        return
    category_id = await preference.get_hackathon_category()
    category = guild.get_channel(category_id) if category_id else None
    if not isinstance(category, discord.CategoryChannel):
        await interaction.followup.send(teams_view.msg_no_category(), ephemeral=True)
        return
    event_id = parse_id(evenement)
    event = await registry.get(guild.id, event_id) if event_id else None
    if event is None:
        await interaction.followup.send(events_view.msg_event_unknown(), ephemeral=True)
        return

    text, voice = await provision_team_channels(guild, nom, category)
    team = Team(name=nom, description=description, members=[], text_channel=text.id, vocal_channel=voice.id)
    try:
        event, team_id = await registry.update(guild, event_id, lambda current: current.teams.add_team(team))
    except LookupFailed:
        # Événement retiré pendant la création des salons
        await delete_team_channels(guild, team)
        raise
    logger.info("Équipe %s (%s) créée pour %s par %s", nom, team_id, event.name, interaction.user.id)

    await announce(guild, await preference.get_hackathon_channel(), teams_view.msg_team_announce(nom, description, event.name))
    await interaction.followup.send(teams_view.msg_team_created(nom, event.name), ephemeral=True)


@team_group.command(name="delete", description="Supprimer une équipe et ses salons")
@app_commands.describe(evenement="Événement hackathon", equipe="Équipe à supprimer")
@require_perms(MANAGE_CHANNELS, message="Permission « Gérer les salons » requise.")
async def team_delete(interaction: discord.Interaction, evenement: str, equipe: str):
    registry = get_registry(interaction)
    guild = interaction.guild
    await interaction.response.defer(ephemeral=True)

    event_id = parse_id(evenement)
    try:
        team_id = TeamId(int(equipe))
    except ValueError:
        team_id = None
    try:
        if event_id is None:
            raise LookupFailed()
        event, team = await registry.update(guild, event_id, lambda current: current.teams.delete(team_id) if team_id is not None else None)
    except LookupFailed:
        await interaction.followup.send(events_view.msg_event_unknown(), ephemeral=True)
        return
    if team is None:
        await interaction.followup.send(teams_view.msg_team_unknown(), ephemeral=True)
        return
    await delete_team_channels(guild, team)
    logger.info("Équipe %s supprimée de %s par %s", team.name, event.name, interaction.user.id)
    await interaction.followup.send(teams_view.msg_team_deleted(team.name), ephemeral=True)


@team_create.autocomplete("evenement")
async def team_create_event_ac(interaction: discord.Interaction, current: str):
    return await registered_choices(interaction, current)


@team_delete.autocomplete("evenement")
async def team_delete_event_ac(interaction: discord.Interaction, current: str):
    return await registered_choices(interaction, current)


@team_delete.autocomplete("equipe")
async def team_delete_team_ac(interaction: discord.Interaction, current: str) -> List[app_commands.Choice[str]]:
    if not interaction.guild:
        return []
    # Valeur déjà saisie pour l'option `evenement`
    event_id = parse_id(str(getattr(interaction.namespace, "evenement", "") or ""))
    if not event_id:
        return []
    event = await get_registry(interaction).get(interaction.guild.id, event_id)
    if event is None:
        return []
    current_lower = (current or "").lower()
    return [
        app_commands.Choice(name=team.name[:100], value=str(team_id))
        for team_id, team in event.teams
        if not current_lower or current_lower in team.name.lower()
    ][:25]


def register(bot: discord.Client):
    bot.tree.add_command(team_group)

__all__ = ["register", "announce"]
