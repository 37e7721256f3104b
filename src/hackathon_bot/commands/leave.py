"""
Commande slash `/leave`.

Même parcours que `/join` mais limité aux équipes dont l'utilisateur fait partie :
la visibilité sur les deux salons est retirée puis le membre est enlevé de l'équipe.
"""
from __future__ import annotations

import logging
from typing import Optional

import discord
from discord import app_commands

from hackathon_bot.commands._context import get_registry
from hackathon_bot.commands.join import EVENT_STAGE, TEAM_STAGE
from hackathon_bot.core import config
from hackathon_bot.core.errors import LookupFailed
from hackathon_bot.core.teams import menus
from hackathon_bot.core.teams.channels import revoke_visibility
from hackathon_bot.core.teams.models import TeamId
from hackathon_bot.core.teams.registry import EventsRegistry, build_event_menu
from hackathon_bot.core.teams.selection import SelectPrompt
from hackathon_bot.views import join as join_view

logger = logging.getLogger(__name__)


async def leave_menu(registry: EventsRegistry, guild_id: int, user_id: int) -> Optional[discord.ui.Select]:
    events = [
        e for e in await registry.events(guild_id)
        if any(team.contains(user_id) for _, team in e.teams)
    ]
    return build_event_menu(events)


async def run_leave(interaction: discord.Interaction, registry: EventsRegistry, *, timeout: Optional[float] = None, prompt_factory=SelectPrompt):
    guild = interaction.guild
    user_id = interaction.user.id
    timeout = config.SELECTION_TIMEOUT if timeout is None else timeout

    menu = await leave_menu(registry, guild.id, user_id)
    if menu is None:
        await interaction.response.send_message(join_view.msg_not_in_team(), ephemeral=True)
        return
    prompt = prompt_factory(menu, user_id=user_id, timeout=timeout)
    await interaction.response.send_message(join_view.msg_select_event_leave(), view=prompt, ephemeral=True)
    event_interaction, event_id = await prompt.choice(EVENT_STAGE, nonzero=True)

    team_menu = await menus.menu_with_user(registry, guild.id, event_id, user_id)
    prompt = prompt_factory(team_menu, user_id=user_id, timeout=timeout)
    await event_interaction.response.edit_message(content=join_view.msg_select_team_leave(), view=prompt)
    team_interaction, raw_team_id = await prompt.choice(TEAM_STAGE)
    team_id = TeamId(raw_team_id)
    await team_interaction.response.defer()

    event = await registry.get(guild.id, event_id)
    team = event.teams.get_team(team_id) if event is not None else None
    if event is None or team is None:
        raise LookupFailed()
    await revoke_visibility(guild, team.text_channel, user_id)
    await revoke_visibility(guild, team.vocal_channel, user_id)
    await registry.update(guild, event_id, lambda current: current.teams.remove_participant(team_id, user_id))
    logger.info("%s quitte %s / %s", user_id, event.name, team.name)
    await team_interaction.edit_original_response(content=join_view.msg_left(team.name), view=None)


def register(bot: discord.Client):
    @bot.tree.command(name="leave", description="Quitter une équipe.")
    @app_commands.guild_only()
    async def leave(interaction: discord.Interaction):  # noqa: D401
        await run_leave(interaction, get_registry(interaction))

__all__ = ["register", "run_leave", "leave_menu"]
