"""
Commande slash `/join`.

Parcours en deux menus : choix de l'événement puis choix de l'équipe.
Le membre reçoit ensuite la visibilité sur les salons texte et vocal de l'équipe
et est ajouté à celle-ci (dans la limite de la capacité de l'événement).

Aucune compensation : si une étape échoue, les effets déjà appliqués restent en place.
"""
from __future__ import annotations

import asyncio
import enum
import logging
from typing import Callable, Optional, Tuple

import discord
from discord import app_commands

from hackathon_bot.commands._context import get_registry
from hackathon_bot.core import config
from hackathon_bot.core.errors import CapacityReached, LookupFailed, NoTeamsAvailable
from hackathon_bot.core.teams import menus
from hackathon_bot.core.teams.channels import Overwrite, apply_overwrite
from hackathon_bot.core.teams.models import Event, Participant, TeamId
from hackathon_bot.core.teams.registry import EventsRegistry
from hackathon_bot.core.teams.selection import SelectPrompt
from hackathon_bot.views import join as join_view

logger = logging.getLogger(__name__)

EVENT_STAGE = "Event selection failed."
TEAM_STAGE = "Team selection failed."

PromptFactory = Callable[..., SelectPrompt]


class JoinState(enum.Enum):
    START = "start"
    AWAITING_EVENT_CHOICE = "awaiting_event_choice"
    AWAITING_TEAM_CHOICE = "awaiting_team_choice"
    APPLYING = "applying"
    DONE = "done"
    ABORTED = "aborted"


class JoinWorkflow:
    """Machine à états d'une interaction `/join`.

    Chaque étape relit l'événement dans le registre avant de le muter : un autre
    handler peut l'avoir modifié entre deux points de suspension.
    """

    def __init__(
        self,
        registry: EventsRegistry,
        *,
        timeout: Optional[float] = None,
        hide_joined: Optional[bool] = None,
        prompt_factory: PromptFactory = SelectPrompt,
    ):
        self.registry = registry
        self.timeout = config.SELECTION_TIMEOUT if timeout is None else timeout
        self.hide_joined = config.JOIN_HIDE_JOINED_TEAMS if hide_joined is None else hide_joined
        self.prompt_factory = prompt_factory
        self.state = JoinState.START

    async def run(self, interaction: discord.Interaction) -> JoinState:
        try:
            await self._run(interaction)
        except (Exception, asyncio.CancelledError):
            self.state = JoinState.ABORTED
            raise
        return self.state

    async def _run(self, interaction: discord.Interaction):
        guild = interaction.guild
        try:
            event_interaction, event_id = await self.select_event(interaction)
        except NoTeamsAvailable as exc:
            await interaction.response.send_message(str(exc), ephemeral=True)
            self.state = JoinState.DONE
            return
        team_interaction, team_id = await self.select_team(event_interaction, event_id)
        await team_interaction.response.defer()
        self.state = JoinState.APPLYING
        message = await self.apply(guild, interaction.user, event_id, team_id)
        await team_interaction.edit_original_response(content=message, view=None)
        self.state = JoinState.DONE

    async def select_event(self, interaction: discord.Interaction) -> Tuple[discord.Interaction, int]:
        menu = await self.registry.menu_nonzero_team(interaction.guild.id)
        if menu is None:
            raise NoTeamsAvailable()
        prompt = self.prompt_factory(menu, user_id=interaction.user.id, timeout=self.timeout)
        await interaction.response.send_message(join_view.msg_select_event(), view=prompt, ephemeral=True)
        self.state = JoinState.AWAITING_EVENT_CHOICE
        return await prompt.choice(EVENT_STAGE, nonzero=True)

    async def select_team(self, interaction: discord.Interaction, event_id: int) -> Tuple[discord.Interaction, TeamId]:
        guild_id = interaction.guild.id
        if self.hide_joined:
            menu = await menus.menu_without_user(self.registry, guild_id, event_id, interaction.user.id)
        else:
            menu = await menus.menu(self.registry, guild_id, event_id)
        prompt = self.prompt_factory(menu, user_id=interaction.user.id, timeout=self.timeout)
        await interaction.response.edit_message(content=join_view.msg_select_team(), view=prompt)
        self.state = JoinState.AWAITING_TEAM_CHOICE
        component, team_id = await prompt.choice(TEAM_STAGE)
        return component, TeamId(team_id)

    async def apply(self, guild: discord.Guild, user: discord.abc.User, event_id: int, team_id: TeamId) -> str:
        event = await self.registry.get(guild.id, event_id)
        if event is None:
            raise LookupFailed()
        team = event.teams.get_team(team_id)
        if team is None:
            raise LookupFailed()

        participant = Participant.from_user(user)
        overwrite = Overwrite.view_channel(participant.id)
        reason = f"Rejoint l'équipe {team.name}"
        await apply_overwrite(guild, team.text_channel, overwrite, reason=reason)
        try:
            await apply_overwrite(guild, team.vocal_channel, overwrite, reason=reason)
        except discord.HTTPException:
            logger.warning(
                "Visibilité partielle pour %s sur l'équipe %s (salon texte %s seulement)",
                participant.id, team.name, team.text_channel,
            )
            raise

        def join_team(current: Event) -> str:
            # Relu sous verrou : l'équipe a pu être supprimée pendant les éditions de salons
            if current.teams.get_team(team_id) is None:
                raise LookupFailed()
            try:
                current.teams.add_participant(team_id, participant)
            except CapacityReached as error:
                logger.info("%s refusé dans %s: capacité atteinte", participant.id, team.name)
                return join_view.msg_not_joined(error)
            logger.info("%s (%s) rejoint %s / %s", participant.display, participant.id, current.name, team.name)
            return join_view.msg_joined(team.name)

        _, message = await self.registry.update(guild, event_id, join_team)
        return message


def register(bot: discord.Client):
    @bot.tree.command(name="join", description="Join a team.")
    @app_commands.guild_only()
    async def join(interaction: discord.Interaction):  # noqa: D401
        await JoinWorkflow(get_registry(interaction)).run(interaction)

__all__ = ["register", "JoinWorkflow", "JoinState", "EVENT_STAGE", "TEAM_STAGE"]
