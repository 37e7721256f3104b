"""Shared test fixtures.

All Discord objects are mocked — no real Discord connection required.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from hackathon_bot.core.errors import SelectionFailed
from hackathon_bot.core.store import JsonFileStore
from hackathon_bot.core.teams.models import Event, Participant, Team, Teams
from hackathon_bot.core.teams.preference import Preference
from hackathon_bot.core.teams.registry import EventsRegistry
from hackathon_bot.core.teams.selection import parse_choice

GUILD_ID = 1
EVENT_ID = 1001


def make_user(user_id: int = 42, display_name: str = "U") -> MagicMock:
    user = MagicMock(spec=discord.Member)
    user.id = user_id
    user.name = display_name.lower()
    user.display_name = display_name
    return user


def make_channel(channel_id: int) -> AsyncMock:
    channel = AsyncMock(spec=discord.TextChannel)
    channel.id = channel_id
    return channel


def make_guild(channels: Optional[Dict[int, Any]] = None, guild_id: int = GUILD_ID) -> MagicMock:
    """Guild whose channel cache is `channels` and without scheduled events cached."""
    channels = channels if channels is not None else {}
    guild = MagicMock(spec=discord.Guild)
    guild.id = guild_id
    guild.get_channel = MagicMock(side_effect=lambda cid: channels.get(cid))
    guild.fetch_channel = AsyncMock(side_effect=discord.NotFound(MagicMock(status=404, reason="Not Found"), "Unknown Channel"))
    guild.get_scheduled_event = MagicMock(return_value=None)
    return guild


def make_interaction(guild: MagicMock, user: Optional[MagicMock] = None) -> MagicMock:
    """Slash command interaction mock."""
    interaction = MagicMock(spec=discord.Interaction)
    interaction.guild = guild
    interaction.user = user or make_user()
    interaction.response = AsyncMock()
    interaction.followup = AsyncMock()
    interaction.edit_original_response = AsyncMock()
    return interaction


def make_component(guild: MagicMock, values: List[str], user: Optional[MagicMock] = None, component_type: int = 3) -> MagicMock:
    """Component interaction mock carrying a StringSelect answer (component_type 3)."""
    interaction = make_interaction(guild, user)
    interaction.data = {"component_type": component_type, "custom_id": "x", "values": values}
    return interaction


class _ScriptedPrompt:
    def __init__(self, answer, hook: Optional[Callable[[], Awaitable[None]]]):
        self.answer = answer
        self.hook = hook

    async def choice(self, stage: str, *, nonzero: bool = False):
        if self.hook is not None:
            await self.hook()
        if self.answer is None:
            # Pas de réponse : même contrat que SelectPrompt après délai
            raise SelectionFailed(stage)
        return self.answer, parse_choice(self.answer.data, stage, nonzero=nonzero)


class ScriptedPrompts:
    """Stands in for SelectPrompt: each created prompt answers with the next scripted interaction.

    `None` means the user never answered. `hooks[i]` runs when prompt `i` is awaited,
    before it answers (simulates another handler mutating state in between).
    """

    def __init__(self, answers: List[Any], hooks: Optional[Dict[int, Callable[[], Awaitable[None]]]] = None):
        self.answers = list(answers)
        self.hooks = hooks or {}
        self.menus: List[discord.ui.Select] = []

    def __call__(self, menu: discord.ui.Select, *, user_id: int, timeout: float):
        index = len(self.menus)
        self.menus.append(menu)
        return _ScriptedPrompt(self.answers[index], self.hooks.get(index))


def make_event(*teams: Team, capacity: Optional[int] = None, event_id: int = EVENT_ID, name: str = "E1") -> Event:
    event = Event(id=event_id, guild_id=GUILD_ID, name=name, description="Hackathon de printemps", teams=Teams(capacity=capacity))
    for team in teams:
        event.teams.add_team(team)
    return event


def make_team(name: str = "T0", members=(), text: int = 100, voice: int = 200) -> Team:
    return Team(name=name, description=f"Équipe {name}", members=[Participant(m, f"user{m}") for m in members], text_channel=text, vocal_channel=voice)


@pytest.fixture
def events_path(tmp_path: Path) -> Path:
    return tmp_path / "events.json"


@pytest.fixture
def registry(events_path: Path) -> EventsRegistry:
    return EventsRegistry(JsonFileStore(events_path))


@pytest.fixture
def preference(tmp_path: Path) -> Preference:
    return Preference(JsonFileStore(tmp_path / "preference.json"))


@pytest.fixture
def channels() -> Dict[int, AsyncMock]:
    return {100: make_channel(100), 200: make_channel(200)}


@pytest.fixture
def guild(channels: Dict[int, AsyncMock]) -> MagicMock:
    return make_guild(channels)
