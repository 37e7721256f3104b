"""Tests for the events registry: snapshots, persistence, rendering and menus."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from conftest import EVENT_ID, GUILD_ID, make_event, make_team
from hackathon_bot.core.errors import CapacityReached, LookupFailed
from hackathon_bot.core.store import JsonFileStore
from hackathon_bot.core.teams import menus
from hackathon_bot.core.teams.models import Participant, TeamId
from hackathon_bot.core.teams.registry import EventsRegistry
from hackathon_bot.views.events import render_event_description


@pytest.mark.asyncio
async def test_get_returns_snapshot(registry: EventsRegistry) -> None:
    await registry.add_event(make_event(make_team()))
    snapshot = await registry.get(GUILD_ID, EVENT_ID)
    snapshot.teams.add_participant(TeamId(0), Participant(1, "a"))
    fresh = await registry.get(GUILD_ID, EVENT_ID)
    assert fresh.teams.get_team(TeamId(0)).members == []


@pytest.mark.asyncio
async def test_get_unknown(registry: EventsRegistry) -> None:
    assert await registry.get(GUILD_ID, 5) is None
    assert await registry.get(999, EVENT_ID) is None


@pytest.mark.asyncio
async def test_refresh_persists_and_reloads_equal(registry: EventsRegistry, events_path: Path, guild: MagicMock) -> None:
    event = make_event(make_team("A", members=(1, 2)), make_team("B", members=(3,), text=101, voice=201), capacity=5)
    await registry.add_event(make_event())
    await registry.refresh_event(guild, event)

    reloaded = EventsRegistry(JsonFileStore(events_path))
    await reloaded.load()
    assert await reloaded.get(GUILD_ID, EVENT_ID) == event
    assert reloaded.to_dict() == registry.to_dict()


@pytest.mark.asyncio
async def test_refresh_is_idempotent(registry: EventsRegistry, events_path: Path, guild: MagicMock) -> None:
    event = make_event(make_team(members=(1,)))
    await registry.add_event(make_event())
    await registry.refresh_event(guild, event)
    first = events_path.read_text(encoding="utf-8")
    await registry.refresh_event(guild, event)
    assert events_path.read_text(encoding="utf-8") == first


@pytest.mark.asyncio
async def test_document_layout(registry: EventsRegistry, events_path: Path) -> None:
    await registry.add_event(make_event(make_team()))
    document = json.loads(events_path.read_text(encoding="utf-8"))
    assert list(document) == [str(GUILD_ID)]
    assert document[str(GUILD_ID)][str(EVENT_ID)]["teams"]["teams"]["0"]["text_channel"] == 100


@pytest.mark.asyncio
async def test_refresh_edits_scheduled_event_description(registry: EventsRegistry, guild: MagicMock) -> None:
    scheduled = MagicMock(spec=discord.ScheduledEvent)
    scheduled.description = "Hackathon de printemps"
    scheduled.edit = AsyncMock()
    guild.get_scheduled_event.return_value = scheduled
    event = make_event(make_team("A", members=(1,)))
    await registry.add_event(make_event())

    await registry.refresh_event(guild, event)

    guild.get_scheduled_event.assert_called_once_with(EVENT_ID)
    scheduled.edit.assert_awaited_once()
    description = scheduled.edit.await_args.kwargs["description"]
    assert description == render_event_description(event)
    assert "**A**: Équipe A\nParticipants: user1" in description


@pytest.mark.asyncio
async def test_refresh_rendering_failure_is_not_fatal(registry: EventsRegistry, guild: MagicMock) -> None:
    scheduled = MagicMock(spec=discord.ScheduledEvent)
    scheduled.description = ""
    scheduled.edit = AsyncMock(side_effect=discord.Forbidden(MagicMock(status=403, reason="Forbidden"), "Missing Permissions"))
    guild.get_scheduled_event.return_value = scheduled
    event = make_event(make_team())
    await registry.add_event(make_event())

    await registry.refresh_event(guild, event)

    assert await registry.get(GUILD_ID, EVENT_ID) == event


@pytest.mark.asyncio
async def test_refresh_does_not_recreate_removed_event(registry: EventsRegistry, events_path: Path, guild: MagicMock) -> None:
    await registry.add_event(make_event(make_team()))
    stale = await registry.get(GUILD_ID, EVENT_ID)
    await registry.remove_event(GUILD_ID, EVENT_ID)

    with pytest.raises(LookupFailed):
        await registry.refresh_event(guild, stale)

    assert await registry.get(GUILD_ID, EVENT_ID) is None
    assert json.loads(events_path.read_text(encoding="utf-8")) == {}


class TestUpdate:
    @pytest.mark.asyncio
    async def test_mutates_live_state(self, registry: EventsRegistry, guild: MagicMock) -> None:
        await registry.add_event(make_event(make_team(members=(1,))))
        stale = await registry.get(GUILD_ID, EVENT_ID)
        await registry.update(guild, EVENT_ID, lambda e: e.teams.add_participant(TeamId(0), Participant(2, "b")))

        snapshot, result = await registry.update(guild, EVENT_ID, lambda e: e.teams.add_participant(TeamId(0), Participant(3, "c")))

        assert result is None
        assert [p.id for p in snapshot.teams.get_team(TeamId(0)).members] == [1, 2, 3]
        assert stale.teams.get_team(TeamId(0)).members == [Participant(1, "")]
        current = await registry.get(GUILD_ID, EVENT_ID)
        assert current == snapshot

    @pytest.mark.asyncio
    async def test_persists_and_renders(self, registry: EventsRegistry, events_path: Path, guild: MagicMock) -> None:
        await registry.add_event(make_event())
        _, team_id = await registry.update(guild, EVENT_ID, lambda e: e.teams.add_team(make_team("A")))
        document = json.loads(events_path.read_text(encoding="utf-8"))
        assert document[str(GUILD_ID)][str(EVENT_ID)]["teams"]["teams"][str(team_id)]["name"] == "A"
        guild.get_scheduled_event.assert_called_once_with(EVENT_ID)

    @pytest.mark.asyncio
    async def test_failed_mutation_keeps_state(self, registry: EventsRegistry, guild: MagicMock) -> None:
        await registry.add_event(make_event(make_team(members=(1,)), capacity=1))
        before = registry.to_dict()

        def overfill(event):
            event.teams.add_team(make_team("B"))
            event.teams.add_participant(TeamId(0), Participant(2, "b"))

        with pytest.raises(CapacityReached):
            await registry.update(guild, EVENT_ID, overfill)
        assert registry.to_dict() == before

    @pytest.mark.asyncio
    async def test_unknown_event(self, registry: EventsRegistry, events_path: Path, guild: MagicMock) -> None:
        mutate = MagicMock()
        with pytest.raises(LookupFailed):
            await registry.update(guild, EVENT_ID, mutate)
        mutate.assert_not_called()
        assert registry.to_dict() == {}
        assert not events_path.exists()


@pytest.mark.asyncio
async def test_remove_event(registry: EventsRegistry) -> None:
    await registry.add_event(make_event())
    removed = await registry.remove_event(GUILD_ID, EVENT_ID)
    assert removed.id == EVENT_ID
    assert await registry.get(GUILD_ID, EVENT_ID) is None
    assert await registry.remove_event(GUILD_ID, EVENT_ID) is None
    assert registry.to_dict() == {}


@pytest.mark.asyncio
async def test_events_sorted_by_name(registry: EventsRegistry) -> None:
    await registry.add_event(make_event(event_id=2, name="Zeta"))
    await registry.add_event(make_event(event_id=3, name="alpha"))
    assert [e.name for e in await registry.events(GUILD_ID)] == ["alpha", "Zeta"]


@pytest.mark.asyncio
async def test_load_missing_file_is_empty(tmp_path: Path) -> None:
    registry = EventsRegistry(JsonFileStore(tmp_path / "absent.json"))
    await registry.load()
    assert await registry.events(GUILD_ID) == []


class TestMenus:
    @pytest.mark.asyncio
    async def test_menu_nonzero_team_empty_registry(self, registry: EventsRegistry) -> None:
        assert await registry.menu_nonzero_team(GUILD_ID) is None

    @pytest.mark.asyncio
    async def test_menu_nonzero_team_skips_events_without_teams(self, registry: EventsRegistry) -> None:
        await registry.add_event(make_event(event_id=10, name="Vide"))
        assert await registry.menu_nonzero_team(GUILD_ID) is None
        await registry.add_event(make_event(make_team(), event_id=11, name="Plein"))
        menu = await registry.menu_nonzero_team(GUILD_ID)
        assert menu.custom_id == "event"
        assert [(o.label, o.value) for o in menu.options] == [("Plein", "11")]

    @pytest.mark.asyncio
    async def test_team_menu(self, registry: EventsRegistry) -> None:
        await registry.add_event(make_event(make_team("A"), make_team("B")))
        menu = await menus.menu(registry, GUILD_ID, EVENT_ID)
        assert menu.custom_id == "team"
        assert sorted((o.label, o.value) for o in menu.options) == [("A", "0"), ("B", "1")]

    @pytest.mark.asyncio
    async def test_team_menu_without_user(self, registry: EventsRegistry) -> None:
        await registry.add_event(make_event(make_team("A", members=(42,)), make_team("B")))
        menu = await menus.menu_without_user(registry, GUILD_ID, EVENT_ID, 42)
        assert [o.label for o in menu.options] == ["B"]

    @pytest.mark.asyncio
    async def test_team_menu_with_user(self, registry: EventsRegistry) -> None:
        await registry.add_event(make_event(make_team("A", members=(42,)), make_team("B")))
        menu = await menus.menu_with_user(registry, GUILD_ID, EVENT_ID, 42)
        assert [o.label for o in menu.options] == ["A"]

    @pytest.mark.asyncio
    async def test_team_menu_unknown_event(self, registry: EventsRegistry) -> None:
        with pytest.raises(LookupFailed):
            await menus.menu(registry, GUILD_ID, 404)
