from __future__ import annotations

import copy
import logging
from typing import Callable, Dict, List, Optional, Tuple, TypeVar

import discord

from hackathon_bot.core.errors import LookupFailed
from hackathon_bot.core.locks import AsyncRWLock
from hackathon_bot.core.store import DocumentStore
from hackathon_bot.views.events import render_event_description
from .models import MAX_SELECT_OPTIONS, Event

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EventsRegistry:
    """Propriétaire unique des événements hackathon, indexés par guilde puis par id.

    Responsabilités:
        - Chargement au démarrage et sauvegarde à l'arrêt (store JSON ou PostgreSQL).
        - Lectures par copie (snapshot) sous verrou lecteur.
        - Mutations et persistance complètes sous verrou écrivain.
        - Rendu Discord (description de l'événement programmé) après persistance.
    """

    def __init__(self, store: DocumentStore):
        self.store = store
        self.lock = AsyncRWLock()
        self._events: Dict[int, Dict[int, Event]] = {}

    async def load(self):
        document = await self.store.load() or {}
        events: Dict[int, Dict[int, Event]] = {}
        for guild_key, guild_events in document.items():
            try:
                events[int(guild_key)] = {int(k): Event.from_dict(v) for k, v in guild_events.items()}
            except (KeyError, TypeError, ValueError):
                logger.exception("Événements illisibles pour la guilde %s, ignorés", guild_key)
        async with self.lock.writer:
            self._events = events
        logger.info("Événements chargés: %s (%s guildes)", sum(len(v) for v in events.values()), len(events))

    def to_dict(self) -> Dict[str, Dict[str, dict]]:
        return {
            str(guild_id): {str(event_id): event.to_dict() for event_id, event in guild_events.items()}
            for guild_id, guild_events in self._events.items()
        }

    async def _persist(self):
        # Appelé verrou écrivain tenu
        await self.store.save(self.to_dict())

    async def flush(self):
        async with self.lock.writer:
            await self._persist()
        logger.info("Événements sauvegardés (%r)", self.store)

    # ---------- lectures ----------
    async def get(self, guild_id: int, event_id: int) -> Optional[Event]:
        async with self.lock.reader:
            event = self._events.get(guild_id, {}).get(event_id)
            return copy.deepcopy(event) if event is not None else None

    async def events(self, guild_id: int) -> List[Event]:
        async with self.lock.reader:
            snapshot = [copy.deepcopy(e) for e in self._events.get(guild_id, {}).values()]
        return sorted(snapshot, key=lambda e: (e.name.lower(), e.id))

    async def menu_nonzero_team(self, guild_id: int) -> Optional[discord.ui.Select]:
        events = [e for e in await self.events(guild_id) if len(e.teams) > 0]
        return build_event_menu(events)

    # ---------- mutations ----------
    async def add_event(self, event: Event):
        async with self.lock.writer:
            self._events.setdefault(event.guild_id, {})[event.id] = copy.deepcopy(event)
            await self._persist()
        logger.info("Événement enregistré %s (guild %s)", event.id, event.guild_id)

    async def remove_event(self, guild_id: int, event_id: int) -> Optional[Event]:
        async with self.lock.writer:
            guild_events = self._events.get(guild_id, {})
            removed = guild_events.pop(event_id, None)
            if removed is None:
                return None
            if not guild_events:
                self._events.pop(guild_id, None)
            await self._persist()
        logger.info("Événement supprimé %s (guild %s)", event_id, guild_id)
        return removed

    async def refresh_event(self, guild: discord.Guild, event: Event):
        """Persiste l'état muté de l'événement puis met à jour sa description Discord.

        L'événement doit toujours être enregistré : un événement retiré entre-temps
        n'est pas recréé (`LookupFailed`).
        """
        async with self.lock.writer:
            guild_events = self._events.get(event.guild_id, {})
            if event.id not in guild_events:
                raise LookupFailed()
            guild_events[event.id] = copy.deepcopy(event)
            await self._persist()
        await self._render(guild, event)

    async def update(self, guild: discord.Guild, event_id: int, mutate: Callable[[Event], T]) -> Tuple[Event, T]:
        """Applique `mutate` à l'état courant de l'événement, verrou écrivain tenu, puis persiste.

        `mutate` travaille sur une copie qui ne remplace l'état courant que si
        elle se termine sans exception. Retourne la copie mutée et le résultat de `mutate`.
        """
        async with self.lock.writer:
            guild_events = self._events.get(guild.id, {})
            current = guild_events.get(event_id)
            if current is None:
                raise LookupFailed()
            event = copy.deepcopy(current)
            result = mutate(event)
            guild_events[event_id] = event
            await self._persist()
            snapshot = copy.deepcopy(event)
        await self._render(guild, snapshot)
        return snapshot, result

    async def _render(self, guild: discord.Guild, event: Event):
        scheduled = guild.get_scheduled_event(event.id)
        if scheduled is None:
            logger.debug("Événement programmé %s absent du cache, rendu ignoré", event.id)
            return
        description = render_event_description(event)
        if (scheduled.description or "") == description:
            return
        try:
            await scheduled.edit(description=description, reason="Mise à jour des équipes")
        except discord.HTTPException:
            logger.exception("Impossible de mettre à jour la description de l'événement %s", event.id)


def build_event_menu(events: List[Event]) -> Optional[discord.ui.Select]:
    if not events:
        return None
    options = [
        discord.SelectOption(label=e.name[:100] or str(e.id), value=str(e.id))
        for e in events[:MAX_SELECT_OPTIONS]
    ]
    return discord.ui.Select(custom_id="event", placeholder="Choisir un événement", min_values=1, max_values=1, options=options)


__all__ = ["EventsRegistry", "build_event_menu"]
