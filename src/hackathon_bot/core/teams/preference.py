from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Optional

from hackathon_bot.core.locks import AsyncRWLock
from hackathon_bot.core.store import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class PreferenceData:
    hackathon_channel: Optional[int] = None
    hackathon_category: Optional[int] = None


def _as_id(value) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


class Preference:
    """Préférences globales : salon d'annonces et catégorie des salons d'équipe."""

    def __init__(self, store: DocumentStore):
        self.store = store
        self.lock = AsyncRWLock()
        self.data = PreferenceData()

    async def load(self):
        document = await self.store.load() or {}
        data = PreferenceData(
            hackathon_channel=_as_id(document.get("hackathon_channel")),
            hackathon_category=_as_id(document.get("hackathon_category")),
        )
        async with self.lock.writer:
            self.data = data
        logger.info("Préférences chargées: %s", asdict(data))

    async def flush(self):
        async with self.lock.writer:
            await self.store.save(asdict(self.data))

    async def get_hackathon_channel(self) -> Optional[int]:
        async with self.lock.reader:
            return self.data.hackathon_channel

    async def edit_hackathon_channel(self, channel_id: int):
        async with self.lock.writer:
            self.data.hackathon_channel = channel_id
            await self.store.save(asdict(self.data))

    async def get_hackathon_category(self) -> Optional[int]:
        async with self.lock.reader:
            return self.data.hackathon_category

    async def edit_hackathon_category(self, category_id: int):
        async with self.lock.writer:
            self.data.hackathon_category = category_id
            await self.store.save(asdict(self.data))


__all__ = ["Preference", "PreferenceData"]
