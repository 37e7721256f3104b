"""
Verrou lecteurs/écrivain asynchrone.

Les lectures peuvent se chevaucher, les écritures sont exclusives.
Un écrivain en attente bloque les nouveaux lecteurs (pas de famine d'écriture).
"""
from __future__ import annotations

import asyncio


class _Side:
    def __init__(self, acquire, release):
        self._acquire = acquire
        self._release = release

    async def __aenter__(self):
        await self._acquire()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self._release()
        return False


class AsyncRWLock:
    def __init__(self):
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0
        self.reader = _Side(self._acquire_read, self._release_read)
        self.writer = _Side(self._acquire_write, self._release_write)

    @property
    def locked(self) -> bool:
        return self._writer or self._readers > 0

    async def _acquire_read(self):
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writer and self._waiting_writers == 0)
            self._readers += 1

    async def _release_read(self):
        async with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    async def _acquire_write(self):
        async with self._cond:
            self._waiting_writers += 1
            try:
                await self._cond.wait_for(lambda: not self._writer and self._readers == 0)
            finally:
                self._waiting_writers -= 1
                # Réveille les lecteurs si l'attente a été annulée
                self._cond.notify_all()
            self._writer = True

    async def _release_write(self):
        async with self._cond:
            self._writer = False
            self._cond.notify_all()


__all__ = ["AsyncRWLock"]
