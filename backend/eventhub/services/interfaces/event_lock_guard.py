"""
Per-event lock guard: the single-writer serialization point for registrations.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from eventhub.services.interfaces.registration_guard import RegistrationGuard


class EventLockGuard(RegistrationGuard):
    """
    Serialize registrations per event inside this process.

    Two requests for the same event run one after the other; requests for
    different events do not wait on each other. Only valid for a single
    worker process, since the locks live in memory.

    A lock is dropped once its last holder or waiter leaves, so ids that
    are never seen again (unknown or deleted events) do not pile up.
    """

    def __init__(self):
        self._locks: dict[int, asyncio.Lock] = {}
        self._users: dict[int, int] = {}

    @property
    def tracked_events(self) -> int:
        """Number of events with a live lock."""
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, event_id: int) -> AsyncIterator[None]:
        lock = self._locks.get(event_id)
        if lock is None:
            lock = self._locks[event_id] = asyncio.Lock()
        self._users[event_id] = self._users.get(event_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[event_id] -= 1
            if self._users[event_id] == 0:
                del self._users[event_id]
                del self._locks[event_id]
