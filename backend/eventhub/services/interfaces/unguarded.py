"""
No serialization: the read-check-write sequence is left open.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from eventhub.services.interfaces.registration_guard import RegistrationGuard


class UnguardedRegistration(RegistrationGuard):
    """
    Pass-through guard.

    Two concurrent registrations can read the same ticket count, both pass
    the capacity check and together overbook the event.
    """

    @asynccontextmanager
    async def hold(self, event_id: int) -> AsyncIterator[None]:
        yield
