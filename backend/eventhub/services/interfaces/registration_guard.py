"""
Registration guard strategy interface.
Decides whether the count-check-write sequence of a registration runs
serialized per event or open to interleaving.
"""

from abc import ABC, abstractmethod
from typing import AsyncContextManager


class RegistrationGuard(ABC):
    """
    Interface for registration serialization strategies.

    Implementations:
    - EventLockGuard: one asyncio.Lock per event, held for the whole workflow
    - UnguardedRegistration: no serialization, concurrent requests may overbook
    """

    @abstractmethod
    def hold(self, event_id: int) -> AsyncContextManager[None]:
        """
        Return an async context manager covering one registration attempt.

        Args:
            event_id: Event the registration targets
        """
        ...
