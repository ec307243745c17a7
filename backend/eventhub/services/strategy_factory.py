"""
Registration guard factory.
Configures which serialization strategy the registration workflow uses.
"""

from typing import Optional

from eventhub.services.interfaces import RegistrationGuard, EventLockGuard, UnguardedRegistration
from eventhub.core.config import get_settings

GUARDS = {
    "lock": EventLockGuard,
    "none": UnguardedRegistration,
}


def build_registration_guard(name: str) -> RegistrationGuard:
    """
    Build a guard by name.

    - "lock": per-event asyncio.Lock (default, single worker process)
    - "none": unserialized, reproduces the check-then-write race
    """
    try:
        return GUARDS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown REGISTRATION_GUARD {name!r}, expected one of {sorted(GUARDS)}") from None


# Singleton instance: locks must be shared by every request in the process
_guard: Optional[RegistrationGuard] = None


def get_registration_guard() -> RegistrationGuard:
    """Get registration guard singleton."""
    global _guard
    if _guard is None:
        _guard = build_registration_guard(get_settings().REGISTRATION_GUARD)
    return _guard
