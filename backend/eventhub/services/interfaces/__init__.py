"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .registration_guard import RegistrationGuard
from .event_lock_guard import EventLockGuard
from .unguarded import UnguardedRegistration

__all__ = ['RegistrationGuard', 'EventLockGuard', 'UnguardedRegistration']
