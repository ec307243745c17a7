"""
FastAPI dependencies wiring sessions into the services.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.db.session import get_db
from eventhub.services.event_store import EventStore
from eventhub.services.interfaces import RegistrationGuard
from eventhub.services.registration_service import RegistrationService
from eventhub.services.strategy_factory import get_registration_guard


def get_event_store(db: AsyncSession = Depends(get_db)) -> EventStore:
    return EventStore(db)


def get_registration_service(
    db: AsyncSession = Depends(get_db),
    events: EventStore = Depends(get_event_store),
    guard: RegistrationGuard = Depends(get_registration_guard),
) -> RegistrationService:
    return RegistrationService(db, events, guard)
