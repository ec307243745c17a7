"""
Event store: persistence and lifecycle of event records.

The store assumes its input was validated at the boundary and never checks
capacity; enforcing capacity belongs to RegistrationService.
"""

from typing import Optional

from sqlalchemy import select, func, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.core.config import get_settings
from eventhub.core.errors import storage_errors
from eventhub.core.logging import get_logger
from eventhub.models.event import Event
from eventhub.models.registration import Registration
from eventhub.schemas.event import EventCreate

logger = get_logger(__name__)

ALL_CATEGORIES = "all"


class EventStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_events(self, category: Optional[str] = None) -> list[Event]:
        """
        List events ordered by (date, time).
        A missing category or "all" returns every event.
        """
        query = select(Event)
        if category and category != ALL_CATEGORIES:
            query = query.where(Event.category == category)
        query = query.order_by(Event.date.asc(), Event.time.asc(), Event.id.asc())

        async with storage_errors("list_events"):
            result = await self.db.execute(query)
            return list(result.scalars().all())

    async def get_event(self, event_id: int) -> Optional[Event]:
        """Return the event, or None when it does not exist."""
        async with storage_errors("get_event"):
            result = await self.db.execute(select(Event).where(Event.id == event_id))
            return result.scalar_one_or_none()

    async def count_events(self) -> int:
        async with storage_errors("count_events"):
            return (await self.db.execute(select(func.count()).select_from(Event))).scalar_one()

    async def create_event(self, event_data: EventCreate) -> Event:
        """Persist a new event with no attendees."""
        event = Event(
            title=event_data.title,
            description=event_data.description,
            date=event_data.date,
            time=event_data.time,
            location=event_data.location,
            capacity=event_data.capacity,
            attendees=0,
            category=event_data.category,
            image=event_data.image or get_settings().DEFAULT_EVENT_IMAGE,
            price=event_data.price or 0,
        )
        try:
            async with storage_errors("create_event"):
                self.db.add(event)
                await self.db.commit()
                await self.db.refresh(event)
        except Exception:
            await self.db.rollback()
            raise

        logger.info("event_created", event_id=event.id, title=event.title, capacity=event.capacity)
        return event

    async def set_attendee_count(self, event_id: int, count: int) -> None:
        """
        Overwrite the denormalized attendee counter.

        Runs inside the caller's transaction; the caller computes the value
        and commits.
        """
        async with storage_errors("set_attendee_count"):
            await self.db.execute(
                update(Event).where(Event.id == event_id).values(attendees=count)
            )

    async def delete_event(self, event_id: int) -> int:
        """
        Delete an event and all of its registrations in one transaction.
        Returns the number of events removed (0 or 1).
        """
        try:
            async with storage_errors("delete_event"):
                removed_registrations = await self.db.execute(
                    delete(Registration).where(Registration.event_id == event_id)
                )
                removed_events = await self.db.execute(
                    delete(Event).where(Event.id == event_id)
                )
                await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        if removed_events.rowcount:
            logger.info(
                "event_deleted",
                event_id=event_id,
                registrations_removed=removed_registrations.rowcount,
            )
        return removed_events.rowcount
