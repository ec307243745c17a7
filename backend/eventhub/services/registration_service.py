"""
Registration service: capacity-safe registration workflow.

CAPACITY CHECK
==============

Invariant:
  SUM(registrations.tickets) for an event never exceeds events.capacity.

Workflow (register):
  1. Validate the request (firstName, lastName, email, phone, eventId, tickets)
  2. Look up the event
  3. Aggregate the confirmed ticket count from registration rows.
     events.attendees is a display cache and is never used for the check.
  4. Reject when current + requested > capacity, reporting capacity - current
  5. Insert the registration
  6. Write current + requested into events.attendees
  7. Commit, return the registration and the refreshed event

  The boundary is inclusive: asking for exactly the remaining tickets
  succeeds. There is no partial fulfilment.

Concurrency:
  Steps 3-6 are a read-check-write sequence. Two requests that both read
  the same count can both pass step 4 and overbook. The RegistrationGuard
  wrapped around steps 2-7 decides whether that window is closed:
  - EventLockGuard: one asyncio.Lock per event, overbooking impossible
    within one process
  - UnguardedRegistration: the window stays open (documented in tests)

No retries: storage failures roll back and surface as StorageError.
"""

import time
from dataclasses import dataclass
from typing import Any, Mapping, Union

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.core.errors import (
    CapacityExceededError,
    DomainError,
    EventNotFoundError,
    ValidationError,
    storage_errors,
)
from eventhub.core.logging import get_logger
from eventhub.core.metrics import record_registration, registration_latency
from eventhub.models.event import Event
from eventhub.models.registration import Registration
from eventhub.schemas.registration import RegistrationCreate
from eventhub.services.event_store import EventStore
from eventhub.services.interfaces import RegistrationGuard

logger = get_logger(__name__)

MISSING_ERROR_TYPES = {"missing", "string_too_short"}
REQUIRED_FIELDS_MESSAGE = "All required fields must be filled"

OUTCOMES = {
    ValidationError: "invalid",
    EventNotFoundError: "not_found",
    CapacityExceededError: "capacity_exceeded",
}


@dataclass
class RegistrationResult:
    registration: Registration
    event: Event


def _is_missing(err) -> bool:
    # Blank form inputs and nulls count as absent, not malformed
    return err["type"] in MISSING_ERROR_TYPES or err.get("input") in ("", None)


def parse_registration(request: Union[RegistrationCreate, Mapping[str, Any]]) -> RegistrationCreate:
    """Validate a raw request body, raising the domain ValidationError."""
    if isinstance(request, RegistrationCreate):
        return request
    if not isinstance(request, Mapping):
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)
    try:
        return RegistrationCreate.model_validate(request)
    except SchemaValidationError as exc:
        errors = exc.errors()
        fields = [".".join(str(part) for part in err["loc"]) for err in errors]
        if all(_is_missing(err) for err in errors):
            message = REQUIRED_FIELDS_MESSAGE
        else:
            message = f"Invalid value for {', '.join(fields)}"
        raise ValidationError(message, fields=fields) from exc


class RegistrationService:
    def __init__(self, db: AsyncSession, events: EventStore, guard: RegistrationGuard):
        self.db = db
        self.events = events
        self.guard = guard

    async def list_registrations(self, event_id: int) -> list[Registration]:
        async with storage_errors("list_registrations"):
            result = await self.db.execute(
                select(Registration)
                .where(Registration.event_id == event_id)
                .order_by(Registration.id.asc())
            )
            return list(result.scalars().all())

    async def get_confirmed_ticket_count(self, event_id: int) -> int:
        """Sum of tickets over the event's registrations; 0 when there are none."""
        async with storage_errors("get_confirmed_ticket_count"):
            result = await self.db.execute(
                select(func.coalesce(func.sum(Registration.tickets), 0))
                .where(Registration.event_id == event_id)
            )
            return int(result.scalar_one())

    async def register(
        self, request: Union[RegistrationCreate, Mapping[str, Any]]
    ) -> RegistrationResult:
        """Register attendees for an event without exceeding its capacity."""
        start_time = time.perf_counter()
        outcome = "error"
        tickets = 0
        try:
            data = parse_registration(request)
            async with self.guard.hold(data.event_id):
                result = await self._register(data)
            outcome, tickets = "success", data.tickets
            return result
        except DomainError as exc:
            outcome = OUTCOMES.get(type(exc), "error")
            if isinstance(exc, ValidationError):
                logger.warning("registration_rejected", reason="invalid", fields=exc.fields)
            raise
        finally:
            registration_latency.observe(time.perf_counter() - start_time)
            record_registration(outcome, tickets)

    async def _register(self, data: RegistrationCreate) -> RegistrationResult:
        event = await self.events.get_event(data.event_id)
        if event is None:
            logger.warning("registration_rejected", reason="event_not_found", event_id=data.event_id)
            raise EventNotFoundError(data.event_id)

        current = await self.get_confirmed_ticket_count(event.id)
        if current + data.tickets > event.capacity:
            remaining = event.capacity - current
            logger.warning(
                "registration_rejected",
                reason="capacity_exceeded",
                event_id=event.id,
                requested=data.tickets,
                remaining=remaining,
            )
            raise CapacityExceededError(event.id, data.tickets, remaining)

        registration = Registration(
            event_id=event.id,
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            phone=data.phone,
            tickets=data.tickets,
            comments=data.comments or "",
        )
        new_total = current + data.tickets
        try:
            async with storage_errors("register"):
                self.db.add(registration)
                await self.db.flush()
                await self.events.set_attendee_count(event.id, new_total)
                await self.db.commit()
                await self.db.refresh(registration)
                await self.db.refresh(event)
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "registration_created",
            registration_id=registration.id,
            event_id=event.id,
            tickets=data.tickets,
            attendees=new_total,
            capacity=event.capacity,
        )
        return RegistrationResult(registration=registration, event=event)
