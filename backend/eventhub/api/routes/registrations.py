"""
Registration endpoints: capacity-checked sign-up, listing and CSV export.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status

from eventhub.api.deps import get_event_store, get_registration_service
from eventhub.core.errors import EventNotFoundError
from eventhub.schemas.event import EventResponse
from eventhub.schemas.registration import RegistrationResponse, RegistrationCreatedResponse
from eventhub.services.cache_service import invalidate_event_cache
from eventhub.services.event_store import EventStore
from eventhub.services.export_service import export_filename, render_registrations_csv
from eventhub.services.registration_service import RegistrationService

router = APIRouter(tags=["Registrations"])


@router.post(
    "/registrations",
    response_model=RegistrationCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_registration(
    request: Request,
    service: RegistrationService = Depends(get_registration_service),
):
    """
    Register attendees for an event.

    The body is validated by the registration service itself so missing
    fields, unknown events and sold-out events come back as distinct errors.
    A body that is not a JSON object counts as missing every field.
    """
    try:
        payload: Any = await request.json()
    except ValueError:
        payload = None
    result = await service.register(payload)
    await invalidate_event_cache()
    return RegistrationCreatedResponse(
        message="Registration successful",
        registration=RegistrationResponse.model_validate(result.registration),
        event=EventResponse.model_validate(result.event),
    )


@router.get("/events/{event_id}/registrations", response_model=list[RegistrationResponse])
async def list_event_registrations(
    event_id: int,
    service: RegistrationService = Depends(get_registration_service),
):
    return await service.list_registrations(event_id)


@router.get("/events/{event_id}/export", response_class=Response)
async def export_event_registrations(
    event_id: int,
    store: EventStore = Depends(get_event_store),
    service: RegistrationService = Depends(get_registration_service),
):
    """Download the event's registrations as CSV."""
    event = await store.get_event(event_id)
    if event is None:
        raise EventNotFoundError(event_id)

    registrations = await service.list_registrations(event_id)
    return Response(
        content=render_registrations_csv(event, registrations),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(event_id)}"'},
    )
