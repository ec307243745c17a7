"""
Event endpoints with Redis caching on list operations.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from eventhub.api.deps import get_event_store
from eventhub.core.errors import EventNotFoundError
from eventhub.schemas.event import EventCreate, EventResponse, EventDeleteResponse
from eventhub.services.event_store import EventStore
from eventhub.services.cache_service import get_cached_events, set_cached_events, invalidate_event_cache
from eventhub.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/events", tags=["Events"])


@router.get("", response_model=list[EventResponse])
async def list_events_endpoint(
    category: Optional[str] = Query(None, description='Exact category, or "all"'),
    store: EventStore = Depends(get_event_store),
):
    """
    List events ordered by date and time.
    Served from Redis when cached; the cache is dropped whenever events or
    attendee counts change.
    """
    cached = await get_cached_events(category)
    if cached is not None:
        logger.info("events_list_cache_hit", category=category)
        return cached

    events = await store.list_events(category)
    response_data = [EventResponse.model_validate(e).model_dump(mode="json") for e in events]
    await set_cached_events(category, response_data)
    return response_data


@router.get("/{event_id}", response_model=EventResponse)
async def get_event_endpoint(
    event_id: int,
    store: EventStore = Depends(get_event_store),
):
    """Get a single event by ID. Not cached."""
    event = await store.get_event(event_id)
    if event is None:
        raise EventNotFoundError(event_id)
    return event


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    event_data: EventCreate,
    store: EventStore = Depends(get_event_store),
):
    """Create a new event with no attendees."""
    event = await store.create_event(event_data)
    await invalidate_event_cache()
    return event


@router.delete("/{event_id}", response_model=EventDeleteResponse)
async def delete_event_endpoint(
    event_id: int,
    store: EventStore = Depends(get_event_store),
):
    """Delete an event together with all of its registrations."""
    deleted = await store.delete_event(event_id)
    if deleted == 0:
        raise EventNotFoundError(event_id)
    await invalidate_event_cache()
    return EventDeleteResponse(message="Event deleted successfully")
