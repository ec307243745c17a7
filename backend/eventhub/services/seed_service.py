"""
Sample events inserted into an empty database on startup.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.core.errors import storage_errors
from eventhub.core.logging import get_logger
from eventhub.models.event import Event
from eventhub.services.event_store import EventStore

logger = get_logger(__name__)

_IMAGE = "https://images.unsplash.com/{photo}?ixlib=rb-1.2.1&auto=format&fit=crop&w=1350&q=80"

# Attendee counts are pre-seeded for display; these events have no registration rows
SAMPLE_EVENTS = [
    {
        "title": "Digital Marketing Conference",
        "description": "Learn the latest trends in digital marketing from industry experts. "
                       "Network with professionals and grow your skills.",
        "date": "2025-11-15",
        "time": "09:00",
        "location": "Mumbai, Maharashtra",
        "capacity": 250,
        "attendees": 180,
        "category": "business",
        "image": _IMAGE.format(photo="photo-1540575467063-178a50c2df87"),
        "price": 2999,
    },
    {
        "title": "Startup Innovation Summit",
        "description": "Connect with investors, mentors, and fellow entrepreneurs. "
                       "Pitch your ideas and find potential collaborators.",
        "date": "2025-12-05",
        "time": "10:00",
        "location": "Bengaluru, Karnataka",
        "capacity": 180,
        "attendees": 120,
        "category": "business",
        "image": _IMAGE.format(photo="photo-1511578314322-379afb476865"),
        "price": 4499,
    },
    {
        "title": "Web Development Workshop",
        "description": "Hands-on workshop covering modern web development techniques. "
                       "Perfect for beginners and intermediate developers.",
        "date": "2025-11-28",
        "time": "13:00",
        "location": "Hyderabad, Telangana",
        "capacity": 50,
        "attendees": 35,
        "category": "tech",
        "image": _IMAGE.format(photo="photo-1559136555-9303baea8ebd"),
        "price": 1999,
    },
]


async def seed_sample_events(db: AsyncSession) -> int:
    """Insert the sample events when the events table is empty. Returns rows inserted."""
    if await EventStore(db).count_events() > 0:
        return 0

    try:
        async with storage_errors("seed_sample_events"):
            db.add_all([Event(**fields) for fields in SAMPLE_EVENTS])
            await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info("sample_events_seeded", count=len(SAMPLE_EVENTS))
    return len(SAMPLE_EVENTS)
