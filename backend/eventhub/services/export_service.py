"""
CSV export of an event's registrations.

Pure formatting: callers fetch the event and its registrations first.
"""

import io
from datetime import datetime
from typing import Iterable, Optional

from eventhub.models.event import Event
from eventhub.models.registration import Registration

CSV_HEADER = ["First Name", "Last Name", "Email", "Phone", "Tickets", "Registration Date", "Comments"]


def export_filename(event_id: int) -> str:
    return f"event-{event_id}-registrations.csv"


def _format_timestamp(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else ""


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def render_registrations_csv(event: Event, registrations: Iterable[Registration]) -> str:
    """
    Render a summary preamble followed by one quoted row per registration.
    Text cells are always quoted; ticket counts and timestamps never are.
    """
    registrations = list(registrations)
    buffer = io.StringIO()
    buffer.write(f"Event: {event.title}\n")
    buffer.write(f"Date: {event.date} {event.time}\n")
    buffer.write(f"Location: {event.location}\n")
    buffer.write(f"Total Registrations: {len(registrations)}\n\n")

    buffer.write(",".join(CSV_HEADER) + "\n")
    for registration in registrations:
        row = [
            _quote(registration.first_name),
            _quote(registration.last_name),
            _quote(registration.email),
            _quote(registration.phone),
            str(registration.tickets),
            _format_timestamp(registration.registration_date),
            _quote(registration.comments or ""),
        ]
        buffer.write(",".join(row) + "\n")
    return buffer.getvalue()
