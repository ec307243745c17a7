"""
Event model with a denormalized attendee counter.

Key design decisions:
- `attendees` caches SUM(registrations.tickets) for display. Capacity checks
  never read it; they aggregate the registration rows instead.
- No CHECK tying attendees to capacity: the counter is an unconditional
  overwrite and must be able to record an overbooked event.
- `date` and `time` are ISO text so (date, time) sorts lexically.
"""

from sqlalchemy import Column, Integer, String, Float, Index, CheckConstraint

from eventhub.db.base import Base, CreatedAtMixin


class Event(Base, CreatedAtMixin):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(String(2000), nullable=False)
    date = Column(String(10), nullable=False)  # YYYY-MM-DD
    time = Column(String(5), nullable=False)  # HH:MM
    location = Column(String(255), nullable=False)
    capacity = Column(Integer, nullable=False)
    attendees = Column(Integer, nullable=False, default=0, server_default="0")
    category = Column(String(50), nullable=False)
    image = Column(String(1000), nullable=True)
    price = Column(Float, nullable=False, default=0, server_default="0")

    __table_args__ = (
        CheckConstraint("capacity > 0", name="check_event_capacity_positive"),
        CheckConstraint("attendees >= 0", name="check_event_attendees_non_negative"),
        CheckConstraint("price >= 0", name="check_event_price_non_negative"),
        # Listing query: ORDER BY date, time (optionally WHERE category = ?)
        Index("ix_events_date_time", "date", "time"),
        Index("ix_events_category", "category"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, attendees={self.attendees}/{self.capacity})>"
