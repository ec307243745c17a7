"""
Registration model: one attendee's request for N tickets to one event.

Rows are removed together with their event by EventStore.delete_event;
there is no database-level cascade.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint, func

from eventhub.db.base import Base


class Registration(Base):
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    tickets = Column(Integer, nullable=False)
    comments = Column(String(1000), nullable=False, default="", server_default="")
    registration_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint("tickets > 0", name="check_registration_tickets_positive"),
    )

    def __repr__(self) -> str:
        return f"<Registration(id={self.id}, event={self.event_id}, tickets={self.tickets})>"
