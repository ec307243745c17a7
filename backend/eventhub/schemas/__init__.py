from eventhub.schemas.event import EventCreate, EventResponse, EventDeleteResponse
from eventhub.schemas.registration import (
    RegistrationCreate,
    RegistrationResponse,
    RegistrationCreatedResponse,
)

__all__ = [
    "EventCreate", "EventResponse", "EventDeleteResponse",
    "RegistrationCreate", "RegistrationResponse", "RegistrationCreatedResponse",
]
