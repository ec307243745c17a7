"""
Pydantic schemas for registration request/response validation.

Requests arrive in camelCase (``firstName``, ``eventId``); responses use the
column names.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from eventhub.schemas.event import EventResponse


class RegistrationCreate(BaseModel):
    event_id: int = Field(..., gt=0)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=50)
    tickets: int = Field(..., gt=0)
    comments: Optional[str] = Field("", max_length=1000)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @field_validator("comments")
    @classmethod
    def blank_comments(cls, value: Optional[str]) -> str:
        return value or ""


class RegistrationResponse(BaseModel):
    id: int
    event_id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    tickets: int
    comments: str
    registration_date: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RegistrationCreatedResponse(BaseModel):
    message: str
    registration: RegistrationResponse
    event: EventResponse
