"""
Pydantic schemas for event-related request/response validation.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^\d{2}:\d{2}$"


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=2000)
    date: str = Field(..., pattern=DATE_PATTERN)
    time: str = Field(..., pattern=TIME_PATTERN)
    location: str = Field(..., min_length=1, max_length=255)
    # Form posts send numbers as strings; lax mode coerces them
    capacity: int = Field(..., gt=0)
    category: str = Field(..., min_length=1, max_length=50)
    image: Optional[str] = Field(None, max_length=1000)
    price: Optional[float] = Field(None, ge=0)

    @field_validator("image", "price", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        # Empty form inputs mean "use the default"
        if isinstance(value, str) and not value.strip():
            return None
        return value


class EventResponse(BaseModel):
    id: int
    title: str
    description: str
    date: str
    time: str
    location: str
    capacity: int
    attendees: int
    category: str
    image: Optional[str]
    price: float
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class EventDeleteResponse(BaseModel):
    message: str
