"""
Declarative base shared by all ORM models.
"""

from sqlalchemy import Column, DateTime, func
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class CreatedAtMixin:
    """Server-assigned creation timestamp."""

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
