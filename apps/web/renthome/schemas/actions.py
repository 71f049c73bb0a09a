"""Schemas for the JSON actions called from rendered pages."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .notices import Notice


class FavoriteToggleRequest(BaseModel):
    favorited: bool = False


class FavoriteToggleResponse(BaseModel):
    house_id: str
    favorited: bool
    changed: bool
    notice: Notice


class BookingForm(BaseModel):
    date: datetime | None = None
    name: str = ""
    phone: str = ""


class BookingRequest(BaseModel):
    """Validated viewing request; lives only for the dialog round-trip."""

    house_id: str
    date: datetime
    name: str
    email: str | None = None
    phone: str


class BookingResponse(BaseModel):
    booking: BookingRequest | None = None
    notice: Notice
    errors: list[str] = Field(default_factory=list)
