"""Viewing requests collected by the booking dialog."""
from __future__ import annotations

import asyncio
import logging

from ..core.errors import FormValidationError
from ..schemas.actions import BookingForm, BookingRequest
from .session_store import AuthSession

logger = logging.getLogger(__name__)


def validate_booking(form: BookingForm, *, house_id: str, auth_session: AuthSession) -> BookingRequest:
    """Require date, name and phone; the phone format is not checked."""

    missing = [
        name
        for name, value in (("date", form.date), ("name", form.name.strip()), ("phone", form.phone.strip()))
        if not value
    ]
    if missing:
        raise FormValidationError("fillRequiredFields", missing)

    email = auth_session.user.email if auth_session.user else None
    return BookingRequest(
        house_id=house_id,
        date=form.date,
        name=form.name.strip(),
        email=email,
        phone=form.phone.strip(),
    )


async def submit_booking(request: BookingRequest, *, delay_seconds: float) -> BookingRequest:
    """Simulate the submission round-trip; there is no booking endpoint to call."""

    if delay_seconds:
        await asyncio.sleep(delay_seconds)
    logger.info("Viewing requested for %s at %s by %s", request.house_id, request.date.isoformat(), request.name)
    return request


def default_name(auth_session: AuthSession) -> str:
    """Name the dialog is pre-filled with."""

    if auth_session.user and auth_session.user.name:
        return auth_session.user.name
    return ""
