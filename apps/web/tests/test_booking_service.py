"""Tests for booking validation and the simulated submission."""
from __future__ import annotations

from datetime import datetime

import pytest

from renthome.core.errors import FormValidationError
from renthome.schemas.actions import BookingForm
from renthome.services import booking


def test_missing_name_is_rejected_before_submission(signed_in_session) -> None:
    form = BookingForm(date=datetime(2030, 1, 2, 10, 30), name="   ", phone="555-0100")

    with pytest.raises(FormValidationError) as excinfo:
        booking.validate_booking(form, house_id="h1", auth_session=signed_in_session)

    assert excinfo.value.message_key == "fillRequiredFields"
    assert excinfo.value.fields == ["name"]


def test_every_missing_field_is_reported(signed_in_session) -> None:
    with pytest.raises(FormValidationError) as excinfo:
        booking.validate_booking(BookingForm(), house_id="h1", auth_session=signed_in_session)

    assert excinfo.value.fields == ["date", "name", "phone"]


def test_valid_form_takes_email_from_the_session(signed_in_session) -> None:
    form = BookingForm(date=datetime(2030, 1, 2, 10, 30), name=" Ada ", phone=" 555-0100 ")

    request = booking.validate_booking(form, house_id="h1", auth_session=signed_in_session)

    assert request.house_id == "h1"
    assert request.name == "Ada"
    assert request.phone == "555-0100"
    assert request.email == "ada@example.com"


@pytest.mark.asyncio
async def test_submit_waits_for_the_configured_delay(monkeypatch, signed_in_session) -> None:
    delays: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        delays.append(seconds)

    monkeypatch.setattr(booking.asyncio, "sleep", fake_sleep)
    form = BookingForm(date=datetime(2030, 1, 2, 10, 30), name="Ada", phone="555-0100")
    request = booking.validate_booking(form, house_id="h1", auth_session=signed_in_session)

    result = await booking.submit_booking(request, delay_seconds=1.5)
    immediate = await booking.submit_booking(request, delay_seconds=0)

    assert result == request
    assert immediate == request
    assert delays == [1.5]


def test_default_name(signed_in_session, anonymous_session) -> None:
    assert booking.default_name(signed_in_session) == "Ada Lovelace"
    assert booking.default_name(anonymous_session) == ""
