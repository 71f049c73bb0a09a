"""JSON actions invoked by scripts on rendered pages."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from ..core.config import settings
from ..core.errors import FormValidationError
from ..schemas.actions import (
    BookingForm,
    BookingResponse,
    FavoriteToggleRequest,
    FavoriteToggleResponse,
)
from ..schemas.notices import Notice
from ..services.backend import BackendClient, BackendError, get_backend
from ..services.booking import submit_booking, validate_booking
from ..services.favorites import toggle_favorite
from ..services.i18n import Translator
from ..services.session_store import AuthSession
from .deps import get_auth_session, get_translator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/{locale}")


@router.post("/favorites/{house_id}/toggle", response_model=FavoriteToggleResponse)
async def toggle(
    house_id: str,
    payload: FavoriteToggleRequest | None = Body(default=None),
    t: Translator = Depends(get_translator),
    auth_session: AuthSession = Depends(get_auth_session),
    backend: BackendClient = Depends(get_backend),
) -> JSONResponse:
    """Add or remove ``house_id`` depending on the state the page shows."""

    houses_t = t.scoped("houses")
    favorited = payload.favorited if payload else False
    owner_id = None
    if auth_session.is_authenticated:
        try:
            listing = await backend.get_house(house_id)
        except BackendError as exc:
            logger.warning("Could not load house %s before toggling: %s", house_id, exc)
            result = FavoriteToggleResponse(
                house_id=house_id,
                favorited=favorited,
                changed=False,
                notice=Notice.error(houses_t("failedToUpdateFavorites"), icon="❌"),
            )
            return JSONResponse(result.model_dump(mode="json"), status_code=status.HTTP_502_BAD_GATEWAY)
        if listing is None:
            result = FavoriteToggleResponse(
                house_id=house_id,
                favorited=favorited,
                changed=False,
                notice=Notice.error(houses_t("detail.notFound")),
            )
            return JSONResponse(result.model_dump(mode="json"), status_code=status.HTTP_404_NOT_FOUND)
        owner_id = listing.owner_id

    result = await toggle_favorite(
        backend,
        auth_session,
        house_id,
        owner_id=owner_id,
        favorited=favorited,
        t=houses_t,
    )
    if not auth_session.is_authenticated:
        code = status.HTTP_401_UNAUTHORIZED
    elif not result.changed and result.notice.level == "error":
        code = status.HTTP_403_FORBIDDEN if owner_id == auth_session.user_id else status.HTTP_502_BAD_GATEWAY
    else:
        code = status.HTTP_200_OK
    return JSONResponse(result.model_dump(mode="json"), status_code=code)


@router.post("/houses/{house_id}/booking", response_model=BookingResponse)
async def book_viewing(
    house_id: str,
    form: BookingForm,
    t: Translator = Depends(get_translator),
    auth_session: AuthSession = Depends(get_auth_session),
) -> JSONResponse:
    """Validate the booking dialog and run the simulated submission."""

    booking_t = t.scoped("booking")
    if not auth_session.is_authenticated:
        result = BookingResponse(notice=Notice.error(booking_t("signInRequired"), icon="🔒"))
        return JSONResponse(result.model_dump(mode="json"), status_code=status.HTTP_401_UNAUTHORIZED)

    try:
        request = validate_booking(form, house_id=house_id, auth_session=auth_session)
    except FormValidationError as exc:
        result = BookingResponse(notice=Notice.error(booking_t(exc.message_key)), errors=exc.fields)
        return JSONResponse(result.model_dump(mode="json"), status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)

    booking = await submit_booking(request, delay_seconds=settings.booking_submit_delay_seconds)
    result = BookingResponse(booking=booking, notice=Notice.success(booking_t("viewingScheduled"), icon="📅"))
    return JSONResponse(result.model_dump(mode="json"))
