"""Locale-prefixed HTML pages."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from ..core.config import settings
from ..schemas.auth import ProfileUpdateForm
from ..schemas.notices import Notice
from ..services import auth as auth_service
from ..services.backend import BackendClient, BackendError, get_backend, gather_settled
from ..services.booking import default_name
from ..services.favorites import load_favorite_ids
from ..services.filters import filter_listings, parse_filter_state, status_for_purpose
from ..services.i18n import Translator
from ..services.session_store import AuthSession
from ..ui.pages import (
    render_collection_page,
    render_detail_page,
    render_listings_page,
    render_not_found,
    render_profile_page,
)
from .deps import get_auth_session, get_translator, page_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/{locale}")


def _home(t: Translator) -> RedirectResponse:
    return RedirectResponse(f"/{t.locale}", status_code=status.HTTP_303_SEE_OTHER)


@router.get("", include_in_schema=False)
async def locale_root(t: Translator = Depends(get_translator)) -> RedirectResponse:
    """The bare locale path opens the listings page."""

    return RedirectResponse(f"/{t.locale}/houses", status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.get("/houses", response_class=HTMLResponse)
async def listings_page(
    request: Request,
    purpose: str | None = None,
    t: Translator = Depends(get_translator),
    auth_session: AuthSession = Depends(get_auth_session),
    backend: BackendClient = Depends(get_backend),
) -> HTMLResponse:
    """Fetch the collection for the purpose preset and apply the query filters."""

    houses_t = t.scoped("houses")
    preset = status_for_purpose(purpose)
    state = parse_filter_state({key: request.query_params.getlist(key) for key in request.query_params.keys()})

    houses, favorite_ids = await gather_settled(
        backend.list_houses(status=preset),
        load_favorite_ids(backend, auth_session),
    )
    load_failed = isinstance(houses, BackendError)
    if load_failed:
        logger.error("Error fetching houses for %s: %s", preset or "all", houses)
        auth_session.flash(Notice.error(houses_t("failedToLoad"), icon="❌"))
        houses = []
    if isinstance(favorite_ids, BackendError):
        logger.warning("Could not load favorites of user %s: %s", auth_session.user_id, favorite_ids)
        favorite_ids = set()

    if preset == "FOR_SALE":
        title = houses_t("homesForSale")
    elif preset == "FOR_RENT":
        title = houses_t("homesForRent")
    else:
        title = houses_t("allProperties")

    ctx = page_context(request, t, auth_session)
    return HTMLResponse(
        render_listings_page(
            ctx,
            title=title,
            listings=filter_listings(houses, state),
            state=state,
            favorite_ids=favorite_ids,
            purpose=purpose if preset else None,
            load_failed=load_failed,
        )
    )


@router.get("/houses/{house_id}", response_class=HTMLResponse, response_model=None)
async def detail_page(
    request: Request,
    house_id: str,
    t: Translator = Depends(get_translator),
    auth_session: AuthSession = Depends(get_auth_session),
    backend: BackendClient = Depends(get_backend),
) -> HTMLResponse | RedirectResponse:
    """Listing detail with photos, map, similar homes and the booking dialog."""

    if not auth_session.is_authenticated:
        return _home(t)

    detail_t = t.scoped("houses.detail")
    try:
        listing = await backend.get_house(house_id)
    except BackendError as exc:
        logger.error("Error fetching house %s: %s", house_id, exc)
        auth_session.flash(Notice.error(t("houses.failedToLoad"), icon="❌"))
        ctx = page_context(request, t, auth_session)
        return HTMLResponse(
            render_not_found(ctx, message=t("houses.failedToLoad")),
            status_code=status.HTTP_502_BAD_GATEWAY,
        )
    if listing is None:
        ctx = page_context(request, t, auth_session)
        return HTMLResponse(
            render_not_found(ctx, message=detail_t("notFound")),
            status_code=status.HTTP_404_NOT_FOUND,
        )

    similar, favorite_ids = await gather_settled(
        backend.list_houses(
            status=listing.home_status,
            exclude=listing.id,
            limit=settings.similar_listings_limit,
        ),
        load_favorite_ids(backend, auth_session),
    )
    if isinstance(similar, BackendError):
        logger.warning("Could not load similar homes for %s: %s", listing.id, similar)
        similar = []
    if isinstance(favorite_ids, BackendError):
        logger.warning("Could not load favorites of user %s: %s", auth_session.user_id, favorite_ids)
        favorite_ids = set()

    ctx = page_context(request, t, auth_session)
    return HTMLResponse(
        render_detail_page(
            ctx,
            listing,
            similar=[item for item in similar if item.id != listing.id],
            is_favorite=listing.id in favorite_ids,
            default_name=default_name(auth_session),
        )
    )


@router.get("/favorites", response_class=HTMLResponse, response_model=None)
async def favorites_page(
    request: Request,
    t: Translator = Depends(get_translator),
    auth_session: AuthSession = Depends(get_auth_session),
    backend: BackendClient = Depends(get_backend),
) -> HTMLResponse | RedirectResponse:
    if not auth_session.is_authenticated:
        return _home(t)

    favorites_t = t.scoped("favorites")
    houses, favorite_ids = await gather_settled(
        backend.list_houses(),
        load_favorite_ids(backend, auth_session),
    )
    if isinstance(houses, BackendError) or isinstance(favorite_ids, BackendError):
        logger.error("Error loading favorites of user %s", auth_session.user_id)
        auth_session.flash(Notice.error(favorites_t("failedToLoad"), icon="❌"))
        houses, favorite_ids = [], set()

    ctx = page_context(request, t, auth_session)
    return HTMLResponse(
        render_collection_page(
            ctx,
            title=favorites_t("title"),
            listings=[house for house in houses if house.id in favorite_ids],
            favorite_ids=favorite_ids,
            empty_message=favorites_t("empty"),
        )
    )


@router.get("/dashboard", response_class=HTMLResponse, response_model=None)
async def dashboard_page(
    request: Request,
    t: Translator = Depends(get_translator),
    auth_session: AuthSession = Depends(get_auth_session),
    backend: BackendClient = Depends(get_backend),
) -> HTMLResponse | RedirectResponse:
    """Listings owned by the signed-in user."""

    if not auth_session.is_authenticated:
        return _home(t)

    dashboard_t = t.scoped("dashboard")
    try:
        houses = await backend.list_user_houses(auth_session.token)
    except BackendError as exc:
        logger.error("Error loading listings of user %s: %s", auth_session.user_id, exc)
        auth_session.flash(Notice.error(dashboard_t("failedToLoad"), icon="❌"))
        houses = []

    ctx = page_context(request, t, auth_session)
    return HTMLResponse(
        render_collection_page(
            ctx,
            title=dashboard_t("title"),
            listings=houses,
            favorite_ids=set(),
            empty_message=dashboard_t("empty"),
        )
    )


@router.get("/profile", response_class=HTMLResponse, response_model=None)
async def profile_page(
    request: Request,
    edit: bool = False,
    t: Translator = Depends(get_translator),
    auth_session: AuthSession = Depends(get_auth_session),
    backend: BackendClient = Depends(get_backend),
) -> HTMLResponse | RedirectResponse:
    if not auth_session.is_authenticated:
        return _home(t)

    stats = await auth_service.load_user_stats(backend, auth_session)
    ctx = page_context(request, t, auth_session)
    return HTMLResponse(render_profile_page(ctx, stats=stats, editing=edit))


@router.post("/profile", include_in_schema=False)
async def update_profile(
    name: str = Form(""),
    current_password: str = Form(""),
    new_password: str = Form(""),
    confirm_password: str = Form(""),
    t: Translator = Depends(get_translator),
    auth_session: AuthSession = Depends(get_auth_session),
) -> RedirectResponse:
    if not auth_session.is_authenticated:
        return _home(t)

    form = ProfileUpdateForm(
        name=name,
        current_password=current_password,
        new_password=new_password,
        confirm_password=confirm_password,
    )
    updated = auth_service.update_profile(auth_session, form, t=t.scoped("profile"))
    target = f"/{t.locale}/profile" if updated else f"/{t.locale}/profile?edit=true"
    return RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)
