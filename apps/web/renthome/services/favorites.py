"""Favorite toggling shared by the listings and detail pages."""
from __future__ import annotations

import logging

from ..schemas.actions import FavoriteToggleResponse
from ..schemas.notices import Notice
from .backend import BackendClient, BackendError
from .i18n import Translator
from .session_store import AuthSession

logger = logging.getLogger(__name__)


async def load_favorite_ids(backend: BackendClient, auth_session: AuthSession) -> set[str]:
    """Favorite listing ids of the signed-in user; empty for anonymous sessions."""

    if not auth_session.is_authenticated:
        return set()
    return set(await backend.list_favorite_ids(auth_session.token))


async def toggle_favorite(
    backend: BackendClient,
    auth_session: AuthSession,
    house_id: str,
    *,
    owner_id: str | None = None,
    favorited: bool,
    t: Translator,
) -> FavoriteToggleResponse:
    """Flip membership of ``house_id`` in the user's favorites.

    ``favorited`` is the state the page currently shows. On a failed call the
    authoritative membership is re-fetched; when that fails too the previous
    state is returned so the page rolls its optimistic change back.
    """

    if not auth_session.is_authenticated:
        return _unchanged(house_id, favorited, Notice.error(t("signInToSaveFavorites"), icon="🔒"))

    if owner_id is not None and owner_id == auth_session.user_id:
        return _unchanged(house_id, favorited, Notice.error(t("cantFavoriteOwnProperty")))

    try:
        if favorited:
            await backend.remove_favorite(auth_session.token, house_id)
        else:
            await backend.add_favorite(auth_session.token, house_id)
    except BackendError as exc:
        logger.warning("Toggling favorite %s for user %s failed: %s", house_id, auth_session.user_id, exc)
        actual = await _reconcile(backend, auth_session, house_id, fallback=favorited)
        return FavoriteToggleResponse(
            house_id=house_id,
            favorited=actual,
            changed=actual != favorited,
            notice=Notice.error(t("failedToUpdateFavorites"), icon="❌"),
        )

    logger.info(
        "User %s %s favorite %s",
        auth_session.user_id,
        "removed" if favorited else "added",
        house_id,
    )
    if favorited:
        notice = Notice.success(t("removedFromFavorites"), icon="💔")
    else:
        notice = Notice.success(t("addedToFavorites"), icon="❤️")
    return FavoriteToggleResponse(house_id=house_id, favorited=not favorited, changed=True, notice=notice)


async def _reconcile(
    backend: BackendClient,
    auth_session: AuthSession,
    house_id: str,
    *,
    fallback: bool,
) -> bool:
    try:
        favorite_ids = await backend.list_favorite_ids(auth_session.token)
    except BackendError as exc:
        logger.warning("Could not reconcile favorites for user %s: %s", auth_session.user_id, exc)
        return fallback
    return house_id in favorite_ids


def _unchanged(house_id: str, favorited: bool, notice: Notice) -> FavoriteToggleResponse:
    return FavoriteToggleResponse(house_id=house_id, favorited=favorited, changed=False, notice=notice)
