"""Dependencies shared by the locale-prefixed routers."""
from __future__ import annotations

from fastapi import Request

from ..services import i18n
from ..services.i18n import Translator
from ..services.session_store import AuthSession
from ..ui.context import PageContext


def get_auth_session(request: Request) -> AuthSession:
    """Session loaded by the session middleware for this request."""

    return request.state.auth_session


def get_translator(locale: str) -> Translator:
    """Translator for the ``{locale}`` path segment.

    Unsupported locales raise ``UnsupportedLocaleError``; the application turns
    that into the not-found page.
    """

    return i18n.get_translator(locale)


def page_context(request: Request, t: Translator, auth_session: AuthSession) -> PageContext:
    """Build the render context, draining the session's pending notices."""

    return PageContext(
        t=t,
        path=request.url.path,
        auth_session=auth_session,
        notices=auth_session.pop_notices(),
    )


def safe_next(target: str | None, fallback: str) -> str:
    """Only follow same-site absolute paths after a form post."""

    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return fallback
