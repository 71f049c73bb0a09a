"""FastAPI application for the Rent&Home web front."""
from __future__ import annotations

import base64
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse, Response

from .core.config import settings
from .routers import actions, auth, pages
from .services.backend import close_backend
from .services.i18n import UnsupportedLocaleError, get_translator, negotiate_locale
from .services.session_store import session_store
from .ui.context import PageContext
from .ui.pages import render_not_found

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    yield
    await close_backend()


app = FastAPI(title="Rent&Home", version="0.1.0", lifespan=lifespan)

if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def attach_session(request: Request, call_next):
    """Load the browser's session before routing and persist it afterwards."""

    cookie_name = settings.session_cookie_name
    cookie_value = request.cookies.get(cookie_name)
    auth_session = session_store.get(cookie_value) if cookie_value else None
    if auth_session is None:
        auth_session = session_store.new()
    request.state.auth_session = auth_session

    response = await call_next(request)

    if auth_session.should_persist:
        session_store.save(auth_session)
        if cookie_value != auth_session.session_id:
            response.set_cookie(
                cookie_name,
                auth_session.session_id,
                max_age=settings.session_ttl_seconds,
                httponly=True,
                samesite="lax",
                secure=settings.app_env == "production",
            )
    else:
        session_store.clear(auth_session.session_id)
        if cookie_value:
            response.delete_cookie(cookie_name)
    return response


@app.exception_handler(UnsupportedLocaleError)
async def unsupported_locale(request: Request, exc: UnsupportedLocaleError) -> HTMLResponse:
    """Unknown locale prefixes render the not-found page in the default locale."""

    logger.info("Unsupported locale %r requested at %s", str(exc), request.url.path)
    ctx = PageContext(
        t=get_translator(settings.default_locale),
        path=request.url.path,
        auth_session=request.state.auth_session,
    )
    return HTMLResponse(render_not_found(ctx), status_code=404)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


@app.get("/", tags=["meta"])
async def index(request: Request) -> RedirectResponse:
    """Send visitors to their preferred locale."""

    locale = negotiate_locale(request.headers.get("accept-language"))
    return RedirectResponse(f"/{locale}/houses", status_code=307)


@app.head("/", tags=["meta"])
async def index_head() -> Response:
    """Fast health checks issue HEAD /; answer with 200 to avoid noisy 405s."""

    return Response(status_code=200)


FAVICON_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR4nGMAAQAABQABDQottAAAAABJRU5ErkJggg=="
)


@app.get("/api/health", tags=["meta"])
async def health() -> dict[str, str]:
    """Simple liveness probe."""

    return {"status": "ok"}


@app.head("/api/health", tags=["meta"])
async def health_head() -> Response:
    return Response(status_code=200)


@app.get("/robots.txt", response_class=PlainTextResponse, include_in_schema=False)
async def robots() -> PlainTextResponse:
    return PlainTextResponse("User-agent: *\nDisallow:")


@app.get("/favicon.ico", include_in_schema=False)
async def favicon() -> Response:
    return Response(content=FAVICON_BYTES, media_type="image/png")


# Registered after the meta routes so /robots.txt and friends win over /{locale}.
app.include_router(auth.router)
app.include_router(actions.router)
app.include_router(pages.router)
