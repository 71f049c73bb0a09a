"""Sign-in, sign-up and sign-out form posts from the navbar dialog."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import RedirectResponse

from ..schemas.auth import SignInForm, SignUpForm
from ..services import auth as auth_service
from ..services.backend import BackendClient, get_backend
from ..services.i18n import Translator
from ..services.session_store import AuthSession, session_store
from .deps import get_auth_session, get_translator, safe_next

router = APIRouter(prefix="/{locale}/auth")


def _back(t: Translator, next_path: str) -> RedirectResponse:
    target = safe_next(next_path, f"/{t.locale}/houses")
    return RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)


@router.post("/signin", include_in_schema=False)
async def sign_in(
    email: str = Form(""),
    password: str = Form(""),
    next_path: str = Form("", alias="next"),
    t: Translator = Depends(get_translator),
    auth_session: AuthSession = Depends(get_auth_session),
    backend: BackendClient = Depends(get_backend),
) -> RedirectResponse:
    form = SignInForm(email=email, password=password)
    if await auth_service.sign_in(backend, auth_session, form, t=t.scoped("auth")):
        session_store.rotate(auth_session)
    return _back(t, next_path)


@router.post("/signup", include_in_schema=False)
async def sign_up(
    name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    next_path: str = Form("", alias="next"),
    t: Translator = Depends(get_translator),
    auth_session: AuthSession = Depends(get_auth_session),
    backend: BackendClient = Depends(get_backend),
) -> RedirectResponse:
    """Register, then sign the new account in."""

    form = SignUpForm(name=name, email=email, password=password)
    if await auth_service.sign_up(backend, auth_session, form, t=t.scoped("auth")):
        session_store.rotate(auth_session)
    return _back(t, next_path)


@router.post("/signout", include_in_schema=False)
async def sign_out(
    next_path: str = Form("", alias="next"),
    t: Translator = Depends(get_translator),
    auth_session: AuthSession = Depends(get_auth_session),
) -> RedirectResponse:
    auth_service.sign_out(auth_session, t=t.scoped("auth"))
    session_store.rotate(auth_session)
    return _back(t, next_path)
