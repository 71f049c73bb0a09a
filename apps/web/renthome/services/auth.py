"""Sign in, sign up, sign out and profile updates."""
from __future__ import annotations

import logging

from ..core.errors import FormValidationError
from ..schemas.auth import ProfileUpdateForm, SignInForm, SignUpForm, UserStats
from ..schemas.notices import Notice
from .backend import BackendClient, BackendError, BackendUnavailableError, gather_settled
from .i18n import Translator
from .session_store import AuthSession

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


async def sign_in(
    backend: BackendClient,
    auth_session: AuthSession,
    form: SignInForm,
    *,
    t: Translator,
) -> bool:
    """Authenticate against the backend and flash the outcome."""

    try:
        user, token = await backend.sign_in(email=form.email.strip(), password=form.password)
    except BackendUnavailableError:
        logger.exception("Sign in for %s could not reach the backend", form.email)
        auth_session.flash(Notice.error(t("genericError"), icon="❌"))
        return False
    except BackendError as exc:
        if exc.status_code is not None and exc.status_code >= 500:
            logger.error("Sign in for %s failed on the backend: %s", form.email, exc)
            auth_session.flash(Notice.error(t("genericError"), icon="❌"))
        else:
            logger.info("Sign in rejected for %s: %s", form.email, exc)
            auth_session.flash(Notice.error(t("invalidCredentials"), icon="❌"))
        return False

    auth_session.sign_in(user, token)
    logger.info("User %s signed in", user.id)
    auth_session.flash(Notice.success(t("signedIn"), icon="✅"))
    return True


async def sign_up(
    backend: BackendClient,
    auth_session: AuthSession,
    form: SignUpForm,
    *,
    t: Translator,
) -> bool:
    """Register an account, then sign in with the same credentials."""

    try:
        await backend.register(name=form.name.strip(), email=form.email.strip(), password=form.password)
    except BackendUnavailableError:
        logger.exception("Registration for %s could not reach the backend", form.email)
        auth_session.flash(Notice.error(t("genericError"), icon="❌"))
        return False
    except BackendError as exc:
        logger.info("Registration rejected for %s: %s", form.email, exc)
        message = exc.message if exc.status_code and exc.status_code < 500 else t("registrationFailed")
        auth_session.flash(Notice.error(message or t("registrationFailed"), icon="❌"))
        return False

    try:
        user, token = await backend.sign_in(email=form.email.strip(), password=form.password)
    except BackendError as exc:
        logger.warning("Automatic sign in after registration failed for %s: %s", form.email, exc)
        auth_session.flash(Notice.error(t("signInFailed"), icon="⚠️"))
        return False

    auth_session.sign_in(user, token)
    logger.info("User %s registered", user.id)
    auth_session.flash(Notice.success(t("accountCreated"), icon="🎉"))
    return True


def sign_out(auth_session: AuthSession, *, t: Translator) -> None:
    if auth_session.user_id:
        logger.info("User %s signed out", auth_session.user_id)
    auth_session.sign_out()
    auth_session.flash(Notice.success(t("signedOut"), icon="👋"))


def validate_password_change(form: ProfileUpdateForm) -> None:
    """Check a password change locally; raises before anything is sent."""

    if not form.new_password:
        return
    if not form.current_password:
        raise FormValidationError("currentPasswordRequired", ["current_password"])
    if len(form.new_password) < MIN_PASSWORD_LENGTH:
        raise FormValidationError("passwordTooShort", ["new_password"])
    if form.new_password != form.confirm_password:
        raise FormValidationError("passwordsDoNotMatch", ["confirm_password"])


def update_profile(auth_session: AuthSession, form: ProfileUpdateForm, *, t: Translator) -> bool:
    """Apply a profile edit to the session.

    The backend has no profile endpoint, so only the display name changes.
    """

    try:
        validate_password_change(form)
    except FormValidationError as exc:
        auth_session.flash(Notice.error(t(exc.message_key), icon="⚠️"))
        return False

    if auth_session.user is None:
        return False

    name = form.name.strip()
    if name:
        auth_session.user = auth_session.user.model_copy(update={"name": name})
    logger.info("User %s updated their profile", auth_session.user_id)
    auth_session.flash(Notice.success(t("profileUpdated"), icon="✅"))
    return True


async def load_user_stats(backend: BackendClient, auth_session: AuthSession) -> UserStats:
    """Count the user's listings and favorites; failed lookups count as zero."""

    houses, favorites = await gather_settled(
        backend.list_user_houses(auth_session.token),
        backend.list_favorite_ids(auth_session.token),
    )
    if isinstance(houses, BackendError):
        logger.warning("Could not load listings of user %s: %s", auth_session.user_id, houses)
        houses = []
    if isinstance(favorites, BackendError):
        logger.warning("Could not load favorites of user %s: %s", auth_session.user_id, favorites)
        favorites = []
    return UserStats(total_houses=len(houses), total_favorites=len(favorites))
