"""Async client for the Rent&Home REST backend."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ..core.config import settings
from ..schemas.auth import SessionUser
from ..schemas.listings import FavoriteEntry, Listing

logger = logging.getLogger(__name__)


class BackendError(RuntimeError):
    """Raised when the backend answers with an error status."""

    def __init__(self, message: str, *, status_code: int | None = None, path: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.path = path


class BackendUnavailableError(BackendError):
    """Raised when the backend cannot be reached or returns garbage."""


class BackendClient:
    """Thin wrapper over ``httpx.AsyncClient`` speaking the ``{data}``/``{error}`` envelope."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_houses(
        self,
        *,
        status: str | None = None,
        exclude: str | None = None,
        limit: int | None = None,
    ) -> list[Listing]:
        """``GET /api/houses`` with optional status, exclusion and limit."""

        params: dict[str, Any] = {}
        if status:
            params["status"] = status
        if exclude:
            params["exclude"] = exclude
        if limit is not None:
            params["limit"] = limit
        payload = await self._request("GET", "/api/houses", params=params)
        return _parse_listings(payload.get("data"))

    async def get_house(self, house_id: str) -> Listing | None:
        """Return one listing, or ``None`` when the backend does not know it."""

        path = f"/api/houses/{quote(house_id, safe='')}"
        try:
            payload = await self._request("GET", path)
        except BackendError as exc:
            if exc.status_code == 404:
                return None
            raise
        data = payload.get("data")
        if not data:
            return None
        try:
            return Listing.model_validate(data)
        except ValidationError as exc:
            raise BackendUnavailableError("Malformed listing payload", path=path) from exc

    async def list_favorite_ids(self, token: str | None) -> list[str]:
        payload = await self._request("GET", "/api/favorites", token=token)
        ids: list[str] = []
        for raw in payload.get("data") or []:
            if not isinstance(raw, dict):
                continue
            listing_id = FavoriteEntry.model_validate(raw).listing_id
            if listing_id and listing_id not in ids:
                ids.append(listing_id)
        return ids

    async def add_favorite(self, token: str | None, house_id: str) -> None:
        await self._request("POST", "/api/favorites", token=token, json={"houseId": house_id})

    async def remove_favorite(self, token: str | None, house_id: str) -> None:
        await self._request("DELETE", "/api/favorites", token=token, params={"houseId": house_id})

    async def list_user_houses(self, token: str | None) -> list[Listing]:
        payload = await self._request("GET", "/api/user/houses", token=token)
        return _parse_listings(payload.get("data"))

    async def register(self, *, name: str, email: str, password: str) -> None:
        await self._request(
            "POST",
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )

    async def sign_in(self, *, email: str, password: str) -> tuple[SessionUser, str | None]:
        """Exchange credentials for the user record and a bearer token."""

        payload = await self._request(
            "POST",
            "/api/auth/signin",
            json={"email": email, "password": password},
        )
        data = payload.get("data") or {}
        try:
            user = SessionUser.model_validate(data.get("user") or {})
        except ValidationError as exc:
            raise BackendUnavailableError("Malformed sign-in payload", path="/api/auth/signin") from exc
        token = data.get("token")
        return user, str(token) if token else None

    async def _request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("Backend %s %s unreachable: %s", method, path, exc)
            raise BackendUnavailableError("Backend unavailable", path=path) from exc

        try:
            payload = response.json() if response.content else {}
        except ValueError:
            payload = None

        if response.is_error:
            message = payload.get("error") if isinstance(payload, dict) else None
            logger.warning("Backend %s %s failed with %s: %s", method, path, response.status_code, message)
            raise BackendError(
                str(message or response.reason_phrase or "Backend error"),
                status_code=response.status_code,
                path=path,
            )

        if not isinstance(payload, dict):
            raise BackendUnavailableError("Backend returned an invalid body", path=path)
        return payload


def _parse_listings(raw: object) -> list[Listing]:
    """Validate listings, skipping records the backend got wrong."""

    if not isinstance(raw, list):
        return []
    listings: list[Listing] = []
    for item in raw:
        try:
            listings.append(Listing.model_validate(item))
        except ValidationError as exc:
            logger.warning("Skipping malformed listing %r: %s", item.get("id") if isinstance(item, dict) else item, exc)
    return listings


_client: BackendClient | None = None


def get_backend() -> BackendClient:
    """FastAPI dependency returning the shared backend client."""

    global _client
    if _client is None:
        _client = BackendClient(settings.backend_base_url, timeout=settings.backend_timeout_seconds)
    return _client


async def close_backend() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


async def gather_settled(*aws: Awaitable[Any]) -> list[Any]:
    """Run independent backend calls concurrently.

    Backend failures come back in place of their result so callers can degrade
    one section at a time; any other exception propagates.
    """

    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException) and not isinstance(result, BackendError):
            raise result
    return list(results)
