"""Shared fixtures: sample listings and an in-memory fake of the REST backend."""
from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from renthome.main import app
from renthome.schemas.auth import SessionUser
from renthome.schemas.listings import Listing
from renthome.services.backend import BackendClient, get_backend
from renthome.services.session_store import AuthSession

USER = {"id": "user-1", "name": "Ada Lovelace", "email": "ada@example.com"}
PASSWORD = "secret-pass"


def house(house_id: str, **overrides: Any) -> dict[str, Any]:
    """Backend-shaped (camelCase) listing record."""

    record: dict[str, Any] = {
        "id": house_id,
        "zpid": 1000,
        "streetAddress": f"{house_id} Main St",
        "city": "Springfield",
        "state": "IL",
        "zipcode": "62701",
        "bedrooms": 3,
        "bathrooms": 2,
        "price": 350_000,
        "livingArea": 1_750,
        "homeStatus": "FOR_SALE",
        "homeType": "Single Family",
        "latitude": 39.78,
        "longitude": -89.65,
        "datePostedString": "2024-05-01",
        "description": "Sunny home",
        "pictures": [{"url": f"https://img.example.com/{house_id}.jpg"}],
    }
    record.update(overrides)
    return record


def make_listing(house_id: str = "h1", **overrides: Any) -> Listing:
    return Listing.model_validate(house(house_id, **overrides))


SAMPLE_HOUSES = [
    house("h1"),
    house("h2", homeType="Condo", bedrooms=2, price=1_800, livingArea=900, homeStatus="FOR_RENT"),
    house("h3", bedrooms=4, bathrooms=3, price=725_000, livingArea=3_200, ownerId=USER["id"]),
    house("h4", homeStatus="RECENTLY_SOLD", price=410_000),
]


class FakeBackend:
    """Request handler for ``httpx.MockTransport`` mimicking the listings API."""

    def __init__(
        self,
        houses: list[dict[str, Any]] | None = None,
        favorites: list[str] | None = None,
    ) -> None:
        self.houses = list(houses if houses is not None else SAMPLE_HOUSES)
        self.favorites = list(favorites or [])
        self.users = {USER["email"]: (dict(USER), PASSWORD)}
        # Paths, or "METHOD path" pairs, answered with a 500.
        self.failing: set[str] = set()
        self.requests: list[httpx.Request] = []

    def client(self) -> BackendClient:
        return BackendClient("http://backend.test", transport=httpx.MockTransport(self.handler))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        method = request.method
        if path in self.failing or f"{method} {path}" in self.failing:
            return httpx.Response(500, json={"error": "Internal server error"})

        authorized = request.headers.get("Authorization") == f"Bearer token-{USER['id']}"

        if path == "/api/houses" and method == "GET":
            params = request.url.params
            data = [
                item
                for item in self.houses
                if (not params.get("status") or item.get("homeStatus") == params["status"])
                and item.get("id") != params.get("exclude")
            ]
            if params.get("limit"):
                data = data[: int(params["limit"])]
            return httpx.Response(200, json={"data": data})

        if path.startswith("/api/houses/") and method == "GET":
            house_id = path.rsplit("/", 1)[-1]
            for item in self.houses:
                if item.get("id") == house_id:
                    return httpx.Response(200, json={"data": item})
            return httpx.Response(404, json={"error": "House not found"})

        if path == "/api/favorites":
            if not authorized:
                return httpx.Response(401, json={"error": "Unauthorized"})
            if method == "GET":
                return httpx.Response(200, json={"data": [{"houseId": item} for item in self.favorites]})
            if method == "POST":
                house_id = json.loads(request.content)["houseId"]
                if house_id not in self.favorites:
                    self.favorites.append(house_id)
                return httpx.Response(201, json={"data": {"houseId": house_id}})
            if method == "DELETE":
                house_id = request.url.params["houseId"]
                if house_id in self.favorites:
                    self.favorites.remove(house_id)
                return httpx.Response(200, json={"data": {"houseId": house_id}})

        if path == "/api/user/houses" and method == "GET":
            if not authorized:
                return httpx.Response(401, json={"error": "Unauthorized"})
            owned = [item for item in self.houses if item.get("ownerId") == USER["id"]]
            return httpx.Response(200, json={"data": owned})

        if path == "/api/auth/register" and method == "POST":
            body = json.loads(request.content)
            if body["email"] in self.users:
                return httpx.Response(400, json={"error": "User already exists"})
            user = {"id": f"user-{len(self.users) + 1}", "name": body["name"], "email": body["email"]}
            self.users[body["email"]] = (user, body["password"])
            return httpx.Response(201, json={"data": user})

        if path == "/api/auth/signin" and method == "POST":
            body = json.loads(request.content)
            user, password = self.users.get(body["email"], (None, None))
            if user is None or password != body["password"]:
                return httpx.Response(401, json={"error": "Invalid credentials"})
            return httpx.Response(200, json={"data": {"user": user, "token": f"token-{user['id']}"}})

        return httpx.Response(404, json={"error": "Not found"})


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def signed_in_session() -> AuthSession:
    return AuthSession(
        session_id="session-1",
        user=SessionUser(**USER),
        token=f"token-{USER['id']}",
    )


@pytest.fixture
def anonymous_session() -> AuthSession:
    return AuthSession(session_id="session-anon")


@pytest_asyncio.fixture
async def client(fake_backend: FakeBackend):
    """HTTP client against the app with the backend swapped for the fake."""

    backend = fake_backend.client()
    app.dependency_overrides[get_backend] = lambda: backend
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
    app.dependency_overrides.clear()
    await backend.aclose()


async def sign_in(client: AsyncClient, locale: str = "en") -> httpx.Response:
    return await client.post(
        f"/{locale}/auth/signin",
        data={"email": USER["email"], "password": PASSWORD, "next": f"/{locale}/houses"},
    )
