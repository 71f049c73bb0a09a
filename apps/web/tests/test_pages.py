"""Tests for the locale-prefixed HTML pages."""
from __future__ import annotations

import pytest
from conftest import house, sign_in


@pytest.mark.asyncio
async def test_unsupported_locale_is_not_found(client) -> None:
    response = await client.get("/fr/houses")

    assert response.status_code == 404
    assert "Page not found" in response.text


@pytest.mark.asyncio
async def test_locale_root_opens_listings(client) -> None:
    response = await client.get("/pt")

    assert response.status_code == 307
    assert response.headers["location"] == "/pt/houses"


@pytest.mark.asyncio
async def test_listings_page_renders_every_house(client, fake_backend) -> None:
    response = await client.get("/en/houses")

    assert response.status_code == 200
    assert 'data-result-count="4"' in response.text
    assert "4 properties found" in response.text
    for house_id in ("h1", "h2", "h3", "h4"):
        assert f'data-listing-id="{house_id}"' in response.text
    assert fake_backend.requests[0].url.path == "/api/houses"
    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_purpose_selects_backend_status(client, fake_backend) -> None:
    response = await client.get("/en/houses", params={"purpose": "rent"})

    assert response.status_code == 200
    assert "Homes for Rent" in response.text
    assert fake_backend.requests[0].url.params["status"] == "FOR_RENT"
    assert 'data-result-count="1"' in response.text
    assert "$1,800/mo" in response.text


@pytest.mark.asyncio
async def test_query_filters_narrow_the_results(client) -> None:
    response = await client.get("/en/houses", params=[("bedrooms", "3"), ("bedrooms", "4")])
    condo = await client.get("/en/houses", params={"q": "condo"})

    assert 'data-result-count="3"' in response.text
    assert 'data-listing-id="h2"' not in response.text
    assert 'data-result-count="1"' in condo.text
    assert 'data-listing-id="h2"' in condo.text


@pytest.mark.asyncio
async def test_clear_shows_the_full_collection(client) -> None:
    response = await client.get("/en/houses", params={"q": "condo", "bedrooms": "2", "clear": "1"})

    assert 'data-result-count="4"' in response.text


@pytest.mark.asyncio
async def test_no_matches_shows_empty_message(client) -> None:
    response = await client.get("/en/houses", params={"q": "lighthouse"})

    assert "data-empty" in response.text
    assert "No properties match your filters" in response.text


@pytest.mark.asyncio
async def test_listings_page_is_translated(client) -> None:
    response = await client.get("/es/houses")

    assert '<html lang="es">' in response.text
    assert "Todas las propiedades" in response.text


@pytest.mark.asyncio
async def test_backend_failure_renders_a_notice(client, fake_backend) -> None:
    fake_backend.failing.add("/api/houses")

    response = await client.get("/en/houses")

    assert response.status_code == 200
    assert "Could not load properties" in response.text
    assert 'data-result-count="0"' in response.text


@pytest.mark.asyncio
async def test_detail_requires_sign_in(client) -> None:
    response = await client.get("/en/houses/h1")

    assert response.status_code == 303
    assert response.headers["location"] == "/en"


@pytest.mark.asyncio
async def test_sign_in_sets_cookie_and_flashes_once(client) -> None:
    response = await sign_in(client)

    assert response.status_code == 303
    assert response.headers["location"] == "/en/houses"
    assert "renthome_session" in response.headers["set-cookie"]

    page = await client.get("/en/houses")
    again = await client.get("/en/houses")

    assert "Successfully signed in!" in page.text
    assert 'data-authenticated="true"' in page.text
    assert "Successfully signed in!" not in again.text


@pytest.mark.asyncio
async def test_sign_in_ignores_offsite_next(client) -> None:
    response = await client.post(
        "/en/auth/signin",
        data={"email": "ada@example.com", "password": "wrong", "next": "//evil.example.com"},
    )

    assert response.headers["location"] == "/en/houses"


@pytest.mark.asyncio
async def test_detail_page_with_similar_homes(client, fake_backend) -> None:
    await sign_in(client)
    fake_backend.favorites = ["h1"]
    fake_backend.requests.clear()

    response = await client.get("/en/houses/h1")

    assert response.status_code == 200
    assert "h1 Main St" in response.text
    assert "data-price-per-area" in response.text
    assert 'id="booking-dialog"' in response.text
    assert 'data-listing-id="h3"' in response.text
    assert 'data-listing-id="h1"' not in response.text
    assert 'data-favorited="true"' in response.text
    similar = [r for r in fake_backend.requests if r.url.path == "/api/houses"][0]
    assert similar.url.params["status"] == "FOR_SALE"
    assert similar.url.params["exclude"] == "h1"
    assert similar.url.params["limit"] == "5"


@pytest.mark.asyncio
async def test_sold_listing_has_no_booking_dialog(client) -> None:
    await sign_in(client)

    response = await client.get("/en/houses/h4")

    assert response.status_code == 200
    assert 'id="booking-dialog"' not in response.text
    assert "data-sold-notice disabled>Sold</button>" in response.text


@pytest.mark.asyncio
async def test_owner_sees_disabled_notice_instead_of_booking(client) -> None:
    await sign_in(client)

    response = await client.get("/en/houses/h3")

    assert response.status_code == 200
    assert 'id="booking-dialog"' not in response.text
    assert "data-owner-notice disabled>You posted this property</button>" in response.text


@pytest.mark.asyncio
async def test_owner_heart_is_disabled_on_detail_and_dashboard(client) -> None:
    await sign_in(client)

    detail = await client.get("/en/houses/h3")
    dashboard = await client.get("/en/dashboard")

    for page in (detail, dashboard):
        assert 'title="You can&#x27;t favorite your own property"' in page.text
        assert 'data-favorited="false" disabled>' in page.text


@pytest.mark.asyncio
async def test_listing_without_photos_still_has_a_heart(client, fake_backend) -> None:
    fake_backend.houses.append(house("bare", pictures=[], homeStatus="PENDING"))
    await sign_in(client)

    response = await client.get("/en/houses/bare")

    assert response.status_code == 200
    assert "No photos available" in response.text
    assert "data-favorite-toggle " in response.text


@pytest.mark.asyncio
async def test_missing_listing_is_not_found(client) -> None:
    await sign_in(client)

    response = await client.get("/en/houses/nope")

    assert response.status_code == 404
    assert "Property not found" in response.text


@pytest.mark.asyncio
async def test_favorites_page_lists_saved_houses(client, fake_backend) -> None:
    await sign_in(client)
    fake_backend.favorites = ["h2"]

    response = await client.get("/en/favorites")

    assert response.status_code == 200
    assert 'data-listing-id="h2"' in response.text
    assert 'data-listing-id="h1"' not in response.text


@pytest.mark.asyncio
async def test_dashboard_lists_owned_houses(client) -> None:
    await sign_in(client)

    response = await client.get("/en/dashboard")

    assert 'data-listing-id="h3"' in response.text
    assert 'data-listing-id="h1"' not in response.text


@pytest.mark.asyncio
async def test_profile_shows_stats(client, fake_backend) -> None:
    await sign_in(client)
    fake_backend.favorites = ["h1", "h2"]

    response = await client.get("/en/profile")

    assert response.status_code == 200
    assert "data-total-houses>1<" in response.text
    assert "data-total-favorites>2<" in response.text


@pytest.mark.asyncio
async def test_profile_password_mismatch_reopens_the_form(client) -> None:
    await sign_in(client)
    await client.get("/en/houses")

    response = await client.post(
        "/en/profile",
        data={"name": "Ada", "current_password": "old", "new_password": "abcdef", "confirm_password": "abcxyz"},
    )
    page = await client.get(response.headers["location"])

    assert response.status_code == 303
    assert response.headers["location"] == "/en/profile?edit=true"
    assert "New passwords do not match" in page.text
    assert 'name="confirm_password"' in page.text


@pytest.mark.asyncio
async def test_sign_out_ends_the_session(client) -> None:
    await sign_in(client)

    response = await client.post("/en/auth/signout", data={"next": "/en/houses"})
    detail = await client.get("/en/houses/h1")

    assert response.status_code == 303
    assert detail.status_code == 303
