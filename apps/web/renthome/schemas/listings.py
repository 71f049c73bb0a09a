"""Listing payloads returned by the backend."""
from __future__ import annotations

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ListingStatus(str, enum.Enum):
    FOR_SALE = "FOR_SALE"
    FOR_RENT = "FOR_RENT"
    RECENTLY_SOLD = "RECENTLY_SOLD"


class Picture(BaseModel):
    url: str


class Listing(BaseModel):
    """Single property record as served by ``/api/houses``.

    Backend JSON is camelCase; snake_case names are accepted as well so tests and
    internal callers can build listings directly. Statuses outside
    :class:`ListingStatus` are passed through untouched.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str
    zpid: int | None = None
    street_address: str = ""
    city: str = ""
    state: str = ""
    zipcode: str = ""
    neighborhood: str | None = None
    community: str | None = None
    subdivision: str | None = None
    pictures: list[Picture] = Field(default_factory=list)
    photos: list[str] = Field(default_factory=list)
    bedrooms: int = Field(default=0, ge=0)
    bathrooms: float = Field(default=0, ge=0)
    price: float = Field(default=0, ge=0)
    living_area: float = Field(default=0, ge=0)
    year_built: int | None = None
    latitude: float | None = None
    longitude: float | None = None
    home_status: str = ""
    description: str = ""
    currency: str = "USD"
    home_type: str = ""
    date_posted_string: str = ""
    url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    owner_id: str | None = None

    @property
    def price_per_area(self) -> int | None:
        """Display-only price per square foot."""

        if not self.price or not self.living_area:
            return None
        return round(self.price / self.living_area)

    @property
    def picture_urls(self) -> list[str]:
        if self.pictures:
            return [picture.url for picture in self.pictures]
        return list(self.photos)

    @property
    def full_address(self) -> str:
        return f"{self.street_address}, {self.city}, {self.state} {self.zipcode}".strip()

    @property
    def is_rent(self) -> bool:
        return self.home_status == ListingStatus.FOR_RENT.value

    @property
    def is_sold(self) -> bool:
        return self.home_status == ListingStatus.RECENTLY_SOLD.value

    def is_owned_by(self, user_id: str | None) -> bool:
        return bool(user_id) and self.owner_id == user_id


class FavoriteEntry(BaseModel):
    """One row of ``GET /api/favorites``.

    Some backend versions return the favorited listings themselves instead of
    ``{houseId}`` rows, so ``id`` is accepted as a fallback.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    house_id: str | None = Field(default=None, alias="houseId")
    id: str | None = None

    @property
    def listing_id(self) -> str | None:
        return self.house_id or self.id
