"""Listing filter state and predicate for the collection page."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Mapping, Sequence

from ..schemas.listings import Listing, ListingStatus

DEFAULT_PRICE_RANGE: tuple[float, float] = (0, 2_000_000)
DEFAULT_AREA_RANGE: tuple[float, float] = (0, 10_000)
BEDROOM_OPTIONS: tuple[int, ...] = (1, 2, 3, 4, 5, 6)
BATHROOM_OPTIONS: tuple[int, ...] = (1, 2, 3, 4, 5)
PROPERTY_TYPES: tuple[str, ...] = ("Single Family", "Condo", "Townhouse", "Multi-Family")
STATUS_OPTIONS: tuple[str, ...] = (ListingStatus.FOR_SALE.value, ListingStatus.FOR_RENT.value)

PURPOSE_STATUS: dict[str, str] = {
    "buy": ListingStatus.FOR_SALE.value,
    "rent": ListingStatus.FOR_RENT.value,
}

# Fallback map centre (New York) when no listing has coordinates.
DEFAULT_MAP_CENTER: tuple[float, float] = (40.7128, -74.0060)


@dataclass(frozen=True)
class FilterState:
    """Active search and filter criteria of the listings page."""

    search: str = ""
    price_min: float = DEFAULT_PRICE_RANGE[0]
    price_max: float = DEFAULT_PRICE_RANGE[1]
    area_min: float = DEFAULT_AREA_RANGE[0]
    area_max: float = DEFAULT_AREA_RANGE[1]
    bedrooms: frozenset[int] = field(default_factory=frozenset)
    bathrooms: frozenset[int] = field(default_factory=frozenset)
    property_types: frozenset[str] = field(default_factory=frozenset)
    statuses: frozenset[str] = field(default_factory=frozenset)

    def cleared(self) -> "FilterState":
        """Return the default state (full ranges, nothing selected, no search)."""

        return FilterState()

    def with_search(self, search: str) -> "FilterState":
        return replace(self, search=search)

    @property
    def is_default(self) -> bool:
        return self == FilterState()

    @property
    def active_count(self) -> int:
        """Number of dialog criteria that narrow the result, for the filter badge."""

        count = 0
        if (self.price_min, self.price_max) != DEFAULT_PRICE_RANGE:
            count += 1
        if (self.area_min, self.area_max) != DEFAULT_AREA_RANGE:
            count += 1
        for selection in (self.bedrooms, self.bathrooms, self.property_types, self.statuses):
            if selection:
                count += 1
        return count


def _within(value: float, lower: float, upper: float, ceiling: float) -> bool:
    # The slider's top value reads "N+", so the default ceiling does not cap.
    if value < lower:
        return False
    return upper >= ceiling or value <= upper


def matches(listing: Listing, state: FilterState) -> bool:
    """Return True when ``listing`` satisfies every criterion of ``state``."""

    needle = state.search.lower()
    if needle:
        haystacks = (
            listing.street_address,
            listing.city,
            listing.state,
            listing.home_type,
            str(listing.bedrooms),
        )
        if not any(needle in haystack.lower() for haystack in haystacks):
            return False

    if not _within(listing.price, state.price_min, state.price_max, DEFAULT_PRICE_RANGE[1]):
        return False
    if not _within(listing.living_area, state.area_min, state.area_max, DEFAULT_AREA_RANGE[1]):
        return False

    if state.bedrooms and listing.bedrooms not in state.bedrooms:
        return False
    if state.bathrooms and listing.bathrooms not in state.bathrooms:
        return False
    if state.property_types and listing.home_type not in state.property_types:
        return False
    if state.statuses and listing.home_status not in state.statuses:
        return False
    return True


def filter_listings(listings: Iterable[Listing], state: FilterState) -> list[Listing]:
    """Evaluate the predicate over the whole collection, preserving input order."""

    return [listing for listing in listings if matches(listing, state)]


def status_for_purpose(purpose: str | None) -> str | None:
    """Map the ``purpose`` query parameter to a backend status preset."""

    if not purpose:
        return None
    return PURPOSE_STATUS.get(purpose.lower())


def map_center(listings: Sequence[Listing]) -> tuple[float, float]:
    """Mean coordinates of the listings that have them."""

    points = [
        (listing.latitude, listing.longitude)
        for listing in listings
        if listing.latitude is not None and listing.longitude is not None
    ]
    if not points:
        return DEFAULT_MAP_CENTER
    lat_sum = sum(lat for lat, _ in points)
    lng_sum = sum(lng for _, lng in points)
    return lat_sum / len(points), lng_sum / len(points)


def _number(value: str | None, default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        parsed = float(value.replace(",", ""))
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


def _int_set(values: Sequence[str], allowed: Sequence[int]) -> frozenset[int]:
    selected: set[int] = set()
    for value in values:
        try:
            number = int(value)
        except ValueError:
            continue
        if number in allowed:
            selected.add(number)
    return frozenset(selected)


def parse_filter_state(params: Mapping[str, Sequence[str]]) -> FilterState:
    """Build a :class:`FilterState` from multi-valued query parameters.

    Unknown options and malformed numbers fall back to the defaults; inverted
    ranges are swapped.
    """

    def first(name: str) -> str | None:
        values = params.get(name) or []
        return values[0] if values else None

    if first("clear"):
        return FilterState()

    price_min = _number(first("price_min"), DEFAULT_PRICE_RANGE[0])
    price_max = _number(first("price_max"), DEFAULT_PRICE_RANGE[1])
    area_min = _number(first("area_min"), DEFAULT_AREA_RANGE[0])
    area_max = _number(first("area_max"), DEFAULT_AREA_RANGE[1])
    if price_min > price_max:
        price_min, price_max = price_max, price_min
    if area_min > area_max:
        area_min, area_max = area_max, area_min

    return FilterState(
        search=(first("q") or "").strip(),
        price_min=price_min,
        price_max=price_max,
        area_min=area_min,
        area_max=area_max,
        bedrooms=_int_set(params.get("bedrooms") or [], BEDROOM_OPTIONS),
        bathrooms=_int_set(params.get("bathrooms") or [], BATHROOM_OPTIONS),
        property_types=frozenset(v for v in params.get("type") or [] if v in PROPERTY_TYPES),
        statuses=frozenset(v for v in params.get("status") or [] if v in STATUS_OPTIONS),
    )
