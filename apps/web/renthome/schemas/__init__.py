"""Expose request and response schemas."""
from .actions import (
    BookingForm,
    BookingRequest,
    BookingResponse,
    FavoriteToggleRequest,
    FavoriteToggleResponse,
)
from .auth import ProfileUpdateForm, SessionUser, SignInForm, SignUpForm, UserStats
from .listings import FavoriteEntry, Listing, ListingStatus, Picture
from .notices import Notice

__all__ = [
    "BookingForm",
    "BookingRequest",
    "BookingResponse",
    "FavoriteEntry",
    "FavoriteToggleRequest",
    "FavoriteToggleResponse",
    "Listing",
    "ListingStatus",
    "Notice",
    "Picture",
    "ProfileUpdateForm",
    "SessionUser",
    "SignInForm",
    "SignUpForm",
    "UserStats",
]
