"""Schemas for authentication and the profile page."""
from __future__ import annotations

from pydantic import BaseModel, Field


class SessionUser(BaseModel):
    id: str
    name: str | None = None
    email: str | None = None


class SignInForm(BaseModel):
    email: str = ""
    password: str = ""


class SignUpForm(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""


class ProfileUpdateForm(BaseModel):
    name: str = ""
    current_password: str = ""
    new_password: str = ""
    confirm_password: str = ""


class UserStats(BaseModel):
    total_houses: int = Field(default=0, ge=0)
    total_favorites: int = Field(default=0, ge=0)
