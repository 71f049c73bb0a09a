"""Transient user feedback shown as toasts."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

NoticeLevel = Literal["success", "error", "loading"]

DEFAULT_DURATIONS_MS: dict[str, int] = {
    "success": 3000,
    "error": 4000,
    "loading": 4000,
}


class Notice(BaseModel):
    level: NoticeLevel
    message: str
    icon: str | None = None
    duration_ms: int = Field(default=4000, ge=0)

    @classmethod
    def success(cls, message: str, *, icon: str | None = None) -> "Notice":
        return cls(level="success", message=message, icon=icon, duration_ms=DEFAULT_DURATIONS_MS["success"])

    @classmethod
    def error(cls, message: str, *, icon: str | None = None) -> "Notice":
        return cls(level="error", message=message, icon=icon, duration_ms=DEFAULT_DURATIONS_MS["error"])
