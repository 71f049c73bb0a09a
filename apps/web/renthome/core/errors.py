"""Errors shared across services."""
from __future__ import annotations


class FormValidationError(ValueError):
    """Raised before any submission when a form is incomplete or inconsistent."""

    def __init__(self, message_key: str, fields: list[str] | None = None) -> None:
        super().__init__(message_key)
        self.message_key = message_key
        self.fields = fields or []
