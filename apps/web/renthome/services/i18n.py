"""Locale resolution and message catalogs."""
from __future__ import annotations

import json
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

from ..core.config import settings

logger = logging.getLogger(__name__)

MESSAGES_DIR = Path(__file__).resolve().parent.parent / "messages"
LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "es": "Español",
    "pt": "Português",
}
_PLACEHOLDER = re.compile(r"\{(\w+)\}")


class UnsupportedLocaleError(LookupError):
    """Raised when a request names a locale without a catalog."""


def resolve_locale(value: str | None) -> str:
    """Return a supported locale, falling back to the default for empty values."""

    locale = (value or "").strip() or settings.default_locale
    if locale not in settings.supported_locales:
        raise UnsupportedLocaleError(locale)
    return locale


def negotiate_locale(accept_language: str | None) -> str:
    """Pick the best supported locale from an ``Accept-Language`` header."""

    if not accept_language:
        return settings.default_locale

    weighted: list[tuple[float, int, str]] = []
    for position, part in enumerate(accept_language.split(",")):
        tag, _, params = part.strip().partition(";")
        quality = 1.0
        if params.strip().startswith("q="):
            try:
                quality = float(params.strip()[2:])
            except ValueError:
                quality = 0.0
        language = tag.strip().split("-")[0].lower()
        if language and quality > 0:
            weighted.append((-quality, position, language))

    for _, _, language in sorted(weighted):
        if language in settings.supported_locales:
            return language
    return settings.default_locale


def switch_locale_path(path: str, new_locale: str) -> str:
    """Swap the leading locale segment of ``path`` for ``new_locale``."""

    segments = path.split("/")
    if len(segments) > 1 and segments[1] in settings.supported_locales:
        rest = "/".join(segments[2:])
    else:
        rest = "/".join(segments[1:])
    return f"/{new_locale}/{rest}" if rest else f"/{new_locale}"


@lru_cache
def load_messages(locale: str) -> dict[str, Any]:
    """Load the JSON catalog for ``locale`` once."""

    path = MESSAGES_DIR / f"{locale}.json"
    if not path.exists():
        raise UnsupportedLocaleError(locale)
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


class Translator:
    """Dotted-key message lookup bound to one locale."""

    def __init__(self, locale: str, messages: dict[str, Any], namespace: str = "") -> None:
        self.locale = locale
        self._messages = messages
        self._namespace = namespace

    def scoped(self, namespace: str) -> "Translator":
        full = f"{self._namespace}.{namespace}" if self._namespace else namespace
        return Translator(self.locale, self._messages, full)

    def __call__(self, key: str, **params: object) -> str:
        full_key = f"{self._namespace}.{key}" if self._namespace else key
        node: Any = self._messages
        for part in full_key.split("."):
            if not isinstance(node, dict) or part not in node:
                logger.warning("Missing message %s for locale %s", full_key, self.locale)
                return full_key
            node = node[part]
        if not isinstance(node, str):
            logger.warning("Message %s for locale %s is not a string", full_key, self.locale)
            return full_key
        if not params:
            return node
        return _PLACEHOLDER.sub(lambda match: str(params.get(match.group(1), match.group(0))), node)


def get_translator(locale: str) -> Translator:
    """Resolve ``locale`` and return a translator for it."""

    resolved = resolve_locale(locale)
    return Translator(resolved, load_messages(resolved))
