"""Tests for locale resolution and message lookup."""
from __future__ import annotations

import json

import pytest

from renthome.services.i18n import (
    MESSAGES_DIR,
    Translator,
    UnsupportedLocaleError,
    get_translator,
    load_messages,
    negotiate_locale,
    resolve_locale,
    switch_locale_path,
)


def test_resolve_locale_defaults_and_rejects_unknown() -> None:
    assert resolve_locale(None) == "en"
    assert resolve_locale("") == "en"
    assert resolve_locale("pt") == "pt"
    with pytest.raises(UnsupportedLocaleError):
        resolve_locale("fr")


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        (None, "en"),
        ("pt-BR,pt;q=0.9", "pt"),
        ("fr-FR, es;q=0.5, en;q=0.7", "en"),
        ("de, fr;q=0.8", "en"),
        ("es;q=abc, pt;q=0.2", "pt"),
        ("fr, es;q=0", "en"),
        ("es;q=0, pt", "pt"),
    ],
)
def test_negotiate_locale(header: str | None, expected: str) -> None:
    assert negotiate_locale(header) == expected


def test_switch_locale_path_keeps_the_rest_of_the_path() -> None:
    assert switch_locale_path("/en/houses/abc", "es") == "/es/houses/abc"
    assert switch_locale_path("/pt", "en") == "/en"
    assert switch_locale_path("/houses", "pt") == "/pt/houses"


def test_catalogs_share_the_same_keys() -> None:
    def keys(node: dict, prefix: str = "") -> set[str]:
        found: set[str] = set()
        for key, value in node.items():
            name = f"{prefix}{key}"
            if isinstance(value, dict):
                found |= keys(value, f"{name}.")
            else:
                found.add(name)
        return found

    catalogs = {
        path.stem: json.loads(path.read_text(encoding="utf-8")) for path in MESSAGES_DIR.glob("*.json")
    }

    assert set(catalogs) == {"en", "es", "pt"}
    reference = keys(catalogs["en"])
    for locale, catalog in catalogs.items():
        assert keys(catalog) == reference, locale


def test_translator_scopes_and_interpolates() -> None:
    t = get_translator("es")

    assert t.locale == "es"
    assert t("houses.allProperties") == "Todas las propiedades"
    assert "3" in t.scoped("houses")("results", count=3)


def test_missing_message_returns_the_key(caplog: pytest.LogCaptureFixture) -> None:
    t = Translator("en", load_messages("en"), "houses")

    assert t("doesNotExist") == "houses.doesNotExist"
    assert t("detail") == "houses.detail"
    assert "Missing message houses.doesNotExist" in caplog.text
