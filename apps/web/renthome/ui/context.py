"""Per-request values every rendered page needs."""
from __future__ import annotations

from dataclasses import dataclass, field

from ..schemas.notices import Notice
from ..services.i18n import Translator
from ..services.session_store import AuthSession


@dataclass
class PageContext:
    t: Translator
    path: str
    auth_session: AuthSession
    notices: list[Notice] = field(default_factory=list)

    @property
    def locale(self) -> str:
        return self.t.locale

    def href(self, suffix: str = "") -> str:
        """Locale-prefixed link, e.g. ``href("/houses")`` -> ``/es/houses``."""

        return f"/{self.locale}{suffix}"
