from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class Language(str, Enum):
    EN = "en"
    AR = "ar"


TEXT_DIRECTION = {
    Language.EN: "ltr",
    Language.AR: "rtl",
}


@dataclass(frozen=True)
class Preferences:
    """Client-side display preferences for one request."""

    theme: Theme = Theme.SYSTEM
    language: Language = Language.EN

    @property
    def direction(self) -> str:
        return TEXT_DIRECTION[self.language]

    def with_changes(self, *, theme: Theme | None = None, language: Language | None = None) -> "Preferences":
        return replace(self, theme=theme or self.theme, language=language or self.language)
