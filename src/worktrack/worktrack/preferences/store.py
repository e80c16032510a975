from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional, TypeVar

from .model import Language, Preferences, Theme

THEME_COOKIE = "theme"
LANGUAGE_COOKIE = "language"
COOKIE_MAX_AGE = 60 * 60 * 24 * 365

E = TypeVar("E", bound=Enum)


def _parse(enum_cls: type[E], value: Optional[str], default: E) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        return default


class PreferenceStore:
    """Loads preferences from request cookies and writes them back on change."""

    def __init__(self, *, default_theme: str = Theme.SYSTEM.value, default_language: str = Language.EN.value):
        self._defaults = Preferences(
            theme=_parse(Theme, default_theme, Theme.SYSTEM),
            language=_parse(Language, default_language, Language.EN),
        )

    @property
    def defaults(self) -> Preferences:
        return self._defaults

    def load(self, cookies: Mapping[str, str]) -> Preferences:
        return Preferences(
            theme=_parse(Theme, cookies.get(THEME_COOKIE), self._defaults.theme),
            language=_parse(Language, cookies.get(LANGUAGE_COOKIE), self._defaults.language),
        )

    def parse_update(self, current: Preferences, form: Mapping[str, str]) -> Preferences:
        """Apply submitted form values; unknown values keep the current choice."""

        return current.with_changes(
            theme=_parse(Theme, form.get("theme"), current.theme),
            language=_parse(Language, form.get("language"), current.language),
        )

    def save(self, response, prefs: Preferences):
        response.set_cookie(THEME_COOKIE, prefs.theme.value, max_age=COOKIE_MAX_AGE, samesite="Lax")
        response.set_cookie(LANGUAGE_COOKIE, prefs.language.value, max_age=COOKIE_MAX_AGE, samesite="Lax")
        return response
