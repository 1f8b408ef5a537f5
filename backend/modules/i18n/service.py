"""
Language Resolver.

Pure helpers that classify, strip and insert the language segment of a
path, plus the process-wide language preference.

    language_of("/id/news/abc")        -> Language.ID
    strip_language("/id/news/abc")     -> "/news/abc"
    with_language(Language.EN, "/")    -> "/en/home"
"""

import logging
import re
from typing import Optional

from shared.config import get_settings

from .interfaces import IPreferenceStore
from .models import Language, DEFAULT_LANGUAGE, HOME_PATH, PREFERENCE_KEY
from .storage import FilePreferenceStore, InMemoryPreferenceStore

logger = logging.getLogger(__name__)

_REPEATED_SLASHES = re.compile(r"/{2,}")


def language_of(path: str) -> Optional[Language]:
    """Return the language named by the first path segment, if recognized."""
    if not path or not path.startswith("/"):
        return None
    segment = path[1:].split("/", 1)[0]
    return Language.parse(segment)


def strip_language(path: str) -> str:
    """
    Remove leading language segments from a path.

    Accidental doubles such as "/en/en/news" are collapsed as well, so the
    result never starts with a language segment. Paths without a language
    prefix are returned unchanged.
    """
    residual = path
    while (lang := language_of(residual)) is not None:
        residual = residual[len(lang.value) + 1:] or "/"
    return residual


def with_language(lang: Language, residual_path: str) -> str:
    """Build the canonical path for a residual path in the given language."""
    residual = strip_language(residual_path or "")
    if residual in ("", "/"):
        residual = HOME_PATH
    if not residual.startswith("/"):
        residual = f"/{residual}"
    return _REPEATED_SLASHES.sub("/", f"/{Language(lang).value}{residual}")


def get_lang_path(lang: Language, residual_path: str) -> str:
    """Build an internal link target. Pages use this for every href."""
    return with_language(lang, residual_path)


class LanguagePreference:
    """
    The user's last explicitly chosen language.

    Reads fail open to the default language; the preference is only
    written by an explicit language switch.
    """

    def __init__(
        self,
        store: IPreferenceStore,
        default: Language = DEFAULT_LANGUAGE,
    ):
        self._store = store
        self._default = default

    @property
    def default(self) -> Language:
        return self._default

    def get_preferred(self) -> Language:
        try:
            stored = self._store.get_item(PREFERENCE_KEY)
        except (OSError, ValueError) as e:
            logger.debug(f"Language preference unreadable, using default: {e}")
            return self._default
        return Language.parse(stored) or self._default

    def set_preferred(self, lang: Language) -> None:
        try:
            self._store.set_item(PREFERENCE_KEY, Language(lang).value)
        except OSError as e:
            logger.warning(f"Failed to persist language preference: {e}")


# Module-level instance getter
_preference_instance: Optional[LanguagePreference] = None


def get_language_preference() -> LanguagePreference:
    """Get the process-wide language preference."""
    global _preference_instance
    if _preference_instance is None:
        settings = get_settings()
        store: IPreferenceStore
        if settings.language_storage_path:
            store = FilePreferenceStore(settings.language_storage_path)
        else:
            store = InMemoryPreferenceStore()
        default = Language.parse(settings.default_language) or DEFAULT_LANGUAGE
        _preference_instance = LanguagePreference(store, default)
    return _preference_instance


def reset_language_preference() -> None:
    """Reset the language preference singleton (for testing)."""
    global _preference_instance
    _preference_instance = None
