"""
Language data models.

The portal supports a fixed, closed set of languages. Every canonical
URL starts with one of them.
"""

from enum import Enum
from typing import Optional


class Language(str, Enum):
    """Supported site languages."""

    EN = "en"
    ID = "id"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Language"]:
        """Return the language for an exact code, or None if unrecognized."""
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


SUPPORTED_LANGUAGES: tuple[Language, ...] = tuple(Language)

DEFAULT_LANGUAGE = Language.EN

# Residual path used when a canonical path would otherwise be empty
HOME_PATH = "/home"

# Storage key for the persisted preference
PREFERENCE_KEY = "tpc_lang"
