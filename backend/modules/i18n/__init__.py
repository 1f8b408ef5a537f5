"""
Language module.

Classifies and rewrites the language segment of URL paths and keeps the
user's preferred language.

Public API:
- Language, SUPPORTED_LANGUAGES, DEFAULT_LANGUAGE, HOME_PATH
- language_of, strip_language, with_language, get_lang_path
- LanguagePreference and its stores
"""

from .interfaces import IPreferenceStore
from .models import Language, SUPPORTED_LANGUAGES, DEFAULT_LANGUAGE, HOME_PATH, PREFERENCE_KEY
from .service import (
    language_of,
    strip_language,
    with_language,
    get_lang_path,
    LanguagePreference,
    get_language_preference,
    reset_language_preference,
)
from .storage import FilePreferenceStore, InMemoryPreferenceStore

__all__ = [
    # Interface
    "IPreferenceStore",
    # Models
    "Language",
    "SUPPORTED_LANGUAGES",
    "DEFAULT_LANGUAGE",
    "HOME_PATH",
    "PREFERENCE_KEY",
    # Resolver
    "language_of",
    "strip_language",
    "with_language",
    "get_lang_path",
    # Preference
    "LanguagePreference",
    "get_language_preference",
    "reset_language_preference",
    "FilePreferenceStore",
    "InMemoryPreferenceStore",
]
