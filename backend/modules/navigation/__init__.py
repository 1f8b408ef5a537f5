"""
Navigation module.

Client-side navigation without full reloads, and the normalizer that
keeps every observed path canonical.

Public API:
- IHistory / BrowserHistory: host session history
- ClientNavigator, Link: navigation primitives used by pages
- PathNormalizer, normalize_path: canonical path ownership
- NavigationEvent, NavigationKind, Location
"""

from .interfaces import IHistory, Unsubscribe
from .history import BrowserHistory
from .models import Location, NavigationEvent, NavigationKind, split_url
from .normalizer import NormalizedPath, PathNormalizer, normalize_path
from .observable import Observable, ObservableView
from .service import ClientNavigator, Link, is_external

__all__ = [
    # Interface
    "IHistory",
    "Unsubscribe",
    "BrowserHistory",
    # Models
    "Location",
    "NavigationEvent",
    "NavigationKind",
    "split_url",
    # Navigator
    "ClientNavigator",
    "Link",
    "is_external",
    # Normalizer
    "NormalizedPath",
    "PathNormalizer",
    "normalize_path",
    "Observable",
    "ObservableView",
]
