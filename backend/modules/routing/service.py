"""
Route Dispatcher.

Maps a language-stripped residual path to a route. Never fails: an
unmatched path is a soft 404 that dispatches to the home page.
"""

import logging
from typing import Optional

from modules.access.paths import clean_residual
from modules.i18n import Language, with_language

from .exceptions import RouteParamsError
from .models import RouteMatch
from .table import RouteTable, get_route_table

logger = logging.getLogger(__name__)


class RouteDispatcher:
    """Dispatches residual paths against a route table."""

    def __init__(self, table: Optional[RouteTable] = None):
        self._table = table or get_route_table()

    @property
    def table(self) -> RouteTable:
        return self._table

    def dispatch(self, residual_path: str) -> RouteMatch:
        """
        Find the route for a residual path.

        Trailing slashes are ignored. Captured parameters are passed
        through verbatim (no unquoting).
        """
        path = clean_residual(residual_path)
        found = self._table.first_match(path)
        if found is None:
            logger.debug(f"No route for {path}; falling back to {self._table.home.name}")
            return RouteMatch(route=self._table.home, params={}, residual_path=path, fallback=True)

        descriptor, params = found
        return RouteMatch(route=descriptor, params=params, residual_path=path)

    def url_for(self, name: str, lang: Language, **params: str) -> str:
        """
        Build the canonical path for a named route.

        Raises:
            RouteNotFoundError: Unknown route name
            RouteParamsError: Missing, unexpected or empty parameters
        """
        descriptor = self._table.get(name)
        pattern = descriptor.pattern

        missing = [p for p in pattern.params if p not in params]
        if missing:
            raise RouteParamsError(name, missing)
        unexpected = sorted(set(params) - set(pattern.params))
        if unexpected:
            raise RouteParamsError(name, message=f"Unexpected parameters for route {name}: {', '.join(unexpected)}")
        empty = [p for p in pattern.params if not str(params[p])]
        if empty:
            raise RouteParamsError(name, message=f"Empty parameters for route {name}: {', '.join(empty)}")

        return with_language(lang, pattern.build(**params))


_dispatcher: Optional[RouteDispatcher] = None


def get_route_dispatcher() -> RouteDispatcher:
    """Get the global dispatcher instance."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = RouteDispatcher()
    return _dispatcher


def reset_route_dispatcher() -> None:
    """Reset the global dispatcher (for testing)."""
    global _dispatcher
    _dispatcher = None


def url_for(name: str, lang: Language, **params: str) -> str:
    """Canonical path for a named route, using the site's route table."""
    return get_route_dispatcher().url_for(name, lang, **params)
