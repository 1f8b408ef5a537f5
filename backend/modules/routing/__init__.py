"""
Routing module.

Maps canonical paths (after language stripping) to page routes through
an explicit, ordered pattern table.

Public API:
- RouteDispatcher: dispatch(residual) and url_for(name, lang, **params)
- RouteTable, ROUTES: the site's route table and its consistency check
- Models: RoutePattern, RouteDescriptor, RouteMatch, PatternTier
"""

from .models import PatternTier, RoutePattern, RouteDescriptor, RouteMatch, route
from .table import ROUTES, HOME_ROUTE, RouteTable, get_route_table
from .service import RouteDispatcher, get_route_dispatcher, reset_route_dispatcher, url_for
from .exceptions import RouteNotFoundError, RouteParamsError, DuplicateRouteError

__all__ = [
    # Models
    "PatternTier",
    "RoutePattern",
    "RouteDescriptor",
    "RouteMatch",
    "route",
    # Table
    "ROUTES",
    "HOME_ROUTE",
    "RouteTable",
    "get_route_table",
    # Dispatcher
    "RouteDispatcher",
    "get_route_dispatcher",
    "reset_route_dispatcher",
    "url_for",
    # Exceptions
    "RouteNotFoundError",
    "RouteParamsError",
    "DuplicateRouteError",
]
