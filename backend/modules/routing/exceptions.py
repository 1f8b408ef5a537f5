"""
Routing exceptions.

Dispatch never raises: an unmatched path is a soft 404 to the home
page. These are only for programming errors such as asking for a link
to a route that does not exist.
"""

from typing import Optional

from shared.exceptions import NotFoundError, ValidationError


class RouteNotFoundError(NotFoundError):
    """No route with this name."""

    def __init__(self, name: str):
        super().__init__(f"Route not found: {name}", details={"route": name})
        self.name = name


class RouteParamsError(ValidationError):
    """url_for was called with missing or malformed parameters."""

    def __init__(self, name: str, missing: Optional[list[str]] = None, message: Optional[str] = None):
        super().__init__(
            message or f"Missing parameters for route {name}: {', '.join(missing or [])}",
            details={"route": name, "missing": missing or []},
        )
        self.name = name


class DuplicateRouteError(ValidationError):
    """Two routes share a name or a pattern."""

    pass
