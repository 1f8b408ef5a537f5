"""
Routing data models.

Patterns are path templates with `{param}` placeholders:

    /member/dashboard       exact
    /news/{slug}            prefix capture (ends in a parameter)
    /admin/news/{id}/edit   dynamic (literal text after a parameter)

A parameter in the middle of a template captures one segment. A
trailing parameter captures the rest of the path verbatim.
"""

import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

from modules.access import Guard, GateRequirement, order_requirements

_PARAM_RE = re.compile(r"^\{([a-zA-Z_][a-zA-Z0-9_]*)\}$")


class PatternTier(IntEnum):
    """Match precedence; lower tiers are tried first."""

    DYNAMIC = 1
    PREFIX_CAPTURE = 2
    EXACT = 3


@dataclass(frozen=True)
class RoutePattern:
    """A compiled route template."""

    template: str
    segments: tuple[str, ...]
    params: tuple[str, ...]
    regex: re.Pattern = field(repr=False, compare=False)

    @classmethod
    def compile(cls, template: str) -> "RoutePattern":
        if not template.startswith("/"):
            raise ValueError(f"Route template must start with '/': {template!r}")

        segments = tuple(s for s in template.split("/") if s)
        params: list[str] = []
        parts: list[str] = []
        for i, segment in enumerate(segments):
            param = _PARAM_RE.match(segment)
            if param is None:
                if "{" in segment or "}" in segment:
                    raise ValueError(f"Malformed segment {segment!r} in {template!r}")
                parts.append(re.escape(segment))
                continue
            name = param.group(1)
            if name in params:
                raise ValueError(f"Duplicate parameter {name!r} in {template!r}")
            params.append(name)
            last = i == len(segments) - 1
            parts.append(f"(?P<{name}>.+)" if last else f"(?P<{name}>[^/]+)")

        regex = re.compile("^/" + "/".join(parts) + "$")
        return cls(template=template, segments=segments, params=tuple(params), regex=regex)

    @property
    def tier(self) -> PatternTier:
        if not self.params:
            return PatternTier.EXACT
        seen_param = False
        for segment in self.segments:
            if _PARAM_RE.match(segment):
                seen_param = True
            elif seen_param:
                return PatternTier.DYNAMIC
        return PatternTier.PREFIX_CAPTURE

    @property
    def literal_count(self) -> int:
        return sum(1 for s in self.segments if _PARAM_RE.match(s) is None)

    def match(self, residual_path: str) -> Optional[dict[str, str]]:
        found = self.regex.match(residual_path)
        if found is None:
            return None
        return found.groupdict()

    def build(self, **params: str) -> str:
        """Fill in the template. Values are inserted verbatim."""
        out = []
        for segment in self.segments:
            param = _PARAM_RE.match(segment)
            out.append(str(params[param.group(1)]) if param else segment)
        return "/" + "/".join(out)

    def example(self) -> str:
        """A residual path this pattern matches, for consistency checks."""
        return self.build(**{name: f"sample-{name}" for name in self.params})


@dataclass(frozen=True)
class RouteDescriptor:
    """
    One entry of the route table.

    `page` names the page component; `guards` are applied in the gate
    chain's global order; `auth_page` selects the minimal auth chrome.
    """

    name: str
    pattern: RoutePattern
    page: str
    guards: tuple[Guard, ...] = ()
    auth_page: bool = False

    @property
    def requirements(self) -> list[GateRequirement]:
        """Every gate this route opts in to, in evaluation order."""
        return order_requirements(r for guard in self.guards for r in guard.requirements)

    @property
    def is_gated(self) -> bool:
        return bool(self.guards)


def route(
    name: str,
    template: str,
    page: str,
    *guards: Guard,
    auth_page: bool = False,
) -> RouteDescriptor:
    """Shorthand used by the route table."""
    return RouteDescriptor(
        name=name,
        pattern=RoutePattern.compile(template),
        page=page,
        guards=tuple(guards),
        auth_page=auth_page,
    )


@dataclass(frozen=True)
class RouteMatch:
    """Result of dispatching a residual path."""

    route: RouteDescriptor
    params: dict[str, str]
    residual_path: str
    fallback: bool = False

    @property
    def name(self) -> str:
        return self.route.name
