"""Pydantic models for the site runtime.

A SiteView is everything needed to draw the page for the current
canonical path: the dispatched route, the gate decision and the chrome.
"""

from typing import Optional

from pydantic import BaseModel, Field

from modules.access import GateDecision, RenderKind
from modules.i18n import Language
from modules.shell import ShellLayout

RELOAD_PROMPT = "Something went wrong. Please reload the page."


class SiteView(BaseModel):
    """What the page shows right now.

    Attributes:
        canonical_path: Language-prefixed path being shown.
        language: Language of the path.
        route: Name of the dispatched route (home on a soft 404).
        page: Page component for the route.
        params: Captured path parameters, verbatim.
        fallback: True when the path matched nothing and home is shown.
        decision: Gate chain outcome; None for the error view.
        shell: Chrome around the page.
        error: Reload prompt, set only by the error boundary.
    """

    canonical_path: str
    language: Language
    route: Optional[str] = None
    page: Optional[str] = None
    params: dict[str, str] = Field(default_factory=dict)
    fallback: bool = False
    decision: Optional[GateDecision] = None
    shell: ShellLayout
    error: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def render(self) -> Optional[RenderKind]:
        return self.decision.render if self.decision else None

    @property
    def shows_content(self) -> bool:
        return self.decision is not None and self.decision.allowed
