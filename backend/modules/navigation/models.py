"""
Navigation data models.
"""

from enum import Enum
from pydantic import BaseModel, Field


class NavigationKind(str, Enum):
    """How the address changed."""

    PUSH = "push"        # New history entry (link activation, navigate())
    REPLACE = "replace"  # Current entry rewritten in place (normalization)
    POP = "pop"          # Browser back/forward
    LOAD = "load"        # Initial page load


class Location(BaseModel):
    """The address bar, split into its parts."""

    pathname: str = Field(default="/", description="Path component")
    search: str = Field(default="", description="Query string including '?'")
    hash: str = Field(default="", description="Fragment including '#'")

    model_config = {"frozen": True}

    @property
    def href(self) -> str:
        return f"{self.pathname}{self.search}{self.hash}"


class NavigationEvent(BaseModel):
    """Broadcast after every address change."""

    location: Location
    kind: NavigationKind

    model_config = {"frozen": True}


def split_url(url: str) -> Location:
    """
    Split an in-app URL into pathname, query string and fragment.

        split_url("/en/news?page=2#top")
        -> Location(pathname="/en/news", search="?page=2", hash="#top")
    """
    hash_index = url.find("#")
    query_index = url.find("?")
    if query_index > hash_index >= 0:
        query_index = -1

    cuts = [i for i in (query_index, hash_index) if i >= 0]
    end_path = min(cuts) if cuts else len(url)

    pathname = url[:end_path] or "/"
    if query_index >= 0:
        search = url[query_index:hash_index if hash_index >= 0 else len(url)]
    else:
        search = ""
    fragment = url[hash_index:] if hash_index >= 0 else ""
    return Location(pathname=pathname, search=search, hash=fragment)
