"""
Page request descriptor and path normalization.
"""

from dataclasses import dataclass
from enum import Enum


class PageMode(str, Enum):
    """Rendering mode of a page request."""

    EDIT = "EDIT"
    PREVIEW = "PREVIEW"
    LIVE = "LIVE"


def normalize_path(path: str | None) -> str:
    """Canonicalize a page path: empty means "/", a trailing "/" means index."""
    path = path or "/"
    return f"{path}index" if path.endswith("/") else path


@dataclass(frozen=True)
class PageRequest:
    """A logical page fetch. ``depth`` only applies to the REST transport."""

    path: str | None = "/"
    site_id: str | None = None
    mode: PageMode = PageMode.LIVE
    language_id: str | None = None
    persona: str | None = None
    fire_rules: bool = False
    depth: int = 1

    def __post_init__(self) -> None:
        # Accept plain strings such as "LIVE" from callers
        object.__setattr__(self, "mode", PageMode(self.mode))

    @property
    def normalized_path(self) -> str:
        return normalize_path(self.path)
