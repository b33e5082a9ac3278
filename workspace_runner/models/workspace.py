"""Workspace definition models.

A workspace is authored data: an ordered list of applications plus restore
preferences. The list order is the launch order and the default tiling order.
"""

import uuid
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class SizeClass(str, Enum):
    """Size hint controlling how many grid cells a window occupies."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @property
    def span(self) -> Tuple[int, int]:
        """(col_span, row_span) in grid cells."""
        return _SPANS[self]

    @property
    def label(self) -> str:
        return self.value[0].upper()


_SPANS = {
    SizeClass.SMALL: (1, 1),
    SizeClass.MEDIUM: (2, 1),
    SizeClass.LARGE: (2, 2),
}


def _new_id() -> str:
    return str(uuid.uuid4())


class WorkspaceApp(BaseModel):
    """One application entry of a workspace.

    Duplicate identifiers are allowed: two entries for the same application
    are two independent placement targets.
    """

    id: str = Field(default_factory=_new_id, description="Stable entry id")
    name: str = Field(..., description="Display name")
    identifier: str = Field(default="", description="Platform application identifier (bundle id)")
    size_class: SizeClass = Field(default=SizeClass.SMALL, description="Tiling size hint")

    # Advisory only; the grid planner never reads these
    position: Optional[Tuple[float, float]] = Field(default=None, description="Last known (x, y)")
    size: Optional[Tuple[float, float]] = Field(default=None, description="Last known (width, height)")

    @property
    def has_identifier(self) -> bool:
        return bool(self.identifier.strip())


class Workspace(BaseModel):
    """Named, ordered set of applications plus restore preferences."""

    id: str = Field(default_factory=_new_id)
    name: str = Field(..., min_length=1)
    apps: List[WorkspaceApp] = Field(default_factory=list)

    # Run inside a freshly created virtual desktop
    isolate_desktop: bool = Field(default=False)

    # Arrange windows on the grid after launching
    restore_window_layout: bool = Field(default=True)

    # Activate already-running apps instead of launching new instances
    reuse_open_apps: bool = Field(default=True)

    @property
    def app_count(self) -> int:
        return len(self.apps)
