"""Data models for workspace runs.

These models cover authored workspace data, derived grid configuration,
screen geometry and the runner's progress states.
"""

from .geometry import ScreenRect
from .layout import GridConfiguration, GridPlacement
from .runner_state import RunnerPhase, RunnerState, RunResult
from .workspace import SizeClass, Workspace, WorkspaceApp

__all__ = [
    "GridConfiguration",
    "GridPlacement",
    "RunResult",
    "RunnerPhase",
    "RunnerState",
    "ScreenRect",
    "SizeClass",
    "Workspace",
    "WorkspaceApp",
]
