"""Workspace Runner - restore a named set of applications with one call.

This package provides:
- Launch-or-activate sequencing against an abstract app registry
- Deterministic grid tiling of the usable screen area
- A forward-only progress state machine for status overlays
- Remediation diagnostics for missing permissions
"""

__version__ = "0.1.0"
__author__ = "workspace-runner contributors"
__license__ = "MIT"

from .config import RunnerConfig
from .errors import (
    AppLaunchFailed,
    DesktopOperationFailed,
    PermissionDenied,
    RunCancelled,
    RunnerBusy,
    RunnerError,
    RunTimedOut,
)
from .models import (
    GridConfiguration,
    RunnerPhase,
    RunnerState,
    RunResult,
    ScreenRect,
    SizeClass,
    Workspace,
    WorkspaceApp,
)
from .logging_config import configure_logging
from .monitoring.diagnostics import WorkspaceDiagnostics, diagnose
from .services.activation import AppActivationSequencer
from .services.grid_planner import GridLayoutPlanner
from .services.runner import WorkspaceRunner

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "AppActivationSequencer",
    "AppLaunchFailed",
    "DesktopOperationFailed",
    "GridConfiguration",
    "GridLayoutPlanner",
    "PermissionDenied",
    "RunCancelled",
    "RunResult",
    "RunTimedOut",
    "RunnerBusy",
    "RunnerConfig",
    "RunnerError",
    "RunnerPhase",
    "RunnerState",
    "ScreenRect",
    "SizeClass",
    "Workspace",
    "WorkspaceApp",
    "WorkspaceDiagnostics",
    "WorkspaceRunner",
    "configure_logging",
    "diagnose",
]
