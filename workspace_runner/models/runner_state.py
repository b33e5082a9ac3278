"""Runner state models for the workspace progress state machine."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import RunnerError


class RunnerPhase(Enum):
    """Phases of a workspace run, in forward order."""
    IDLE = "idle"
    PREPARING_DESKTOP = "preparing_desktop"
    SWITCHING_DESKTOP = "switching_desktop"
    LAUNCHING_APPS = "launching_apps"
    POSITIONING_WINDOWS = "positioning_windows"
    COMPLETED = "completed"
    FAILED = "failed"


_PHASE_ORDER = {phase: i for i, phase in enumerate(RunnerPhase)}

_TERMINAL_PHASES = (RunnerPhase.COMPLETED, RunnerPhase.FAILED)


@dataclass(frozen=True)
class RunnerState:
    """One state of the run; payload fields are set only for their phase.

    Use the constructors (``RunnerState.launching_apps(...)`` etc.) rather
    than building instances by hand.
    """
    phase: RunnerPhase
    current: Optional[str] = None  # LAUNCHING_APPS: display name
    index: Optional[int] = None  # LAUNCHING_APPS: 0-based position
    total: Optional[int] = None  # LAUNCHING_APPS: number of apps
    message: Optional[str] = None  # FAILED: user-facing reason

    @classmethod
    def idle(cls) -> "RunnerState":
        return cls(RunnerPhase.IDLE)

    @classmethod
    def preparing_desktop(cls) -> "RunnerState":
        return cls(RunnerPhase.PREPARING_DESKTOP)

    @classmethod
    def switching_desktop(cls) -> "RunnerState":
        return cls(RunnerPhase.SWITCHING_DESKTOP)

    @classmethod
    def launching_apps(cls, current: str, index: int, total: int) -> "RunnerState":
        return cls(RunnerPhase.LAUNCHING_APPS, current=current, index=index, total=total)

    @classmethod
    def positioning_windows(cls) -> "RunnerState":
        return cls(RunnerPhase.POSITIONING_WINDOWS)

    @classmethod
    def completed(cls) -> "RunnerState":
        return cls(RunnerPhase.COMPLETED)

    @classmethod
    def failed(cls, message: str) -> "RunnerState":
        return cls(RunnerPhase.FAILED, message=message)

    @property
    def is_terminal(self) -> bool:
        return self.phase in _TERMINAL_PHASES

    @property
    def order(self) -> int:
        """Position of this phase in the forward order."""
        return _PHASE_ORDER[self.phase]

    @property
    def title(self) -> str:
        """Overlay headline for this state."""
        if self.phase == RunnerPhase.PREPARING_DESKTOP:
            return "Preparing Workspace..."
        if self.phase == RunnerPhase.SWITCHING_DESKTOP:
            return "Switching Desktop..."
        if self.phase == RunnerPhase.LAUNCHING_APPS:
            return f"Launching {self.current}..."
        if self.phase == RunnerPhase.POSITIONING_WINDOWS:
            return "Arranging Windows..."
        if self.phase == RunnerPhase.COMPLETED:
            return "Workspace Ready"
        if self.phase == RunnerPhase.FAILED:
            return "Something went wrong"
        return ""

    @property
    def subtitle(self) -> Optional[str]:
        """Overlay detail line (progress count or failure reason)."""
        if self.phase == RunnerPhase.LAUNCHING_APPS:
            return f"{self.index + 1} of {self.total}"
        if self.phase == RunnerPhase.FAILED:
            return self.message
        return None


@dataclass
class RunResult:
    """Outcome of one WorkspaceRunner.run() call."""
    success: bool
    state: RunnerState
    error: Optional[RunnerError] = None
    apps_launched: int = 0
    windows_positioned: int = 0
    windows_skipped: int = 0
    duration: float = 0.0  # Time taken in seconds
    remediation: Optional[str] = None  # Diagnostics text, set on failure

    @property
    def message(self) -> Optional[str]:
        """User-facing failure message (None on success)."""
        return self.state.message
