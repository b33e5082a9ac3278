"""Error taxonomy for workspace runs.

Every RunnerError carries a user-facing sentence in ``message``; the runner
turns it into the FAILED state's text. Soft failures (activation fallback,
missing windows) are logged and never raised.
"""

from typing import Optional


class RunnerError(Exception):
    """Fatal workspace run error with a user-facing message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PermissionDenied(RunnerError):
    """Automation permission has not been granted."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Accessibility permission not granted.")


class AppLaunchFailed(RunnerError):
    """An application could not be launched or resolved."""

    def __init__(self, app_name: str, reason: str):
        self.app_name = app_name
        self.reason = reason
        super().__init__(f"Failed to launch {app_name}: {reason}")


class DesktopOperationFailed(RunnerError):
    """Creating or switching to a virtual desktop failed."""

    PHASE_MESSAGES = {
        "create": "Unable to create a new Desktop.",
        "switch": "Unable to switch to the new Desktop.",
    }

    def __init__(self, phase: str, reason: str):
        self.phase = phase
        self.reason = reason
        prefix = self.PHASE_MESSAGES.get(phase, f"Desktop operation '{phase}' failed.")
        super().__init__(f"{prefix} {reason}".strip())


class RunTimedOut(RunnerError):
    """The run exceeded its configured deadline."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__("Workspace run timed out.")


class RunCancelled(RunnerError):
    """The run was cancelled cooperatively."""

    def __init__(self):
        super().__init__("Workspace run was cancelled.")


class RunnerBusy(RuntimeError):
    """A run was requested while another run is still in flight."""
