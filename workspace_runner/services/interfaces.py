"""Collaborator contracts for the workspace runner.

The runner never queries the live process/window state of the machine
directly. It talks to these interfaces, so the sequencing and layout logic
can be driven by fakes in tests and by any platform backend in production
(accessibility APIs, window-manager IPC, remote desktop protocols).

Handles returned by the registry are opaque: the runner only passes them
back to the collaborator that produced them.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..models.geometry import ScreenRect

# Opaque platform objects
AppHandle = Any
RunningApp = Any


class AppRegistry(ABC):
    """Installed and running applications (shared, externally mutable)."""

    @abstractmethod
    async def resolve(self, identifier: str) -> Optional[AppHandle]:
        """Resolve an identifier to an installed application, or None."""
        pass

    @abstractmethod
    async def running_instance(self, identifier: str) -> Optional[RunningApp]:
        """Running process for the identifier, or None if not running."""
        pass

    @abstractmethod
    async def launch(self, handle: AppHandle, activate: bool = True, add_to_recents: bool = False) -> None:
        """Launch a fresh instance.

        Raises:
            Exception: Any platform error; the sequencer reports its message
        """
        pass

    @abstractmethod
    async def list_windows(self, running: RunningApp) -> List[Any]:
        """Windows currently owned by the running process."""
        pass

    @abstractmethod
    async def is_hidden(self, running: RunningApp) -> bool:
        pass

    @abstractmethod
    async def unhide(self, running: RunningApp) -> None:
        pass

    @abstractmethod
    async def activate_process(self, running: RunningApp) -> None:
        """Bring the process to the foreground directly (fallback path)."""
        pass


class WindowControl(ABC):
    """Window and desktop automation."""

    @abstractmethod
    async def activate(self, identifier: str) -> None:
        """Activate an application by identifier (raises on failure)."""
        pass

    @abstractmethod
    async def activate_by_name(self, name: str) -> None:
        """Activate an application by display name (raises on failure)."""
        pass

    @abstractmethod
    async def unminimize_all(self, running: RunningApp) -> None:
        """Restore every minimized window of the process."""
        pass

    @abstractmethod
    async def set_frame(self, running: RunningApp, rect: ScreenRect) -> None:
        """Move and resize the process's first window."""
        pass

    @abstractmethod
    async def create_desktop(self) -> None:
        """Create a new virtual desktop (raises on failure)."""
        pass

    @abstractmethod
    async def switch_to_newest_desktop(self) -> None:
        """Switch to the most recently created desktop (raises on failure)."""
        pass

    @abstractmethod
    async def usable_area(self) -> ScreenRect:
        """Usable area of the current screen (excluding menu bar and dock)."""
        pass


class PermissionOracle(ABC):
    """Automation permission state."""

    @abstractmethod
    def is_granted(self) -> bool:
        pass

    @abstractmethod
    def request_grant(self) -> None:
        """Ask the OS to prompt the user (opens the settings surface)."""
        pass


class DesktopPreferences(ABC):
    """OS desktop configuration relevant to desktop isolation."""

    @abstractmethod
    def separate_desktops_enabled(self) -> bool:
        """True if each display has its own set of desktops."""
        pass
