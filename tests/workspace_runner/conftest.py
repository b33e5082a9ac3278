"""Fake collaborators and shared fixtures for workspace runner tests.

The fakes model the machine's live process/window state in memory and
record every call so tests can assert on the exact interaction sequence.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

import pytest

from workspace_runner.config import RunnerConfig
from workspace_runner.models import ScreenRect, SizeClass, Workspace, WorkspaceApp
from workspace_runner.services.activation import AppActivationSequencer
from workspace_runner.services.interfaces import (
    AppRegistry,
    DesktopPreferences,
    PermissionOracle,
    WindowControl,
)
from workspace_runner.services.runner import WorkspaceRunner


@dataclass
class FakeRunningApp:
    """Running process as seen by the fake registry."""
    identifier: str
    hidden: bool = False
    windows: List[str] = field(default_factory=list)
    polls_until_window: int = 0


class FakeAppRegistry(AppRegistry):
    """In-memory registry of installed and running apps."""

    def __init__(self):
        self.installed: Set[str] = set()
        self.running: Dict[str, FakeRunningApp] = {}
        self.launch_errors: Dict[str, Exception] = {}
        # identifier -> polls before the first window shows (None: never)
        self.window_delays: Dict[str, Optional[int]] = {}
        self.activate_process_error: Optional[Exception] = None
        self.unhide_error: Optional[Exception] = None
        self.launch_hang: bool = False
        self.calls: List[tuple] = []

    def install(self, *identifiers: str) -> None:
        self.installed.update(identifiers)

    def start(self, identifier: str, hidden: bool = False) -> FakeRunningApp:
        self.installed.add(identifier)
        running = FakeRunningApp(identifier, hidden=hidden, windows=[f"{identifier}-window"])
        self.running[identifier] = running
        return running

    def calls_to(self, method: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == method]

    async def resolve(self, identifier: str) -> Optional[Any]:
        self.calls.append(("resolve", identifier))
        return f"/Applications/{identifier}.app" if identifier in self.installed else None

    async def running_instance(self, identifier: str) -> Optional[FakeRunningApp]:
        self.calls.append(("running_instance", identifier))
        return self.running.get(identifier)

    async def launch(self, handle: Any, activate: bool = True, add_to_recents: bool = False) -> None:
        identifier = handle.rsplit("/", 1)[-1][:-len(".app")]
        self.calls.append(("launch", identifier, activate, add_to_recents))

        if self.launch_hang:
            await asyncio.sleep(10)
        if identifier in self.launch_errors:
            raise self.launch_errors[identifier]

        delay = self.window_delays.get(identifier, 0)
        self.running[identifier] = FakeRunningApp(
            identifier,
            windows=[] if delay is None else [f"{identifier}-window"],
            polls_until_window=delay or 0,
        )

    async def list_windows(self, running: FakeRunningApp) -> List[str]:
        self.calls.append(("list_windows", running.identifier))
        if running.polls_until_window > 0:
            running.polls_until_window -= 1
            return []
        return list(running.windows)

    async def is_hidden(self, running: FakeRunningApp) -> bool:
        return running.hidden

    async def unhide(self, running: FakeRunningApp) -> None:
        self.calls.append(("unhide", running.identifier))
        if self.unhide_error:
            raise self.unhide_error
        running.hidden = False

    async def activate_process(self, running: FakeRunningApp) -> None:
        self.calls.append(("activate_process", running.identifier))
        if self.activate_process_error:
            raise self.activate_process_error


class FakeWindowControl(WindowControl):
    """Records automation commands; ``errors`` maps method name to exception."""

    def __init__(self, area: Optional[ScreenRect] = None):
        self.area = area or ScreenRect(x=0, y=0, width=1920, height=1080)
        self.errors: Dict[str, Exception] = {}
        self.frames: List[tuple] = []
        self.calls: List[tuple] = []

    def calls_to(self, method: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == method]

    def _record(self, method: str, *args) -> None:
        self.calls.append((method,) + args)
        if method in self.errors:
            raise self.errors[method]

    async def activate(self, identifier: str) -> None:
        self._record("activate", identifier)

    async def activate_by_name(self, name: str) -> None:
        self._record("activate_by_name", name)

    async def unminimize_all(self, running: FakeRunningApp) -> None:
        self._record("unminimize_all", running.identifier)

    async def set_frame(self, running: FakeRunningApp, rect: ScreenRect) -> None:
        self._record("set_frame", running.identifier)
        self.frames.append((running.identifier, rect))

    async def create_desktop(self) -> None:
        self._record("create_desktop")

    async def switch_to_newest_desktop(self) -> None:
        self._record("switch_to_newest_desktop")

    async def usable_area(self) -> ScreenRect:
        self._record("usable_area")
        return self.area


class FakePermissionOracle(PermissionOracle):

    def __init__(self, granted: bool = True):
        self.granted = granted
        self.requests = 0

    def is_granted(self) -> bool:
        return self.granted

    def request_grant(self) -> None:
        self.requests += 1


class FakeDesktopPreferences(DesktopPreferences):

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def separate_desktops_enabled(self) -> bool:
        return self.enabled


class RecordingSleep:
    """Sleep replacement: records requested delays and yields once."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)

    def count(self, delay: float) -> int:
        return sum(1 for d in self.delays if d == pytest.approx(delay))


@pytest.fixture
def registry() -> FakeAppRegistry:
    return FakeAppRegistry()


@pytest.fixture
def window_control() -> FakeWindowControl:
    return FakeWindowControl()


@pytest.fixture
def permission_oracle() -> FakePermissionOracle:
    return FakePermissionOracle(granted=True)


@pytest.fixture
def desktop_preferences() -> FakeDesktopPreferences:
    return FakeDesktopPreferences(enabled=True)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def config() -> RunnerConfig:
    """Default timings; tests never actually wait because sleep is faked."""
    return RunnerConfig()


@pytest.fixture
def sequencer(registry, window_control, config, sleep) -> AppActivationSequencer:
    return AppActivationSequencer(registry, window_control, config, sleep=sleep)


@pytest.fixture
def runner(registry, window_control, permission_oracle, desktop_preferences, config, sleep) -> WorkspaceRunner:
    return WorkspaceRunner(
        registry=registry,
        window_control=window_control,
        permission_oracle=permission_oracle,
        desktop_preferences=desktop_preferences,
        config=config,
        sleep=sleep,
    )


@pytest.fixture
def make_workspace(registry):
    """Factory: workspace of installed apps named after their identifiers."""

    def _make(*identifiers: str, size_classes=None, install: bool = True, **options) -> Workspace:
        if install:
            registry.install(*[i for i in identifiers if i])
        sizes = size_classes or [SizeClass.SMALL] * len(identifiers)
        apps = [
            WorkspaceApp(name=identifier.split(".")[-1].title() or "Unnamed", identifier=identifier, size_class=size)
            for identifier, size in zip(identifiers, sizes)
        ]
        return Workspace(name="Test Workspace", apps=apps, **options)

    return _make
