"""Workspace runner: drives a workspace run through its ordered phases.

Phases (strict forward order, every transition delivered before proceeding):

    IDLE -> [PREPARING_DESKTOP -> SWITCHING_DESKTOP] -> LAUNCHING_APPS (x N)
         -> [POSITIONING_WINDOWS] -> COMPLETED

The first hard failure anywhere ends the run in FAILED(message). Work already
done (launched apps, created desktops) is never rolled back.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import AsyncIterator, Callable, List, Optional

from ..config import RunnerConfig
from ..errors import (
    AppLaunchFailed,
    DesktopOperationFailed,
    PermissionDenied,
    RunCancelled,
    RunnerBusy,
    RunnerError,
    RunTimedOut,
)
from ..logging_config import log_timing
from ..models.geometry import ScreenRect
from ..models.runner_state import RunnerState, RunResult
from ..models.workspace import Workspace, WorkspaceApp
from ..monitoring.diagnostics import WorkspaceDiagnostics
from .activation import AppActivationSequencer, SleepFunc
from .grid_planner import GridLayoutPlanner
from .interfaces import AppRegistry, DesktopPreferences, PermissionOracle, WindowControl

logger = logging.getLogger(__name__)

StateObserver = Callable[[RunnerState], None]


@dataclass
class _RunStats:
    apps_launched: int = 0
    windows_positioned: int = 0
    windows_skipped: int = 0


class WorkspaceRunner:
    """Progress state machine for restoring a workspace.

    At most one run is active per runner; a second ``run()`` while one is in
    flight raises RunnerBusy.

    The runner logs on the ``workspace_runner`` logger tree but never
    installs handlers; call ``logging_config.configure_logging(config)``
    from the host to see phase progress and timings.
    """

    def __init__(
        self,
        registry: AppRegistry,
        window_control: WindowControl,
        permission_oracle: PermissionOracle,
        desktop_preferences: Optional[DesktopPreferences] = None,
        config: Optional[RunnerConfig] = None,
        planner: Optional[GridLayoutPlanner] = None,
        sequencer: Optional[AppActivationSequencer] = None,
        sleep: Optional[SleepFunc] = None,
    ):
        """Initialize runner.

        Args:
            registry: Installed/running application registry
            window_control: Window and desktop automation
            permission_oracle: Automation permission state
            desktop_preferences: Desktop isolation preference (diagnostics only)
            config: Delays, timeouts and grid geometry (defaults if None)
            planner: Grid planner (built from config if None)
            sequencer: Activation sequencer (built from collaborators if None)
            sleep: Suspension coroutine (asyncio.sleep if None)
        """
        self.registry = registry
        self.window_control = window_control
        self.permission_oracle = permission_oracle
        self.config = config or RunnerConfig()
        self._sleep = sleep or asyncio.sleep

        self.planner = planner or GridLayoutPlanner.from_config(self.config)
        self.sequencer = sequencer or AppActivationSequencer(
            registry, window_control, self.config, sleep=self._pause
        )
        self.diagnostics = WorkspaceDiagnostics(permission_oracle, desktop_preferences)

        self._state = RunnerState.idle()
        self._observers: List[StateObserver] = []
        self._callback: Optional[StateObserver] = None
        self._active = False
        self._cancel_requested = False

    @property
    def state(self) -> RunnerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._active

    def add_observer(self, observer: StateObserver) -> None:
        """Register a persistent observer for every state transition."""
        self._observers.append(observer)

    def remove_observer(self, observer: StateObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def cancel(self) -> None:
        """Request cooperative cancellation of the active run.

        Checked at every suspension point; no-op when idle.
        """
        if self._active:
            logger.info("Cancellation requested")
            self._cancel_requested = True

    async def run(
        self,
        workspace: Workspace,
        on_state_change: Optional[StateObserver] = None,
    ) -> RunResult:
        """Restore a workspace.

        Never raises for run failures: they end in FAILED and are reported in
        the returned RunResult.

        Args:
            workspace: Workspace to restore
            on_state_change: Callback for this run's transitions (overlay)

        Returns:
            RunResult with the terminal state and fatal error, if any

        Raises:
            RunnerBusy: Another run is still in flight
        """
        if self._active:
            raise RunnerBusy(f"A workspace run is already in progress ({self._state.phase.value})")

        self._active = True
        self._cancel_requested = False
        self._callback = on_state_change

        stats = _RunStats()
        error: Optional[RunnerError] = None
        start = time.perf_counter()

        logger.info(f"Restoring workspace '{workspace.name}' with {workspace.app_count} app(s)")

        try:
            try:
                await self._run_with_deadline(workspace, stats)
            except RunnerError as e:
                error = e
            except Exception as e:
                logger.exception(f"Unexpected error while restoring '{workspace.name}'")
                error = RunnerError(f"Unexpected error while restoring workspace: {e}")

            if error is None:
                self._transition(RunnerState.completed())
            else:
                logger.error(f"Workspace '{workspace.name}' failed: {error.message}")
                self._transition(RunnerState.failed(error.message))
        finally:
            self._active = False
            self._callback = None

        duration = time.perf_counter() - start
        result = RunResult(
            success=error is None,
            state=self._state,
            error=error,
            apps_launched=stats.apps_launched,
            windows_positioned=stats.windows_positioned,
            windows_skipped=stats.windows_skipped,
            duration=duration,
        )

        if error is not None:
            result.remediation = self.diagnostics.diagnose(include_desktop=workspace.isolate_desktop)
        else:
            logger.info(
                f"Workspace '{workspace.name}' ready in {duration:.2f}s: "
                f"{stats.apps_launched} app(s), {stats.windows_positioned} window(s) arranged"
            )

        return result

    async def stream(self, workspace: Workspace) -> AsyncIterator[RunnerState]:
        """Run a workspace and yield every state transition in order.

        Ends after the terminal state. Closing the iterator early cancels the
        run cooperatively.

        Raises:
            RunnerBusy: Another run is still in flight
        """
        queue: "asyncio.Queue[RunnerState]" = asyncio.Queue()
        task = asyncio.ensure_future(self.run(workspace, on_state_change=queue.put_nowait))

        try:
            while True:
                getter = asyncio.ensure_future(queue.get())
                done, _ = await asyncio.wait({getter, task}, return_when=asyncio.FIRST_COMPLETED)

                if getter not in done:
                    # run() returned or raised without queueing anything more
                    getter.cancel()
                    while not queue.empty():
                        yield queue.get_nowait()
                    task.result()
                    return

                state = getter.result()
                yield state
                if state.is_terminal:
                    break

            await task
        finally:
            if not task.done():
                self.cancel()
                await task

    async def _run_with_deadline(self, workspace: Workspace, stats: _RunStats) -> None:
        timeout = self.config.run_timeout
        if timeout is None:
            await self._run_phases(workspace, stats)
            return

        try:
            async with asyncio.timeout(timeout) as deadline:
                await self._run_phases(workspace, stats)
        except TimeoutError as e:
            if deadline.expired():
                raise RunTimedOut(timeout) from e
            # Raised by a collaborator, not by the deadline
            raise

    async def _run_phases(self, workspace: Workspace, stats: _RunStats) -> None:
        # Precondition before any other work
        try:
            granted = self.permission_oracle.is_granted()
        except Exception as e:
            raise RunnerError(f"Unable to check Accessibility permission: {e}") from e

        if not granted:
            raise PermissionDenied()

        if workspace.isolate_desktop:
            with log_timing("Desktop isolation", logger):
                await self._prepare_desktop()

        with log_timing("Launching apps", logger):
            await self._launch_apps(workspace, stats)

        if workspace.restore_window_layout and workspace.apps:
            with log_timing("Arranging windows", logger):
                await self._position_windows(workspace, stats)

    async def _prepare_desktop(self) -> None:
        self._transition(RunnerState.preparing_desktop())
        try:
            await self.window_control.create_desktop()
        except RunnerError:
            raise
        except Exception as e:
            raise DesktopOperationFailed("create", str(e)) from e

        # Let the new desktop finish appearing before switching to it
        await self._pause(self.config.desktop_create_settle_delay)

        self._transition(RunnerState.switching_desktop())
        try:
            await self.window_control.switch_to_newest_desktop()
        except RunnerError:
            raise
        except Exception as e:
            raise DesktopOperationFailed("switch", str(e)) from e

        # Wait for the desktop transition animation
        await self._pause(self.config.desktop_settle_delay)

    async def _launch_apps(self, workspace: Workspace, stats: _RunStats) -> None:
        total = workspace.app_count
        for index, app in enumerate(workspace.apps):
            logger.info(f"[{index + 1}/{total}] {app.name} ({app.identifier or 'no identifier'})")
            self._transition(RunnerState.launching_apps(app.name, index, total))

            try:
                await self.sequencer.activate(app, reuse_open_apps=workspace.reuse_open_apps)
            except RunnerError:
                raise
            except Exception as e:
                raise AppLaunchFailed(app.name, str(e) or type(e).__name__) from e

            stats.apps_launched += 1

            # Delay between launches to avoid window manager races
            if index < total - 1:
                await self._pause(self.config.inter_app_delay)

    async def _position_windows(self, workspace: Workspace, stats: _RunStats) -> None:
        await self._pause(self.config.positioning_settle_delay)
        self._transition(RunnerState.positioning_windows())

        try:
            area = await self.window_control.usable_area()
        except Exception as e:
            raise RunnerError(f"Unable to arrange windows: {e}") from e

        rects = self.planner.plan(workspace.apps, area)
        last = len(rects) - 1

        for index, (app, rect) in enumerate(zip(workspace.apps, rects)):
            if await self._place_window(app, rect):
                stats.windows_positioned += 1
            else:
                stats.windows_skipped += 1

            if index < last:
                await self._pause(self.config.positioning_delay)

    async def _place_window(self, app: WorkspaceApp, rect: ScreenRect) -> bool:
        """Move one app's first window; missing apps/windows are skipped."""
        if not app.has_identifier:
            return False

        try:
            running = await self.registry.running_instance(app.identifier)
        except Exception as e:
            logger.warning(f"Could not look up {app.name} for positioning: {e}")
            return False

        if running is None:
            logger.info(f"{app.name} is not running, skipping positioning")
            return False

        try:
            await self.window_control.set_frame(running, rect)
        except Exception as e:
            logger.warning(f"Failed to position {app.name}: {e}")
            return False

        logger.debug(
            f"Positioned {app.name} at ({rect.x:.0f}, {rect.y:.0f}) "
            f"{rect.width:.0f}x{rect.height:.0f}"
        )
        return True

    async def _pause(self, delay: float) -> None:
        """Suspension point: honours cancellation before and after sleeping."""
        self._check_cancelled()
        await self._sleep(delay)
        self._check_cancelled()

    def _check_cancelled(self) -> None:
        if self._cancel_requested:
            raise RunCancelled()

    def _transition(self, state: RunnerState) -> None:
        self._state = state
        logger.debug(f"Runner state -> {state.phase.value}")

        if self._callback is not None:
            self._deliver(self._callback, state)
        for observer in list(self._observers):
            self._deliver(observer, state)

    @staticmethod
    def _deliver(observer: StateObserver, state: RunnerState) -> None:
        try:
            observer(state)
        except Exception:
            logger.exception(f"State observer failed on {state.phase.value}")
