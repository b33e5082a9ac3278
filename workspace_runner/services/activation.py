"""Launch-or-activate sequencing for workspace applications."""

import asyncio
import logging
import math
from typing import Any, Awaitable, Callable, Dict, Optional

from ..config import RunnerConfig
from ..errors import AppLaunchFailed
from ..models.workspace import WorkspaceApp
from .interfaces import AppHandle, AppRegistry, RunningApp, WindowControl

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class AppActivationSequencer:
    """Brings one workspace app to the foreground, launching it if needed.

    Decided once per call:
    - no identifier / not installed: AppLaunchFailed
    - already running: unhide, unminimize, activate (with fallbacks)
    - not running: launch, then poll for the first window

    The caller inserts ``config.inter_app_delay`` between apps.
    """

    def __init__(
        self,
        registry: AppRegistry,
        window_control: WindowControl,
        config: Optional[RunnerConfig] = None,
        sleep: Optional[SleepFunc] = None,
    ):
        """Initialize sequencer.

        Args:
            registry: Installed/running application registry
            window_control: Window automation collaborator
            config: Delays and timeouts (defaults if None)
            sleep: Suspension coroutine (asyncio.sleep if None)
        """
        self.registry = registry
        self.window_control = window_control
        self.config = config or RunnerConfig()
        self._sleep = sleep or asyncio.sleep

    async def activate(self, app: WorkspaceApp, reuse_open_apps: bool = True) -> Dict[str, Any]:
        """Launch or activate an app.

        Args:
            app: Workspace entry to bring up
            reuse_open_apps: Activate a running instance instead of launching

        Returns:
            Response dict with action, app, window_ready, message

        Raises:
            AppLaunchFailed: No identifier, not installed, or launch error
        """
        if not app.has_identifier:
            raise AppLaunchFailed(app.name, "no identifier")

        handle = await self.registry.resolve(app.identifier)
        if handle is None:
            logger.error(f"Application not installed: {app.name} ({app.identifier})")
            raise AppLaunchFailed(app.name, "not installed")

        running = None
        if reuse_open_apps:
            running = await self.registry.running_instance(app.identifier)

        if running is not None:
            await self._activate_running(app, running)
            return {
                "action": "activated",
                "app": app.name,
                "window_ready": True,
                "message": f"Activated {app.name}",
            }

        window_ready = await self._launch(app, handle)
        return {
            "action": "launched",
            "app": app.name,
            "window_ready": window_ready,
            "message": f"Launched {app.name}",
        }

    async def _activate_running(self, app: WorkspaceApp, running: RunningApp) -> None:
        logger.info(f"{app.name} is already running, activating")

        unhidden = False
        try:
            if await self.registry.is_hidden(running):
                await self.registry.unhide(running)
                unhidden = True
                logger.debug(f"Unhid {app.name}")
        except Exception as e:
            logger.warning(f"Failed to unhide {app.name}: {e}")

        if unhidden:
            await self._sleep(self.config.unhide_settle_delay)

        try:
            await self.window_control.unminimize_all(running)
        except Exception as e:
            logger.info(f"No minimized windows restored for {app.name}: {e}")

        await self._bring_to_front(app, running)

        # Let window state settle onto the current desktop
        await self._sleep(self.config.activation_settle_delay)

    async def _bring_to_front(self, app: WorkspaceApp, running: RunningApp) -> None:
        """Activate through automation, falling back without ever raising."""
        try:
            await self.window_control.activate(app.identifier)
            return
        except Exception as e:
            automation_error = e
            logger.debug(f"Automation activate failed for {app.name}: {e}")

        try:
            await self.registry.activate_process(running)
            return
        except Exception as e:
            process_error = e

        try:
            await self.window_control.activate_by_name(app.name)
        except Exception as e:
            # The app is running, it just might not be in front
            logger.warning(
                f"Failed to activate {app.name}: "
                f"{automation_error} / {process_error} / {e}"
            )

    async def _launch(self, app: WorkspaceApp, handle: AppHandle) -> bool:
        logger.info(f"Launching {app.name} ({app.identifier})")

        try:
            await self.registry.launch(handle, activate=True, add_to_recents=False)
        except Exception as e:
            logger.error(f"Failed to launch {app.name}: {e}")
            raise AppLaunchFailed(app.name, str(e) or type(e).__name__) from e

        return await self._wait_for_window(app)

    async def _wait_for_window(self, app: WorkspaceApp) -> bool:
        """Poll until the launched app reports a window, or time out.

        Timing out is not an error: menu-bar-only utilities never open one.
        """
        interval = self.config.window_poll_interval
        timeout = self.config.window_appear_timeout
        max_polls = math.ceil(round(timeout / interval, 6))

        for poll in range(max_polls + 1):
            if await self._has_window(app):
                logger.debug(f"{app.name} window appeared after {poll * interval:.1f}s")
                return True

            if poll == max_polls:
                break

            await self._sleep(interval)

        logger.info(f"No window from {app.name} after {timeout:.1f}s, continuing")
        return False

    async def _has_window(self, app: WorkspaceApp) -> bool:
        try:
            running = await self.registry.running_instance(app.identifier)
            if running is None:
                return False
            windows = await self.registry.list_windows(running)
        except Exception as e:
            logger.debug(f"Window query for {app.name} failed: {e}")
            return False
        return bool(windows)
