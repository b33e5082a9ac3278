"""Named delays, timeouts and geometry limits for the workspace runner.

The settle delays paper over asynchronous window-manager animation and
state propagation. They are tunable through RunnerConfig (see RunnerConfig.instant()
for a zero-delay configuration).
"""

from typing import Final


class Delays:
    """Default suspension intervals (seconds).

    Example:
        from .constants import Delays

        await sleep(Delays.INTER_APP)
    """

    # Between successive app activations (not after the last)
    INTER_APP: Final[float] = 0.5

    # After unhiding an already-running app
    UNHIDE_SETTLE: Final[float] = 0.2

    # After activating an already-running app
    ACTIVATION_SETTLE: Final[float] = 0.4

    # Window-appearance polling for freshly launched apps
    WINDOW_POLL_INTERVAL: Final[float] = 0.2
    WINDOW_APPEAR_TIMEOUT: Final[float] = 5.0

    # After creating a desktop, before switching to it
    DESKTOP_CREATE_SETTLE: Final[float] = 0.4

    # After switching into a freshly created desktop
    DESKTOP_SETTLE: Final[float] = 0.8

    # After all activations, before arranging windows
    POSITIONING_SETTLE: Final[float] = 0.5

    # Between window positioning calls (not after the last)
    POSITIONING: Final[float] = 0.1


class GridLimits:
    """Grid planner geometry defaults."""

    PADDING: Final[float] = 4.0
    MIN_WINDOW_WIDTH: Final[float] = 200.0
    MIN_WINDOW_HEIGHT: Final[float] = 150.0

    # Rows scanned past the cursor before falling back to a new row
    MAX_SCAN_ROWS: Final[int] = 10


# Environment variable prefix for RunnerConfig.from_environment()
ENV_PREFIX: Final[str] = "WORKSPACE_RUNNER_"

# Default level for configure_logging()
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"

# Logger namespace configured by setup_logging()
LOGGER_NAME: Final[str] = "workspace_runner"
