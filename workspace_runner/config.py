"""Runner configuration.

Delays, timeouts and grid geometry are validated by a Pydantic model and
can be overridden from environment variables or a JSON file, e.g.
WORKSPACE_RUNNER_INTER_APP_DELAY=0.8 or ~/.config/workspace-runner/runner.json.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import DEFAULT_LOG_LEVEL, ENV_PREFIX, Delays, GridLimits

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path.home() / ".config" / "workspace-runner" / "runner.json"


class RunnerConfig(BaseModel):
    """Tunable timings and grid geometry for a workspace run."""

    # Sequencing delays (seconds)
    inter_app_delay: float = Field(default=Delays.INTER_APP, ge=0, description="Delay between app activations")
    unhide_settle_delay: float = Field(default=Delays.UNHIDE_SETTLE, ge=0, description="Settle after unhiding")
    activation_settle_delay: float = Field(default=Delays.ACTIVATION_SETTLE, ge=0, description="Settle after activating")
    window_poll_interval: float = Field(default=Delays.WINDOW_POLL_INTERVAL, gt=0, description="Window polling interval")
    window_appear_timeout: float = Field(default=Delays.WINDOW_APPEAR_TIMEOUT, ge=0, description="Max wait for first window")
    desktop_create_settle_delay: float = Field(default=Delays.DESKTOP_CREATE_SETTLE, ge=0, description="Settle between desktop create and switch")
    desktop_settle_delay: float = Field(default=Delays.DESKTOP_SETTLE, ge=0, description="Settle after desktop switch")
    positioning_settle_delay: float = Field(default=Delays.POSITIONING_SETTLE, ge=0, description="Settle before arranging")
    positioning_delay: float = Field(default=Delays.POSITIONING, ge=0, description="Delay between positioning calls")

    # Grid geometry (screen units)
    padding: float = Field(default=GridLimits.PADDING, ge=0, le=100, description="Inset on every window side")
    min_window_width: float = Field(default=GridLimits.MIN_WINDOW_WIDTH, gt=0)
    min_window_height: float = Field(default=GridLimits.MIN_WINDOW_HEIGHT, gt=0)
    max_scan_rows: int = Field(default=GridLimits.MAX_SCAN_ROWS, ge=1, le=100)

    # Whole-run deadline (None disables it)
    run_timeout: Optional[float] = Field(default=None, gt=0, description="Run deadline in seconds")

    # Level used by logging_config.configure_logging()
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="DEBUG, INFO, WARNING or ERROR")

    @field_validator("window_appear_timeout")
    @classmethod
    def validate_reasonable_timeout(cls, v: float) -> float:
        """Keep window polling bounded to a couple of minutes."""
        if v > 120:
            raise ValueError("Window appearance timeout exceeds reasonable maximum (120s)")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Invalid log level '{v}'")
        return level

    @classmethod
    def instant(cls, **overrides) -> "RunnerConfig":
        """Configuration with every delay at zero (deterministic tests, dry runs)."""
        values = {
            "inter_app_delay": 0.0,
            "unhide_settle_delay": 0.0,
            "activation_settle_delay": 0.0,
            "window_poll_interval": 0.001,
            "window_appear_timeout": 0.0,
            "desktop_create_settle_delay": 0.0,
            "desktop_settle_delay": 0.0,
            "positioning_settle_delay": 0.0,
            "positioning_delay": 0.0,
        }
        values.update(overrides)
        return cls(**values)

    @classmethod
    def from_environment(cls, environ: Optional[dict] = None) -> "RunnerConfig":
        """Load configuration overrides from WORKSPACE_RUNNER_* variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            ValueError: If a variable holds an invalid value
        """
        if environ is None:
            environ = os.environ

        overrides = {}
        for name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is None or raw.strip() == "":
                continue
            overrides[name] = raw.strip()

        if overrides:
            logger.debug(f"Runner config overrides from environment: {sorted(overrides)}")

        try:
            return cls(**overrides)
        except ValidationError as e:
            raise ValueError(f"Invalid runner configuration in environment: {e}") from e

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "RunnerConfig":
        """Load configuration from a JSON file.

        A missing file yields the defaults.

        Args:
            config_file: Path to runner.json (default: ~/.config/workspace-runner/runner.json)

        Raises:
            ValueError: If the file is not valid JSON or fails validation
        """
        if config_file is None:
            config_file = DEFAULT_CONFIG_FILE

        if not config_file.exists():
            logger.debug(f"Runner config not found, using defaults: {config_file}")
            return cls()

        try:
            with config_file.open("r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {config_file}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Runner config must be a JSON object: {config_file}")

        try:
            config = cls(**data)
        except ValidationError as e:
            raise ValueError(f"Invalid runner configuration in {config_file}: {e}") from e

        logger.info(f"Loaded runner config from {config_file}")
        return config
