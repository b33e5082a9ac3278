"""
Services for workspace runs: collaborator contracts, grid planning and
launch-or-activate sequencing.

The runner lives in ``services.runner`` (it depends on monitoring, which
depends on the contracts defined here).
"""

from .interfaces import (
    AppRegistry,
    DesktopPreferences,
    PermissionOracle,
    WindowControl,
)
from .grid_planner import GridLayoutPlanner
from .activation import AppActivationSequencer

__all__ = [
    "AppRegistry",
    "DesktopPreferences",
    "PermissionOracle",
    "WindowControl",
    "GridLayoutPlanner",
    "AppActivationSequencer",
]
