"""
Environment Diagnostics

Turns environment predicates into user-facing remediation text:
- Automation (Accessibility) permission granted?
- Separate desktops per display enabled? (desktop isolation only)

Shown by the presentation layer next to a failed run's message.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..services.interfaces import DesktopPreferences, PermissionOracle

logger = logging.getLogger(__name__)

ALL_GOOD_MESSAGE = "All required permissions are configured correctly."
ISSUES_HEADER = "Unable to restore the workspace. Please ensure:"

PERMISSION_REMEDIATION = (
    "• Grant Accessibility permission in "
    "System Settings → Privacy & Security → Accessibility"
)
SEPARATE_DESKTOPS_REMEDIATION = (
    "• Enable \"Displays have separate Spaces\" in "
    "System Settings → Desktop & Dock"
)


@dataclass
class EnvironmentCheck:
    """Result of one environment predicate."""
    name: str
    ok: bool
    remediation: str


def build_checks(
    permission_granted: bool,
    separate_desktops_enabled: Optional[bool] = None,
) -> List[EnvironmentCheck]:
    """Checks in display order; a None predicate does not apply and is omitted."""
    checks = [
        EnvironmentCheck("accessibility_permission", permission_granted, PERMISSION_REMEDIATION),
    ]
    if separate_desktops_enabled is not None:
        checks.append(
            EnvironmentCheck("separate_desktops", separate_desktops_enabled, SEPARATE_DESKTOPS_REMEDIATION)
        )
    return checks


def render_checks(checks: List[EnvironmentCheck]) -> str:
    issues = [check.remediation for check in checks if not check.ok]
    if not issues:
        return ALL_GOOD_MESSAGE
    return ISSUES_HEADER + "\n\n" + "\n".join(issues)


def diagnose(
    permission_granted: bool,
    separate_desktops_enabled: Optional[bool] = None,
) -> str:
    """
    Build remediation text from environment predicates.

    Pure: never fails, never mutates anything.

    Args:
        permission_granted: Automation permission state
        separate_desktops_enabled: Desktop isolation preference, or None when
            the workspace does not isolate into a new desktop

    Returns:
        Fixed success message, or a header plus one bullet per failing check
    """
    return render_checks(build_checks(permission_granted, separate_desktops_enabled))


class WorkspaceDiagnostics:
    """Reads predicates from the environment collaborators."""

    def __init__(
        self,
        permission_oracle: PermissionOracle,
        desktop_preferences: Optional[DesktopPreferences] = None,
    ):
        self.permission_oracle = permission_oracle
        self.desktop_preferences = desktop_preferences

    def check(self, include_desktop: bool = True) -> List[EnvironmentCheck]:
        """
        Probe the environment.

        Args:
            include_desktop: Include the desktop isolation predicate (needs
                desktop_preferences)

        Returns:
            List of EnvironmentCheck in display order
        """
        granted = self._probe("accessibility_permission", self.permission_oracle.is_granted)

        separate = None
        if include_desktop and self.desktop_preferences is not None:
            separate = self._probe(
                "separate_desktops", self.desktop_preferences.separate_desktops_enabled
            )

        return build_checks(granted, separate)

    def diagnose(self, include_desktop: bool = True) -> str:
        return render_checks(self.check(include_desktop))

    @staticmethod
    def _probe(name: str, predicate: Callable[[], bool]) -> bool:
        # A probe that cannot be read counts as unsatisfied
        try:
            return bool(predicate())
        except Exception as e:
            logger.warning(f"Diagnostic probe '{name}' failed: {e}")
            return False
