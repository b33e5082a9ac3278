"""Environment diagnostics and run reports for workspace runs."""

from .diagnostics import EnvironmentCheck, WorkspaceDiagnostics, diagnose
from .report import create_checks_table, display_run_result

__all__ = [
    "EnvironmentCheck",
    "WorkspaceDiagnostics",
    "create_checks_table",
    "diagnose",
    "display_run_result",
]
