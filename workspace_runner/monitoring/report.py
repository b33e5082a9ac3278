"""
Run Report Display

Rich-formatted terminal report of a finished workspace run and of the
environment checks, for debugging runs from a shell or a log viewer.
"""

from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models.runner_state import RunResult
from .diagnostics import EnvironmentCheck


def format_duration(seconds: float) -> str:
    """Format a run duration, e.g. 850ms or 4.2s."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.1f}s"


def create_checks_table(checks: List[EnvironmentCheck], title: str = "Environment Checks") -> Table:
    """
    Create table of environment checks.

    Args:
        checks: Checks in display order
        title: Table title

    Returns:
        Rich Table object
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Check", style="dim")
    table.add_column("Status")
    table.add_column("Remediation")

    for check in checks:
        status = Text("✓ OK", style="green") if check.ok else Text("✗ Missing", style="red")
        table.add_row(
            check.name.replace("_", " ").title(),
            status,
            "" if check.ok else check.remediation.lstrip("• "),
        )

    return table


def create_result_table(result: RunResult) -> Table:
    """Two-column summary of a run's counters."""
    table = Table(show_header=False)
    table.add_column("Metric", style="dim")
    table.add_column("Value", justify="right")

    table.add_row("Apps Launched", str(result.apps_launched))
    table.add_row("Windows Positioned", str(result.windows_positioned))
    table.add_row("Windows Skipped", str(result.windows_skipped))
    table.add_row("Duration", format_duration(result.duration))

    return table


def display_run_result(
    result: RunResult,
    checks: Optional[List[EnvironmentCheck]] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Display a run result, optionally followed by the environment checks.

    Args:
        result: Outcome returned by WorkspaceRunner.run()
        checks: Environment checks (e.g. WorkspaceDiagnostics.check())
        console: Rich console (optional, creates new if not provided)
    """
    if console is None:
        console = Console()

    if result.success:
        status_text = Text(f"✓ {result.state.title}", style="bold green")
    else:
        status_text = Text(f"✗ {result.message}", style="bold red")

    console.print(Panel(status_text, title="Workspace Run"))
    console.print(Panel(create_result_table(result), title="Summary"))

    if checks:
        console.print()
        console.print(create_checks_table(checks))

    if result.remediation and not result.success:
        console.print()
        console.print(result.remediation, style="yellow")
