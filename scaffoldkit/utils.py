"""Shared helpers: command execution and Rich console output.

The engine modules never print; everything human-facing goes through the
shared ``console`` defined here.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .planner import Plan
from .results import ScaffoldReport, WriteStatus

console = Console()

# ---------------------------------------------------------------------------
# Command execution
# ---------------------------------------------------------------------------


def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 300,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command and capture its output.

    Args:
        cmd: Executable and arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  A missing executable is
        reported as returncode ``127`` and a timeout as ``-1``.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            env=merged_env,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        return (127, "", f"Command not found: {cmd[0]}")
    except subprocess.TimeoutExpired:
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    return (completed.returncode, (completed.stdout or "").strip(), (completed.stderr or "").strip())


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------

STATUS_STYLES: dict[str, str] = {
    WriteStatus.CREATED.value: "green",
    WriteStatus.OVERWRITTEN.value: "cyan",
    WriteStatus.SKIPPED.value: "yellow",
    WriteStatus.FAILED.value: "bold red",
}


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_plan(plan: Plan) -> None:
    """Print a dry-run view of a plan."""
    table = Table(title="Plan", show_header=True, header_style="bold cyan")
    table.add_column("Kind", style="dim", no_wrap=True)
    table.add_column("Path")
    table.add_column("Template", style="dim")

    for directory in plan.directories:
        table.add_row("directory", f"{directory}/", "")
    for planned in plan.files:
        table.add_row("file", planned.path, planned.template_id)

    console.print(table)
    console.print()


def print_report(report: ScaffoldReport) -> None:
    """Print every outcome, the counts, and the install result if any."""
    if report.error is not None:
        print_error(report.summary())
        return

    table = Table(title=f"Scaffold: {report.root}", show_header=True, header_style="bold cyan")
    table.add_column("Status", no_wrap=True)
    table.add_column("Path")
    table.add_column("Detail", style="dim")

    for outcome in report.outcomes:
        style = STATUS_STYLES[outcome.status.value]
        path = f"{outcome.path}/" if outcome.kind.value == "directory" else outcome.path
        detail = outcome.error or outcome.reason
        if outcome.error_kind is not None:
            detail = f"{outcome.error_kind.value}: {detail}"
        table.add_row(f"[{style}]{outcome.status.value}[/{style}]", path, detail)

    console.print(table)
    print_summary_table({status: str(count) for status, count in report.counts.items()}, title="Counts")

    if report.install is not None:
        command = " ".join(report.install.command)
        if report.install.success:
            print_success(f"Installed dependencies: {command}")
        else:
            print_error(f"Dependency install failed ({report.install.returncode}): {command}")
            if report.install.stderr:
                console.print(report.install.stderr, markup=False)

    if report.has_skips:
        print_warning("Some entries were skipped because they already exist.")
