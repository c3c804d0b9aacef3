"""Shared utility functions for htmx-starter.

Provides async command execution, Rich-based console output and a small
duration formatter used in the run summary.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()
err_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(cmd: list[str], cwd: str | Path | None = None) -> int:
    """Run an executable and wait for it to exit.

    No timeout is applied; the caller blocks until the child process exits.
    stdout and stderr are inherited so the user sees the tool's output.

    Args:
        cmd: Executable followed by its arguments.
        cwd: Working directory for the child process.

    Returns:
        The process return code.

    Raises:
        FileNotFoundError: If the executable is not on ``PATH`` or *cwd*
            does not exist.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=None,
        stderr=None,
        cwd=str(cwd) if cwd else None,
    )
    await process.wait()
    return process.returncode or 0


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
    """
    if seconds < 0:
        return "0.0s"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


STAGE_COLORS: dict[str, str] = {
    "selecting": "bright_cyan",
    "resolving": "bright_blue",
    "materializing": "bright_green",
    "bootstrapping": "bright_yellow",
}


def print_stage_header(stage: str, detail: str = "") -> None:
    """Print a full-width rule naming the current stage."""
    color = STAGE_COLORS.get(stage, "white")
    title = stage.upper() if not detail else f"{stage.upper()}: {detail}"
    console.print(Rule(f"[bold {color}] {title} [/bold {color}]", style=color))


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message to standard error."""
    err_console.print(f"[bold red]{escape(message)}[/bold red]")


