"""Shared utilities for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from confaudit.models.result import CheckResult, summarize

# Shared console instances
console = Console()
err_console = Console(stderr=True)


def fail(error: Exception) -> NoReturn:
    """Print an error and exit with status 1.

    Args:
        error: Error to report; its message carries the stage chain
    """
    err_console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(1)


def exit_code(results: list[CheckResult], fail_on_warn: bool) -> int:
    """Exit status for a finished run.

    0 when nothing failed. Failures give 1, or 2 with ``fail_on_warn``,
    where warnings alone give 1.

    Args:
        results: Results of the run
        fail_on_warn: Treat warnings as a failing outcome
    """
    summary = summarize(results)
    if fail_on_warn:
        if summary.failures:
            return 2
        if summary.warnings:
            return 1
        return 0
    return 1 if summary.failures else 0
