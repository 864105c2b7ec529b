"""Terminal renderers for check results."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from confaudit.models.result import CheckResult, summarize
from confaudit.renderers.base import OutputFormat, RenderContext

STYLES = {
    "FAIL": "red",
    "WARN": "yellow",
    "EXCP": "cyan",
    "PASS": "green",
    "TRAC": "dim",
}


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def _summary_line(results: list[CheckResult]) -> str:
    summary = summarize(results)
    return (
        f"{_plural(summary.tests, 'test')}, {summary.passed} passed, "
        f"{_plural(summary.warnings, 'warning')}, {_plural(summary.failures, 'failure')}, "
        f"{_plural(summary.exceptions, 'exception')}"
    )


class _ConsoleRenderer:
    def __init__(self, console: Console | None = None) -> None:
        """Initialize the renderer.

        Args:
            console: Rich console to print to. Creates one per render if None.
        """
        self._console = console

    def _get_console(self, context: RenderContext) -> Console:
        if self._console is not None:
            return self._console
        return Console(no_color=not context.color, highlight=False)


class StdoutRenderer(_ConsoleRenderer):
    """Prints one line per warning, failure and exception, then a summary.

    Example output:
        FAIL - deploy.yaml - main - containers must not run as root

        2 tests, 1 passed, 0 warnings, 1 failure, 0 exceptions
    """

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.STDOUT

    def render(self, results: list[CheckResult], context: RenderContext) -> str:
        console = self._get_console(context)

        for result in results:
            if context.trace:
                for line in result.traces:
                    self._line(console, "TRAC", result, line)
            for warning in result.warnings:
                self._line(console, "WARN", result, warning.message)
            for failure in result.failures:
                self._line(console, "FAIL", result, failure.message)
            for exception in result.exceptions:
                self._line(console, "EXCP", result, exception.message)

        console.print()
        console.print(_summary_line(results))
        return ""

    @staticmethod
    def _line(console: Console, label: str, result: CheckResult, message: str) -> None:
        text = Text()
        text.append(label, style=STYLES[label])
        text.append(f" - {result.filename} - {result.namespace} - {message}")
        console.print(text)


class TableRenderer(_ConsoleRenderer):
    """Prints results as a rich table."""

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.TABLE

    def render(self, results: list[CheckResult], context: RenderContext) -> str:
        console = self._get_console(context)

        table = Table(title="Results")
        table.add_column("Result")
        table.add_column("File", style="bold")
        table.add_column("Namespace")
        table.add_column("Message")

        for result in results:
            rows = (
                [("FAIL", r.message) for r in result.failures]
                + [("WARN", r.message) for r in result.warnings]
                + [("EXCP", r.message) for r in result.exceptions]
            )
            if not rows and result.successes:
                rows = [("PASS", "-")]
            for label, message in rows:
                style = STYLES[label]
                table.add_row(f"[{style}]{label}[/{style}]", result.filename, result.namespace, message)

        console.print(table)
        console.print(_summary_line(results))
        return ""
