"""Main CLI entry point for confaudit."""

import typer
from rich.console import Console

from confaudit.cli import parse, test

app = typer.Typer(
    name="confaudit",
    help="Test configuration files against policies.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.command(name="test")(test.test_cmd)
app.command(name="parse")(parse.parse_cmd)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
    structured_logs: bool = typer.Option(
        False, "--structured-logs", help="Timestamped log lines with key=value context"
    ),
) -> None:
    """
    confaudit: test configuration files against policies.

    - [bold]test[/bold]: Evaluate policies against configuration files
    - [bold]parse[/bold]: Show how configuration files are parsed
    """
    from confaudit.utils.logging import configure_logging

    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "WARNING"
    else:
        level = "INFO"
    configure_logging(level=level, structured=structured_logs)


@app.command()
def version() -> None:
    """Show the confaudit version."""
    from confaudit import __version__

    console.print(f"confaudit version {__version__}")


if __name__ == "__main__":
    app()
