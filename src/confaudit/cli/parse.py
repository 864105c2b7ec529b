"""CLI command for printing parsed configurations."""

import json
from typing import List, Optional

import typer

from confaudit.cli.utils import fail
from confaudit.utils.errors import ConfauditError


def parse_cmd(
    paths: List[str] = typer.Argument(..., help="Files or directories to parse, '-' for stdin"),
    parser: Optional[str] = typer.Option(
        None, "--parser", help="Parse every file with this parser (yaml, json, toml, ini, dotenv)"
    ),
    ignore: str = typer.Option(
        "", "--ignore", help="Regular expression of paths to skip inside directories"
    ),
) -> None:
    """
    Print the parsed form of configuration files as JSON.

    Shows the exact value policies receive as 'input'.

    Example:
        confaudit parse deploy/service.yaml
    """
    from confaudit.core.files import resolve_files
    from confaudit.parser import ConfigurationParser

    config_parser = ConfigurationParser()
    try:
        files = resolve_files(paths, ignore, config_parser.is_supported)
        if parser:
            configurations = config_parser.parse_as(files, parser)
        else:
            configurations = config_parser.parse(files)
    except ConfauditError as e:
        fail(e)

    typer.echo(json.dumps(configurations, indent=2, default=str))
