"""CLI command for testing configuration files against policies."""

from pathlib import Path
from typing import List, Optional

import typer

from confaudit.cli.utils import exit_code, fail
from confaudit.utils.errors import ConfauditError


def test_cmd(
    paths: List[str] = typer.Argument(..., help="Files or directories to test, '-' for stdin"),
    policy: Optional[List[str]] = typer.Option(
        None, "--policy", "-p", help="Path to the policies [default: policy]"
    ),
    data: Optional[List[str]] = typer.Option(
        None, "--data", "-d", help="Data files or directories exposed as 'data'"
    ),
    update: Optional[List[str]] = typer.Option(
        None, "--update", "-u", help="Policy bundle URLs to download into the first policy path"
    ),
    ignore: Optional[str] = typer.Option(
        None, "--ignore", help="Regular expression of paths to skip inside directories"
    ),
    parser: Optional[str] = typer.Option(
        None, "--parser", help="Parse every file with this parser (yaml, json, toml, ini, dotenv)"
    ),
    namespace: Optional[List[str]] = typer.Option(
        None, "--namespace", "-n", help="Namespace to evaluate [default: main]"
    ),
    all_namespaces: bool = typer.Option(
        False, "--all-namespaces", help="Evaluate every namespace in the policies"
    ),
    namespace_prefix: Optional[str] = typer.Option(
        None, "--namespace-prefix", help="Evaluate namespaces starting with this prefix"
    ),
    combine: bool = typer.Option(
        False, "--combine", help="Evaluate all files together instead of one by one"
    ),
    fail_on_warn: bool = typer.Option(
        False, "--fail-on-warn", help="Exit non-zero when warnings are found"
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output"),
    trace: bool = typer.Option(False, "--trace", help="Show rule evaluation traces"),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output format (stdout, table, json)"
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
    timeout: float = typer.Option(
        0.0, "--timeout", help="Abort the run after this many seconds (0 disables)"
    ),
) -> None:
    """
    Test configuration files against policies.

    Files found in directories are filtered by --ignore and by whether a
    parser supports them; files named directly are always tested.

    Example:
        confaudit test deploy/ --policy policy --namespace kubernetes
    """
    from confaudit.core.runner import TestRunner
    from confaudit.downloader import BundleDownloader
    from confaudit.renderers import OutputFormat, RenderContext, get_renderer
    from confaudit.utils.config import load_config
    from confaudit.utils.context import RunContext

    try:
        settings = load_config(config)
    except (FileNotFoundError, ValueError) as e:
        fail(e)

    defaults = settings.test
    options = defaults.model_copy(
        update={
            "policy": policy or defaults.policy,
            "data": data or defaults.data,
            "update": update or defaults.update,
            "ignore": ignore if ignore is not None else defaults.ignore,
            "parser": parser if parser is not None else defaults.parser,
            "namespace": namespace or defaults.namespace,
            "all_namespaces": all_namespaces or defaults.all_namespaces,
            "namespace_prefix": namespace_prefix if namespace_prefix is not None else defaults.namespace_prefix,
            "combine": combine or defaults.combine,
            "fail_on_warn": fail_on_warn or defaults.fail_on_warn,
            "no_color": no_color or defaults.no_color or not settings.output.color,
            "trace": trace or defaults.trace,
            "output": output or defaults.output,
        }
    )

    try:
        output_format = OutputFormat(options.output)
    except ValueError:
        fail(ValueError(f"Invalid output format: {options.output}"))

    ctx = RunContext.with_timeout(timeout) if timeout > 0 else RunContext.background()
    runner = TestRunner(
        options,
        downloader=BundleDownloader(
            timeout=settings.download.timeout,
            max_retries=settings.download.max_retries,
        ),
    )

    try:
        results = runner.run(ctx, paths)
    except ConfauditError as e:
        fail(e)

    context = RenderContext(format=output_format, color=not options.no_color, trace=options.trace)
    rendered = get_renderer(output_format).render(results, context)
    if rendered:
        typer.echo(rendered)

    code = exit_code(results, options.fail_on_warn)
    if code:
        raise typer.Exit(code)

