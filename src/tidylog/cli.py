"""tidylog CLI entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from tidylog import __version__


@click.group()
@click.version_option(version=__version__, prog_name="tidylog")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output (debug logging).")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
@click.pass_context
def main(ctx: click.Context, *, verbose: bool, quiet: bool) -> None:
    """tidylog - structured logging and exception hygiene for typed trees."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument(
    "trees",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to tidylog.yml (default: ./tidylog.yml if present).",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "json", "porcelain"]),
    default=None,
    help="Output format (default: rich if TTY, porcelain if piped).",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit 1 if findings remain.",
)
@click.option(
    "--output",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write rewritten tree documents to this directory.",
)
def check(
    trees: tuple[Path, ...],
    *,
    config_path: Path | None,
    fmt: str | None,
    strict: bool,
    output_dir: Path | None,
) -> None:
    """Run all enabled rules over TREES until nothing changes.

    Exit codes: 0 = clean or findings without --strict,
    1 = findings with --strict, 2 = configuration or tree document error.
    """
    from tidylog.checker import CheckError, format_json, format_porcelain, format_rich, write_outputs
    from tidylog.checker import check as run_check

    if fmt is None:
        fmt = "rich" if sys.stdout.isatty() else "porcelain"

    try:
        result = run_check(list(trees), config_path=config_path)
    except CheckError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    formatters = {
        "rich": format_rich,
        "json": format_json,
        "porcelain": format_porcelain,
    }
    output = formatters[fmt](result)
    if output:
        click.echo(output)

    if output_dir is not None:
        written = write_outputs(result, output_dir)
        click.echo(f"Wrote {len(written)} tree(s) to {output_dir}", err=True)

    if strict and result.findings:
        sys.exit(1)


@main.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to tidylog.yml (default: ./tidylog.yml if present).",
)
def rules(*, config_path: Path | None) -> None:
    """List the available rules and whether they are enabled."""
    from rich.console import Console
    from rich.table import Table

    from tidylog.config import DEFAULT_CONFIG_NAME, load_settings
    from tidylog.rules import ALL_RULES, is_disabled

    try:
        settings = load_settings(config_path or Path.cwd() / DEFAULT_CONFIG_NAME)
    except ValueError as exc:
        click.echo(f"Error: Invalid configuration: {exc}", err=True)
        sys.exit(2)

    table = Table(title="Rules", show_header=True, box=None, padding=(0, 1))
    table.add_column("Rule")
    table.add_column("Enabled")
    table.add_column("Description")
    for rule_cls in ALL_RULES:
        enabled = "no" if is_disabled(rule_cls.rule_id, settings) else "yes"
        table.add_row(rule_cls.rule_id, enabled, rule_cls.description)

    console = Console()
    console.print(table)
    console.print(f"Suppress with: // {settings.marker} <RuleId>")


@main.command()
@click.argument("text")
@click.option("--marker", default=None, help="Directive marker (default: tidylog:disable).")
def directive(text: str, *, marker: str | None) -> None:
    """Show how comment TEXT parses as a suppression directive."""
    from tidylog.suppression.directive import DEFAULT_MARKER, DirectiveScope, parse_directive

    parsed = parse_directive(text, marker or DEFAULT_MARKER)
    if parsed is None:
        click.echo("no directive")
    elif parsed.scope is DirectiveScope.ALL:
        click.echo("all rules")
    else:
        click.echo(f"rule: {parsed.rule_id}")
