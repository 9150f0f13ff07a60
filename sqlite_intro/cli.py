"""CLI entry point - command definitions using Click.

Commands:
    init          Generate a template config file
    report        Boxed introspection report (version, ids, modules, ...)
    version       SQLite library version only
    modules       Comma-separated list of loaded modules
    metadata      Introspection snapshot as JSON
"""

import json
import sys
from typing import Any

import click

from sqlite_intro import __version__

REPORT_HEADING = "\nSQLite Introspection Information"


# ---------------------------------------------------------------------------
# Helpers shared by all data commands
# ---------------------------------------------------------------------------

def _make_client(ctx: click.Context, database: str | None):
    """Load config and return (url, SqliteClient). Exits on config error."""
    from sqlite_intro.client import SqliteClient
    from sqlite_intro.config import ConfigError, database_path, load

    obj = ctx.obj
    try:
        config = load(obj["config_path"])
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)

    url = config.resolve_database(database)
    if obj["verbose"]:
        click.echo(f"[verbose] Opening {url} (timeout={config.timeout}s)", err=True)

    client = SqliteClient(database_path(url), timeout=config.timeout, read_only=config.read_only)
    return url, client


def _emit_text(text: str, ctx: click.Context) -> None:
    """Write text to stdout or to the file specified by --output."""
    output_path: str | None = ctx.obj["output_path"]
    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        click.echo(f"Report written to '{output_path}'", err=True)
    else:
        click.echo(text)


def _emit_json(data: Any, ctx: click.Context) -> None:
    indent = 2 if ctx.obj["pretty"] else None
    _emit_text(json.dumps(data, indent=indent, ensure_ascii=False), ctx)


def _handle_client_errors(func):
    """Decorator that catches introspection exceptions and exits cleanly."""
    import functools

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from sqlite_intro.client import IntrospectionError, MalformedRow, SourceUnavailable
        from sqlite_intro.config import DatabaseNotFoundError

        try:
            return func(*args, **kwargs)
        except DatabaseNotFoundError as exc:
            click.echo(f"Configuration error: {exc}", err=True)
            sys.exit(1)
        except SourceUnavailable as exc:
            click.echo(f"Database error: {exc}", err=True)
            sys.exit(1)
        except MalformedRow as exc:
            click.echo(f"Malformed metadata: {exc}", err=True)
            sys.exit(1)
        except IntrospectionError as exc:
            click.echo(f"Introspection error: {exc}", err=True)
            sys.exit(1)

    return wrapper


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--config", "config_path", default="sqlite-intro.yaml", show_default=True,
              help="Path to the configuration file.")
@click.option("--output", "output_path", default=None,
              help="Write output to a file instead of stdout.")
@click.option("--pretty", is_flag=True, default=False,
              help="Pretty-print JSON output.")
@click.option("--verbose", is_flag=True, default=False,
              help="Enable verbose logging.")
@click.version_option(__version__, prog_name="sqlite-intro")
@click.pass_context
def cli(ctx: click.Context, config_path: str, output_path: str | None,
        pretty: bool, verbose: bool) -> None:
    """SQLite introspection tool - version, modules, pragmas, compile options, functions."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["output_path"] = output_path
    ctx.obj["pretty"] = pretty
    ctx.obj["verbose"] = verbose


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

@cli.command("init")
@click.option("--output", "output_path", default="sqlite-intro.yaml", show_default=True,
              help="Path where the template config file will be written.")
def init_command(output_path: str) -> None:
    """Generate a template sqlite-intro.yaml file."""
    from sqlite_intro.config import ConfigError, generate_template
    try:
        generate_template(output_path)
        click.echo(f"Template written to '{output_path}'.")
        click.echo("Edit it with your default database URL and aliases.")
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# report
# ---------------------------------------------------------------------------

@cli.command("report")
@click.argument("database", required=False)
@click.pass_context
@_handle_client_errors
def report_command(ctx: click.Context, database: str | None) -> None:
    """Boxed introspection report for DATABASE (alias or sqlite: URL)."""
    from sqlite_intro.reports.introspection import build_report

    url, client = _make_client(ctx, database)
    if ctx.obj["verbose"]:
        click.echo(f"[verbose] Collecting introspection metadata from {url}", err=True)

    with client:
        report = build_report(client)
    _emit_text(f"{REPORT_HEADING}\n{report}", ctx)


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------

@cli.command("version")
@click.argument("database", required=False)
@click.pass_context
@_handle_client_errors
def version_command(ctx: click.Context, database: str | None) -> None:
    """SQLite library version reported by DATABASE."""
    from sqlite_intro.reports.introspection import get_version

    _, client = _make_client(ctx, database)
    with client:
        _emit_text(get_version(client), ctx)


# ---------------------------------------------------------------------------
# modules
# ---------------------------------------------------------------------------

@cli.command("modules")
@click.argument("database", required=False)
@click.pass_context
@_handle_client_errors
def modules_command(ctx: click.Context, database: str | None) -> None:
    """Comma-separated list of virtual-table modules registered in DATABASE."""
    from sqlite_intro.reports.introspection import get_module_names

    _, client = _make_client(ctx, database)
    with client:
        _emit_text(get_module_names(client), ctx)


# ---------------------------------------------------------------------------
# metadata
# ---------------------------------------------------------------------------

@cli.command("metadata")
@click.argument("database", required=False)
@click.pass_context
@_handle_client_errors
def metadata_command(ctx: click.Context, database: str | None) -> None:
    """Introspection snapshot of DATABASE as JSON."""
    from sqlite_intro.reports.introspection import get_metadata

    url, client = _make_client(ctx, database)
    if ctx.obj["verbose"]:
        click.echo(f"[verbose] Collecting introspection metadata from {url}", err=True)

    with client:
        report = get_metadata(client, url)
    _emit_json(report, ctx)
