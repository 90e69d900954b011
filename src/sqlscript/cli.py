"""
Click-based CLI for sqlscript.
"""

import json
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .commands import RunError, build_session, open_executor, run_script
from .domain.errors import ScriptError

console = Console()


def _configure_logging(verbose: bool) -> None:
    """Send library diagnostics to stderr through rich."""
    handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    package_logger = logging.getLogger("sqlscript")
    package_logger.handlers = [handler]
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group()
@click.version_option(version=__version__, prog_name="sqlscript")
def cli() -> None:
    """Run SQL*Plus-style scripts"""
    pass


@cli.command()
@click.argument("target")
@click.argument("arguments", nargs=-1)
@click.option(
    "--database",
    "-d",
    default=":memory:",
    show_default=True,
    help="SQLite database file used when no warehouse is given",
)
@click.option("--warehouse-id", help="Run statements on this Databricks SQL warehouse")
@click.option("--profile", "-p", help="Databricks authentication profile")
@click.option(
    "--timeout",
    type=int,
    default=300,
    show_default=True,
    help="Databricks statement timeout in seconds",
)
@click.option("--dry-run", is_flag=True, help="Print statements instead of executing them")
@click.option(
    "--set",
    "overrides",
    multiple=True,
    metavar="OPTION=VALUE",
    help="Initial SET option (SQLTERMINATOR, BLOCKTERMINATOR, DEFINE, CONCAT, ESCAPE)",
)
@click.option(
    "--define",
    "-D",
    "defines",
    multiple=True,
    metavar="NAME=VALUE",
    help="Initial substitution variable",
)
@click.option("--encoding", default="utf-8", show_default=True, help="Script file encoding")
@click.option("--verbose", "-v", is_flag=True, help="Show debug diagnostics")
@click.option("--json", "json_output", is_flag=True, help="Print a JSON result envelope")
def run(
    target: str,
    arguments: tuple[str, ...],
    database: str,
    warehouse_id: str | None,
    profile: str | None,
    timeout: int,
    dry_run: bool,
    overrides: tuple[str, ...],
    defines: tuple[str, ...],
    encoding: str,
    verbose: bool,
    json_output: bool,
) -> None:
    """Run TARGET (a script, a directory of scripts, or - for stdin)

    ARGUMENTS are bound to the substitution variables &1, &2, ...
    """
    _configure_logging(verbose)

    # JSON mode keeps stdout for the envelope
    output = Console(stderr=True) if json_output else console

    try:
        session = build_session(overrides, defines)
        with open_executor(
            database=database,
            warehouse_id=warehouse_id,
            profile=profile,
            timeout_seconds=timeout,
            dry_run=dry_run,
            output=output,
        ) as executor:
            result = run_script(
                target,
                arguments,
                executor,
                session=session,
                encoding=encoding,
                output=output,
            )

        if json_output:
            click.echo(json.dumps(result.as_json_dict(), indent=2))
        else:
            console.print(f"[green]✓[/green] {result.message}")

    except RunError as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        sys.exit(1)
    except ScriptError as e:
        if json_output:
            payload = {"success": False, "code": e.code, "message": e.message, "data": {}}
            click.echo(json.dumps(payload, indent=2))
        else:
            console.print(f"[red]✗ Script failed:[/red] {escape(str(e))}")
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
