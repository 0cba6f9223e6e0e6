"""projroot CLI — diagnostic presentation layer.

Thin adapter: all detection logic lives in :mod:`projroot.resolver`.
Each command opens FILE as a buffer of an in-memory host, asks the
resolver, and formats the answer.
"""

from __future__ import annotations

from pathlib import Path

import structlog
import typer
from pydantic import ValidationError
from rich import print
from rich.markup import escape
from rich.table import Table

from projroot.core.errors import ConfigInvalid, ConfigNotFound, SpecInvalid
from projroot.core.logging import configure_logging
from projroot.core.paths import to_native
from projroot.core.settings import Settings
from projroot.host import MemoryHost
from projroot.resolver import RootResolver

logger = structlog.get_logger()

app = typer.Typer(help="projroot — find the project root of a file.")


# ── Callback (runs before every command) ────────────────────
@app.callback(invoke_without_command=True)
def _main_callback(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    log_level: str = typer.Option("WARNING", "--log-level", envvar="PROJROOT_LOG_LEVEL", help="Log level."),
    log_json: bool = typer.Option(True, "--log-json/--log-text", envvar="PROJROOT_LOG_JSON", help="JSON or human logs."),
    config: Path | None = typer.Option(
        None, "--config", "-c", envvar="PROJROOT_CONFIG_FILE", help="YAML file with spec / lsp_ignore."
    ),
) -> None:
    """Configure logging + settings, then store in context for sub-commands."""
    configure_logging(level=log_level, json_output=log_json)
    try:
        settings = Settings(log_level=log_level, log_json=log_json, config_file=config)
    except (ConfigNotFound, ConfigInvalid, SpecInvalid, ValidationError) as exc:
        print(f"[red]ERROR:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings

    # If no sub-command given, show help.
    if ctx.invoked_subcommand is None:
        print(ctx.get_help())


def _open(ctx: typer.Context, file: str) -> tuple[RootResolver, int]:
    """Resolver over a fresh host with *file* open as the current buffer."""
    host = MemoryHost()
    buffer = host.open(file)
    return RootResolver(host, settings=ctx.obj["settings"]), buffer


def _parse_cli_spec(values: list[str]) -> list[str | list[str]]:
    """``--spec .git,lua`` is a pattern list; ``--spec lsp`` a single entry."""
    return [v.split(",") if "," in v else v for v in values]


# ── Commands ────────────────────────────────────────────────
@app.command()
def root(
    ctx: typer.Context,
    file: str = typer.Argument(help="File (or directory) whose root to find."),
    native: bool = typer.Option(False, "--native", help="Print with the platform path separator."),
) -> None:
    """Print the project root of FILE."""
    resolver, buffer = _open(ctx, file)
    found = resolver.get(buffer)
    typer.echo(to_native(found) if native else found)
    logger.info("root_printed", file=file, root=found)


@app.command()
def git(
    ctx: typer.Context,
    file: str = typer.Argument(help="File (or directory) whose repository root to find."),
    native: bool = typer.Option(False, "--native", help="Print with the platform path separator."),
) -> None:
    """Print the directory holding the nearest .git above FILE's root."""
    resolver, buffer = _open(ctx, file)
    found = resolver.git(buffer)
    typer.echo(to_native(found) if native else found)


@app.command()
def detect(
    ctx: typer.Context,
    file: str = typer.Argument(help="File (or directory) to inspect."),
    spec: list[str] | None = typer.Option(
        None, "--spec", "-s", help="Spec entry, repeatable: 'lsp', 'cwd' or comma-separated patterns."
    ),
    first: bool = typer.Option(False, "--first", help="Stop at the first entry with a result."),
) -> None:
    """Show every spec entry that produced candidate roots for FILE."""
    resolver, buffer = _open(ctx, file)
    try:
        results = resolver.detect(buffer, spec=_parse_cli_spec(spec) if spec else None, all=not first)
    except SpecInvalid as exc:
        print(f"[red]ERROR:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    if not results:
        print("[yellow]No spec entry produced a root.[/yellow]")
        return

    table = Table(title=f"Roots for {escape(file)}", show_lines=False)
    table.add_column("#", style="bold")
    table.add_column("Spec")
    table.add_column("Paths")
    for i, result in enumerate(results, start=1):
        table.add_row(str(i), escape(result.spec.label), "\n".join(escape(p) for p in result.paths))

    print(table)


# ── Entrypoint ──────────────────────────────────────────────
def main() -> None:  # noqa: D103
    app()
