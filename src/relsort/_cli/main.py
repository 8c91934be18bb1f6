import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from relsort._graph import CycleError
from relsort._io import ManifestError, export_order_to_toml, load_apps_from_toml
from relsort._models import AppInfo
from relsort._topo import format_error, sort_apps

from .config import ConfigError, RelsortConfig, get_config

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Relsort CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> RelsortConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _optional_config() -> RelsortConfig:
    try:
        return get_config()
    except ConfigError as e:
        logger.warning(f"Ignoring invalid configuration: {e}")
        return RelsortConfig()


def _resolve_manifest(manifest: Path | None, config: RelsortConfig | None) -> Path:
    if manifest is not None:
        return manifest
    if config is None:
        config = _load_config()
    if config.manifest is None:
        err_console.print(f"[red]✗ No manifest given and no {escape('[tool.relsort]')}.manifest configured[/red]")
        raise typer.Exit(code=1)
    logger.debug(f"Using manifest from config: {config.manifest}")
    return config.manifest


def _load_and_sort(manifest: Path) -> list[AppInfo]:
    err_console.print(f"[cyan]Loading manifest from:[/cyan] {manifest}")
    try:
        apps = load_apps_from_toml(manifest)
    except ManifestError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    err_console.print(f"[cyan]Ordering {len(apps)} applications...[/cyan]")
    try:
        return sort_apps(apps)
    except CycleError as e:
        err_console.print()
        err_console.print(f"[red]✗ {escape(format_error(e))}[/red]")
        err_console.print()
        raise typer.Exit(code=1) from e


@app.command()
def order(
    manifest: Annotated[
        Path | None,
        typer.Argument(help="Path to the release manifest TOML file"),
    ] = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ] = None,
    plain: Annotated[
        bool,
        typer.Option("--plain", help="Print one application name per line"),
    ] = False,
) -> None:
    """Print the order in which the applications of a release must be installed."""
    err_console.print()
    # Configuration is only required when the manifest is not given
    config = _load_config() if manifest is None else None
    manifest = _resolve_manifest(manifest, config)
    ordered = _load_and_sort(manifest)
    err_console.print()

    if plain:
        for app_info in ordered:
            out_console.print(app_info.name, markup=False, highlight=False)
    else:
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Application", style="bold")
        table.add_column("Version", style="yellow")
        table.add_column("Depends on", style="dim")

        for i, app_info in enumerate(ordered, start=1):
            table.add_row(str(i), escape(app_info.name), escape(app_info.vsn), escape(", ".join(app_info.deps)))

        out_console.print(Panel(table, title="[bold]Install order[/bold]", border_style="cyan"))

    if output is None:
        output = (config or _optional_config()).output
    if output is not None:
        err_console.print(f"[cyan]Exporting order to:[/cyan] {output}")
        export_order_to_toml(ordered, output)

    err_console.print()
    err_console.print("[green]✓ Ordering complete[/green]")
    err_console.print()


@app.command()
def check(
    manifest: Annotated[
        Path | None,
        typer.Argument(help="Path to the release manifest TOML file"),
    ] = None,
) -> None:
    """Check that the applications of a release can be ordered."""
    err_console.print()
    manifest = _resolve_manifest(manifest, None)
    ordered = _load_and_sort(manifest)
    err_console.print()
    err_console.print(f"[green]✓ {len(ordered)} applications can be ordered[/green]")
    err_console.print()
