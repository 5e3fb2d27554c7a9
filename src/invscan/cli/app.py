# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

import asyncio
import sys
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer

app = typer.Typer(
    name="invscan",
    help="Software inventory and security finding scanner",
    no_args_is_help=True,
)
plugins_app = typer.Typer()
app.add_typer(plugins_app, name="plugins", help="Inspect registered plugins")


class OutputFormat(StrEnum):
    CONSOLE = "console"
    JSON = "json"


def _build_registry(settings):
    from invscan.plugins.registry import PluginRegistry

    registry = PluginRegistry()
    registry.discover(module_paths=settings.plugin_module_paths or None)
    return registry


@app.command()
def scan(
    root: Annotated[Path, typer.Argument(help="Directory to treat as the scan root")],
    fmt: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.CONSOLE,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path"),
    ] = None,
    plugins: Annotated[
        str | None,
        typer.Option("--plugins", help="Comma-separated plugin names to enable"),
    ] = None,
    offline: Annotated[
        bool, typer.Option("--offline", help="Declare that no network access is available")
    ] = False,
) -> None:
    """Scan a directory for packages and security findings."""
    exit_code = asyncio.run(_async_scan(root, fmt, output, plugins, offline))
    if exit_code:
        raise typer.Exit(exit_code)


async def _async_scan(
    root: Path,
    fmt: OutputFormat,
    output: Path | None,
    plugins_str: str | None,
    offline: bool,
) -> int:
    from invscan.core.config import get_settings
    from invscan.core.constants import Network, PluginKind
    from invscan.core.exceptions import UnknownPluginError
    from invscan.core.logging import setup_logging
    from invscan.fs.local import dir_scan_root
    from invscan.scanner.config import ScanConfig
    from invscan.scanner.pipeline import Scanner

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    registry = _build_registry(settings)

    names = (
        [p.strip() for p in plugins_str.split(",") if p.strip()]
        if plugins_str
        else list(settings.enabled_plugins)
    )
    try:
        by_kind = registry.plugins_from_names(names)
    except UnknownPluginError as exc:
        typer.echo(str(exc), err=True)
        return 2

    config = ScanConfig.from_settings(
        settings,
        scan_roots=[dir_scan_root(root)],
        filesystem_extractors=by_kind[PluginKind.FILESYSTEM_EXTRACTOR],
        standalone_extractors=by_kind[PluginKind.STANDALONE_EXTRACTOR],
        detectors=by_kind[PluginKind.DETECTOR],
        annotators=by_kind[PluginKind.ANNOTATOR],
        enrichers=by_kind[PluginKind.ENRICHER],
    )
    if offline and config.capabilities is not None:
        config.capabilities = config.capabilities.model_copy(
            update={"network": Network.OFFLINE}
        )

    result = await Scanner(registry=registry).scan(config)

    if fmt == OutputFormat.CONSOLE:
        from invscan.cli.formatters.console import format_scan_result

        format_scan_result(result)
    else:
        from invscan.cli.formatters.json_fmt import format_json

        _write_output(format_json(result), output)
    return 0 if result.succeeded else 1


def _write_output(text: str, output: Path | None) -> None:
    if output:
        output.write_text(text)
        typer.echo(f"Output written to {output}", err=True)
    else:
        sys.stdout.write(text + "\n")


@plugins_app.command(name="list")
def plugins_list() -> None:
    """List registered plugins."""
    from rich.console import Console
    from rich.table import Table

    from invscan.core.config import get_settings

    registry = _build_registry(get_settings())
    infos = registry.list_plugins()
    console = Console()

    if not infos:
        console.print("[dim]No plugins installed.[/dim]")
        return

    table = Table(title="Plugins")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Version")
    table.add_column("Kind")
    for info in infos:
        table.add_row(info.name, str(info.version), info.kind)
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from invscan import __version__

    typer.echo(f"invscan v{__version__}")
