# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Rich console output formatter for scan results."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from invscan import __version__
from invscan.core.constants import ScanStatusCode, Severity
from invscan.models.scan import ScanResult

console = Console()

SEVERITY_COLORS = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "cyan",
    Severity.MINIMAL: "dim",
    Severity.UNSPECIFIED: "dim",
}


def format_scan_result(result: ScanResult) -> None:
    """Print a scan result to the console with Rich formatting."""
    console.print()
    console.print(f"[bold]invscan v{__version__}[/bold] - Software Inventory Scanner")
    console.print()

    if result.status.status == ScanStatusCode.SUCCEEDED:
        console.print(Panel("[bold green]SCAN SUCCEEDED[/bold green]", style="green"))
    else:
        console.print(
            Panel(
                f"[bold red]SCAN FAILED[/bold red]\n{result.status.failure_reason}",
                style="red",
            )
        )
    console.print()

    if result.inventory.packages:
        table = Table(title="Packages")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Version")
        table.add_column("Type")
        table.add_column("Location")
        table.add_column("Layer")
        for pkg in result.inventory.packages:
            layer = str(pkg.layer_details.index) if pkg.layer_details else ""
            table.add_row(pkg.name, pkg.version, pkg.purl_type, ", ".join(pkg.locations), layer)
        console.print(table)
        console.print()

    findings = [
        (v.severity, v.id, v.summary) for v in result.inventory.package_vulns
    ] + [
        (f.advisory.severity, f.advisory.id.reference, f.advisory.title)
        for f in result.inventory.generic_findings
    ]
    if findings:
        for severity, ident, title in findings:
            color = SEVERITY_COLORS.get(severity, "white")
            console.print(f"[{color}]{severity.upper():<11}[/{color}] [bold]{ident}[/bold]  {title}")
        console.print()
    else:
        console.print("  No security findings.", style="bold green")
        console.print()

    failed = [s for s in result.plugin_status if not s.succeeded]
    console.print(
        f"  Summary: {len(result.inventory.packages)} packages, {len(findings)} findings"
    )
    console.print(f"  Plugins: {len(result.plugin_status)} run, {len(failed)} failed")
    for status in failed:
        console.print(f"    {status.name}: {status.failure_reason}", style="red")
    duration = (result.end_time - result.start_time).total_seconds()
    console.print(f"  Duration: {duration:.1f}s")
    console.print()
