# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Turn accumulated scan state into a deterministic :class:`ScanResult`.

Two scans over identical inputs must serialise to identical bytes no
matter in which order the filesystem was enumerated or plugins appended
their output, so everything in the result is sorted here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from invscan import __version__
from invscan.core.constants import ScanStatusCode
from invscan.models.finding import GenericFinding, PackageVuln
from invscan.models.inventory import Inventory
from invscan.models.package import Package
from invscan.models.scan import PluginStatus, ScanResult, ScanStatus


@dataclass
class ScanResultOptions:
    """Everything a scan accumulated, possibly cut short by a fatal error."""

    start_time: datetime
    end_time: datetime
    extractor_status: list[PluginStatus] = field(default_factory=list)
    detector_status: list[PluginStatus] = field(default_factory=list)
    annotator_status: list[PluginStatus] = field(default_factory=list)
    enricher_status: list[PluginStatus] = field(default_factory=list)
    inventory: Inventory = field(default_factory=Inventory)
    error: BaseException | None = None


def package_sort_key(pkg: Package) -> tuple:
    """Name, version, plugin count, plugin names, then the sorted locations."""
    locations = "[" + " ".join(sorted(pkg.locations)) + "]"
    return (pkg.name, pkg.version, len(pkg.plugins), tuple(pkg.plugins), locations)


def cmp_packages(a: Package, b: Package) -> int:
    """Three-way comparison of two packages, for ``functools.cmp_to_key``."""
    ka, kb = package_sort_key(a), package_sort_key(b)
    return (ka > kb) - (ka < kb)


def _generic_finding_key(finding: GenericFinding) -> tuple[str, str]:
    extra = finding.target.extra if finding.target is not None else ""
    return (finding.advisory.id.reference, extra)


def _package_vuln_key(vuln: PackageVuln) -> str:
    return vuln.id


def sort_results(inventory: Inventory, statuses: list[PluginStatus]) -> None:
    """Sort *inventory* and *statuses* in place."""
    for pkg in inventory.packages:
        pkg.locations.sort()
    statuses.sort(key=lambda s: s.name)
    inventory.packages.sort(key=package_sort_key)
    inventory.package_vulns.sort(key=_package_vuln_key)
    inventory.generic_findings.sort(key=_generic_finding_key)


def new_scan_result(options: ScanResultOptions) -> ScanResult:
    """Assemble the final, sorted result."""
    if options.error is None:
        status = ScanStatus(status=ScanStatusCode.SUCCEEDED)
    else:
        status = ScanStatus(status=ScanStatusCode.FAILED, failure_reason=str(options.error))

    statuses = [
        *options.extractor_status,
        *options.detector_status,
        *options.annotator_status,
        *options.enricher_status,
    ]
    inventory = options.inventory
    sort_results(inventory, statuses)

    return ScanResult(
        version=__version__,
        start_time=options.start_time,
        end_time=options.end_time,
        status=status,
        plugin_status=statuses,
        inventory=inventory,
    )
