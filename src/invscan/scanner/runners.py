# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Runners for the plugin phases that follow filesystem extraction.

Each runner invokes its plugins in declaration order and reports a
:class:`PhaseResult`: the inventory it produced, one status per plugin it
reached, the joined per-plugin errors, and a fatal error when the phase
had to stop early (cancellation).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

from invscan.core.cancel import CancelToken
from invscan.core.exceptions import PluginError, ScanCancelledError, join_errors
from invscan.fs.base import ScanRoot
from invscan.models.inventory import Inventory
from invscan.models.scan import PluginStatus
from invscan.packageindex import PackageIndex
from invscan.plugins.base import (
    Annotator,
    Detector,
    Enricher,
    Plugin,
    ScanInput,
    StandaloneExtractor,
)
from invscan.plugins.status import status_from_error

logger = logging.getLogger("invscan.scanner.runners")

P = TypeVar("P", bound=Plugin)


@dataclass
class PhaseResult:
    inventory: Inventory = field(default_factory=Inventory)
    statuses: list[PluginStatus] = field(default_factory=list)
    # Joined per-plugin failures.  Siblings still ran.
    error: BaseException | None = None
    # Set when the phase stopped before reaching every plugin.
    fatal: BaseException | None = None


def _tag(plugins: list[str], name: str) -> None:
    if name not in plugins:
        plugins.append(name)


def _log_context(plugin: Plugin) -> dict[str, str]:
    return {"plugin": plugin.name, "plugin_kind": str(plugin.kind)}


async def run_standalone_extractors(
    extractors: Sequence[StandaloneExtractor], scan_root: ScanRoot, token: CancelToken
) -> PhaseResult:
    """Run standalone extractors against *scan_root*.

    A failing extractor gets a failed status and extraction moves on to
    the next one; extractor failures are not reported as a phase error.
    """
    result = PhaseResult()
    if not scan_root.is_virtual:
        scan_root = ScanRoot(fs=scan_root.fs, path=os.path.abspath(scan_root.path))
    scan_input = ScanInput(scan_root=scan_root)

    for extractor in extractors:
        if token.cancelled:
            result.fatal = ScanCancelledError(token.reason)
            return result
        try:
            inv = await extractor.extract(scan_input, token)
        except ScanCancelledError as exc:
            result.fatal = exc
            return result
        except Exception as exc:
            logger.warning(
                "Standalone extractor %s failed: %s",
                extractor.name,
                exc,
                extra=_log_context(extractor),
            )
            result.statuses.append(status_from_error(extractor, exc))
            continue
        for pkg in inv.packages:
            _tag(pkg.plugins, extractor.name)
        result.inventory.append(inv)
        result.statuses.append(status_from_error(extractor, None))
    return result


async def run_detectors(
    detectors: Sequence[Detector],
    scan_root: ScanRoot,
    index: PackageIndex,
    token: CancelToken,
) -> PhaseResult:
    """Run every detector; findings land in the returned inventory."""
    result = PhaseResult()
    errors: list[BaseException] = []

    for detector in detectors:
        if token.cancelled:
            result.fatal = ScanCancelledError(token.reason)
            break
        try:
            logger.info("Running detector: %s", detector.name, extra=_log_context(detector))
            findings = await detector.scan(scan_root, index, token)
        except ScanCancelledError as exc:
            result.fatal = exc
            break
        except Exception as exc:
            logger.error(
                "Detector failed: %s: %s", detector.name, exc, extra=_log_context(detector)
            )
            errors.append(PluginError(detector.name, exc))
            result.statuses.append(status_from_error(detector, exc))
            continue
        for vuln in findings.package_vulns:
            _tag(vuln.plugins, detector.name)
        for finding in findings.generic_findings:
            _tag(finding.plugins, detector.name)
        result.inventory.package_vulns.extend(findings.package_vulns)
        result.inventory.generic_findings.extend(findings.generic_findings)
        result.statuses.append(status_from_error(detector, None))

    result.error = join_errors(*errors)
    return result


async def _run_in_place(
    plugins: Sequence[P],
    call: Callable[[P], Awaitable[None]],
    token: CancelToken,
    label: str,
) -> PhaseResult:
    result = PhaseResult()
    errors: list[BaseException] = []
    for plugin in plugins:
        if token.cancelled:
            result.fatal = ScanCancelledError(token.reason)
            break
        try:
            logger.info("Running %s: %s", label, plugin.name, extra=_log_context(plugin))
            await call(plugin)
        except ScanCancelledError as exc:
            result.fatal = exc
            break
        except Exception as exc:
            logger.error(
                "%s failed: %s: %s",
                label.capitalize(),
                plugin.name,
                exc,
                extra=_log_context(plugin),
            )
            errors.append(PluginError(plugin.name, exc))
            result.statuses.append(status_from_error(plugin, exc))
            continue
        result.statuses.append(status_from_error(plugin, None))
    result.error = join_errors(*errors)
    return result


async def run_annotators(
    annotators: Sequence[Annotator],
    scan_root: ScanRoot,
    inventory: Inventory,
    token: CancelToken,
) -> PhaseResult:
    """Run annotators against *inventory*, which they modify in place."""
    scan_input = ScanInput(scan_root=scan_root)
    return await _run_in_place(
        annotators, lambda a: a.annotate(scan_input, inventory, token), token, "annotator"
    )


async def run_enrichers(
    enrichers: Sequence[Enricher],
    scan_root: ScanRoot,
    inventory: Inventory,
    token: CancelToken,
) -> PhaseResult:
    """Run enrichers against *inventory*, which they modify in place."""
    scan_input = ScanInput(scan_root=scan_root)
    return await _run_in_place(
        enrichers, lambda e: e.enrich(scan_input, inventory, token), token, "enricher"
    )
