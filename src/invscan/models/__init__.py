# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Domain models for invscan."""

from invscan.models.finding import (
    Advisory,
    AdvisoryID,
    Findings,
    GenericFinding,
    PackageVuln,
    TargetDetails,
)
from invscan.models.inventory import Inventory
from invscan.models.package import LayerDetails, Package, PackageExploitabilitySignal
from invscan.models.scan import PluginStatus, ScanResult, ScanStatus

__all__ = [
    "Advisory",
    "AdvisoryID",
    "Findings",
    "GenericFinding",
    "Inventory",
    "LayerDetails",
    "Package",
    "PackageExploitabilitySignal",
    "PackageVuln",
    "PluginStatus",
    "ScanResult",
    "ScanStatus",
    "TargetDetails",
]
