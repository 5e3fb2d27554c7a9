# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""The accumulating result of a scan."""

from __future__ import annotations

from pydantic import BaseModel, Field

from invscan.models.finding import GenericFinding, PackageVuln
from invscan.models.package import Package


class Inventory(BaseModel):
    """Packages and findings collected across the pipeline phases."""

    packages: list[Package] = Field(default_factory=list)
    package_vulns: list[PackageVuln] = Field(default_factory=list)
    generic_findings: list[GenericFinding] = Field(default_factory=list)

    def append(self, other: Inventory) -> None:
        self.packages.extend(other.packages)
        self.package_vulns.extend(other.package_vulns)
        self.generic_findings.extend(other.generic_findings)

    def is_empty(self) -> bool:
        return not (self.packages or self.package_vulns or self.generic_findings)
