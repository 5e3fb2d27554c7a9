# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Security finding models produced by detectors."""

from __future__ import annotations

from pydantic import BaseModel, Field

from invscan.core.constants import FindingType, Severity
from invscan.models.package import Package, PackageExploitabilitySignal


class AdvisoryID(BaseModel):
    publisher: str
    reference: str


class Advisory(BaseModel):
    """Static description of a finding type, shared by every instance of it."""

    id: AdvisoryID
    type: FindingType = FindingType.VULNERABILITY
    title: str = ""
    description: str = ""
    recommendation: str = ""
    severity: Severity = Severity.UNSPECIFIED


class TargetDetails(BaseModel):
    """What a generic finding was found on."""

    package: Package | None = None
    location: list[str] = Field(default_factory=list)
    extra: str = Field(default="", description="Free-form discriminator, e.g. host:port")


class PackageVuln(BaseModel):
    """A known vulnerability affecting a discovered package."""

    id: str = Field(description="Vulnerability identifier, e.g. GHSA-xxxx or CVE-...")
    package: Package | None = None
    summary: str = ""
    aliases: list[str] = Field(default_factory=list)
    severity: Severity = Severity.UNSPECIFIED
    plugins: list[str] = Field(default_factory=list)
    exploitability_signals: list[PackageExploitabilitySignal] = Field(default_factory=list)


class GenericFinding(BaseModel):
    """A finding that is not tied to a package, e.g. a weak credential."""

    advisory: Advisory
    target: TargetDetails | None = None
    plugins: list[str] = Field(default_factory=list)


class Findings(BaseModel):
    """Output of a single detector run."""

    package_vulns: list[PackageVuln] = Field(default_factory=list)
    generic_findings: list[GenericFinding] = Field(default_factory=list)
