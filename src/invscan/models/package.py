# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Discovered software package models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from invscan.core.constants import VexJustification


class LayerDetails(BaseModel):
    """The container image layer that introduced a package."""

    index: int
    diff_id: str = ""
    chain_id: str = ""
    command: str = ""


class PackageExploitabilitySignal(BaseModel):
    """Evidence from an enricher that a package's vulnerabilities are not exploitable."""

    plugin: str
    justification: VexJustification
    vuln_identifiers: list[str] = Field(default_factory=list)
    matches_all_vulns: bool = False


class Package(BaseModel):
    """A software package found by an extractor."""

    name: str
    version: str = ""
    purl_type: str = ""
    locations: list[str] = Field(default_factory=list)
    plugins: list[str] = Field(
        default_factory=list,
        description="Names of the plugins that found this package",
    )
    metadata: dict[str, Any] = Field(default_factory=dict)
    exploitability_signals: list[PackageExploitabilitySignal] = Field(default_factory=list)
    layer_details: LayerDetails | None = None

    @property
    def purl(self) -> str:
        if not self.purl_type:
            return ""
        if not self.version:
            return f"pkg:{self.purl_type}/{self.name}"
        return f"pkg:{self.purl_type}/{self.name}@{self.version}"
