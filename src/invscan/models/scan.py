# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Scan status and result models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from invscan.core.constants import ScanStatusCode
from invscan.models.inventory import Inventory


class PluginStatus(BaseModel):
    """Outcome of one plugin's run."""

    name: str
    version: int = 0
    status: ScanStatusCode = ScanStatusCode.SUCCEEDED
    failure_reason: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status == ScanStatusCode.SUCCEEDED


class ScanStatus(BaseModel):
    status: ScanStatusCode
    failure_reason: str = ""


class ScanResult(BaseModel):
    """Terminal artifact of a scan. Built once, never modified afterwards."""

    model_config = ConfigDict(frozen=True)

    version: str
    start_time: datetime
    end_time: datetime
    status: ScanStatus
    plugin_status: list[PluginStatus] = Field(default_factory=list)
    inventory: Inventory = Field(default_factory=Inventory)

    @property
    def succeeded(self) -> bool:
        return self.status.status == ScanStatusCode.SUCCEEDED
