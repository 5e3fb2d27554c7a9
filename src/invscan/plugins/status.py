# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Plugin status construction."""

from __future__ import annotations

from invscan.core.constants import ScanStatusCode
from invscan.models.scan import PluginStatus
from invscan.plugins.base import Plugin


def status_from_error(plugin: Plugin, error: BaseException | None) -> PluginStatus:
    """Build the :class:`PluginStatus` for one run of *plugin*."""
    if error is None:
        return PluginStatus(name=plugin.name, version=plugin.version)
    return PluginStatus(
        name=plugin.name,
        version=plugin.version,
        status=ScanStatusCode.FAILED,
        failure_reason=str(error) or type(error).__name__,
    )
