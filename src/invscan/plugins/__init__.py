# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Plugin kinds, capabilities and the plugin registry."""

from invscan.plugins.base import (
    Annotator,
    Detector,
    Enricher,
    FileAPI,
    FilesystemExtractor,
    FileScanInput,
    Plugin,
    ScanInput,
    StandaloneExtractor,
)
from invscan.plugins.capabilities import Capabilities, validate_requirements
from invscan.plugins.registry import PluginInfo, PluginRegistry
from invscan.plugins.status import status_from_error

__all__ = [
    "Annotator",
    "Capabilities",
    "Detector",
    "Enricher",
    "FileAPI",
    "FileScanInput",
    "FilesystemExtractor",
    "Plugin",
    "PluginInfo",
    "PluginRegistry",
    "ScanInput",
    "StandaloneExtractor",
    "status_from_error",
    "validate_requirements",
]
