# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Implicit plugin dependencies and environment capability checks."""

from __future__ import annotations

import logging

from invscan.core.exceptions import (
    CapabilityError,
    PluginResolutionError,
    UnknownPluginError,
)
from invscan.plugins.capabilities import validate_requirements
from invscan.plugins.registry import PluginRegistry
from invscan.scanner.config import ScanConfig

logger = logging.getLogger("invscan.scanner.resolver")


def required_plugin_names(config: ScanConfig) -> set[str]:
    """Names declared as required by enabled detectors and enrichers."""
    required: set[str] = set()
    for detector in config.detectors:
        required.update(detector.required_extractors())
    for enricher in config.enrichers:
        required.update(enricher.required_plugins())
    return required


def enable_required_extractors(config: ScanConfig, registry: PluginRegistry) -> None:
    """Append extractors that enabled plugins need but the config lacks.

    A name that resolves as both a filesystem and a standalone extractor
    is added to both lists.  Names already enabled are left alone, so
    calling this twice is the same as calling it once.

    Raises:
        PluginResolutionError: a required name is in neither registry list.
    """
    enabled = {e.name for e in config.filesystem_extractors}
    enabled.update(e.name for e in config.standalone_extractors)

    for name in sorted(required_plugin_names(config) - enabled):
        fs_err: UnknownPluginError | None = None
        st_err: UnknownPluginError | None = None
        try:
            fs_extractor = registry.filesystem_extractor_from_name(name)
        except UnknownPluginError as exc:
            fs_extractor, fs_err = None, exc
        try:
            st_extractor = registry.standalone_extractor_from_name(name)
        except UnknownPluginError as exc:
            st_extractor, st_err = None, exc

        if fs_err is not None and st_err is not None:
            raise PluginResolutionError(name, [fs_err, st_err])
        if fs_extractor is not None:
            config.filesystem_extractors.append(fs_extractor)
            logger.info("Enabled required filesystem extractor %s", name)
        if st_extractor is not None:
            config.standalone_extractors.append(st_extractor)
            logger.info("Enabled required standalone extractor %s", name)


def validate_plugin_requirements(config: ScanConfig) -> None:
    """Check every enabled plugin against the environment's capabilities.

    Raises:
        CapabilityError: one entry per plugin whose requirements are unmet.
    """
    problems = [
        ValueError(reason)
        for plugin in config.all_plugins()
        if (reason := validate_requirements(plugin, config.capabilities)) is not None
    ]
    if problems:
        raise CapabilityError(problems)
