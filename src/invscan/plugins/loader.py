# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Plugin discovery from entry points and dotted module paths."""

from __future__ import annotations

import importlib
import importlib.metadata
import inspect
import logging
from collections.abc import Callable

from invscan.core.constants import ENTRY_POINT_GROUPS
from invscan.plugins.base import (
    Annotator,
    Detector,
    Enricher,
    FilesystemExtractor,
    Plugin,
    StandaloneExtractor,
)

logger = logging.getLogger("invscan.plugins.loader")

PluginFactory = Callable[[], Plugin]

_BASE_CLASSES = (
    Plugin,
    FilesystemExtractor,
    StandaloneExtractor,
    Detector,
    Annotator,
    Enricher,
)


class PluginLoader:
    """Finds plugin factories.

    Sources (checked in order):
      1. ``importlib.metadata`` entry points in the ``invscan.*`` groups.
      2. Explicit dotted module paths supplied via configuration.

    Every factory is a zero-argument callable, usually the plugin class.
    """

    def load_from_entry_points(self) -> list[PluginFactory]:
        factories: list[PluginFactory] = []
        try:
            eps = importlib.metadata.entry_points()
        except Exception:
            logger.debug("Entry points unavailable")
            return factories

        for kind, group in ENTRY_POINT_GROUPS.items():
            for ep in eps.select(group=group):
                try:
                    obj = ep.load()
                except Exception:
                    logger.exception("Failed to load %s entry point %s", kind, ep.name)
                    continue
                factories.append(obj)
        return factories

    def load_from_module_paths(self, paths: list[str]) -> list[PluginFactory]:
        """Import each dotted module path and collect concrete plugin classes."""
        factories: list[PluginFactory] = []
        for mod_path in paths:
            try:
                module = importlib.import_module(mod_path)
            except Exception:
                logger.exception("Failed to import plugin module %s", mod_path)
                continue
            factories.extend(self._collect_from_module(module))
        return factories

    @staticmethod
    def _collect_from_module(module: object) -> list[PluginFactory]:
        found: list[PluginFactory] = []
        for attr_name in sorted(dir(module)):
            obj = getattr(module, attr_name)
            if (
                isinstance(obj, type)
                and issubclass(obj, Plugin)
                and obj not in _BASE_CLASSES
                and not inspect.isabstract(obj)
            ):
                found.append(obj)
        return found


def instantiate(factory: PluginFactory) -> Plugin | None:
    """Call *factory*, returning ``None`` if it fails or yields a non-plugin."""
    try:
        instance = factory()
    except Exception:
        logger.exception("Failed to instantiate plugin factory %r", factory)
        return None
    if not isinstance(instance, Plugin):
        logger.error("Factory %r did not return a plugin", factory)
        return None
    if not instance.name or not instance.name.strip():
        logger.error("Plugin from %r has empty name", factory)
        return None
    return instance
