# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Explicit name-to-plugin registry.

The registry is built once at process start and passed to whoever needs to
turn plugin names into instances, most importantly the requirement
resolver.  There is no module-level registry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from invscan.core.constants import PluginKind
from invscan.core.exceptions import UnknownPluginError
from invscan.plugins.base import FilesystemExtractor, Plugin, StandaloneExtractor
from invscan.plugins.loader import PluginFactory, PluginLoader, instantiate

logger = logging.getLogger("invscan.plugins.registry")


@dataclass
class PluginInfo:
    """Snapshot of a registered plugin."""

    name: str
    version: int
    kind: PluginKind


class PluginRegistry:
    """Maps plugin names to factories, grouped by plugin kind.

    Typical usage::

        registry = PluginRegistry()
        registry.discover(module_paths=settings.plugin_module_paths)
        by_kind = registry.plugins_from_names(["python/known-bad-versions"])
        config.detectors = by_kind[PluginKind.DETECTOR]
    """

    def __init__(self, factories: list[PluginFactory] | None = None) -> None:
        self._factories: dict[PluginKind, dict[str, PluginFactory]] = {
            kind: {} for kind in PluginKind
        }
        self._info: dict[tuple[PluginKind, str], PluginInfo] = {}
        for factory in factories or []:
            self.register(factory)

    # -- registration ------------------------------------------------------

    def register(self, factory: PluginFactory) -> bool:
        """Register *factory*. Returns ``False`` if it could not be used."""
        sample = instantiate(factory)
        if sample is None:
            return False
        kind = sample.kind
        if sample.name in self._factories[kind]:
            logger.warning("Plugin %s (%s) already registered, replacing", sample.name, kind)
        self._factories[kind][sample.name] = factory
        self._info[(kind, sample.name)] = PluginInfo(
            name=sample.name, version=sample.version, kind=kind
        )
        logger.debug("Registered %s %s v%d", kind, sample.name, sample.version)
        return True

    def discover(
        self,
        *,
        module_paths: list[str] | None = None,
        entry_points: bool = True,
    ) -> int:
        """Register plugins from entry points and module paths.

        Returns the number of plugins registered.
        """
        loader = PluginLoader()
        factories: list[PluginFactory] = []
        if entry_points:
            factories.extend(loader.load_from_entry_points())
        if module_paths:
            factories.extend(loader.load_from_module_paths(module_paths))
        registered = sum(1 for f in factories if self.register(f))
        logger.info("Discovered %d plugins", registered)
        return registered

    # -- lookup ------------------------------------------------------------

    def _create(self, kind: PluginKind, name: str) -> Plugin:
        factory = self._factories[kind].get(name)
        if factory is None:
            raise UnknownPluginError(f"{kind.replace('_', ' ')} {name!r} not found")
        plugin = instantiate(factory)
        if plugin is None:
            raise UnknownPluginError(f"{kind.replace('_', ' ')} {name!r} failed to load")
        return plugin

    def filesystem_extractor_from_name(self, name: str) -> FilesystemExtractor:
        return self._create(PluginKind.FILESYSTEM_EXTRACTOR, name)  # type: ignore[return-value]

    def standalone_extractor_from_name(self, name: str) -> StandaloneExtractor:
        return self._create(PluginKind.STANDALONE_EXTRACTOR, name)  # type: ignore[return-value]

    def plugins_from_names(self, names: list[str]) -> dict[PluginKind, list[Plugin]]:
        """Instantiate every plugin registered under one of *names*.

        A name registered for several kinds yields one instance per kind.
        Raises :class:`UnknownPluginError` for names that match nothing.
        """
        found: dict[PluginKind, list[Plugin]] = {kind: [] for kind in PluginKind}
        for name in names:
            kinds = [kind for kind in PluginKind if name in self._factories[kind]]
            if not kinds:
                raise UnknownPluginError(f"plugin {name!r} not found")
            for kind in kinds:
                found[kind].append(self._create(kind, name))
        return found

    def list_plugins(self) -> list[PluginInfo]:
        return sorted(self._info.values(), key=lambda p: (p.kind, p.name))

    def __contains__(self, name: str) -> bool:
        return any(name in by_name for by_name in self._factories.values())
