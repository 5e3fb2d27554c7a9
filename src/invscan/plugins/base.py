# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Abstract base classes for the five plugin kinds.

Each kind exposes one narrow capability on top of the shared
:class:`Plugin` identity; the scanner only ever depends on the capability
a phase needs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO

from invscan.core.constants import PluginKind
from invscan.fs.base import FileInfo, Filesystem, ScanRoot
from invscan.models.finding import Findings
from invscan.models.inventory import Inventory
from invscan.plugins.capabilities import Capabilities

if TYPE_CHECKING:
    from invscan.core.cancel import CancelToken
    from invscan.packageindex import PackageIndex


class Plugin(ABC):
    """Identity and requirements shared by every plugin."""

    kind: PluginKind

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique plugin name, e.g. ``python/requirements``."""
        ...

    @property
    def version(self) -> int:
        return 0

    def requirements(self) -> Capabilities:
        """Capabilities the environment must provide. Defaults to none."""
        return Capabilities()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} v{self.version}>"


@dataclass
class FileAPI:
    """What a filesystem extractor sees when deciding whether it wants a file."""

    path: str
    info: FileInfo


@dataclass
class FileScanInput:
    """A single file handed to a filesystem extractor."""

    fs: Filesystem
    path: str
    root: str
    info: FileInfo
    reader: BinaryIO


@dataclass
class ScanInput:
    """The scan root handed to standalone extractors, annotators and enrichers."""

    scan_root: ScanRoot

    @property
    def fs(self) -> Filesystem:
        return self.scan_root.fs

    @property
    def root(self) -> str:
        return self.scan_root.path


class FilesystemExtractor(Plugin):
    """Extracts packages from individual files found by the walker."""

    kind = PluginKind.FILESYSTEM_EXTRACTOR

    @abstractmethod
    def file_required(self, api: FileAPI) -> bool:
        """Return ``True`` if the file at ``api.path`` should be extracted."""
        ...

    @abstractmethod
    async def extract(self, scan_input: FileScanInput, token: CancelToken) -> Inventory:
        ...


class StandaloneExtractor(Plugin):
    """Extracts packages independently of the file walk, e.g. by running a command."""

    kind = PluginKind.STANDALONE_EXTRACTOR

    @abstractmethod
    async def extract(self, scan_input: ScanInput, token: CancelToken) -> Inventory:
        ...


class Detector(Plugin):
    """Finds vulnerabilities or misconfigurations using the collected packages."""

    kind = PluginKind.DETECTOR

    def required_extractors(self) -> list[str]:
        """Names of extractors whose output this detector needs."""
        return []

    @abstractmethod
    async def scan(
        self, scan_root: ScanRoot, index: PackageIndex, token: CancelToken
    ) -> Findings:
        ...


class Annotator(Plugin):
    """Adds context to the inventory in place."""

    kind = PluginKind.ANNOTATOR

    @abstractmethod
    async def annotate(
        self, scan_input: ScanInput, inventory: Inventory, token: CancelToken
    ) -> None:
        ...


class Enricher(Plugin):
    """Adds exploitability and provenance data to the inventory in place."""

    kind = PluginKind.ENRICHER

    def required_plugins(self) -> list[str]:
        """Names of plugins whose output this enricher needs."""
        return []

    @abstractmethod
    async def enrich(
        self, scan_input: ScanInput, inventory: Inventory, token: CancelToken
    ) -> None:
        ...
