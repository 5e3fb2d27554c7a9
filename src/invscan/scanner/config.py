# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Per-run scan configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from invscan.core.config import Settings
from invscan.fs.base import ScanRoot
from invscan.plugins.base import (
    Annotator,
    Detector,
    Enricher,
    FilesystemExtractor,
    Plugin,
    StandaloneExtractor,
)
from invscan.plugins.capabilities import Capabilities


@dataclass
class ScanConfig:
    """Plugins, scan roots and walk options for one scan.

    Owned by the caller.  The scanner only appends to the extractor lists
    (plugins implicitly required by detectors and enrichers).
    """

    filesystem_extractors: list[FilesystemExtractor] = field(default_factory=list)
    standalone_extractors: list[StandaloneExtractor] = field(default_factory=list)
    detectors: list[Detector] = field(default_factory=list)
    annotators: list[Annotator] = field(default_factory=list)
    enrichers: list[Enricher] = field(default_factory=list)
    # Capabilities the scanning environment satisfies.
    capabilities: Capabilities | None = None
    # Extractors and detectors treat file paths as relative to these roots.
    scan_roots: list[ScanRoot] = field(default_factory=list)
    # Only these files, or the contents of these dirs, are extracted when set.
    paths_to_extract: list[str] = field(default_factory=list)
    # Only top-level files of paths_to_extract dirs are extracted.
    ignore_sub_dirs: bool = False
    dirs_to_skip: list[str] = field(default_factory=list)
    skip_dir_regex: re.Pattern[str] | None = None
    skip_dir_glob: str | None = None
    # Files larger than this are skipped; 0 means no limit.
    max_file_size: int = 0
    # Visited-inode limit; 0 means no limit.
    max_inodes: int = 0
    read_symlinks: bool = False
    store_absolute_path: bool = False
    error_on_fs_errors: bool = False

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: object) -> ScanConfig:
        """Build a config whose capabilities and walk options come from *settings*."""
        values: dict[str, object] = {
            "capabilities": Capabilities(
                os=settings.os,
                network=settings.network,
                direct_fs=settings.direct_fs,
                running_system=settings.running_system,
                extract_from_dirs=settings.extract_from_dirs,
            ),
            "dirs_to_skip": list(settings.dirs_to_skip),
            "max_file_size": settings.max_file_size,
            "max_inodes": settings.max_inodes,
            "read_symlinks": settings.read_symlinks,
            "store_absolute_path": settings.store_absolute_path,
            "error_on_fs_errors": settings.error_on_fs_errors,
        }
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]

    def all_plugins(self) -> list[Plugin]:
        """Every enabled plugin, extractors first, in declaration order."""
        return [
            *self.filesystem_extractors,
            *self.standalone_extractors,
            *self.detectors,
            *self.annotators,
            *self.enrichers,
        ]
