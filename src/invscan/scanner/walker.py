# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Filesystem extraction: the walker interface and a directory walker.

The scanner only depends on :class:`FilesystemWalker`.  Walkers raise
:class:`ExtractionError` (or let :class:`ScanCancelledError` through) for
failures that stop the whole walk; a single extractor failing on a single
file is recorded against that extractor's status instead.
"""

from __future__ import annotations

import abc
import fnmatch
import logging
import os
import posixpath
import re
import time
from collections import defaultdict
from dataclasses import dataclass, field

from invscan.core.cancel import CancelToken
from invscan.core.exceptions import ExtractionError, ScanCancelledError
from invscan.fs.base import FileInfo, ScanRoot, clean_path
from invscan.models.inventory import Inventory
from invscan.models.scan import PluginStatus
from invscan.plugins.base import FileAPI, FilesystemExtractor, FileScanInput
from invscan.plugins.status import status_from_error
from invscan.scanner.config import ScanConfig

logger = logging.getLogger("invscan.scanner.walker")


@dataclass
class WalkerConfig:
    """The subset of :class:`ScanConfig` a filesystem walk needs."""

    extractors: list[FilesystemExtractor]
    scan_roots: list[ScanRoot]
    paths_to_extract: list[str] = field(default_factory=list)
    ignore_sub_dirs: bool = False
    dirs_to_skip: list[str] = field(default_factory=list)
    skip_dir_regex: re.Pattern[str] | None = None
    skip_dir_glob: str | None = None
    max_file_size: int = 0
    max_inodes: int = 0
    read_symlinks: bool = False
    store_absolute_path: bool = False
    error_on_fs_errors: bool = False

    @classmethod
    def from_scan_config(cls, config: ScanConfig) -> WalkerConfig:
        return cls(
            extractors=list(config.filesystem_extractors),
            scan_roots=list(config.scan_roots),
            paths_to_extract=list(config.paths_to_extract),
            ignore_sub_dirs=config.ignore_sub_dirs,
            dirs_to_skip=list(config.dirs_to_skip),
            skip_dir_regex=config.skip_dir_regex,
            skip_dir_glob=config.skip_dir_glob,
            max_file_size=config.max_file_size,
            max_inodes=config.max_inodes,
            read_symlinks=config.read_symlinks,
            store_absolute_path=config.store_absolute_path,
            error_on_fs_errors=config.error_on_fs_errors,
        )


class FilesystemWalker(abc.ABC):
    """Runs filesystem extractors over every scan root."""

    @abc.abstractmethod
    async def run(
        self, config: WalkerConfig, token: CancelToken
    ) -> tuple[Inventory, list[PluginStatus]]:
        """Return the extracted inventory and one status per extractor."""


def _relative_to_root(path: str, root: ScanRoot) -> str:
    """Turn a configured path into one relative to *root*."""
    if not root.is_virtual and os.path.isabs(path):
        path = os.path.relpath(path, root.path)
    return clean_path(path)


class DirectoryWalker(FilesystemWalker):
    """Depth-first walk in sorted order over each scan root's filesystem."""

    async def run(
        self, config: WalkerConfig, token: CancelToken
    ) -> tuple[Inventory, list[PluginStatus]]:
        walk = _Walk(config, token)
        start = time.monotonic()
        try:
            for root in config.scan_roots:
                await walk.walk_root(root)
        except ScanCancelledError as exc:
            logger.warning("Filesystem walk cancelled after %d entries", walk.inodes)
            raise ScanCancelledError(
                str(exc), statuses=walk.statuses(), inventory=walk.inventory
            ) from exc
        logger.info(
            "Walked %d entries with %d extractors in %dms",
            walk.inodes,
            len(config.extractors),
            int((time.monotonic() - start) * 1000),
        )
        return walk.inventory, walk.statuses()


class _Walk:
    """State of one walk across all scan roots."""

    def __init__(self, config: WalkerConfig, token: CancelToken) -> None:
        self.config = config
        self.token = token
        self.inventory = Inventory()
        self.inodes = 0
        self.errors: dict[str, list[str]] = defaultdict(list)

    def statuses(self) -> list[PluginStatus]:
        result = []
        for extractor in self.config.extractors:
            errors = self.errors.get(extractor.name)
            err = None
            if errors:
                err = ExtractionError(
                    f"encountered {len(errors)} error(s) while running plugin: "
                    + "; ".join(errors[:3])
                )
            result.append(status_from_error(extractor, err))
        return result

    def _fail(self, message: str) -> ExtractionError:
        return ExtractionError(message, statuses=self.statuses(), inventory=self.inventory)

    async def walk_root(self, root: ScanRoot) -> None:
        try:
            root.fs.listdir("")
        except OSError as exc:
            raise self._fail(f"cannot access scan root {root.path or root.fs!r}: {exc}") from exc

        starts = [_relative_to_root(p, root) for p in self.config.paths_to_extract] or [""]
        skip = {_relative_to_root(d, root) for d in self.config.dirs_to_skip}
        for start in starts:
            await self._walk(root, start, skip, top=True)

    def _skip_dir(self, path: str, skip: set[str]) -> bool:
        if path in skip:
            return True
        if self.config.skip_dir_regex is not None and self.config.skip_dir_regex.search(path):
            return True
        return bool(self.config.skip_dir_glob and fnmatch.fnmatch(path, self.config.skip_dir_glob))

    def _fs_error(self, path: str, exc: OSError) -> None:
        if self.config.error_on_fs_errors:
            raise self._fail(f"filesystem error at {path}: {exc}") from exc
        logger.warning("Skipping %s: %s", path, exc, extra={"path": path})

    async def _walk(self, root: ScanRoot, path: str, skip: set[str], *, top: bool) -> None:
        self.token.raise_if_cancelled()
        try:
            info = root.fs.stat(path)
        except OSError as exc:
            self._fs_error(path, exc)
            return

        self.inodes += 1
        if self.config.max_inodes and self.inodes > self.config.max_inodes:
            raise self._fail(f"maximum number of inodes ({self.config.max_inodes}) exceeded")
        if info.is_symlink and not self.config.read_symlinks:
            return

        if not info.is_dir:
            await self._extract(root, path, info)
            return
        if path and self._skip_dir(path, skip):
            return
        if not top and self.config.ignore_sub_dirs and self.config.paths_to_extract:
            return
        try:
            names = root.fs.listdir(path)
        except OSError as exc:
            self._fs_error(path, exc)
            return
        for name in names:
            await self._walk(root, posixpath.join(path, name) if path else name, skip, top=False)

    async def _extract(self, root: ScanRoot, path: str, info: FileInfo) -> None:
        if self.config.max_file_size and info.size > self.config.max_file_size:
            logger.debug("Skipping %s: %d bytes exceeds size limit", path, info.size)
            return
        location = posixpath.join(root.path, path) if self.config.store_absolute_path else path

        for extractor in self.config.extractors:
            if not extractor.file_required(FileAPI(path=path, info=info)):
                continue
            self.token.raise_if_cancelled()
            try:
                with root.fs.open(path) as reader:
                    inv = await extractor.extract(
                        FileScanInput(
                            fs=root.fs, path=path, root=root.path, info=info, reader=reader
                        ),
                        self.token,
                    )
            except ScanCancelledError:
                raise
            except OSError as exc:
                self.errors[extractor.name].append(f"{path}: {exc}")
                self._fs_error(path, exc)
                continue
            except Exception as exc:
                logger.error(
                    "Extractor %s failed on %s: %s",
                    extractor.name,
                    path,
                    exc,
                    extra={
                        "plugin": extractor.name,
                        "plugin_kind": str(extractor.kind),
                        "path": path,
                    },
                )
                self.errors[extractor.name].append(f"{path}: {exc}")
                continue

            for pkg in inv.packages:
                if not pkg.locations:
                    pkg.locations = [location]
                if extractor.name not in pkg.plugins:
                    pkg.plugins.append(extractor.name)
            self.inventory.append(inv)
