# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Filesystem backed by a local directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO

from invscan.fs.base import FileInfo, Filesystem, ScanRoot, clean_path


class DirFS(Filesystem):
    """Expose the directory *root* through the :class:`Filesystem` interface."""

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        rel = clean_path(path)
        return self.root / rel if rel else self.root

    def stat(self, path: str) -> FileInfo:
        full = self._resolve(path)
        st = full.lstat()
        is_symlink = full.is_symlink()
        is_dir = full.is_dir() if is_symlink else os.path.isdir(full)
        return FileInfo(name=full.name, size=st.st_size, is_dir=is_dir, is_symlink=is_symlink)

    def open(self, path: str) -> BinaryIO:
        return self._resolve(path).open("rb")

    def listdir(self, path: str) -> list[str]:
        return sorted(os.listdir(self._resolve(path)))

    def __repr__(self) -> str:
        return f"DirFS({str(self.root)!r})"


def dir_scan_root(path: str | os.PathLike[str]) -> ScanRoot:
    """Build a :class:`ScanRoot` for a local directory."""
    return ScanRoot(fs=DirFS(path), path=str(path))
