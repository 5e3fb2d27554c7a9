# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Read-only filesystem abstraction shared by extractors, walkers and images.

Paths are slash separated and relative to the filesystem root; a leading
``/`` or ``./`` is ignored.
"""

from __future__ import annotations

import abc
import posixpath
from dataclasses import dataclass
from typing import BinaryIO


def clean_path(path: str) -> str:
    """Normalise *path* to the relative form every backend uses ("" is the root)."""
    cleaned = posixpath.normpath("/" + path.replace("\\", "/")).lstrip("/")
    return "" if cleaned == "." else cleaned


@dataclass(frozen=True)
class FileInfo:
    name: str
    size: int
    is_dir: bool
    is_symlink: bool = False


class Filesystem(abc.ABC):
    """Minimal read-only filesystem interface."""

    @abc.abstractmethod
    def stat(self, path: str) -> FileInfo:
        """Return file metadata, raising ``FileNotFoundError`` if absent."""

    @abc.abstractmethod
    def open(self, path: str) -> BinaryIO:
        """Open *path* for binary reading."""

    @abc.abstractmethod
    def listdir(self, path: str) -> list[str]:
        """Return the sorted entry names of directory *path*."""

    def exists(self, path: str) -> bool:
        try:
            self.stat(path)
        except (FileNotFoundError, NotADirectoryError):
            return False
        return True

    def is_dir(self, path: str) -> bool:
        try:
            return self.stat(path).is_dir
        except (FileNotFoundError, NotADirectoryError):
            return False


@dataclass
class ScanRoot:
    """A filesystem plus the directory inside it that a scan treats as root.

    A root without a real on-disk path (in-memory filesystems, image
    layers) is *virtual*.
    """

    fs: Filesystem
    path: str = ""

    @property
    def is_virtual(self) -> bool:
        return not self.path
