# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""In-memory filesystem used for virtual scan roots and image layers."""

from __future__ import annotations

import io
from collections.abc import Mapping
from typing import BinaryIO

from invscan.fs.base import FileInfo, Filesystem, clean_path


class MemoryFS(Filesystem):
    """Read-only filesystem over a ``{path: content}`` mapping.

    Parent directories are implied by the file paths.
    """

    def __init__(self, files: Mapping[str, bytes | str] | None = None) -> None:
        self._files: dict[str, bytes] = {}
        self._dirs: set[str] = {""}
        for path, content in (files or {}).items():
            data = content.encode() if isinstance(content, str) else content
            rel = clean_path(path)
            self._files[rel] = data
            parent = rel.rpartition("/")[0]
            while parent not in self._dirs:
                self._dirs.add(parent)
                parent = parent.rpartition("/")[0]

    @property
    def files(self) -> dict[str, bytes]:
        return dict(self._files)

    def stat(self, path: str) -> FileInfo:
        rel = clean_path(path)
        name = rel.rpartition("/")[2]
        if rel in self._files:
            return FileInfo(name=name, size=len(self._files[rel]), is_dir=False)
        if rel in self._dirs:
            return FileInfo(name=name, size=0, is_dir=True)
        raise FileNotFoundError(path)

    def open(self, path: str) -> BinaryIO:
        rel = clean_path(path)
        if rel not in self._files:
            raise FileNotFoundError(path)
        return io.BytesIO(self._files[rel])

    def listdir(self, path: str) -> list[str]:
        rel = clean_path(path)
        if rel not in self._dirs:
            if rel in self._files:
                raise NotADirectoryError(path)
            raise FileNotFoundError(path)
        prefix = f"{rel}/" if rel else ""
        names = set()
        for entry in (*self._files, *self._dirs):
            if entry and entry.startswith(prefix) and entry != rel:
                names.add(entry[len(prefix):].split("/", 1)[0])
        return sorted(names)
