# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Container image assembled from in-memory layer contents."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

from invscan.fs.base import Filesystem, clean_path
from invscan.fs.memory import MemoryFS
from invscan.image.base import ChainLayer, Image


@dataclass
class LayerSpec:
    """Changes one layer makes: files added or replaced, paths deleted."""

    files: dict[str, bytes | str] = field(default_factory=dict)
    deleted: list[str] = field(default_factory=list)
    command: str = ""
    diff_id: str = ""


def _digest(data: bytes) -> str:
    return "sha256:" + hashlib.sha256(data).hexdigest()


def _layer_diff_id(spec: LayerSpec) -> str:
    h = hashlib.sha256()
    for path in sorted(spec.files):
        content = spec.files[path]
        h.update(path.encode())
        h.update(content.encode() if isinstance(content, str) else content)
    for path in sorted(spec.deleted):
        h.update(b".wh." + path.encode())
    return "sha256:" + h.hexdigest()


class MemoryImage(Image):
    """Image whose layers are described by :class:`LayerSpec` values.

    Chain IDs follow the OCI definition: the first layer's chain ID is its
    diff ID, every later one is the digest of ``"<parent chain ID> <diff ID>"``.
    """

    def __init__(self, layers: list[LayerSpec]) -> None:
        self._chain: list[ChainLayer] = []
        state: dict[str, bytes | str] = {}
        chain_id = ""
        for index, spec in enumerate(layers):
            for path in spec.deleted:
                prefix = clean_path(path)
                for existing in [p for p in state if p == prefix or p.startswith(prefix + "/")]:
                    del state[existing]
            for path, content in spec.files.items():
                state[clean_path(path)] = content
            diff_id = spec.diff_id or _layer_diff_id(spec)
            chain_id = diff_id if not chain_id else _digest(f"{chain_id} {diff_id}".encode())
            self._chain.append(
                ChainLayer(
                    index=index,
                    fs=MemoryFS(dict(state)),
                    diff_id=diff_id,
                    chain_id=chain_id,
                    command=spec.command,
                )
            )

    def fs(self) -> Filesystem:
        if not self._chain:
            return MemoryFS()
        return self._chain[-1].fs

    def chain_layers(self) -> list[ChainLayer]:
        return list(self._chain)
