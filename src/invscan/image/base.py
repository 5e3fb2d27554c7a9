# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Container image interface consumed by container scans."""

from __future__ import annotations

import abc
from dataclasses import dataclass

from invscan.fs.base import Filesystem


@dataclass(frozen=True)
class ChainLayer:
    """Cumulative filesystem state of an image up to and including one layer."""

    index: int
    fs: Filesystem
    diff_id: str = ""
    chain_id: str = ""
    command: str = ""


class Image(abc.ABC):
    """A container image exposing its flattened and per-layer filesystems."""

    @abc.abstractmethod
    def fs(self) -> Filesystem:
        """Filesystem of the final, flattened image."""

    @abc.abstractmethod
    def chain_layers(self) -> list[ChainLayer]:
        """Chain layers from the base layer to the final one."""
