# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Container image views used by container scans."""

from invscan.image.base import ChainLayer, Image
from invscan.image.memory import LayerSpec, MemoryImage

__all__ = ["ChainLayer", "Image", "LayerSpec", "MemoryImage"]
