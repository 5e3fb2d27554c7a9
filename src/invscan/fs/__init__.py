# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Filesystem views handed to extractors, detectors and the walker."""

from invscan.fs.base import FileInfo, Filesystem, ScanRoot, clean_path
from invscan.fs.local import DirFS, dir_scan_root
from invscan.fs.memory import MemoryFS

__all__ = [
    "DirFS",
    "FileInfo",
    "Filesystem",
    "MemoryFS",
    "ScanRoot",
    "clean_path",
    "dir_scan_root",
]
