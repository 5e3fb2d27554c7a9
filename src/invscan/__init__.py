# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""invscan - software inventory and security finding scanner."""

__version__ = "0.4.0"

from invscan.core.cancel import CancelToken
from invscan.scanner.config import ScanConfig
from invscan.scanner.pipeline import Scanner
from invscan.scanner.result import cmp_packages

__all__ = [
    "CancelToken",
    "ScanConfig",
    "Scanner",
    "__version__",
    "cmp_packages",
]
