# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""JSON output formatter."""

from __future__ import annotations

from invscan.models.scan import ScanResult


def format_json(result: ScanResult) -> str:
    """Return the scan result as a formatted JSON string."""
    return result.model_dump_json(indent=2)
