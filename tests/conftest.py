# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from invscan.core.constants import OS, Network
from invscan.fs.base import ScanRoot
from invscan.fs.memory import MemoryFS
from invscan.plugins.capabilities import Capabilities

SAMPLE_FILES = {
    "app/requests.pkg": "requests@2.31.0",
    "app/urllib3.pkg": "urllib3@2.0.7",
    "lib/vendor/six.pkg": "six@1.16.0",
    "README.md": "not a package",
}


@pytest.fixture
def memory_root() -> ScanRoot:
    return ScanRoot(fs=MemoryFS(SAMPLE_FILES))


@pytest.fixture
def full_capabilities() -> Capabilities:
    return Capabilities(
        os=OS.LINUX,
        network=Network.ONLINE,
        direct_fs=True,
        running_system=True,
        extract_from_dirs=True,
    )


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep INVSCAN_* variables from the developer's shell out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("INVSCAN_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _reset_invscan_logger():
    """Drop handlers installed by ``setup_logging`` so they never outlive a test."""
    import logging

    yield
    logger = logging.getLogger("invscan")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
