# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Clients for external package registries."""

from invscan.datasource.cache import RequestCache
from invscan.datasource.pypi import PyPIRegistryClient

__all__ = ["PyPIRegistryClient", "RequestCache"]
