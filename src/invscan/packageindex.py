# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Lookup index over the packages collected by the extraction phases."""

from __future__ import annotations

from collections import defaultdict

from invscan.core.exceptions import PackageIndexError
from invscan.models.package import Package


class PackageIndex:
    """Groups packages by purl type and name so detectors can query them.

    Raises :class:`PackageIndexError` when a package has no name, since
    such a package cannot be looked up or reported.
    """

    def __init__(self, packages: list[Package]) -> None:
        self._packages = list(packages)
        self._by_type: dict[str, dict[str, list[Package]]] = defaultdict(
            lambda: defaultdict(list)
        )
        for pkg in self._packages:
            if not pkg.name:
                locations = ", ".join(pkg.locations) or "unknown location"
                raise PackageIndexError(
                    f"package without a name found by {pkg.plugins or 'unknown plugin'} "
                    f"at {locations}"
                )
            self._by_type[pkg.purl_type.lower()][pkg.name].append(pkg)

    def get_all(self) -> list[Package]:
        return list(self._packages)

    def get_all_of_type(self, purl_type: str) -> list[Package]:
        by_name = self._by_type.get(purl_type.lower(), {})
        return [pkg for pkgs in by_name.values() for pkg in pkgs]

    def get_specific(self, name: str, purl_type: str) -> list[Package]:
        by_name = self._by_type.get(purl_type.lower(), {})
        return list(by_name.get(name, []))

    def __len__(self) -> int:
        return len(self._packages)
