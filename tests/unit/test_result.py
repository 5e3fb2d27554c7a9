# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for deterministic result assembly."""

from __future__ import annotations

import functools
import itertools
import random
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from invscan import __version__
from invscan.core.constants import ScanStatusCode
from invscan.core.exceptions import ErrorList
from invscan.models.finding import Advisory, AdvisoryID, GenericFinding, PackageVuln, TargetDetails
from invscan.models.inventory import Inventory
from invscan.models.package import Package
from invscan.models.scan import PluginStatus
from invscan.scanner.result import ScanResultOptions, cmp_packages, new_scan_result

START = datetime(2026, 1, 1, tzinfo=UTC)
END = datetime(2026, 1, 1, 0, 0, 5, tzinfo=UTC)


def _finding(reference: str, extra: str = "") -> GenericFinding:
    return GenericFinding(
        advisory=Advisory(id=AdvisoryID(publisher="TEST", reference=reference)),
        target=TargetDetails(extra=extra),
    )


def _inventory() -> Inventory:
    return Inventory(
        packages=[
            Package(name="b", version="1", plugins=["x"], locations=["z/loc", "a/loc"]),
            Package(name="a", version="2", plugins=["y"], locations=["l"]),
            Package(name="a", version="1", plugins=["x", "y"], locations=["l2"]),
            Package(name="a", version="1", plugins=["x"], locations=["l3"]),
            Package(name="a", version="1", plugins=["w"], locations=["l4"]),
        ],
        package_vulns=[PackageVuln(id="GHSA-2"), PackageVuln(id="CVE-1"), PackageVuln(id="GHSA-1")],
        generic_findings=[_finding("weak-ssh", "host:22"), _finding("weak-ssh"), _finding("cis-1")],
    )


def _statuses() -> list[PluginStatus]:
    return [PluginStatus(name="z/plugin"), PluginStatus(name="a/plugin")]


def _shuffled(inv: Inventory, seed: int) -> Inventory:
    rng = random.Random(seed)
    copy = inv.model_copy(deep=True)
    for pkg in copy.packages:
        rng.shuffle(pkg.locations)
    rng.shuffle(copy.packages)
    rng.shuffle(copy.package_vulns)
    rng.shuffle(copy.generic_findings)
    return copy


class TestNewScanResult:
    def test_succeeded_without_error(self) -> None:
        result = new_scan_result(ScanResultOptions(start_time=START, end_time=END))
        assert result.status.status == ScanStatusCode.SUCCEEDED
        assert result.status.failure_reason == ""
        assert result.version == __version__
        assert result.succeeded

    def test_failed_with_joined_error(self) -> None:
        result = new_scan_result(
            ScanResultOptions(
                start_time=START,
                end_time=END,
                error=ErrorList([ValueError("first"), ValueError("second")]),
            )
        )
        assert result.status.status == ScanStatusCode.FAILED
        assert result.status.failure_reason == "first\nsecond"

    def test_sorts_everything(self) -> None:
        result = new_scan_result(
            ScanResultOptions(
                start_time=START,
                end_time=END,
                extractor_status=_statuses()[:1],
                detector_status=_statuses()[1:],
                inventory=_inventory(),
            )
        )
        inv = result.inventory

        assert [s.name for s in result.plugin_status] == ["a/plugin", "z/plugin"]
        assert [(p.name, p.version, p.plugins) for p in inv.packages] == [
            ("a", "1", ["w"]),
            ("a", "1", ["x"]),
            ("a", "1", ["x", "y"]),
            ("a", "2", ["y"]),
            ("b", "1", ["x"]),
        ]
        assert inv.packages[-1].locations == ["a/loc", "z/loc"]
        assert [v.id for v in inv.package_vulns] == ["CVE-1", "GHSA-1", "GHSA-2"]
        assert [(f.advisory.id.reference, f.target.extra) for f in inv.generic_findings] == [
            ("cis-1", ""),
            ("weak-ssh", ""),
            ("weak-ssh", "host:22"),
        ]

    @pytest.mark.parametrize("seed", range(5))
    def test_permuted_inputs_serialise_identically(self, seed: int) -> None:
        def build(inv: Inventory) -> str:
            return new_scan_result(
                ScanResultOptions(
                    start_time=START,
                    end_time=END,
                    extractor_status=_statuses(),
                    inventory=inv,
                )
            ).model_dump_json()

        assert build(_inventory()) == build(_shuffled(_inventory(), seed))

    def test_result_is_frozen(self) -> None:
        result = new_scan_result(ScanResultOptions(start_time=START, end_time=END))
        with pytest.raises(ValidationError):
            result.version = "other"


class TestCmpPackages:
    def test_orders_by_name_then_version(self) -> None:
        assert cmp_packages(Package(name="a", version="9"), Package(name="b", version="1")) < 0
        assert cmp_packages(Package(name="a", version="2"), Package(name="a", version="1")) > 0

    def test_fewer_plugins_first(self) -> None:
        one = Package(name="a", plugins=["z"])
        two = Package(name="a", plugins=["a", "b"])
        assert cmp_packages(one, two) < 0

    def test_location_order_does_not_matter(self) -> None:
        a = Package(name="a", locations=["x", "y"])
        b = Package(name="a", locations=["y", "x"])
        assert cmp_packages(a, b) == 0

    def test_consistent_with_sorted(self) -> None:
        pkgs = _inventory().packages
        for a, b in itertools.permutations(pkgs, 2):
            assert cmp_packages(a, b) == -cmp_packages(b, a)
        ordered = sorted(pkgs, key=functools.cmp_to_key(cmp_packages))
        assert [p.plugins for p in ordered][:3] == [["w"], ["x"], ["x", "y"]]
