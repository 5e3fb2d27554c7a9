# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Example plugins demonstrating the invscan plugin interfaces.

``RequirementsTxtExtractor`` reports pinned packages from ``requirements.txt``
files and ``KnownBadVersionDetector`` flags a couple of historically
compromised releases.  Both are intentionally simplistic; they serve as a
reference for third-party plugin authors.

Installation
------------
Put this module on ``sys.path`` and list it in
``INVSCAN_PLUGIN_MODULE_PATHS``, or register the classes as entry points in
your package's ``pyproject.toml``:

.. code-block:: toml

    [project.entry-points."invscan.extractors.filesystem"]
    requirements = "my_package.plugins:RequirementsTxtExtractor"

    [project.entry-points."invscan.detectors"]
    known_bad = "my_package.plugins:KnownBadVersionDetector"
"""

from __future__ import annotations

import re

from invscan.core.cancel import CancelToken
from invscan.core.constants import Severity
from invscan.fs.base import ScanRoot
from invscan.models.finding import Findings, PackageVuln
from invscan.models.inventory import Inventory
from invscan.models.package import Package
from invscan.packageindex import PackageIndex
from invscan.plugins.base import Detector, FileAPI, FilesystemExtractor, FileScanInput

_PIN_RE = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)\s*==\s*([^\s;#]+)")

# (name, version) -> advisory id
_KNOWN_BAD = {
    ("ctx", "0.2.2"): "PYSEC-2022-EXAMPLE-1",
    ("ultralytics", "8.3.41"): "PYSEC-2024-EXAMPLE-2",
}


class RequirementsTxtExtractor(FilesystemExtractor):
    """Extracts ``name==version`` pins from requirements files."""

    @property
    def name(self) -> str:
        return "python/requirements"

    def file_required(self, api: FileAPI) -> bool:
        return api.path.rpartition("/")[2] == "requirements.txt"

    async def extract(self, scan_input: FileScanInput, token: CancelToken) -> Inventory:
        inv = Inventory()
        for raw in scan_input.reader.read().decode("utf-8", errors="replace").splitlines():
            match = _PIN_RE.match(raw)
            if match:
                inv.packages.append(
                    Package(name=match.group(1), version=match.group(2), purl_type="pypi")
                )
        return inv


class KnownBadVersionDetector(Detector):
    """Flags PyPI releases that are known to have been compromised."""

    @property
    def name(self) -> str:
        return "python/known-bad-versions"

    def required_extractors(self) -> list[str]:
        return ["python/requirements"]

    async def scan(
        self, scan_root: ScanRoot, index: PackageIndex, token: CancelToken
    ) -> Findings:
        findings = Findings()
        for pkg in index.get_all_of_type("pypi"):
            advisory = _KNOWN_BAD.get((pkg.name.lower(), pkg.version))
            if advisory is not None:
                findings.package_vulns.append(
                    PackageVuln(
                        id=advisory,
                        package=pkg,
                        summary=f"{pkg.name} {pkg.version} was a malicious release",
                        severity=Severity.CRITICAL,
                    )
                )
        return findings
