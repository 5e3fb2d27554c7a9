# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Enumerations shared by plugins, models and the scanner."""

from enum import StrEnum


class ScanStatusCode(StrEnum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OS(StrEnum):
    ANY = "any"
    LINUX = "linux"
    WINDOWS = "windows"
    MAC = "mac"
    UNIX = "unix"


class Network(StrEnum):
    ANY = "any"
    OFFLINE = "offline"
    ONLINE = "online"


class PluginKind(StrEnum):
    FILESYSTEM_EXTRACTOR = "filesystem_extractor"
    STANDALONE_EXTRACTOR = "standalone_extractor"
    DETECTOR = "detector"
    ANNOTATOR = "annotator"
    ENRICHER = "enricher"


class Severity(StrEnum):
    UNSPECIFIED = "unspecified"
    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class FindingType(StrEnum):
    UNSPECIFIED = "unspecified"
    VULNERABILITY = "vulnerability"
    CIS_FINDING = "cis_finding"


class VexJustification(StrEnum):
    """VEX status justifications attached to packages by enrichers."""

    UNSPECIFIED = "unspecified"
    COMPONENT_NOT_PRESENT = "component_not_present"
    VULNERABLE_CODE_NOT_PRESENT = "vulnerable_code_not_present"
    VULNERABLE_CODE_NOT_IN_EXECUTE_PATH = "vulnerable_code_not_in_execute_path"
    VULNERABLE_CODE_CANNOT_BE_CONTROLLED_BY_ADVERSARY = (
        "vulnerable_code_cannot_be_controlled_by_adversary"
    )
    INLINE_MITIGATION_ALREADY_EXISTS = "inline_mitigation_already_exists"



ENTRY_POINT_GROUPS: dict[PluginKind, str] = {
    PluginKind.FILESYSTEM_EXTRACTOR: "invscan.extractors.filesystem",
    PluginKind.STANDALONE_EXTRACTOR: "invscan.extractors.standalone",
    PluginKind.DETECTOR: "invscan.detectors",
    PluginKind.ANNOTATOR: "invscan.annotators",
    PluginKind.ENRICHER: "invscan.enrichers",
}
