# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Environment capabilities and plugin requirement checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from invscan.core.constants import OS, Network

if TYPE_CHECKING:
    from invscan.plugins.base import Plugin


class Capabilities(BaseModel):
    """What a scanning environment provides, or what a plugin needs.

    As a requirement, the defaults mean "no requirement"; as an
    environment description, they mean "nothing special is available".
    """

    os: OS = OS.ANY
    network: Network = Network.ANY
    direct_fs: bool = False
    running_system: bool = False
    extract_from_dirs: bool = False


def _os_satisfied(required: OS, available: OS) -> bool:
    if required == OS.ANY:
        return True
    if required == OS.UNIX:
        return available in (OS.UNIX, OS.LINUX, OS.MAC)
    return required == available


def unsatisfied_requirements(required: Capabilities, available: Capabilities) -> list[str]:
    """Describe each requirement field that *available* does not satisfy."""
    problems: list[str] = []
    if not _os_satisfied(required.os, available.os):
        problems.append(f"needs to run on {required.os}")
    if required.network == Network.ONLINE and available.network == Network.OFFLINE:
        problems.append("needs network access")
    if required.network == Network.OFFLINE and available.network == Network.ONLINE:
        problems.append("needs to run offline")
    if required.direct_fs and not available.direct_fs:
        problems.append("needs direct filesystem access")
    if required.running_system and not available.running_system:
        problems.append("needs to scan the running system")
    if required.extract_from_dirs and not available.extract_from_dirs:
        problems.append("needs extraction from directories")
    return problems


def validate_requirements(plugin: Plugin, capabilities: Capabilities | None) -> str | None:
    """Return why *plugin* cannot run under *capabilities*, or ``None``.

    A missing capabilities value is treated as an environment that
    provides nothing beyond the defaults.
    """
    available = capabilities or Capabilities()
    problems = unsatisfied_requirements(plugin.requirements(), available)
    if not problems:
        return None
    return f"plugin {plugin.name} can't be enabled: {', '.join(problems)}"
