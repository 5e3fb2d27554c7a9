# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for invscan."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


class InvscanError(Exception):
    """Base exception for all invscan errors."""


class ConfigurationError(InvscanError):
    """Invalid or missing scan configuration."""


class UnknownPluginError(InvscanError):
    """A plugin name did not resolve in a registry."""


class PluginResolutionError(ConfigurationError):
    """A plugin required by another enabled plugin could not be found."""

    def __init__(self, name: str, causes: Sequence[Exception]) -> None:
        self.name = name
        self.causes = list(causes)
        detail = ", ".join(str(c) for c in self.causes)
        super().__init__(f"required plugin {name!r} not present in registry: {detail}")


class ExtractionError(InvscanError):
    """Filesystem extraction could not complete.

    ``statuses`` and ``inventory`` carry whatever the walker collected
    before it gave up, so the scanner can keep partial results.
    """

    def __init__(
        self,
        message: str,
        *,
        statuses: list | None = None,
        inventory: object | None = None,
    ) -> None:
        super().__init__(message)
        self.statuses = statuses or []
        self.inventory = inventory


class PackageIndexError(InvscanError):
    """The package index cannot represent the collected packages."""


class ScanCancelledError(InvscanError):
    """The scan's cancellation token fired.

    A walker that is interrupted attaches what it had collected so far in
    ``statuses`` and ``inventory``, as with :class:`ExtractionError`.
    """

    def __init__(
        self,
        reason: str,
        *,
        statuses: list | None = None,
        inventory: object | None = None,
    ) -> None:
        super().__init__(reason)
        self.statuses = statuses or []
        self.inventory = inventory


class ImageError(InvscanError):
    """A container image could not be read."""


class DatasourceError(InvscanError):
    """A registry or other external lookup failed."""


class ErrorList(InvscanError):
    """Ordered collection of errors reported as one.

    ``str()`` joins the member messages with newlines, the same way the
    failure reason of a scan reads.
    """

    def __init__(self, errors: Iterable[BaseException]) -> None:
        self.errors: list[BaseException] = list(errors)
        super().__init__("\n".join(str(e) for e in self.errors))

    def __iter__(self):
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


class CapabilityError(ErrorList, ConfigurationError):
    """One or more enabled plugins need capabilities the environment lacks."""


def join_errors(*errors: BaseException | None) -> BaseException | None:
    """Combine errors, dropping ``None`` and flattening nested lists.

    Returns ``None`` when nothing is left, the error itself when only one
    remains, and an :class:`ErrorList` otherwise.
    """
    flat: list[BaseException] = []
    for err in errors:
        if err is None:
            continue
        if type(err) is ErrorList:
            flat.extend(err.errors)
        else:
            flat.append(err)
    if not flat:
        return None
    if len(flat) == 1:
        return flat[0]
    return ErrorList(flat)


class PluginError(InvscanError):
    """A single plugin failed; the message is prefixed with the plugin name."""

    def __init__(self, plugin: str, cause: BaseException) -> None:
        self.plugin = plugin
        self.cause = cause
        super().__init__(f"{plugin}: {cause}")
