# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Scanner pipeline orchestrator: chains extraction, detection, annotation and enrichment.

Phases run sequentially on the caller's task:

    validate -> filesystem extraction -> standalone extraction ->
    package indexing -> detection -> annotation -> enrichment

Each phase appends to one shared :class:`Inventory`.  A fatal error
stops the remaining phases but keeps everything collected so far; a
single plugin failing only marks that plugin's status as failed.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from invscan.core.cancel import CancelToken
from invscan.core.exceptions import (
    ConfigurationError,
    ExtractionError,
    ImageError,
    PackageIndexError,
    ScanCancelledError,
    join_errors,
)
from invscan.fs.base import ScanRoot
from invscan.image.base import Image
from invscan.models.inventory import Inventory
from invscan.models.scan import ScanResult
from invscan.packageindex import PackageIndex
from invscan.plugins.registry import PluginRegistry
from invscan.scanner.config import ScanConfig
from invscan.scanner.layers import populate_layer_details
from invscan.scanner.resolver import (
    enable_required_extractors,
    validate_plugin_requirements,
)
from invscan.scanner.result import ScanResultOptions, new_scan_result
from invscan.scanner.runners import (
    PhaseResult,
    run_annotators,
    run_detectors,
    run_enrichers,
    run_standalone_extractors,
)
from invscan.scanner.walker import DirectoryWalker, FilesystemWalker, WalkerConfig

logger = logging.getLogger("invscan.scanner.pipeline")


@dataclass
class _ScanState:
    """Mutable bookkeeping for one scan; turned into a result exactly once."""

    options: ScanResultOptions
    errors: list[BaseException] = field(default_factory=list)
    # Set once a fatal error stops the remaining phases.
    aborted: bool = False
    scan_root: ScanRoot | None = None

    @property
    def inventory(self) -> Inventory:
        return self.options.inventory

    def abort(self, error: BaseException) -> None:
        logger.error("Scan aborted: %s", error)
        self.errors.append(error)
        self.aborted = True

    def check_cancelled(self, token: CancelToken) -> bool:
        """Abort and return ``True`` if *token* fired."""
        if token.cancelled:
            self.abort(ScanCancelledError(token.reason))
            return True
        return False

    def record(self, phase: PhaseResult) -> None:
        """Fold the phase's joined plugin errors and fatal error into the scan."""
        if phase.error is not None:
            self.errors.append(phase.error)
        if phase.fatal is not None:
            self.abort(phase.fatal)

    def finish(self) -> ScanResult:
        self.options.end_time = datetime.now(UTC)
        self.options.error = join_errors(*self.errors)
        return new_scan_result(self.options)


class Scanner:
    """Runs a :class:`ScanConfig` through every pipeline phase.

    Args:
        registry: Resolves plugins that detectors and enrichers require
            but the config does not enable.
        walker: Filesystem walker used for the extraction phase.
    """

    def __init__(
        self,
        registry: PluginRegistry | None = None,
        walker: FilesystemWalker | None = None,
    ) -> None:
        self._registry = registry or PluginRegistry()
        self._walker = walker or DirectoryWalker()

    async def scan(self, config: ScanConfig, token: CancelToken | None = None) -> ScanResult:
        """Extract packages and run detection on the config's scan roots.

        Never raises for scan failures; they are reported on the result's
        status and on the per-plugin statuses.
        """
        token = token or CancelToken()
        state = await self._run(config, token, run_enrichers=True)
        return self._complete(state)

    async def scan_container(
        self,
        image: Image,
        config: ScanConfig,
        token: CancelToken | None = None,
    ) -> ScanResult:
        """Scan a container image and attribute each package to its origin layer.

        The image's flattened filesystem replaces any configured scan
        roots.  Enrichers run only after layer attribution so they can
        rely on it.

        Raises:
            ImageError: the image's layers could not be read.
        """
        token = token or CancelToken()
        if config.scan_roots:
            logger.warning(
                "Expected no scan roots, got %d; using the container image root",
                len(config.scan_roots),
            )
        try:
            chain_layers = image.chain_layers()
        except Exception as exc:
            raise ImageError(f"failed to get chain layers: {exc}") from exc

        image_config = dataclasses.replace(config, scan_roots=[ScanRoot(fs=image.fs())])
        state = await self._run(image_config, token, run_enrichers=False)
        if state.aborted:
            return self._complete(state)

        try:
            populate_layer_details(state.inventory, chain_layers, token)
        except ScanCancelledError as exc:
            state.abort(exc)
            return self._complete(state)
        except Exception as exc:
            logger.exception("Layer attribution failed")
            state.abort(ImageError(f"layer attribution failed: {exc}"))
            return self._complete(state)

        if not state.check_cancelled(token):
            await self._enrich(image_config, state, token)
        return self._complete(state)

    # -- phases ------------------------------------------------------------

    def _validate(self, config: ScanConfig) -> ConfigurationError | None:
        try:
            enable_required_extractors(config, self._registry)
            validate_plugin_requirements(config)
        except ConfigurationError as exc:
            return exc
        if not config.scan_roots:
            return ConfigurationError("no scan root specified")
        if config.paths_to_extract and len(config.scan_roots) > 1:
            return ConfigurationError("can't extract specific files with several scan roots")
        return None

    async def _run(
        self, config: ScanConfig, token: CancelToken, *, run_enrichers: bool
    ) -> _ScanState:
        now = datetime.now(UTC)
        state = _ScanState(options=ScanResultOptions(start_time=now, end_time=now))

        error = self._validate(config)
        if error is not None:
            state.abort(error)
            return state
        state.scan_root = config.scan_roots[0]
        logger.info(
            "Starting scan of %d root(s) with %d plugins",
            len(config.scan_roots),
            len(config.all_plugins()),
        )

        if state.check_cancelled(token):
            return state
        await self._extract_filesystem(config, state, token)
        if state.aborted or state.check_cancelled(token):
            return state

        standalone = await run_standalone_extractors(
            config.standalone_extractors, state.scan_root, token
        )
        state.inventory.append(standalone.inventory)
        state.options.extractor_status.extend(standalone.statuses)
        state.record(standalone)
        if state.aborted or state.check_cancelled(token):
            return state

        try:
            index = PackageIndex(state.inventory.packages)
        except PackageIndexError as exc:
            state.abort(exc)
            return state
        if state.check_cancelled(token):
            return state

        detection = await run_detectors(config.detectors, state.scan_root, index, token)
        state.inventory.package_vulns.extend(detection.inventory.package_vulns)
        state.inventory.generic_findings.extend(detection.inventory.generic_findings)
        state.options.detector_status = detection.statuses
        state.record(detection)
        if state.aborted or state.check_cancelled(token):
            return state

        annotation = await run_annotators(
            config.annotators, state.scan_root, state.inventory, token
        )
        state.options.annotator_status = annotation.statuses
        state.record(annotation)
        if state.aborted:
            return state

        if run_enrichers and not state.check_cancelled(token):
            await self._enrich(config, state, token)
        return state

    async def _extract_filesystem(
        self, config: ScanConfig, state: _ScanState, token: CancelToken
    ) -> None:
        try:
            inventory, statuses = await self._walker.run(
                WalkerConfig.from_scan_config(config), token
            )
        except (ExtractionError, ScanCancelledError) as exc:
            state.options.extractor_status.extend(exc.statuses)
            if isinstance(exc.inventory, Inventory):
                state.inventory.append(exc.inventory)
            state.abort(exc)
            return
        except Exception as exc:
            logger.exception("Filesystem extraction failed")
            state.abort(ExtractionError(f"filesystem extraction failed: {exc}"))
            return
        state.inventory.append(inventory)
        state.options.extractor_status.extend(statuses)

    async def _enrich(self, config: ScanConfig, state: _ScanState, token: CancelToken) -> None:
        enrichment = await run_enrichers(
            config.enrichers, config.scan_roots[0], state.inventory, token
        )
        state.options.enricher_status = enrichment.statuses
        state.record(enrichment)

    def _complete(self, state: _ScanState) -> ScanResult:
        result = state.finish()
        elapsed = result.end_time - result.start_time
        logger.info(
            "Scan complete: status=%s packages=%d vulns=%d findings=%d plugins=%d duration=%dms",
            result.status.status,
            len(result.inventory.packages),
            len(result.inventory.package_vulns),
            len(result.inventory.generic_findings),
            len(result.plugin_status),
            int(elapsed.total_seconds() * 1000),
        )
        return result
