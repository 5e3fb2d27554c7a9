# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Attribute packages found in a container image to the layer that added them."""

from __future__ import annotations

import logging

from invscan.core.cancel import CancelToken
from invscan.image.base import ChainLayer
from invscan.models.inventory import Inventory
from invscan.models.package import LayerDetails, Package

logger = logging.getLogger("invscan.scanner.layers")


def _layer_has(layer: ChainLayer, path: str) -> bool:
    try:
        return layer.fs.exists(path)
    except OSError as exc:
        # Unreadable entries count as absent from this layer.
        logger.debug("Cannot check %s in layer %d: %s", path, layer.index, exc)
        return False


def origin_layer(pkg: Package, chain_layers: list[ChainLayer]) -> ChainLayer | None:
    """Return the earliest chain layer that contains every location of *pkg*."""
    if not pkg.locations:
        return None
    for layer in chain_layers:
        if all(_layer_has(layer, loc) for loc in pkg.locations):
            return layer
    return None


def populate_layer_details(
    inventory: Inventory, chain_layers: list[ChainLayer], token: CancelToken
) -> int:
    """Set ``layer_details`` on every package whose origin layer is known.

    Must run after all extraction has finished, since a package's full
    location list is only known then.  Returns the number of packages
    attributed.

    Raises:
        ScanCancelledError: the token fired part way through.
    """
    attributed = 0
    for pkg in inventory.packages:
        token.raise_if_cancelled()
        layer = origin_layer(pkg, chain_layers)
        if layer is None:
            logger.debug("No origin layer found for %s %s", pkg.name, pkg.version)
            continue
        pkg.layer_details = LayerDetails(
            index=layer.index,
            diff_id=layer.diff_id,
            chain_id=layer.chain_id,
            command=layer.command,
        )
        attributed += 1
    logger.info(
        "Attributed %d of %d packages to %d layers",
        attributed,
        len(inventory.packages),
        len(chain_layers),
    )
    return attributed
