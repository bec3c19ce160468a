"""
Extent reconciliation: the concrete must contain every bar.

effective length = max(nominal length, farthest bar end (offset + A))

The nominal length is only ever raised to the effective length, never
lowered: a shorter bar set does not remove end covers the user drew.
"""

import logging

from ..schemas import SteelItem

logger = logging.getLogger(__name__)


def max_bar_extent_cm(item: SteelItem) -> float:
    """Farthest point any bar reaches, cm from the element start (0 with no bars)."""
    return max((bar.extent_cm for bar in item.bars), default=0.0)


def effective_length_cm(item: SteelItem) -> float:
    return max(item.length * 100.0, max_bar_extent_cm(item))


def effective_length_m(item: SteelItem) -> float:
    return effective_length_cm(item) / 100.0


def reconcile(item: SteelItem) -> SteelItem:
    """Return the item with its nominal length raised to contain every bar."""
    extent_m = max_bar_extent_cm(item) / 100.0
    if extent_m > item.length:
        logger.info("Element %s: length %.3f m raised to bar extent %.3f m",
                    item.id or item.observation or "?", item.length, extent_m)
        return item.model_copy(update={"length": extent_m})
    return item
