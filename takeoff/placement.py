"""
Bar placement on a cross-section grid.

A bar group references grid points by id only. Occupancy is exclusive: a
point belongs to at most one group of an element. Legacy groups carry a face
role (top/bottom/distributed/center) instead of ids and are laid out here so
a renderer never has to branch on which kind it got.
"""

import logging
from typing import Dict, Iterable, List, Set, Tuple

from .calculators.shapes import grid_points, resolve_model
from .config import settings
from .models import PlacementRole, StirrupModel
from .schemas import BarGroup, ExplicitPlacement, LegacyPlacement, SteelItem

logger = logging.getLogger(__name__)


class PlacementError(ValueError):
    """A requested placement cannot be applied to the element."""


class PlacementConflictError(PlacementError):
    def __init__(self, point_ids: Iterable[int]):
        self.point_ids = sorted(set(point_ids))
        super().__init__("Grid points already occupied: %s" % self.point_ids)


class UnknownPointError(PlacementError):
    def __init__(self, point_ids: Iterable[int]):
        self.point_ids = sorted(set(point_ids))
        super().__init__("Grid points not on this section: %s" % self.point_ids)


def occupancy(item: SteelItem, exclude_index: int = None) -> Set[int]:
    """Point ids held by the element's bar groups (optionally ignoring one group)."""
    occupied = set()
    for i, bar in enumerate(item.bars):
        if i == exclude_index:
            continue
        occupied.update(bar.point_ids)
    return occupied


def find_conflicts(item: SteelItem) -> Dict[int, List[int]]:
    """Point id -> indices of the bar groups sharing it, for ids used more than once."""
    holders: Dict[int, List[int]] = {}
    for i, bar in enumerate(item.bars):
        for point_id in set(bar.point_ids):
            holders.setdefault(point_id, []).append(i)
    return {pid: idx for pid, idx in sorted(holders.items()) if len(idx) > 1}


def conflict_messages(item: SteelItem) -> List[str]:
    """One readable line per grid point held by more than one bar group."""
    return [
        "Grid point %d is shared by bar groups %s" % (point_id, holders)
        for point_id, holders in find_conflicts(item).items()
    ]


def section_grid(item: SteelItem):
    cfg = item.stirrups
    return grid_points(cfg.model, cfg.width, cfg.height)


def check_points(item: SteelItem, point_ids: Iterable[int], exclude_index: int = None) -> None:
    """Raise if any id is off the grid or held by another group."""
    point_ids = list(point_ids)
    valid = {p.id for p in section_grid(item)}
    unknown = [pid for pid in point_ids if pid not in valid]
    if unknown:
        raise UnknownPointError(unknown)
    taken = occupancy(item, exclude_index=exclude_index).intersection(point_ids)
    if taken:
        raise PlacementConflictError(taken)


def assign_points(item: SteelItem, bar_index: int, point_ids: Iterable[int]) -> SteelItem:
    """
    Place bar group `bar_index` on explicit grid points.
    The group's previous points are released; occupied or unknown ids are
    rejected, nothing is overwritten.
    """
    if not 0 <= bar_index < len(item.bars):
        raise PlacementError("No bar group at index %d" % bar_index)
    ids = tuple(dict.fromkeys(point_ids))
    check_points(item, ids, exclude_index=bar_index)

    bars = list(item.bars)
    bars[bar_index] = bars[bar_index].model_copy(
        update={"placement": ExplicitPlacement(point_ids=ids)})
    logger.debug("Bar group %d placed on points %s", bar_index, list(ids))
    return item.model_copy(update={"bars": tuple(bars)})


# --- Coordinates for rendering ---

def bar_coordinates(bar: BarGroup, model, width: float, height: float) -> List[Tuple[float, float]]:
    """
    (x, y) in cm of each bar of a group on its section.
    Explicit ids resolve through the grid (ids off the grid are skipped);
    legacy roles are laid out along the faces.
    """
    if isinstance(bar.placement, ExplicitPlacement):
        points = {p.id: p for p in grid_points(model, width, height)}
        return [(points[pid].x, points[pid].y) for pid in bar.placement.point_ids if pid in points]
    return _legacy_coordinates(bar.placement, bar.count, model, width, height)


def _legacy_coordinates(placement: LegacyPlacement, count: int, model,
                        width: float, height: float) -> List[Tuple[float, float]]:
    count = min(count, settings.MAX_RENDERED_BARS)
    if count <= 0:
        return []
    w = width if width > 0 else settings.DEFAULT_STIRRUP_WIDTH_CM
    h = height if height > 0 else settings.DEFAULT_STIRRUP_HEIGHT_CM
    if resolve_model(model) == StirrupModel.CIRCLE:
        h = w
    cover = min(w, h) * 0.1

    role = placement.role
    if role == PlacementRole.CENTER:
        return [(w / 2, h / 2)]
    if role == PlacementRole.DISTRIBUTED:
        rows = (count + 1) // 2
        coords = []
        for i in range(count):
            x = cover if i % 2 == 0 else w - cover
            coords.append((x, h * (i // 2 + 1) / (rows + 1)))
        return coords

    y = cover if role == PlacementRole.TOP else h - cover
    if count == 1:
        return [(w / 2, y)]
    return [(cover + (w - 2 * cover) * i / (count - 1), y) for i in range(count)]
