"""
Bar group editing.

Every mutation returns a new SteelItem with extent reconciliation already
applied, so the length the quantifiers see is always consistent with the bars.
"""

from .calculators.extent import reconcile
from .placement import check_points
from .schemas import BarGroup, SteelItem


def add_bar_group(item: SteelItem, bar: BarGroup) -> SteelItem:
    """Append a bar group. Explicit points must be free."""
    if bar.point_ids:
        check_points(item, bar.point_ids)
    return reconcile(item.model_copy(update={"bars": item.bars + (bar,)}))


def update_bar_group(item: SteelItem, index: int, bar: BarGroup) -> SteelItem:
    """Replace the bar group at `index`. Its own points may be kept."""
    if not 0 <= index < len(item.bars):
        raise IndexError("No bar group at index %d" % index)
    if bar.point_ids:
        check_points(item, bar.point_ids, exclude_index=index)
    bars = list(item.bars)
    bars[index] = bar
    return reconcile(item.model_copy(update={"bars": tuple(bars)}))


def remove_bar_group(item: SteelItem, index: int) -> SteelItem:
    """Drop the bar group at `index`. The nominal length is not lowered."""
    if not 0 <= index < len(item.bars):
        raise IndexError("No bar group at index %d" % index)
    bars = item.bars[:index] + item.bars[index + 1:]
    return reconcile(item.model_copy(update={"bars": bars}))
