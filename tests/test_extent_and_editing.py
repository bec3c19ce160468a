"""
Extent reconciliation and bar group editing.

An element's nominal length must always contain every bar it holds,
after any sequence of edits.
"""

import pytest

from takeoff.calculators.extent import (
    reconcile, max_bar_extent_cm, effective_length_cm, effective_length_m,
)
from takeoff.elements import add_bar_group, update_bar_group, remove_bar_group
from takeoff.placement import PlacementConflictError
from takeoff.schemas import BarGroup, ExplicitPlacement, SteelItem


def _contains_every_bar(item: SteelItem) -> bool:
    return item.length * 100.0 >= max_bar_extent_cm(item) - 1e-9


# ============================================================
# Reconciliation
# ============================================================

def test_extent_is_offset_plus_segment_a():
    item = SteelItem(length=3.0, bars=(
        BarGroup(count=2, segment_a=300),
        BarGroup(count=2, segment_a=200, offset=150),
    ))
    assert max_bar_extent_cm(item) == 350.0
    assert effective_length_cm(item) == 350.0
    assert effective_length_m(item) == 3.5


def test_reconcile_raises_length():
    item = SteelItem(length=3.0, bars=(BarGroup(count=2, segment_a=420),))
    assert reconcile(item).length == 4.2


def test_reconcile_never_lowers_length():
    item = SteelItem(length=6.0, bars=(BarGroup(count=2, segment_a=300),))
    assert reconcile(item) is item
    assert effective_length_m(item) == 6.0


def test_no_bars_keeps_nominal_length():
    item = SteelItem(length=2.0)
    assert max_bar_extent_cm(item) == 0.0
    assert reconcile(item).length == 2.0


# ============================================================
# Editing
# ============================================================

def test_add_longer_bar_grows_element():
    item = SteelItem(length=3.0)
    updated = add_bar_group(item, BarGroup(count=2, segment_a=350, offset=20))
    assert len(updated.bars) == 1
    assert updated.length == pytest.approx(3.7)
    assert item.bars == ()


def test_update_bar_group_replaces_in_place():
    item = SteelItem(length=3.0, bars=(
        BarGroup(count=2, gauge="10.0", segment_a=300),
        BarGroup(count=2, gauge="8.0", segment_a=300),
    ))
    updated = update_bar_group(item, 1, BarGroup(count=4, gauge="12.5", segment_a=500))
    assert [b.gauge for b in updated.bars] == ["10.0", "12.5"]
    assert updated.length == 5.0


def test_remove_bar_group_keeps_length():
    item = add_bar_group(SteelItem(length=3.0), BarGroup(count=2, segment_a=450))
    updated = remove_bar_group(item, 0)
    assert updated.bars == ()
    assert updated.length == 4.5


def test_bad_index_raises():
    item = SteelItem(length=3.0, bars=(BarGroup(count=2),))
    with pytest.raises(IndexError):
        update_bar_group(item, 1, BarGroup(count=1))
    with pytest.raises(IndexError):
        remove_bar_group(item, -1)


def test_add_rejects_taken_points():
    item = SteelItem(length=3.0, bars=(
        BarGroup(count=2, placement=ExplicitPlacement(point_ids=(0, 4))),
    ))
    with pytest.raises(PlacementConflictError):
        add_bar_group(item, BarGroup(count=1, placement=ExplicitPlacement(point_ids=(4,))))


def test_update_may_keep_its_own_points():
    item = SteelItem(length=3.0, bars=(
        BarGroup(count=2, placement=ExplicitPlacement(point_ids=(0, 4))),
    ))
    updated = update_bar_group(item, 0, BarGroup(
        count=3, placement=ExplicitPlacement(point_ids=(0, 2, 4))))
    assert updated.bars[0].point_ids == (0, 2, 4)


def test_length_contains_bars_after_any_edit_sequence():
    item = SteelItem(length=2.0)
    steps = [
        lambda it: add_bar_group(it, BarGroup(count=2, segment_a=250)),
        lambda it: add_bar_group(it, BarGroup(count=2, segment_a=100, offset=260)),
        lambda it: update_bar_group(it, 0, BarGroup(count=2, segment_a=400)),
        lambda it: remove_bar_group(it, 1),
        lambda it: update_bar_group(it, 0, BarGroup(count=2, segment_a=120)),
    ]
    lengths = []
    for step in steps:
        item = step(item)
        assert _contains_every_bar(item)
        lengths.append(item.length)
    # Never lowered
    assert lengths == sorted(lengths)
    assert lengths[-1] == 4.0
