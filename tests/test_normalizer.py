"""
Normalizer tests: raw reader/UI records into canonical elements.

Tests:
1-4.   Full record: units, shapes, gaps, aliases
5-8.   Bars: defaults, placement, returns, dropped legs, shared points
9-11.  Length floor and extent
12-13. Idempotence
14-17. Reader output parsing
"""

import json
import logging

import pytest

from takeoff.models import (
    ElementType, BarUsage, BarShape, HookType, StirrupModel, PlacementRole,
)
from takeoff.normalizer import (
    normalize, normalize_bar, parse_extraction, import_extraction, parse_number,
)
from takeoff.placement import find_conflicts
from takeoff.schemas import ExplicitPlacement, LegacyPlacement


# ============================================================
# Full record
# ============================================================

def test_extracted_beam_is_normalized(raw_extracted_beam):
    item = normalize(raw_extracted_beam)

    assert item.type == ElementType.UPPER_BEAM
    assert item.observation == "V3 sala"
    assert item.quantity == 2
    assert item.length == 3.0
    # Section typed in centimeters, stirrup fields typed in meters
    assert item.width == 0.15
    assert item.height == 0.40
    assert item.stirrups.width == 12.0
    assert item.stirrups.height == 35.0
    assert item.stirrups.spacing == 15.0
    assert item.stirrups.gauge == "5.0"
    assert item.stirrups.count == 16


def test_straight_bar_drops_its_hooks(raw_extracted_beam):
    bar = normalize(raw_extracted_beam).bars[0]
    assert bar.shape == BarShape.STRAIGHT
    assert bar.gauge == "10.0"
    assert bar.hook_start_type == HookType.NONE
    assert bar.hook_end_type == HookType.NONE
    assert bar.segment_b == 0.0
    assert bar.segment_c == 0.0
    assert bar.hook_start == 0.0
    assert bar.segment_a == 300.0


def test_hooks_without_shape_infer_a_u(raw_extracted_beam):
    """Top bar with hooks → U pointing down; legs take the hook lengths."""
    bar = normalize(raw_extracted_beam).bars[1]
    assert bar.usage == BarUsage.RIB
    assert bar.placement == LegacyPlacement(role=PlacementRole.TOP)
    assert bar.shape == BarShape.U_DOWN
    assert bar.hook_start_type == HookType.DOWN
    assert bar.segment_b == 20.0
    assert bar.segment_c == 20.0


def test_gaps_inferred_from_explicit_stirrup_count(raw_extracted_beam):
    """16 stirrups c/15 cover 225 cm of 300 → 37.5 cm at each end."""
    item = normalize(raw_extracted_beam)
    assert item.start_gap == 37.5
    assert item.end_gap == 37.5


def test_unit_heuristics_can_be_switched_off(raw_extracted_beam):
    item = normalize(raw_extracted_beam, apply_unit_heuristics=False)
    assert item.width == 15.0
    assert item.stirrups.spacing == 0.15
    assert item.stirrups.width == 0.12


def test_given_gaps_are_not_overwritten(raw_extracted_beam):
    raw = dict(raw_extracted_beam, startGap=5, endGap=0)
    item = normalize(raw)
    assert item.start_gap == 5.0
    assert item.end_gap == 0.0


def test_element_and_model_aliases():
    assert normalize({"type": "Sapata"}).type == ElementType.FOOTING
    assert normalize({"type": "broca"}).type == ElementType.DRILLED_PIER
    assert normalize({"type": "Viga Baldrame"}).type == ElementType.GROUND_BEAM
    assert normalize({"type": "column"}).type == ElementType.COLUMN
    assert normalize({"type": "???"}).type == ElementType.UPPER_BEAM
    assert normalize({"stirrupModel": "Circular"}).stirrups.model == StirrupModel.CIRCLE
    assert normalize({"stirrups": {"model": "hexagon"}}).stirrups.model == StirrupModel.HEXAGON


def test_defaults_for_an_empty_record():
    item = normalize({})
    assert item.quantity == 1
    assert item.length == 3.0
    assert item.width == 0.15
    assert item.height == 0.30
    assert item.bars == ()
    assert item.stirrups.spacing == 20.0
    assert item.stirrups.count is None
    assert item.start_gap == 0.0


def test_footing_defaults():
    item = normalize({"type": "footing", "length": 1.2})
    assert item.width == 0.80
    assert item.height == 0.20


# ============================================================
# Bars
# ============================================================

def test_bar_defaults():
    bar = normalize_bar({}, length_m=2.5)
    assert bar.count == 2
    assert bar.gauge == "10.0"
    assert bar.usage == BarUsage.PRINCIPAL
    assert bar.placement == LegacyPlacement(role=PlacementRole.BOTTOM)
    assert bar.shape == BarShape.STRAIGHT
    assert bar.segment_a == 250.0


def test_negative_count_becomes_zero():
    assert normalize_bar({"count": -3}, length_m=3.0).count == 0


def test_point_indices_become_explicit_placement():
    bar = normalize_bar({"pointIndices": [3, "4", 3, -1]}, length_m=3.0)
    assert bar.placement == ExplicitPlacement(point_ids=(3, 4))
    assert bar.point_ids == (3, 4)


def test_returns_kept_only_on_c_shapes():
    c_bar = normalize_bar({"shape": "c_up", "segmentB": 20, "segmentC": 20,
                           "segmentD": 8, "segmentE": 8}, length_m=3.0)
    assert (c_bar.segment_d, c_bar.segment_e) == (8.0, 8.0)

    u_bar = normalize_bar({"shape": "u_up", "segmentB": 20, "segmentC": 20,
                           "segmentD": 8, "segmentE": 8}, length_m=3.0)
    assert (u_bar.segment_d, u_bar.segment_e) == (0.0, 0.0)


def test_l_shape_keeps_one_leg():
    bar = normalize_bar({"shape": "l_left_up", "hookStart": 25, "hookEnd": 25}, length_m=3.0)
    assert bar.segment_b == 25.0
    assert bar.segment_c == 0.0
    assert bar.hook_end_type == HookType.NONE


def test_width_bar_keeps_segment_a_unset():
    bar = normalize_bar({"usage": "largura"}, length_m=1.2)
    assert bar.usage == BarUsage.WIDTH
    assert bar.segment_a is None


def test_dropped_legs_are_logged(caplog):
    with caplog.at_level(logging.INFO, logger="takeoff.normalizer"):
        bar = normalize_bar({"shape": "l_right_up", "segmentB": 12, "segmentC": 30},
                            length_m=3.0)
    assert bar.segment_b == 0.0
    assert bar.segment_c == 30.0
    assert any("Start leg dropped" in r.getMessage() for r in caplog.records)
    assert not any("End leg dropped" in r.getMessage() for r in caplog.records)


def test_shared_point_ids_are_kept_and_reported(caplog):
    raw = {"length": 3, "bars": [
        {"count": 1, "pointIndices": [0]},
        {"count": 1, "pointIndices": [0, 4]},
    ]}
    with caplog.at_level(logging.WARNING, logger="takeoff.normalizer"):
        item = normalize(raw)
    assert item.bars[0].point_ids == (0,)
    assert item.bars[1].point_ids == (0, 4)
    assert find_conflicts(item) == {0: [0, 1]}
    assert any("Grid point 0" in r.getMessage() for r in caplog.records)


# ============================================================
# Length floor
# ============================================================

def test_length_floored_to_longest_bar():
    item = normalize({"length": 3.0, "bars": [{"segmentA": 350}]})
    assert item.length == 3.55


def test_length_raised_to_bar_extent():
    item = normalize({"length": 3.0, "bars": [{"segmentA": 300, "offset": 80}]})
    assert item.length == pytest.approx(3.8)


def test_length_never_lowered():
    item = normalize({"length": 5.0, "bars": [{"segmentA": 300}]})
    assert item.length == 5.0


# ============================================================
# Idempotence
# ============================================================

def test_normalize_is_idempotent(raw_extracted_beam):
    once = normalize(raw_extracted_beam)
    twice = normalize(once)
    assert twice == once


def test_normalize_is_idempotent_for_explicit_and_c_bars():
    raw = {
        "type": "sapata", "length": 1.0, "width": 80, "height": 0.25,
        "bars": [
            {"shape": "c_down", "segmentA": 120, "segmentB": 15, "segmentC": 15,
             "segmentD": 5, "segmentE": 5, "pointIndices": [0, 1]},
            {"usage": "largura", "count": 5},
        ],
        "supports": [{"position": 50, "leftGap": 10, "rightGap": 10}],
    }
    once = normalize(raw)
    assert once.length == 1.25
    assert normalize(once) == once


# ============================================================
# Reader output
# ============================================================

def test_parse_extraction_plain_array():
    text = json.dumps([{"type": "pilar"}, {"type": "sapata"}, "noise"])
    assert parse_extraction(text) == [{"type": "pilar"}, {"type": "sapata"}]


def test_parse_extraction_inside_prose():
    text = 'Here are the elements:\n```json\n[{"type": "broca", "quantity": 4}]\n```\nDone.'
    assert parse_extraction(text) == [{"type": "broca", "quantity": 4}]


def test_parse_extraction_items_wrapper_and_single_object():
    assert parse_extraction('{"items": [{"type": "viga"}]}') == [{"type": "viga"}]
    assert parse_extraction('{"type": "viga"}') == [{"type": "viga"}]


def test_parse_extraction_garbage():
    assert parse_extraction("") == []
    assert parse_extraction("no json here") == []
    assert parse_extraction("[not, json") == []


def test_import_extraction_normalizes_each_record():
    items = import_extraction('[{"type": "pilar", "length": "2,80"}]')
    assert len(items) == 1
    assert items[0].type == ElementType.COLUMN
    assert items[0].length == 2.8


def test_parse_number_leniency():
    assert parse_number("12,5") == 12.5
    assert parse_number("20cm") == 20.0
    assert parse_number(None, default=7.0) == 7.0
    assert parse_number(float("nan"), default=1.0) == 1.0
    assert parse_number(True, default=0.0) == 0.0
