"""
Input normalizer for element records.

Runs once when an element enters the quote, typed in by hand or read off a
drawing by the AI reader, and turns whatever arrived into a canonical
SteelItem:

  - lenient number/label parsing with the importer's defaults
  - unit heuristics (see units.py) for meters/centimeters mix-ups
  - shape vs hooks: 'straight' zeroes legs; hooks with no shape infer a U
  - stirrup gaps inferred from an explicit count + spacing
  - nominal length floored to the longest bar (+ margin) and its extent

Every correction is a deterministic transform of the input and is logged.
normalize(normalize(x)) == normalize(x).
"""

import json
import logging
import re
from typing import Iterable, List, Optional

from .config import settings
from .models import (
    ElementType, BarUsage, HookType, BarShape, StirrupModel, PlacementRole,
    SHAPE_HOOKS, RETURN_SHAPES,
    ELEMENT_TYPE_ALIASES, BAR_USAGE_ALIASES, STIRRUP_MODEL_ALIASES,
)
from .placement import conflict_messages
from .schemas import (
    SteelItem, BarGroup, StirrupConfig, Support, ExplicitPlacement, LegacyPlacement,
)
from .units import fix_meters_field, fix_cm_field
from .weights import normalize_gauge

logger = logging.getLogger(__name__)

_JSON_RE = re.compile(r"(\[[\s\S]*\]|\{[\s\S]*\})")


# --- Lenient parsing helpers ---

def _first(*values):
    """First value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def parse_number(value, default: Optional[float] = 0.0) -> Optional[float]:
    """Parse a numeric value from user/extractor input. Handles '12,5', '20cm'."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value) if value == value else default  # NaN
    match = re.search(r"-?\d+(?:[.,]\d+)?", str(value))
    if not match:
        return default
    return float(match.group().replace(",", "."))


def parse_int(value, default: Optional[int] = 0) -> Optional[int]:
    number = parse_number(value, default=None)
    if number is None:
        return default
    return int(number)


def parse_bool(value, default: bool = True) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "1", "yes", "sim", "y"):
        return True
    if text in ("false", "0", "no", "nao", "não", "n"):
        return False
    return default


def parse_label(enum_cls, value, aliases: dict = None, default=None):
    """Enum member for a value, its label, or a known alias. Unknown → default."""
    if value is None:
        return default
    if isinstance(value, enum_cls):
        return value
    key = str(value).strip().lower()
    if not key:
        return default
    for candidate in (key, key.replace(" ", "_").replace("-", "_")):
        try:
            return enum_cls(candidate)
        except ValueError:
            pass
    if aliases and key in aliases:
        return aliases[key]
    return default


def _positive(value, default: float) -> float:
    number = parse_number(value, default=None)
    if number is None or number <= 0:
        return default
    return number


def _non_negative(value) -> float:
    return max(parse_number(value, default=0.0), 0.0)


def _optional_cm(value) -> Optional[float]:
    number = parse_number(value, default=None)
    if number is None:
        return None
    return max(number, 0.0)


# --- Extractor output ---

def parse_extraction(text: str) -> List[dict]:
    """
    Element records from raw reader output.
    Accepts a JSON array, a single object, or either wrapped in prose/code
    fences. Returns [] when nothing parseable is found.
    """
    if not text:
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        match = _JSON_RE.search(text)
        if not match:
            logger.warning("Could not find JSON in extractor response")
            return []
        try:
            data = json.loads(match.group())
        except json.JSONDecodeError:
            logger.warning("Failed to parse extracted JSON from extractor response")
            return []

    if isinstance(data, dict):
        data = data.get("items", [data]) if isinstance(data.get("items"), list) else [data]
    if not isinstance(data, list):
        logger.warning("Extractor response is not a list or object")
        return []
    return [entry for entry in data if isinstance(entry, dict)]


# --- Bars ---

def _legacy_role(raw_bar: dict, usage: BarUsage) -> PlacementRole:
    placement = raw_bar.get("placement")
    if isinstance(placement, dict):
        placement = placement.get("role")
    default = PlacementRole.BOTTOM if usage == BarUsage.PRINCIPAL else PlacementRole.TOP
    return parse_label(PlacementRole, placement, default=default)


def _placement(raw_bar: dict, usage: BarUsage):
    placement = raw_bar.get("placement")
    ids = raw_bar.get("pointIndices")
    if ids is None and isinstance(placement, dict):
        ids = placement.get("point_ids")
    if ids is None:
        ids = raw_bar.get("point_ids")

    point_ids = []
    for value in ids or []:
        pid = parse_int(value, default=None)
        if pid is not None and pid >= 0 and pid not in point_ids:
            point_ids.append(pid)
    if point_ids:
        return ExplicitPlacement(point_ids=tuple(point_ids))
    return LegacyPlacement(role=_legacy_role(raw_bar, usage))


def normalize_bar(raw_bar: dict, length_m: float) -> BarGroup:
    """Canonical BarGroup for one raw bar record of an element `length_m` long."""
    get = raw_bar.get

    usage = parse_label(BarUsage, get("usage"), BAR_USAGE_ALIASES, BarUsage.PRINCIPAL)
    placement = _placement(raw_bar, usage)

    count = parse_int(get("count"), default=None)
    count = settings.DEFAULT_BAR_COUNT if count is None else max(count, 0)
    gauge = normalize_gauge(get("gauge")) or settings.DEFAULT_BAR_GAUGE

    segment_a = _optional_cm(_first(get("segment_a"), get("segmentA")))
    if not segment_a:
        # Width-direction bars fall back to the element width when measured
        segment_a = None if usage == BarUsage.WIDTH else round(length_m * 100.0, 2)

    hook_start = _non_negative(_first(get("hook_start"), get("hookStart")))
    hook_end = _non_negative(_first(get("hook_end"), get("hookEnd")))
    leg_b = _optional_cm(_first(get("segment_b"), get("segmentB")))
    leg_c = _optional_cm(_first(get("segment_c"), get("segmentC")))
    return_d = _optional_cm(_first(get("segment_d"), get("segmentD")))
    return_e = _optional_cm(_first(get("segment_e"), get("segmentE")))

    shape = parse_label(BarShape, get("shape"))
    if shape is None:
        if hook_start > 0 or hook_end > 0 or (leg_b or 0) > 0 or (leg_c or 0) > 0:
            # Hooks on a top bar point down, on a bottom bar up
            role = placement.role if isinstance(placement, LegacyPlacement) else _legacy_role(raw_bar, usage)
            shape = BarShape.U_DOWN if role == PlacementRole.TOP else BarShape.U_UP
            logger.info("Bar with hooks and no shape: inferred %s", shape.value)
        else:
            shape = BarShape.STRAIGHT

    start_type, end_type = SHAPE_HOOKS[shape]
    if start_type == HookType.NONE:
        if leg_b or hook_start:
            logger.info("Start leg dropped from %s bar (no hook at the start)", shape.value)
        leg_b = 0.0
    else:
        leg_b = leg_b if leg_b is not None else hook_start
    if end_type == HookType.NONE:
        if leg_c or hook_end:
            logger.info("End leg dropped from %s bar (no hook at the end)", shape.value)
        leg_c = 0.0
    else:
        leg_c = leg_c if leg_c is not None else hook_end

    if shape in RETURN_SHAPES:
        return_d, return_e = return_d or 0.0, return_e or 0.0
    else:
        if return_d or return_e:
            logger.info("Inward returns dropped from %s bar (only C shapes have them)", shape.value)
        return_d, return_e = 0.0, 0.0

    position = get("position")
    return BarGroup(
        count=count,
        gauge=gauge,
        usage=usage,
        placement=placement,
        shape=shape,
        hook_start_type=start_type,
        hook_end_type=end_type,
        hook_start=leg_b,
        hook_end=leg_c,
        segment_a=segment_a,
        segment_b=leg_b,
        segment_c=leg_c,
        segment_d=return_d,
        segment_e=return_e,
        offset=_non_negative(get("offset")),
        position=str(position) if position not in (None, "") else None,
    )


def normalize_support(raw_support: dict) -> Support:
    get = raw_support.get
    label = get("label")
    return Support(
        position=_non_negative(get("position")),
        width=_positive(get("width"), settings.DEFAULT_SUPPORT_WIDTH_CM),
        left_gap=_non_negative(_first(get("left_gap"), get("leftGap"))),
        right_gap=_non_negative(_first(get("right_gap"), get("rightGap"))),
        label=str(label) if label not in (None, "") else None,
    )


# --- Element ---

def _floor_length(length_m: float, bars: List[BarGroup]) -> float:
    """Nominal length raised to hold the longest bar (+ margin) and every bar end."""
    longest_cm = max((bar.segment_a or 0.0 for bar in bars), default=0.0)
    if longest_cm > 0 and length_m < longest_cm / 100.0:
        floored = round((longest_cm + settings.LENGTH_MARGIN_CM) / 100.0, 2)
        logger.info("Length %.3f m shorter than bar %.1f cm, raised to %.2f m",
                    length_m, longest_cm, floored)
        length_m = floored

    extent_cm = max((bar.extent_cm for bar in bars), default=0.0)
    if extent_cm / 100.0 > length_m:
        logger.info("Length %.3f m raised to bar extent %.1f cm", length_m, extent_cm)
        length_m = extent_cm / 100.0
    return length_m


def _infer_gaps(length_m: float, count: Optional[int], spacing: float,
                start_gap: float, end_gap: float):
    """
    A drawing that says '16 N3 c/15' fixes the stirrups; whatever length they
    leave uncovered is split evenly between the two ends.
    """
    if not count or count <= 0 or spacing <= 0 or start_gap or end_gap:
        return start_gap, end_gap
    remaining = length_m * 100.0 - (count - 1) * spacing
    if remaining <= 0:
        return start_gap, end_gap
    gap = round(remaining / 2.0, 2)
    logger.info("Inferred start/end gaps of %.2f cm from %d stirrups c/%.0f", gap, count, spacing)
    return gap, gap


def normalize(raw, apply_unit_heuristics: bool = None) -> SteelItem:
    """
    Canonical SteelItem from a raw record (camelCase extractor/legacy keys or
    snake_case keys) or from an existing SteelItem.
    """
    if isinstance(raw, SteelItem):
        raw = raw.model_dump(mode="json")
    if apply_unit_heuristics is None:
        apply_unit_heuristics = settings.UNIT_HEURISTICS_ENABLED
    get = raw.get
    stirrup_raw = get("stirrups") if isinstance(get("stirrups"), dict) else {}
    sget = stirrup_raw.get

    element_type = parse_label(ElementType, get("type"), ELEMENT_TYPE_ALIASES, ElementType.UPPER_BEAM)
    is_footing = element_type == ElementType.FOOTING
    quantity = max(parse_int(get("quantity"), default=1), 1)
    length_m = _positive(get("length"), settings.DEFAULT_ELEMENT_LENGTH_M)

    # Concrete section, meters
    width_m = _positive(get("width"), settings.DEFAULT_FOOTING_WIDTH_M if is_footing
                        else settings.DEFAULT_ELEMENT_WIDTH_M)
    height_m = _positive(get("height"), settings.DEFAULT_FOOTING_HEIGHT_M if is_footing
                         else settings.DEFAULT_ELEMENT_HEIGHT_M)

    # Stirrup section and spacing, centimeters
    stirrup_width = _positive(_first(sget("width"), get("stirrupWidth")), settings.DEFAULT_STIRRUP_WIDTH_CM)
    stirrup_height = _positive(_first(sget("height"), get("stirrupHeight")), settings.DEFAULT_STIRRUP_HEIGHT_CM)
    spacing = _positive(_first(sget("spacing"), get("stirrupSpacing")), settings.DEFAULT_STIRRUP_SPACING_CM)

    if apply_unit_heuristics:
        width_m = fix_meters_field("width", width_m)
        height_m = fix_meters_field("height", height_m)
        stirrup_width = fix_cm_field("stirrup width", stirrup_width)
        stirrup_height = fix_cm_field("stirrup height", stirrup_height)
        spacing = fix_cm_field("stirrup spacing", spacing)

    raw_bars = _first(get("bars"), get("mainBars")) or []
    bars = [normalize_bar(b, length_m) for b in raw_bars if isinstance(b, dict)]
    length_m = _floor_length(length_m, bars)

    stirrup_count = parse_int(_first(sget("count"), get("stirrupCount")), default=None)
    if stirrup_count is not None and stirrup_count <= 0:
        stirrup_count = None
    start_gap, end_gap = _infer_gaps(
        length_m, stirrup_count, spacing,
        _non_negative(_first(get("start_gap"), get("startGap"))),
        _non_negative(_first(get("end_gap"), get("endGap"))),
    )

    stirrup_position = _first(sget("position"), get("stirrupPosition"))
    stirrups = StirrupConfig(
        enabled=parse_bool(_first(sget("enabled"), get("hasStirrups")), default=True),
        gauge=normalize_gauge(_first(sget("gauge"), get("stirrupGauge"))) or settings.DEFAULT_STIRRUP_GAUGE,
        spacing=spacing,
        model=parse_label(StirrupModel, _first(sget("model"), get("stirrupModel")),
                          STIRRUP_MODEL_ALIASES, StirrupModel.RECT),
        width=stirrup_width,
        height=stirrup_height,
        count=stirrup_count,
        position=str(stirrup_position) if stirrup_position not in (None, "") else None,
    )

    raw_supports = get("supports") or []
    item_id = get("id")
    observation = get("observation")
    item = SteelItem(
        id=str(item_id) if item_id not in (None, "") else None,
        type=element_type,
        observation=str(observation) if observation not in (None, "") else None,
        quantity=quantity,
        length=length_m,
        width=width_m,
        height=height_m,
        bars=tuple(bars),
        stirrups=stirrups,
        supports=tuple(normalize_support(s) for s in raw_supports if isinstance(s, dict)),
        start_gap=start_gap,
        end_gap=end_gap,
    )
    # Overlapping point ids are kept as given; only reported
    for message in conflict_messages(item):
        logger.warning("Element %s: %s", item.id or item.observation or "?", message)
    return item


def normalize_many(raws: Iterable, apply_unit_heuristics: bool = None) -> List[SteelItem]:
    return [normalize(raw, apply_unit_heuristics=apply_unit_heuristics) for raw in raws]


def import_extraction(text: str, apply_unit_heuristics: bool = None) -> List[SteelItem]:
    """Reader output text → normalized elements."""
    return normalize_many(parse_extraction(text), apply_unit_heuristics=apply_unit_heuristics)
