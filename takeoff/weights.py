# Rebar weight constants: nominal mass of CA-50/CA-60 bars (NBR 7480), kg per linear meter

import math
import re

# Gauge (nominal diameter, mm) -> kg/m
STEEL_WEIGHTS = {
    "4.2": 0.109,
    "5.0": 0.154,
    "6.3": 0.245,
    "8.0": 0.395,
    "10.0": 0.617,
    "12.5": 0.963,
    "16.0": 1.578,
    "20.0": 2.466,
}

GAUGES = list(STEEL_WEIGHTS.keys())

_NUMBER_RE = re.compile(r"\d+(?:[.,]\d+)?")


def normalize_gauge(value) -> str:
    """
    Canonical gauge label for a user/extractor supplied value.
    '10', 10, 'Ø10', '10 mm', '10,0' all become '10.0'. Labels with no number
    are returned stripped so the caller can still report them.
    """
    if value is None:
        return ""
    text = str(value).strip()
    match = _NUMBER_RE.search(text)
    if not match:
        return text
    number = float(match.group().replace(",", "."))
    return "%.1f" % number


def is_known_gauge(gauge: str) -> bool:
    return gauge in STEEL_WEIGHTS


def weight_per_meter(gauge: str) -> float:
    """kg/m for a gauge label. Unknown gauges weigh nothing (0.0)."""
    return STEEL_WEIGHTS.get(gauge, 0.0)


def weight_from_gauge(gauge: str, length_m: float) -> float:
    """Weight in kg of `length_m` linear meters of a gauge."""
    return round(weight_per_meter(gauge) * length_m, 3)


def stock_bars(total_length_m: float, stock_length_m: float = 12.0) -> int:
    """
    Number of stock bars to buy for a linear total.
    Always rounds up; a partial bar is still a bar.
    """
    if total_length_m <= 0:
        return 0
    return math.ceil(round(total_length_m / stock_length_m, 9))


def price_from_weight(weight_kg: float, price_per_kg: float) -> float:
    """Flat per-kg price, no waste or markup."""
    return round(weight_kg * price_per_kg, 2)
