"""
Abstract base class for the takeoff quantifiers.

Input: an immutable SteelItem (plus the part being measured)
Output: plain result dicts (linear meters and kilograms per gauge)
"""

import logging
import math
from abc import ABC, abstractmethod

from ..config import settings
from ..weights import STEEL_WEIGHTS, is_known_gauge

logger = logging.getLogger(__name__)


class BaseQuantifier(ABC):
    """All quantifiers inherit from this. Quantifiers hold no state."""

    @abstractmethod
    def quantify(self, item, *args, **kwargs) -> dict:
        """
        Measure one part of an element.
        Must not raise on shaped input: bad values are clamped, not rejected.
        """
        pass

    # --- Helper methods for all quantifiers ---

    def cm_to_m(self, cm: float) -> float:
        return cm / 100.0

    def m_to_cm(self, m: float) -> float:
        return m * 100.0

    def positive_or(self, value, default: float) -> float:
        """Value if it is a positive number, otherwise the default."""
        try:
            number = float(value)
        except (ValueError, TypeError):
            return default
        if math.isnan(number) or number <= 0:
            return default
        return number

    def fits(self, length_cm: float, spacing_cm: float) -> int:
        """
        Whole spacing increments that fit in a length (floor, never negative).
        Ratios past MAX_STIRRUPS (or infinite) come back as MAX_STIRRUPS + 1
        so the caller's cap still applies.
        """
        if length_cm <= 0 or spacing_cm <= 0:
            return 0
        ratio = length_cm / spacing_cm
        if not math.isfinite(ratio) or ratio > settings.MAX_STIRRUPS + 1:
            return settings.MAX_STIRRUPS + 1
        return int(math.floor(ratio + 1e-9))

    def covers(self, length_cm: float, spacing_cm: float) -> int:
        """Bars needed to cover a length at a spacing (ceil, never negative, bounded like fits)."""
        if length_cm <= 0 or spacing_cm <= 0:
            return 0
        ratio = length_cm / spacing_cm
        if not math.isfinite(ratio) or ratio > settings.MAX_STIRRUPS + 1:
            return settings.MAX_STIRRUPS + 1
        return int(math.ceil(ratio - 1e-9))

    def get_weight_per_m(self, gauge: str, warnings: list = None) -> float:
        """
        kg/m for a gauge. Unknown gauges contribute zero weight; the caller
        gets a warning in `warnings` instead of an exception.
        """
        if not is_known_gauge(gauge):
            message = "Unknown gauge '%s', weight counted as 0 kg" % gauge
            logger.warning(message)
            if warnings is not None and message not in warnings:
                warnings.append(message)
            return 0.0
        return STEEL_WEIGHTS[gauge]

    def make_line(self, position: str, gauge: str, count_per_unit: int,
                  quantity: int, cut_length_cm: float, weight_per_m: float) -> dict:
        """Build one takeoff line: a set of identical bars of one gauge."""
        count_total = count_per_unit * quantity
        linear_m = count_total * self.cm_to_m(cut_length_cm)
        return {
            "position": position,
            "gauge": gauge,
            "count_per_unit": count_per_unit,
            "count_total": count_total,
            "cut_length_cm": round(cut_length_cm, 2),
            "total_linear_m": round(linear_m, 3),
            "total_weight_kg": round(linear_m * weight_per_m, 3),
        }
