"""
Unit heuristics for externally supplied measurements.

Element dimensions are stored in meters and cross-section/stirrup dimensions
in centimeters. Drawing readers regularly put one in the other's field; the
thresholds below catch the magnitudes that cannot be right for the unit.
These are guesses by design and stay isolated here so callers can turn them
off (Settings.UNIT_HEURISTICS_ENABLED or normalize(..., apply_unit_heuristics=False)).
"""

import logging

from .config import settings

logger = logging.getLogger(__name__)


def meters_field_looks_like_cm(value: float) -> bool:
    """A meters field holding more than METERS_FIELD_MAX was typed in cm."""
    return value > settings.METERS_FIELD_MAX


def cm_field_looks_like_meters(value: float) -> bool:
    """A positive centimeters field under CM_FIELD_MIN was typed in meters."""
    return 0 < value < settings.CM_FIELD_MIN


def fix_meters_field(name: str, value: float) -> float:
    if meters_field_looks_like_cm(value):
        fixed = round(value / 100.0, 6)
        logger.info("%s=%s looks like centimeters, using %.4g m", name, value, fixed)
        return fixed
    return value


def fix_cm_field(name: str, value: float) -> float:
    if cm_field_looks_like_meters(value):
        fixed = round(value * 100.0, 6)
        logger.info("%s=%s looks like meters, using %.4g cm", name, value, fixed)
        return fixed
    return value
