"""
Transverse reinforcement quantifiers.

Beams, columns and piers get closed stirrups along their length; a footing
gets a "cage": two families of bent bars, one running each way across the
plan. Both read the shared StirrupConfig of the element.
"""

import logging
from typing import List, Tuple

from .base import BaseQuantifier
from .extent import effective_length_cm
from .shapes import perimeter
from ..config import settings

logger = logging.getLogger(__name__)


class _TransverseQuantifier(BaseQuantifier):

    def clamp_spacing(self, spacing, warnings: list = None) -> float:
        """Non-positive spacing would never terminate; fall back to the default."""
        clamped = self.positive_or(spacing, settings.DEFAULT_STIRRUP_SPACING_CM)
        if clamped != spacing:
            message = "Stirrup spacing %r is not positive, using %.0f cm" % (
                spacing, settings.DEFAULT_STIRRUP_SPACING_CM)
            logger.warning(message)
            if warnings is not None:
                warnings.append(message)
        return clamped

    def cap(self, count: int, warnings: list = None) -> Tuple[int, bool]:
        if count > settings.MAX_STIRRUPS:
            message = "Stirrup count %d capped at %d" % (count, settings.MAX_STIRRUPS)
            logger.warning(message)
            if warnings is not None:
                warnings.append(message)
            return settings.MAX_STIRRUPS, True
        return count, False

    def empty_result(self, item) -> dict:
        cfg = item.stirrups
        return {
            "mode": "none",
            "position": cfg.position or "EST",
            "gauge": cfg.gauge,
            "count_per_unit": 0,
            "count_total": 0,
            "cut_length_cm": 0.0,
            "total_linear_m": 0.0,
            "total_weight_kg": 0.0,
            "capped": False,
        }


class StirrupQuantifier(_TransverseQuantifier):
    """Closed stirrups at a fixed spacing, skipping end gaps and support zones."""

    def quantify(self, item, length_cm: float = None, warnings: list = None) -> dict:
        cfg = item.stirrups
        if not cfg.enabled:
            return self.empty_result(item)

        if length_cm is None:
            length_cm = effective_length_cm(item)
        spacing = self.clamp_spacing(cfg.spacing, warnings)

        zones = self.stirrup_zones(length_cm, item.start_gap, item.end_gap, item.supports)
        computed = self.count_in_zones(zones, spacing)

        # A count read off the drawing wins over ours
        if cfg.count is not None and cfg.count > 0:
            count, source = cfg.count, "explicit"
        else:
            count, source = computed, "computed"
        count, capped = self.cap(count, warnings)

        cut_length_cm = perimeter(cfg.model, cfg.width, cfg.height)
        result = self.make_line(
            position=cfg.position or "EST",
            gauge=cfg.gauge,
            count_per_unit=count,
            quantity=item.quantity,
            cut_length_cm=cut_length_cm,
            weight_per_m=self.get_weight_per_m(cfg.gauge, warnings),
        )
        result.update({
            "mode": "stirrup",
            "model": cfg.model.value,
            "spacing_cm": spacing,
            "computed_count": computed,
            "count_source": source,
            "zones": [{"start_cm": round(s, 2), "end_cm": round(e, 2)} for s, e in zones],
            "capped": capped,
        })
        return result

    def stirrup_zones(self, length_cm: float, start_gap: float, end_gap: float,
                      supports) -> List[Tuple[float, float]]:
        """
        Stretches of the element that carry stirrups, in order.

        The element runs [start_gap, length - end_gap]; each support removes
        [position - left_gap, position + right_gap].
        """
        zones = []
        current = max(start_gap or 0.0, 0.0)
        for support in sorted(supports, key=lambda s: s.position):
            zone_end = support.position - max(support.left_gap, 0.0)
            if zone_end > current:
                zones.append((current, zone_end))
            current = max(current, support.position + max(support.right_gap, 0.0))

        last_end = length_cm - max(end_gap or 0.0, 0.0)
        if last_end > current:
            zones.append((current, last_end))
        return zones

    def count_in_zones(self, zones: List[Tuple[float, float]], spacing: float) -> int:
        """floor(zone / spacing) per zone; a partial increment gets no stirrup."""
        return sum(self.fits(end - start, spacing) for start, end in zones)


class CageQuantifier(_TransverseQuantifier):
    """
    Footing cage: bars along the length spread across the width, and bars
    along the width spread across the length. Each bar gets an end hook on
    both ends running down the footing height, less concrete cover.
    """

    def quantify(self, item, length_cm: float = None, warnings: list = None) -> dict:
        cfg = item.stirrups
        if not cfg.enabled:
            return self.empty_result(item)

        if length_cm is None:
            length_cm = effective_length_cm(item)
        spacing = self.clamp_spacing(cfg.spacing, warnings)
        width_cm = self.m_to_cm(self.positive_or(item.width, settings.DEFAULT_FOOTING_WIDTH_M))
        height_cm = self.m_to_cm(self.positive_or(item.height, settings.DEFAULT_FOOTING_HEIGHT_M))
        hook_cm = max(height_cm - settings.CAGE_COVER_CM, 0.0)

        weight_per_m = self.get_weight_per_m(cfg.gauge, warnings)
        position = cfg.position or "EST"

        count_along_length, capped_l = self.cap(self.covers(width_cm, spacing), warnings)
        count_along_width, capped_w = self.cap(self.covers(length_cm, spacing), warnings)

        along_length = self.make_line(
            position=position, gauge=cfg.gauge,
            count_per_unit=count_along_length, quantity=item.quantity,
            cut_length_cm=length_cm + 2 * hook_cm, weight_per_m=weight_per_m,
        )
        along_length["direction"] = "length"
        along_width = self.make_line(
            position=position, gauge=cfg.gauge,
            count_per_unit=count_along_width, quantity=item.quantity,
            cut_length_cm=width_cm + 2 * hook_cm, weight_per_m=weight_per_m,
        )
        along_width["direction"] = "width"

        families = [along_length, along_width]
        count_per_unit = count_along_length + count_along_width
        return {
            "mode": "cage",
            "position": position,
            "gauge": cfg.gauge,
            "spacing_cm": spacing,
            "hook_cm": round(hook_cm, 2),
            "count_per_unit": count_per_unit,
            "count_total": count_per_unit * item.quantity,
            "cut_length_cm": None,
            "total_linear_m": round(sum(f["total_linear_m"] for f in families), 3),
            "total_weight_kg": round(sum(f["total_weight_kg"] for f in families), 3),
            "families": families,
            "capped": capped_l or capped_w,
        }
