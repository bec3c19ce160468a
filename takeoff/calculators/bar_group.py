"""
Longitudinal bar group quantifier.

Cut length per bar = base run + legs/returns. The base run is segment A when
it is set; otherwise the element's length (or its width, for width-direction
bars). Extras come from the A–E segment model, falling back per side to the
legacy hookStart/hookEnd fields for bars saved before segments existed.
"""

from .base import BaseQuantifier
from ..models import BarUsage, BarShape, HookType
from ..schemas import BarGroup


class BarGroupQuantifier(BaseQuantifier):

    def quantify(self, item, bar: BarGroup = None, index: int = 0, warnings: list = None) -> dict:
        """
        Linear meters and weight of one bar group across all units of an element.

        Returns a takeoff line dict (see BaseQuantifier.make_line).
        """
        cut_length_cm = self.cut_length_cm(bar, item.length, item.width)
        weight_per_m = self.get_weight_per_m(bar.gauge, warnings)
        return self.make_line(
            position=bar.position or "N%d" % (index + 1),
            gauge=bar.gauge,
            count_per_unit=bar.count,
            quantity=item.quantity,
            cut_length_cm=cut_length_cm,
            weight_per_m=weight_per_m,
        )

    def base_length_cm(self, bar: BarGroup, length_m: float, width_m: float = None) -> float:
        if bar.segment_a is not None and bar.segment_a > 0:
            return bar.segment_a
        if bar.usage == BarUsage.WIDTH:
            return self.m_to_cm(width_m or length_m or 0.0)
        return self.m_to_cm(length_m or 0.0)

    def extra_length_cm(self, bar: BarGroup) -> float:
        if bar.shape == BarShape.STRAIGHT:
            return 0.0

        # Start side: leg B, or the legacy start hook
        if bar.segment_b is not None:
            start = bar.segment_b
        else:
            start = bar.hook_start if bar.hook_start_type != HookType.NONE else 0.0

        # End side: leg C, or the legacy end hook
        if bar.segment_c is not None:
            end = bar.segment_c
        else:
            end = bar.hook_end if bar.hook_end_type != HookType.NONE else 0.0

        returns = (bar.segment_d or 0.0) + (bar.segment_e or 0.0)
        return max(start, 0.0) + max(end, 0.0) + max(returns, 0.0)

    def cut_length_cm(self, bar: BarGroup, length_m: float, width_m: float = None) -> float:
        """Total fabricated length of one bar: A + B + C + D + E."""
        return self.base_length_cm(bar, length_m, width_m) + self.extra_length_cm(bar)


def quantify_bar_group(quantity: int, bar: BarGroup, length_m: float,
                       width_m: float = None) -> dict:
    """
    Pure per-group totals: {total_linear_m, total_weight_kg}.
    Unknown gauges weigh 0 kg.
    """
    calc = BarGroupQuantifier()
    cut_m = calc.cm_to_m(calc.cut_length_cm(bar, length_m, width_m))
    linear_m = quantity * bar.count * cut_m
    return {
        "total_linear_m": round(linear_m, 3),
        "total_weight_kg": round(linear_m * calc.get_weight_per_m(bar.gauge), 3),
    }
