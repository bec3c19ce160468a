"""
Rebar takeoff engine.

    normalize(raw) -> SteelItem
    quantify(item) -> {per_bar_group, stirrups, total_weight_kg, ...}
    grid_points(model, width_cm, height_cm) -> [GridPoint]
    occupancy(item) -> {point_id}
"""

from .calculators.shapes import grid_points, perimeter
from .calculators.takeoff import quantify, summarize_quote
from .normalizer import normalize
from .placement import occupancy

__all__ = ["normalize", "quantify", "summarize_quote", "grid_points", "perimeter", "occupancy"]
