"""
Cross-section geometry for stirrups.

Two things per model: the cut length of one stirrup (perimeter plus the
closing-hook allowance) and the ordered grid of points where longitudinal
bars may sit. Grid point ids are positions in a fixed ordering (bar groups
store ids, never coordinates), so every generator here must return the same
sequence for the same (model, width, height).

Coordinates are cm in the section's bounding box, origin top-left, y down.
"""

import math
from functools import lru_cache
from typing import List, Tuple

from ..config import settings
from ..models import StirrupModel, STIRRUP_MODEL_ALIASES
from ..schemas import GridPoint

RECT_COLUMNS = 5
RECT_ROWS = 6
CIRCLE_POINTS = 16
TRIANGLE_POINTS_PER_EDGE = 4
POLYGON_POINTS_PER_EDGE = 3

# Vertices as fractions of the (width, height) bounding box, clockwise from the top
PENTAGON_VERTICES = ((0.5, 0.0), (1.0, 0.38), (0.81, 1.0), (0.19, 1.0), (0.0, 0.38))
HEXAGON_VERTICES = ((0.25, 0.0), (0.75, 0.0), (1.0, 0.5), (0.75, 1.0), (0.25, 1.0), (0.0, 0.5))


def resolve_model(model) -> StirrupModel:
    """StirrupModel for a model value or label. Unknown/missing → rect."""
    if isinstance(model, StirrupModel):
        return model
    key = str(model or "").strip().lower()
    try:
        return StirrupModel(key)
    except ValueError:
        return STIRRUP_MODEL_ALIASES.get(key, StirrupModel.RECT)


def _safe_dims(width: float, height: float) -> Tuple[float, float]:
    w = width if width and width > 0 else settings.DEFAULT_STIRRUP_WIDTH_CM
    h = height if height and height > 0 else settings.DEFAULT_STIRRUP_HEIGHT_CM
    return float(w), float(h)


def polygon_vertices(model, width: float, height: float) -> List[Tuple[float, float]]:
    """Corner coordinates of a polygonal section (triangle, pentagon, hexagon, rect)."""
    model = resolve_model(model)
    w, h = _safe_dims(width, height)
    if model == StirrupModel.TRIANGLE:
        return [(w / 2, 0.0), (w, h), (0.0, h)]
    if model == StirrupModel.PENTAGON:
        return [(w * fx, h * fy) for fx, fy in PENTAGON_VERTICES]
    if model == StirrupModel.HEXAGON:
        return [(w * fx, h * fy) for fx, fy in HEXAGON_VERTICES]
    return [(0.0, 0.0), (w, 0.0), (w, h), (0.0, h)]


def _edge_sum(vertices: List[Tuple[float, float]]) -> float:
    total = 0.0
    for i, (x1, y1) in enumerate(vertices):
        x2, y2 = vertices[(i + 1) % len(vertices)]
        total += math.hypot(x2 - x1, y2 - y1)
    return total


def perimeter(model, width: float, height: float) -> float:
    """
    Cut length (cm) of one stirrup: section perimeter + hook allowance.

    rect:     2(w + h)
    circle:   π·w (w is the diameter; h is ignored)
    triangle: isosceles, base w, height h
    pentagon/hexagon: sum of the actual edge lengths
    """
    model = resolve_model(model)
    w, h = _safe_dims(width, height)
    hooks = settings.HOOK_ALLOWANCE_CM

    if model == StirrupModel.RECT:
        return 2 * (w + h) + hooks
    if model == StirrupModel.CIRCLE:
        return math.pi * w + hooks
    if model == StirrupModel.TRIANGLE:
        return w + 2 * math.sqrt((w / 2) ** 2 + h ** 2) + hooks
    return _edge_sum(polygon_vertices(model, w, h)) + hooks


# --- Grid points ---

def _rect_grid(w: float, h: float) -> List[Tuple[float, float]]:
    coords = []
    for r in range(RECT_ROWS):
        for c in range(RECT_COLUMNS):
            coords.append((w * c / (RECT_COLUMNS - 1), h * r / (RECT_ROWS - 1)))
    return coords


def _circle_grid(w: float) -> List[Tuple[float, float]]:
    radius = w / 2
    cx = cy = radius
    coords = []
    for i in range(CIRCLE_POINTS):
        # Start at 12 o'clock, go clockwise
        angle = 2 * math.pi * i / CIRCLE_POINTS - math.pi / 2
        coords.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    coords.append((cx, cy))
    return coords


def _edge_grid(vertices: List[Tuple[float, float]], per_edge: int) -> List[Tuple[float, float]]:
    """Points along each edge, starting at its first vertex, excluding its last."""
    coords = []
    for side, (x1, y1) in enumerate(vertices):
        x2, y2 = vertices[(side + 1) % len(vertices)]
        for i in range(per_edge):
            t = i / per_edge
            coords.append((x1 + (x2 - x1) * t, y1 + (y2 - y1) * t))
    return coords


@lru_cache(maxsize=256)
def _grid(model: StirrupModel, w: float, h: float) -> Tuple[GridPoint, ...]:
    if model == StirrupModel.RECT:
        coords = _rect_grid(w, h)
    elif model == StirrupModel.CIRCLE:
        coords = _circle_grid(w)
    elif model == StirrupModel.TRIANGLE:
        coords = _edge_grid(polygon_vertices(model, w, h), TRIANGLE_POINTS_PER_EDGE)
    else:
        coords = _edge_grid(polygon_vertices(model, w, h), POLYGON_POINTS_PER_EDGE)
    return tuple(
        GridPoint(id=i, x=round(x, 6), y=round(y, 6))
        for i, (x, y) in enumerate(coords)
    )


def grid_points(model, width: float, height: float) -> List[GridPoint]:
    """
    Ordered attachment points for a section.

    rect: 5 x 6 lattice, row by row from the top (30 points)
    circle: 16 on the circumference from 12 o'clock clockwise + center (17)
    triangle: 4 per edge (12); pentagon: 3 per edge (15); hexagon: 3 per edge (18)
    """
    w, h = _safe_dims(width, height)
    return list(_grid(resolve_model(model), w, h))


def grid_point_ids(model, width: float, height: float) -> List[int]:
    return [p.id for p in grid_points(model, width, height)]
