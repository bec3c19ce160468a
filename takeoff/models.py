"""
Vocabularies shared by the takeoff engine.

Values are the canonical labels stored on elements. The *_ALIASES tables map
labels produced by the quoting UI and the drawing reader onto them.
"""

import enum


class ElementType(str, enum.Enum):
    DRILLED_PIER = "drilled_pier"
    FOOTING = "footing"
    COLUMN = "column"
    GROUND_BEAM = "ground_beam"
    UPPER_BEAM = "upper_beam"


class BarUsage(str, enum.Enum):
    PRINCIPAL = "principal"
    RIB = "rib"
    SECOND_LAYER = "second_layer"
    REINFORCEMENT = "reinforcement"
    CHAIR = "chair"
    WIDTH = "width"  # runs across the element's width, not its length
    OTHER = "other"


class HookType(str, enum.Enum):
    NONE = "none"
    UP = "up"
    DOWN = "down"


class BarShape(str, enum.Enum):
    STRAIGHT = "straight"
    L_LEFT_UP = "l_left_up"
    L_LEFT_DOWN = "l_left_down"
    L_RIGHT_UP = "l_right_up"
    L_RIGHT_DOWN = "l_right_down"
    U_UP = "u_up"
    U_DOWN = "u_down"
    C_UP = "c_up"
    C_DOWN = "c_down"


class StirrupModel(str, enum.Enum):
    RECT = "rect"
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    PENTAGON = "pentagon"
    HEXAGON = "hexagon"


class PlacementRole(str, enum.Enum):
    TOP = "top"
    BOTTOM = "bottom"
    DISTRIBUTED = "distributed"
    CENTER = "center"


# (hook at start, hook at end) implied by each shape
SHAPE_HOOKS = {
    BarShape.STRAIGHT: (HookType.NONE, HookType.NONE),
    BarShape.L_LEFT_UP: (HookType.UP, HookType.NONE),
    BarShape.L_LEFT_DOWN: (HookType.DOWN, HookType.NONE),
    BarShape.L_RIGHT_UP: (HookType.NONE, HookType.UP),
    BarShape.L_RIGHT_DOWN: (HookType.NONE, HookType.DOWN),
    BarShape.U_UP: (HookType.UP, HookType.UP),
    BarShape.U_DOWN: (HookType.DOWN, HookType.DOWN),
    BarShape.C_UP: (HookType.UP, HookType.UP),
    BarShape.C_DOWN: (HookType.DOWN, HookType.DOWN),
}

# Shapes with inward returns (segments D and E)
RETURN_SHAPES = (BarShape.C_UP, BarShape.C_DOWN)


ELEMENT_TYPE_ALIASES = {
    "broca": ElementType.DRILLED_PIER,
    "pier": ElementType.DRILLED_PIER,
    "sapata": ElementType.FOOTING,
    "pilar": ElementType.COLUMN,
    "viga baldrame": ElementType.GROUND_BEAM,
    "baldrame": ElementType.GROUND_BEAM,
    "grade beam": ElementType.GROUND_BEAM,
    "viga superior": ElementType.UPPER_BEAM,
    "viga": ElementType.UPPER_BEAM,
    "beam": ElementType.UPPER_BEAM,
}

BAR_USAGE_ALIASES = {
    "costela": BarUsage.RIB,
    "2ª camada": BarUsage.SECOND_LAYER,
    "2a camada": BarUsage.SECOND_LAYER,
    "camada 2": BarUsage.SECOND_LAYER,
    "reforço": BarUsage.REINFORCEMENT,
    "reforco": BarUsage.REINFORCEMENT,
    "cavalete": BarUsage.CHAIR,
    "largura": BarUsage.WIDTH,
    "outros": BarUsage.OTHER,
}

STIRRUP_MODEL_ALIASES = {
    "retangular": StirrupModel.RECT,
    "rectangle": StirrupModel.RECT,
    "square": StirrupModel.RECT,
    "circular": StirrupModel.CIRCLE,
    "round": StirrupModel.CIRCLE,
    "triangular": StirrupModel.TRIANGLE,
    "pentagono": StirrupModel.PENTAGON,
    "hexagono": StirrupModel.HEXAGON,
}