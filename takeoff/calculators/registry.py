"""
Stirrup mode registry: maps element types to the quantifier that measures
their transverse reinforcement.
"""

from .base import BaseQuantifier
from .stirrups import StirrupQuantifier, CageQuantifier
from ..models import ElementType

STIRRUP_MODES: dict[str, type] = {
    "stirrup": StirrupQuantifier,
    "cage": CageQuantifier,
}

ELEMENT_STIRRUP_MODE: dict[ElementType, str] = {
    ElementType.DRILLED_PIER: "stirrup",
    ElementType.FOOTING: "cage",
    ElementType.COLUMN: "stirrup",
    ElementType.GROUND_BEAM: "stirrup",
    ElementType.UPPER_BEAM: "stirrup",
}


def stirrup_mode(element_type: ElementType) -> str:
    """Mode name for an element type. Unlisted types use plain stirrups."""
    return ELEMENT_STIRRUP_MODE.get(element_type, "stirrup")


def get_stirrup_quantifier(element_type: ElementType) -> BaseQuantifier:
    """Returns a quantifier instance for the element type's stirrup mode."""
    return STIRRUP_MODES[stirrup_mode(element_type)]()


def list_modes() -> list[str]:
    return list(STIRRUP_MODES.keys())
