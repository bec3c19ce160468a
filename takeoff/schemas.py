from pydantic import BaseModel, Field
from typing import Annotated, Optional, List, Tuple, Union, Literal

from .models import (
    ElementType, BarUsage, HookType, BarShape, StirrupModel, PlacementRole,
)


# --- Placement: explicit grid point ids, or a legacy face role ---

class ExplicitPlacement(BaseModel):
    kind: Literal["explicit"] = "explicit"
    point_ids: Tuple[int, ...] = ()

    class Config:
        frozen = True


class LegacyPlacement(BaseModel):
    kind: Literal["legacy"] = "legacy"
    role: PlacementRole = PlacementRole.BOTTOM

    class Config:
        frozen = True


Placement = Annotated[Union[ExplicitPlacement, LegacyPlacement], Field(discriminator="kind")]


# --- Element ---

class Support(BaseModel):
    position: float = 0.0     # cm from element start (support center)
    width: float = 20.0       # cm
    left_gap: float = 0.0     # cm without stirrups left of position
    right_gap: float = 0.0    # cm without stirrups right of position
    label: Optional[str] = None

    class Config:
        frozen = True


class BarGroup(BaseModel):
    count: int = Field(default=0, ge=0)
    gauge: str = "10.0"
    usage: BarUsage = BarUsage.PRINCIPAL
    placement: Placement = LegacyPlacement()
    shape: Optional[BarShape] = None  # None: not declared (legacy rows)
    hook_start_type: HookType = HookType.NONE
    hook_end_type: HookType = HookType.NONE
    hook_start: float = 0.0   # legacy hook lengths, cm
    hook_end: float = 0.0
    segment_a: Optional[float] = None  # main straight run, cm
    segment_b: Optional[float] = None  # left leg
    segment_c: Optional[float] = None  # right leg
    segment_d: Optional[float] = None  # left inward return
    segment_e: Optional[float] = None  # right inward return
    offset: float = 0.0       # cm from element start
    position: Optional[str] = None

    class Config:
        frozen = True

    @property
    def point_ids(self) -> Tuple[int, ...]:
        if isinstance(self.placement, ExplicitPlacement):
            return self.placement.point_ids
        return ()

    @property
    def extent_cm(self) -> float:
        """Farthest point the bar reaches along the element."""
        return self.offset + (self.segment_a or 0.0)


class StirrupConfig(BaseModel):
    enabled: bool = True
    gauge: str = "5.0"
    spacing: float = 20.0     # cm
    model: StirrupModel = StirrupModel.RECT
    width: float = 15.0       # cm (diameter for circle)
    height: float = 25.0      # cm
    count: Optional[int] = None  # explicit count read off a drawing
    position: Optional[str] = None

    class Config:
        frozen = True


class SteelItem(BaseModel):
    id: Optional[str] = None
    type: ElementType = ElementType.UPPER_BEAM
    observation: Optional[str] = None
    quantity: int = Field(default=1, ge=1)
    length: float = 1.0               # m
    width: Optional[float] = None     # m
    height: Optional[float] = None    # m
    bars: Tuple[BarGroup, ...] = ()
    stirrups: StirrupConfig = StirrupConfig()
    supports: Tuple[Support, ...] = ()
    start_gap: float = 0.0            # cm
    end_gap: float = 0.0              # cm

    class Config:
        frozen = True

    @property
    def is_configured(self) -> bool:
        return len(self.bars) > 0


class GridPoint(BaseModel):
    id: int
    x: float
    y: float

    class Config:
        frozen = True


# --- API request bodies ---

class ImportRequest(BaseModel):
    text: str
    apply_unit_heuristics: bool = True


class NormalizeRequest(BaseModel):
    items: List[dict]
    apply_unit_heuristics: bool = True


class SummaryRequest(BaseModel):
    items: List[SteelItem]
    kg_price: Optional[float] = None


class AssignPointsRequest(BaseModel):
    item: SteelItem
    bar_index: int
    point_ids: List[int]
