"""
Takeoff API: the engine's three function families over HTTP.

POST /api/takeoff/normalize      raw element records → canonical elements
POST /api/takeoff/import         drawing reader output text → canonical elements
POST /api/takeoff/quantify       one element → quantities per bar group + stirrups
POST /api/takeoff/summary        quote elements → totals per gauge, weight, price
GET  /api/takeoff/grid-points    ordered attachment points for a section
POST /api/takeoff/occupancy      occupied point ids and conflicts of an element
POST /api/takeoff/assign-points  place a bar group on grid points
"""

from fastapi import APIRouter, HTTPException

from ..calculators.shapes import grid_points, perimeter, resolve_model
from ..calculators.takeoff import quantify, summarize_quote
from ..normalizer import normalize_many, import_extraction
from ..placement import (
    occupancy, find_conflicts, assign_points,
    PlacementConflictError, UnknownPointError, PlacementError,
)
from ..schemas import (
    SteelItem, ImportRequest, NormalizeRequest, SummaryRequest, AssignPointsRequest,
)

router = APIRouter(prefix="/takeoff", tags=["takeoff"])


@router.post("/normalize")
def normalize_items(request: NormalizeRequest):
    items = normalize_many(request.items, apply_unit_heuristics=request.apply_unit_heuristics)
    return {"items": [item.model_dump(mode="json") for item in items]}


@router.post("/import")
def import_items(request: ImportRequest):
    items = import_extraction(request.text, apply_unit_heuristics=request.apply_unit_heuristics)
    if not items:
        raise HTTPException(status_code=422, detail="No element records found in reader output")
    return {"items": [item.model_dump(mode="json") for item in items]}


@router.post("/quantify")
def quantify_item(item: SteelItem):
    return quantify(item)


@router.post("/summary")
def quote_summary(request: SummaryRequest):
    return summarize_quote(request.items, kg_price=request.kg_price)


@router.get("/grid-points")
def section_grid_points(model: str = "rect", width: float = 15.0, height: float = 25.0):
    points = grid_points(model, width, height)
    return {
        "model": resolve_model(model).value,
        "cut_length_cm": round(perimeter(model, width, height), 2),
        "points": [p.model_dump() for p in points],
    }


@router.post("/occupancy")
def item_occupancy(item: SteelItem):
    return {
        "occupied": sorted(occupancy(item)),
        "conflicts": {str(pid): idx for pid, idx in find_conflicts(item).items()},
    }


@router.post("/assign-points")
def assign_bar_points(request: AssignPointsRequest):
    try:
        item = assign_points(request.item, request.bar_index, request.point_ids)
    except PlacementConflictError as e:
        raise HTTPException(status_code=409, detail={"message": str(e), "point_ids": e.point_ids})
    except UnknownPointError as e:
        raise HTTPException(status_code=422, detail={"message": str(e), "point_ids": e.point_ids})
    except PlacementError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"item": item.model_dump(mode="json"), "occupied": sorted(occupancy(item))}
