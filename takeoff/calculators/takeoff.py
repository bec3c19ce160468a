"""
Element and quote takeoff.

quantify(item) is the entry point the UI and exports call on every read:
it reconciles the element's extent, measures each bar group and the
transverse reinforcement, and totals them. Nothing is cached or stored on
the element; callers re-run it whenever the element changes.
"""

import logging
from typing import Iterable, List

from .bar_group import BarGroupQuantifier
from .extent import effective_length_cm, reconcile
from .registry import get_stirrup_quantifier
from ..config import settings
from ..placement import conflict_messages
from ..schemas import SteelItem
from ..weights import stock_bars, price_from_weight

logger = logging.getLogger(__name__)


def quantify(item: SteelItem) -> dict:
    """
    Takeoff for one element.

    Returns:
        {element_id, element_type, quantity, effective_length_m,
         per_bar_group: [line...], stirrups: {...},
         total_linear_m, total_weight_kg, warnings: [str]}
    """
    item = reconcile(item)
    warnings: List[str] = conflict_messages(item)
    length_cm = effective_length_cm(item)

    bar_calc = BarGroupQuantifier()
    per_bar_group = [
        bar_calc.quantify(item, bar, index=i, warnings=warnings)
        for i, bar in enumerate(item.bars)
    ]

    stirrups = get_stirrup_quantifier(item.type).quantify(
        item, length_cm=length_cm, warnings=warnings)

    total_linear_m = sum(line["total_linear_m"] for line in per_bar_group) + stirrups["total_linear_m"]
    total_weight_kg = sum(line["total_weight_kg"] for line in per_bar_group) + stirrups["total_weight_kg"]

    return {
        "element_id": item.id,
        "element_type": item.type.value,
        "observation": item.observation,
        "quantity": item.quantity,
        "effective_length_m": round(length_cm / 100.0, 4),
        "per_bar_group": per_bar_group,
        "stirrups": stirrups,
        "total_linear_m": round(total_linear_m, 3),
        "total_weight_kg": round(total_weight_kg, 3),
        "warnings": warnings,
    }


def quantify_many(items: Iterable[SteelItem]) -> List[dict]:
    """Each element is independent; order of the results follows the input."""
    return [quantify(item) for item in items]


def _stirrup_lines(stirrups: dict) -> List[dict]:
    if stirrups["mode"] == "cage":
        return stirrups["families"]
    if stirrups["mode"] == "stirrup":
        return [stirrups]
    return []


def summarize_quote(items: Iterable[SteelItem], kg_price: float = None) -> dict:
    """
    Consolidate a quote by gauge: meters, kilograms and 12 m stock bars.

    Returns:
        {by_gauge: [{gauge, total_linear_m, total_weight_kg, stock_bars}],
         elements: [quantify() result...], total_weight_kg, total_price, warnings}
    """
    if kg_price is None:
        kg_price = settings.KG_PRICE_DEFAULT

    results = quantify_many(items)
    by_gauge: dict = {}
    warnings: List[str] = []

    for result in results:
        for message in result["warnings"]:
            if message not in warnings:
                warnings.append(message)
        for line in result["per_bar_group"] + _stirrup_lines(result["stirrups"]):
            entry = by_gauge.setdefault(line["gauge"], {
                "gauge": line["gauge"],
                "total_linear_m": 0.0,
                "total_weight_kg": 0.0,
            })
            entry["total_linear_m"] += line["total_linear_m"]
            entry["total_weight_kg"] += line["total_weight_kg"]

    consolidated = []
    for gauge in sorted(by_gauge, key=_gauge_sort_key):
        entry = by_gauge[gauge]
        consolidated.append({
            "gauge": gauge,
            "total_linear_m": round(entry["total_linear_m"], 3),
            "total_weight_kg": round(entry["total_weight_kg"], 3),
            "stock_bars": stock_bars(entry["total_linear_m"], settings.STOCK_BAR_LENGTH_M),
        })

    total_weight_kg = round(sum(r["total_weight_kg"] for r in results), 3)
    logger.info("Quote summary: %d elements, %.1f kg", len(results), total_weight_kg)
    return {
        "by_gauge": consolidated,
        "elements": results,
        "total_weight_kg": total_weight_kg,
        "kg_price": kg_price,
        "total_price": price_from_weight(total_weight_kg, kg_price),
        "warnings": warnings,
    }


def _gauge_sort_key(gauge: str):
    try:
        return (0, float(gauge), gauge)
    except ValueError:
        return (1, 0.0, gauge)
