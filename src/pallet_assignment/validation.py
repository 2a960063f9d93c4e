"""Input checks that run before packing.

The packer trusts its input, so malformed cartons are logged and skipped
here and capacity gaps are reported as warnings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from .models import Carton, ItemId
from .units import parse_quantity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RejectedCarton:
    carton: Carton
    reason: str


def check_carton(carton: Carton) -> Tuple[Carton | None, str]:
    """Return the carton with a numeric quantity, or ``None`` and a reason."""
    if carton.item_id is None or carton.item_id == "":
        return None, "missing item id"
    try:
        quantity = parse_quantity(carton.quantity)
    except (TypeError, ValueError):
        return None, f"invalid quantity {carton.quantity!r}"
    if quantity <= 0:
        return None, f"non-positive quantity {carton.quantity!r}"
    if quantity != carton.quantity:
        carton = replace(carton, quantity=quantity)
    return carton, ""


def sanitize_cartons(cartons: Iterable[Carton]) -> Tuple[List[Carton], List[RejectedCarton]]:
    accepted: List[Carton] = []
    rejected: List[RejectedCarton] = []
    for carton in cartons:
        checked, reason = check_carton(carton)
        if checked is None:
            logger.warning(
                "Skipping carton %s (item %s): %s",
                carton.package_id or "?",
                carton.item_id,
                reason,
            )
            rejected.append(RejectedCarton(carton, reason))
        else:
            accepted.append(checked)
    return accepted, rejected


def clean_units_per_pallet(mapping: Mapping[ItemId, Any]) -> Dict[ItemId, float]:
    """Drop units-per-pallet entries that are not finite non-negative numbers."""
    cleaned: Dict[ItemId, float] = {}
    for item_id, value in mapping.items():
        if value is None or value == "":
            continue
        try:
            upp = parse_quantity(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring units per pallet %r for item %s", value, item_id)
            continue
        if upp < 0:
            logger.warning("Ignoring units per pallet %r for item %s", value, item_id)
            continue
        cleaned[item_id] = upp
    return cleaned


def missing_capacity_items(
    cartons: Iterable[Carton], units_per_pallet: Mapping[ItemId, float]
) -> List[ItemId]:
    """Items packed one carton per pallet because they have no units per pallet."""
    missing: List[ItemId] = []
    for carton in cartons:
        if carton.item_id in missing:
            continue
        if not units_per_pallet.get(carton.item_id):
            missing.append(carton.item_id)
    for item_id in missing:
        logger.warning(
            "Item %s has no units per pallet; packing one carton per pallet", item_id
        )
    return missing
