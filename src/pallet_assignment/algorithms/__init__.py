from typing import Callable, Dict, List, Optional

from pallet_assignment.models import ItemCapacity, Pallet

from .best_fit import best_fit
from .first_fit import first_fit

PlacementRule = Callable[[List[Pallet], ItemCapacity, float, float], Optional[int]]

PLACEMENT_RULES: Dict[str, PlacementRule] = {
    "first_fit": first_fit,
    "best_fit": best_fit,
}


def placement_rule(name: str) -> PlacementRule:
    try:
        return PLACEMENT_RULES[name]
    except KeyError:
        known = ", ".join(sorted(PLACEMENT_RULES))
        raise ValueError(f"unknown packing strategy {name!r} (known: {known})") from None


__all__ = [
    "PLACEMENT_RULES",
    "PlacementRule",
    "best_fit",
    "first_fit",
    "placement_rule",
]
