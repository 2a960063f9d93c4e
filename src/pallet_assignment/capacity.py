from __future__ import annotations

import math
from typing import Dict, Iterable, List, Mapping

from .models import Carton, ItemCapacity, ItemId
from .units import FULL_PALLET, Percent, Quantity


def max_cartons_per_pallet(units_per_pallet: Quantity, carton_quantity: Quantity) -> int:
    if units_per_pallet <= 0:
        return 1
    return max(1, math.floor(units_per_pallet / carton_quantity))


def item_capacity(
    item_id: ItemId,
    units_per_pallet: Quantity,
    carton_quantity: Quantity,
    capacity_percent: Percent = FULL_PALLET,
) -> ItemCapacity:
    max_cpp = max_cartons_per_pallet(units_per_pallet, carton_quantity)
    return ItemCapacity(
        item_id=item_id,
        units_per_pallet=units_per_pallet,
        carton_quantity=carton_quantity,
        max_cartons_per_pallet=max_cpp,
        percent_per_carton=capacity_percent / max_cpp,
    )


def group_by_item(cartons: Iterable[Carton]) -> Dict[ItemId, List[Carton]]:
    """Group cartons by item, keeping first-seen item order and carton order."""
    groups: Dict[ItemId, List[Carton]] = {}
    for carton in cartons:
        groups.setdefault(carton.item_id, []).append(carton)
    return groups


def derive_capacities(
    groups: Mapping[ItemId, List[Carton]],
    units_per_pallet: Mapping[ItemId, Quantity],
    capacity_percent: Percent = FULL_PALLET,
) -> Dict[ItemId, ItemCapacity]:
    """Capacity per item group.

    The first carton of each group stands in for the whole item: an item
    shipped in cartons of different sizes is sized by the first one seen.
    """
    capacities: Dict[ItemId, ItemCapacity] = {}
    for item_id, cartons in groups.items():
        capacities[item_id] = item_capacity(
            item_id,
            units_per_pallet.get(item_id, 0) or 0,
            cartons[0].quantity,
            capacity_percent,
        )
    return capacities


def total_percent(cartons: List[Carton], capacity: ItemCapacity) -> Percent:
    return len(cartons) * capacity.percent_per_carton


def pallet_lower_bound(
    groups: Mapping[ItemId, List[Carton]],
    capacities: Mapping[ItemId, ItemCapacity],
    capacity_percent: Percent = FULL_PALLET,
    eps: float = 1e-6,
) -> int:
    """Fewest pallets any packing could use.

    The larger of the most constrained item's own pallet count and the total
    percent demand spread over full pallets.
    """
    if not groups:
        return 0
    by_item = max(
        math.ceil(len(cartons) / capacities[item_id].max_cartons_per_pallet)
        for item_id, cartons in groups.items()
    )
    demand = sum(total_percent(cartons, capacities[item_id]) for item_id, cartons in groups.items())
    by_demand = math.ceil(demand / capacity_percent - eps)
    return max(by_item, by_demand)
