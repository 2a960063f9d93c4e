"""Carton-to-pallet assignment.

Cartons are grouped by item and the items are placed hardest first: the item
needing the largest share of pallet capacity in total goes first. Each carton
then lands on an existing pallet chosen by the placement rule, or opens a new
pallet when none has room. A pallet has room for a carton only when the
item's own carton cap and the pallet's percentage budget both allow it.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .algorithms import placement_rule
from .assignments import usage_report
from .capacity import derive_capacities, group_by_item, total_percent
from .models import Carton, ItemCapacity, ItemId, Pallet
from .policy import DEFAULT_PACKING_POLICY, PackingPolicy
from .units import Quantity

logger = logging.getLogger(__name__)


def order_items(
    groups: Mapping[ItemId, List[Carton]], capacities: Mapping[ItemId, ItemCapacity]
) -> List[ItemId]:
    """Items by descending total percent demand, ties in grouping order."""
    return sorted(
        groups,
        key=lambda item_id: -total_percent(groups[item_id], capacities[item_id]),
    )


def _pack(
    cartons: Sequence[Carton],
    item_capacity: Mapping[ItemId, Quantity],
    policy: PackingPolicy,
) -> Tuple[List[Pallet], Dict[ItemId, ItemCapacity]]:
    groups = group_by_item(cartons)
    capacities = derive_capacities(groups, item_capacity, policy.capacity_percent)
    choose = placement_rule(policy.strategy)

    pallets: List[Pallet] = []
    for item_id in order_items(groups, capacities):
        capacity = capacities[item_id]
        for carton in groups[item_id]:
            index = choose(pallets, capacity, policy.capacity_percent, policy.eps)
            if index is None:
                pallet = Pallet()
                pallets.append(pallet)
            else:
                pallet = pallets[index]
            pallet.place(carton, capacity)

    if logger.isEnabledFor(logging.DEBUG):
        for line in usage_report(pallets):
            logger.debug(line)
    return pallets, capacities


def pack(
    cartons: Sequence[Carton],
    item_capacity: Mapping[ItemId, Quantity],
    *,
    policy: Optional[PackingPolicy] = None,
) -> List[Pallet]:
    """Assign every carton to exactly one pallet.

    ``item_capacity`` maps item ids to units per pallet; items without an
    entry get one carton per pallet. Pallets are returned in creation order.
    """
    pallets, _ = _pack(cartons, item_capacity, policy or DEFAULT_PACKING_POLICY)
    return pallets


def pack_with_capacities(
    cartons: Sequence[Carton],
    item_capacity: Mapping[ItemId, Quantity],
    *,
    policy: Optional[PackingPolicy] = None,
) -> Tuple[List[Pallet], Dict[ItemId, ItemCapacity]]:
    """Like :func:`pack` but also return the derived per-item capacities."""
    return _pack(cartons, item_capacity, policy or DEFAULT_PACKING_POLICY)
