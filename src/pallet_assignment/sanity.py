from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Mapping, Optional, Sequence

from .models import Carton, ItemCapacity, ItemId, Pallet
from .policy import DEFAULT_PACKING_POLICY, PackingPolicy

LOST_CARTON = "lost_carton"
DUPLICATE_CARTON = "duplicate_carton"
ITEM_CAP_EXCEEDED = "item_cap_exceeded"
OVER_CAPACITY = "over_capacity"
EMPTY_PALLET = "empty_pallet"
COUNT_MISMATCH = "item_count_mismatch"


def carton_multiset(pallets: Iterable[Pallet]) -> Counter:
    placed: Counter = Counter()
    for pallet in pallets:
        placed.update(pallet.cartons)
    return placed


def over_capacity_pallets(
    pallets: Sequence[Pallet], policy: Optional[PackingPolicy] = None
) -> List[int]:
    if policy is None:
        policy = DEFAULT_PACKING_POLICY
    limit = policy.capacity_percent + policy.eps
    return [idx for idx, pallet in enumerate(pallets) if pallet.usage > limit]


def item_cap_violations(
    pallets: Sequence[Pallet], capacities: Mapping[ItemId, ItemCapacity]
) -> List[tuple]:
    """(pallet index, item id) pairs where an item exceeds its carton cap."""
    violations = []
    for idx, pallet in enumerate(pallets):
        for item_id, count in pallet.item_counts.items():
            capacity = capacities.get(item_id)
            max_cpp = capacity.max_cartons_per_pallet if capacity else 1
            if count > max_cpp:
                violations.append((idx, item_id))
    return violations


def assignment_flags(
    cartons: Sequence[Carton],
    pallets: Sequence[Pallet],
    capacities: Mapping[ItemId, ItemCapacity],
    policy: Optional[PackingPolicy] = None,
) -> set[str]:
    flags: set[str] = set()

    expected = Counter(cartons)
    placed = carton_multiset(pallets)
    if expected - placed:
        flags.add(LOST_CARTON)
    if placed - expected:
        flags.add(DUPLICATE_CARTON)

    if item_cap_violations(pallets, capacities):
        flags.add(ITEM_CAP_EXCEEDED)
    if over_capacity_pallets(pallets, policy):
        flags.add(OVER_CAPACITY)

    for pallet in pallets:
        if not pallet.cartons:
            flags.add(EMPTY_PALLET)
        if Counter(carton.item_id for carton in pallet.cartons) != Counter(pallet.item_counts):
            flags.add(COUNT_MISMATCH)

    return flags


def is_sane(
    cartons: Sequence[Carton],
    pallets: Sequence[Pallet],
    capacities: Mapping[ItemId, ItemCapacity],
    policy: Optional[PackingPolicy] = None,
) -> bool:
    return not assignment_flags(cartons, pallets, capacities, policy)
