from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional

from .units import Percent, Quantity

ItemId = Hashable


@dataclass(frozen=True)
class Carton:
    """One physical box of one item."""

    item_id: ItemId
    quantity: Quantity
    package_id: Optional[str] = None
    content_id: Optional[str] = None


@dataclass(frozen=True)
class ItemCapacity:
    """Per-item packing limits derived from units per pallet."""

    item_id: ItemId
    units_per_pallet: Quantity
    carton_quantity: Quantity
    max_cartons_per_pallet: int
    percent_per_carton: Percent


@dataclass
class ItemSummary:
    item_id: ItemId
    quantity: Quantity = 0.0
    cartons: int = 0


@dataclass
class Pallet:
    """A bin of cartons, possibly of mixed items."""

    cartons: List[Carton] = field(default_factory=list)
    item_counts: Dict[ItemId, int] = field(default_factory=dict)
    usage: Percent = 0.0

    def count_of(self, item_id: ItemId) -> int:
        return self.item_counts.get(item_id, 0)

    def has_room(self, capacity: ItemCapacity, limit: Percent, eps: float) -> bool:
        """Both the item's carton cap and the pallet budget must allow one more carton."""
        if self.count_of(capacity.item_id) >= capacity.max_cartons_per_pallet:
            return False
        return self.usage + capacity.percent_per_carton <= limit + eps

    def place(self, carton: Carton, capacity: ItemCapacity) -> None:
        self.cartons.append(carton)
        self.item_counts[carton.item_id] = self.count_of(carton.item_id) + 1
        self.usage += capacity.percent_per_carton

    @property
    def total_cartons(self) -> int:
        return len(self.cartons)

    @property
    def items(self) -> List[ItemSummary]:
        summaries: Dict[ItemId, ItemSummary] = {}
        for carton in self.cartons:
            summary = summaries.setdefault(carton.item_id, ItemSummary(carton.item_id))
            summary.quantity += carton.quantity
            summary.cartons += 1
        return list(summaries.values())

    @property
    def package_ids(self) -> List[Optional[str]]:
        return [carton.package_id for carton in self.cartons]

    @property
    def content_ids(self) -> List[Optional[str]]:
        return [carton.content_id for carton in self.cartons]
