from __future__ import annotations

from typing import List, Optional

from pallet_assignment.models import ItemCapacity, Pallet


def first_fit(
    pallets: List[Pallet], capacity: ItemCapacity, limit: float, eps: float
) -> Optional[int]:
    """Index of the earliest pallet that can take one more carton of the item."""
    for index, pallet in enumerate(pallets):
        if pallet.has_room(capacity, limit, eps):
            return index
    return None
