from __future__ import annotations

from typing import List, Optional

from pallet_assignment.models import ItemCapacity, Pallet


def best_fit(
    pallets: List[Pallet], capacity: ItemCapacity, limit: float, eps: float
) -> Optional[int]:
    """Index of the fullest pallet that can still take the carton.

    Ties go to the pallet created first.
    """
    best_index: Optional[int] = None
    best_usage = float("-inf")
    for index, pallet in enumerate(pallets):
        if not pallet.has_room(capacity, limit, eps):
            continue
        if pallet.usage > best_usage + eps:
            best_index = index
            best_usage = pallet.usage
    return best_index
