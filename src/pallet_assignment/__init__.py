"""Carton-to-pallet assignment helpers."""

from .capacity import derive_capacities, group_by_item, item_capacity, pallet_lower_bound
from .models import Carton, ItemCapacity, ItemSummary, Pallet
from .packer import pack, pack_with_capacities
from .planner import Shipment, ShipmentPlan, plan_shipment, plan_shipments
from .policy import DEFAULT_PACKING_POLICY, PackingPolicy, load_policy
from .sanity import assignment_flags, is_sane
from .validation import RejectedCarton, missing_capacity_items, sanitize_cartons

__all__ = [
    "Carton",
    "ItemCapacity",
    "ItemSummary",
    "Pallet",
    "pack",
    "pack_with_capacities",
    "item_capacity",
    "derive_capacities",
    "group_by_item",
    "pallet_lower_bound",
    "PackingPolicy",
    "DEFAULT_PACKING_POLICY",
    "load_policy",
    "assignment_flags",
    "is_sane",
    "RejectedCarton",
    "sanitize_cartons",
    "missing_capacity_items",
    "Shipment",
    "ShipmentPlan",
    "plan_shipment",
    "plan_shipments",
]
