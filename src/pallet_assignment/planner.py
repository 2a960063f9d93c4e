from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .assignments import (
    append_population_note,
    item_rows,
    pallet_assignment,
    pallet_notes,
    pallet_package_json,
)
from .models import Carton, ItemId, Pallet
from .packer import pack_with_capacities
from .policy import DEFAULT_PACKING_POLICY, PackingPolicy
from .sanity import assignment_flags
from .validation import (
    RejectedCarton,
    clean_units_per_pallet,
    missing_capacity_items,
    sanitize_cartons,
)

logger = logging.getLogger(__name__)


@dataclass
class Shipment:
    """Cartons of one fulfillment plus the item data needed to palletize them."""

    shipment_id: str
    cartons: List[Carton]
    units_per_pallet: Dict[ItemId, Any] = field(default_factory=dict)
    tran_id: str = ""
    item_vpn: Dict[ItemId, str] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return self.tran_id or str(self.shipment_id)


@dataclass
class ShipmentPlan:
    shipment: Shipment
    pallets: List[Pallet]
    rejected: List[RejectedCarton] = field(default_factory=list)
    missing_items: List[ItemId] = field(default_factory=list)
    flags: set = field(default_factory=set)

    @property
    def total_pallets(self) -> int:
        return len(self.pallets)

    def assignments(self) -> List[Dict[str, Any]]:
        """Pallet assignments stamped with shipment data, numbered from 1 per shipment."""
        stamped = []
        for number, pallet in enumerate(self.pallets, start=1):
            payload = pallet_assignment(pallet)
            payload["items"] = item_rows(pallet, self.shipment.item_vpn)
            payload.update(
                {
                    "shipmentId": self.shipment.shipment_id,
                    "tranId": self.shipment.label,
                    "palletNumber": number,
                    "totalPallets": self.total_pallets,
                    "packageJson": pallet_package_json(pallet, self.shipment.item_vpn),
                }
            )
            stamped.append(payload)
        return stamped

    def notes(self, populated: Optional[int] = None) -> str:
        notes = pallet_notes(self.total_pallets)
        if populated is not None:
            notes = append_population_note(notes, populated)
        return notes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shipmentId": self.shipment.shipment_id,
            "tranId": self.shipment.label,
            "totalPallets": self.total_pallets,
            "palletAssignments": self.assignments(),
            "missingCapacity": list(self.missing_items),
            "rejectedCartons": [
                {"packageId": r.carton.package_id, "itemId": r.carton.item_id, "reason": r.reason}
                for r in self.rejected
            ],
            "flags": sorted(self.flags),
            "notes": self.notes(),
        }


def plan_shipment(shipment: Shipment, policy: Optional[PackingPolicy] = None) -> ShipmentPlan:
    if policy is None:
        policy = DEFAULT_PACKING_POLICY
    cartons, rejected = sanitize_cartons(shipment.cartons)
    units_per_pallet = clean_units_per_pallet(shipment.units_per_pallet)
    missing = missing_capacity_items(cartons, units_per_pallet)

    pallets, capacities = pack_with_capacities(cartons, units_per_pallet, policy=policy)
    flags = assignment_flags(cartons, pallets, capacities, policy)
    if flags:
        logger.error("Shipment %s: pallet assignment flags %s", shipment.label, sorted(flags))

    logger.info(
        "Shipment %s: %d carton(s) on %d pallet(s)",
        shipment.label,
        len(cartons),
        len(pallets),
    )
    return ShipmentPlan(
        shipment=shipment,
        pallets=pallets,
        rejected=rejected,
        missing_items=missing,
        flags=flags,
    )


def _plan_or_none(shipment: Shipment, policy: PackingPolicy) -> Optional[ShipmentPlan]:
    try:
        return plan_shipment(shipment, policy)
    except Exception:
        logger.exception("Failed to plan pallets for shipment %s", shipment.label)
        return None


def plan_shipments(
    shipments: Iterable[Shipment], policy: Optional[PackingPolicy] = None
) -> List[ShipmentPlan]:
    """Plan each shipment independently; shipments that fail are logged and left out."""
    if policy is None:
        policy = DEFAULT_PACKING_POLICY
    shipments = list(shipments)
    if policy.max_workers > 1 and len(shipments) > 1:
        with ThreadPoolExecutor(max_workers=policy.max_workers) as executor:
            results = list(executor.map(lambda s: _plan_or_none(s, policy), shipments))
    else:
        results = [_plan_or_none(shipment, policy) for shipment in shipments]
    return [plan for plan in results if plan is not None]
