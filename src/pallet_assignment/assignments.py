"""JSON-ready payloads describing packed pallets."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from .models import ItemId, Pallet
from .units import format_percent


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def item_rows(pallet: Pallet, item_vpn: Optional[Mapping[ItemId, str]] = None) -> List[Dict[str, Any]]:
    rows = []
    for summary in pallet.items:
        row: Dict[str, Any] = {
            "itemId": summary.item_id,
            "quantity": summary.quantity,
            "cartons": summary.cartons,
        }
        if item_vpn is not None:
            row["vpn"] = item_vpn.get(summary.item_id, "")
        rows.append(row)
    return rows


def pallet_assignment(pallet: Pallet) -> Dict[str, Any]:
    """Assignment of one pallet; ``palletId`` is filled in once the pallet record exists."""
    return {
        "palletId": None,
        "packageIds": pallet.package_ids,
        "contentIds": pallet.content_ids,
        "usage": pallet.usage,
        "items": item_rows(pallet),
        "totalCartons": pallet.total_cartons,
    }


def pallet_package_json(pallet: Pallet, item_vpn: Mapping[ItemId, str]) -> Dict[str, Any]:
    """Item contents of a pallet with vendor part numbers, as sent with the ASN."""
    return {
        "items": item_rows(pallet, item_vpn),
        "totalCartons": pallet.total_cartons,
    }


def pallet_notes(count: int) -> str:
    return f"{_plural(count, 'pallet')} created. Finished pallet creation"


def append_population_note(current: str, populated: int) -> str:
    note = f"populated {_plural(populated, 'pallet')}"
    if current:
        return f"{current}. {note}"
    return note


def usage_report(pallets: Sequence[Pallet]) -> List[str]:
    return [
        f"Pallet {number}: usage {format_percent(pallet.usage)} | cartons {pallet.total_cartons}"
        for number, pallet in enumerate(pallets, start=1)
    ]
