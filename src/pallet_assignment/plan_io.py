from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .models import Carton
from .planner import Shipment, ShipmentPlan


def get_plan_dir() -> str:
    env_dir = os.getenv("PALLET_PLAN_DIR")
    if env_dir:
        return str(Path(env_dir).expanduser().resolve())
    return str((Path.cwd() / "data" / "pallet_plans").resolve())


def ensure_plan_dir() -> str:
    path = Path(get_plan_dir())
    path.mkdir(parents=True, exist_ok=True)
    return str(path)


def _plan_path(name: str) -> str:
    return str(Path(get_plan_dir()) / f"{name}.json")


def list_plans() -> list[str]:
    """Return saved plan names."""
    path = ensure_plan_dir()
    files = [f[:-5] for f in os.listdir(path) if f.endswith(".json")]
    files.sort()
    return files


def load_plan(name: str) -> Any:
    with open(_plan_path(name), "r", encoding="utf-8") as f:
        return json.load(f)


def save_plan(name: str, payload: Any) -> str:
    ensure_plan_dir()
    path = _plan_path(name)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    return path


def _item_key(value: Any) -> Any:
    """Item ids as strings, the form JSON object keys take."""
    if value is None:
        return None
    return str(value)


def _by_item(mapping: Dict[Any, Any]) -> Dict[str, Any]:
    return {_item_key(item_id): value for item_id, value in mapping.items()}


def carton_from_dict(data: Dict[str, Any]) -> Carton:
    return Carton(
        item_id=_item_key(data.get("itemId")),
        quantity=data.get("quantity", data.get("packageQty")),
        package_id=data.get("packageId"),
        content_id=data.get("contentId"),
    )


def shipment_from_dict(data: Dict[str, Any]) -> Shipment:
    shipment_id = data.get("shipmentId", data.get("ifId"))
    if shipment_id is None:
        raise ValueError(f"Shipment without shipmentId: {sorted(data)}")
    return Shipment(
        shipment_id=str(shipment_id),
        cartons=[carton_from_dict(c) for c in data.get("cartons", data.get("packages", []))],
        units_per_pallet=_by_item(data.get("unitsPerPallet", data.get("itemUPP", {}))),
        tran_id=str(data.get("tranId", data.get("ifTranId", "")) or ""),
        item_vpn=_by_item(data.get("itemVpn", data.get("itemVpnMap", {}))),
    )


def shipments_from_payload(payload: Any) -> List[Shipment]:
    """Accept a shipment object, a list, or a ``shipments``/``jobs`` wrapper."""
    if isinstance(payload, list):
        entries = payload
    elif isinstance(payload, dict) and "shipments" in payload:
        entries = payload["shipments"]
    elif isinstance(payload, dict) and "jobs" in payload:
        entries = payload["jobs"]
    elif isinstance(payload, dict):
        entries = [payload]
    else:
        raise ValueError(f"Unsupported shipment payload type: {type(payload).__name__}")
    return [shipment_from_dict(entry) for entry in entries]


def load_shipments(path: str) -> List[Shipment]:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Shipment file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in shipment file {path}: {e}") from e
    return shipments_from_payload(payload)


def plans_payload(plans: Iterable[ShipmentPlan]) -> Dict[str, Any]:
    return {"shipments": [plan.to_dict() for plan in plans]}


__all__ = [
    "get_plan_dir",
    "ensure_plan_dir",
    "list_plans",
    "load_plan",
    "save_plan",
    "carton_from_dict",
    "shipment_from_dict",
    "shipments_from_payload",
    "load_shipments",
    "plans_payload",
]
