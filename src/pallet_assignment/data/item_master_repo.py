import os
import xml.etree.ElementTree as ET
from functools import lru_cache
from typing import Dict, Optional

from pallet_assignment.units import parse_quantity

from .paths import item_master_xml_path


def _load_xml(path: str) -> ET.Element:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Item master file not found: {path}")
    try:
        tree = ET.parse(path)
        return tree.getroot()
    except ET.ParseError as e:
        raise ValueError(f"Invalid XML in item master file {path}: {e}")


@lru_cache(maxsize=None)
def load_units_per_pallet(path: Optional[str] = None, location: Optional[str] = None) -> Dict[str, float]:
    """Return units per pallet by item id.

    Rows for ``location`` override rows without a location; rows for other
    locations are ignored.
    """
    root = _load_xml(path or item_master_xml_path())
    defaults: Dict[str, float] = {}
    located: Dict[str, float] = {}
    for item in root.findall("item"):
        item_id = item.get("id")
        raw_upp = item.get("upp")
        if not item_id or raw_upp is None:
            continue
        try:
            upp = parse_quantity(raw_upp)
        except ValueError as e:
            raise ValueError(f"Invalid item master row '{item.attrib}': {e}")
        item_location = item.get("location")
        if not item_location:
            defaults[item_id] = upp
        elif location is not None and item_location == str(location):
            located[item_id] = upp
    defaults.update(located)
    return defaults


@lru_cache(maxsize=None)
def load_item_vpns(path: Optional[str] = None) -> Dict[str, str]:
    """Return vendor part numbers {item id: vpn}."""
    root = _load_xml(path or item_master_xml_path())
    vpns = {}
    for item in root.findall("item"):
        item_id = item.get("id")
        vpn = item.get("vpn")
        if item_id and vpn:
            vpns[item_id] = vpn
    return vpns
