from .cache import clear_item_master_cache
from .item_master_repo import load_item_vpns, load_units_per_pallet
from .paths import data_dir, item_master_xml_path

__all__ = [
    "clear_item_master_cache",
    "data_dir",
    "item_master_xml_path",
    "load_item_vpns",
    "load_units_per_pallet",
]
