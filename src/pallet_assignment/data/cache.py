def clear_item_master_cache() -> None:
    from .item_master_repo import load_item_vpns, load_units_per_pallet

    load_units_per_pallet.cache_clear()
    load_item_vpns.cache_clear()
