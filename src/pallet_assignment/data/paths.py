import os

DATA_DIR = os.path.join(os.path.dirname(__file__))


def data_dir() -> str:
    return os.getenv("PALLET_ASSIGNMENT_DATA_DIR") or DATA_DIR


def item_master_xml_path() -> str:
    return os.path.join(data_dir(), "items.xml")
