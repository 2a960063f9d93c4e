import pytest

from pallet_assignment.assignments import (
    append_population_note,
    pallet_assignment,
    pallet_notes,
    pallet_package_json,
    usage_report,
)
from pallet_assignment.models import Carton
from pallet_assignment.packer import pack


def _pallets():
    cartons = [
        Carton("A", 10, package_id="p1", content_id="c1"),
        Carton("B", 5, package_id="p2", content_id="c2"),
        Carton("A", 10, package_id="p3", content_id="c3"),
    ]
    return pack(cartons, {"A": 40, "B": 20})


def test_pallet_assignment_payload():
    (pallet,) = _pallets()

    payload = pallet_assignment(pallet)

    assert payload["palletId"] is None
    assert payload["packageIds"] == ["p1", "p3", "p2"]
    assert payload["contentIds"] == ["c1", "c3", "c2"]
    assert payload["usage"] == pytest.approx(75.0)
    assert payload["items"] == [
        {"itemId": "A", "quantity": 20, "cartons": 2},
        {"itemId": "B", "quantity": 5, "cartons": 1},
    ]
    assert payload["totalCartons"] == 3


def test_package_json_adds_vpn():
    (pallet,) = _pallets()

    payload = pallet_package_json(pallet, {"A": "VPN-A"})

    assert payload["items"][0]["vpn"] == "VPN-A"
    assert payload["items"][1]["vpn"] == ""
    assert payload["totalCartons"] == 3


def test_notes_pluralize():
    assert pallet_notes(1) == "1 pallet created. Finished pallet creation"
    assert pallet_notes(3) == "3 pallets created. Finished pallet creation"


def test_append_population_note():
    assert append_population_note("", 1) == "populated 1 pallet"
    assert (
        append_population_note("2 pallets created", 2)
        == "2 pallets created. populated 2 pallets"
    )


def test_usage_report_lines():
    assert usage_report(_pallets()) == ["Pallet 1: usage 75.00% | cartons 3"]
