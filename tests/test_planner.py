import logging

from pallet_assignment.models import Carton
from pallet_assignment.planner import Shipment, plan_shipment, plan_shipments
from pallet_assignment.policy import PackingPolicy


def make_shipment(shipment_id="IF1", **kwargs):
    cartons = kwargs.pop(
        "cartons",
        [Carton("A", 6, package_id=f"p{i}", content_id=f"c{i}") for i in range(5)],
    )
    return Shipment(
        shipment_id=shipment_id,
        cartons=cartons,
        units_per_pallet=kwargs.pop("units_per_pallet", {"A": 24}),
        tran_id=kwargs.pop("tran_id", f"IF-{shipment_id}"),
        item_vpn=kwargs.pop("item_vpn", {"A": "VPN-A"}),
    )


def test_plan_shipment_numbers_pallets_per_shipment():
    plan = plan_shipment(make_shipment())

    assignments = plan.assignments()

    assert plan.total_pallets == 2
    assert [a["palletNumber"] for a in assignments] == [1, 2]
    assert all(a["totalPallets"] == 2 for a in assignments)
    assert all(a["tranId"] == "IF-IF1" for a in assignments)
    assert assignments[0]["items"] == [
        {"itemId": "A", "quantity": 24, "cartons": 4, "vpn": "VPN-A"}
    ]
    assert assignments[1]["packageIds"] == ["p4"]
    assert plan.flags == set()


def test_plan_shipment_skips_bad_cartons_and_reports_missing_capacity(caplog):
    cartons = [Carton("A", 6), Carton("A", 0, package_id="bad"), Carton("B", 2)]
    shipment = make_shipment(cartons=cartons, units_per_pallet={"A": 24})

    with caplog.at_level(logging.WARNING):
        plan = plan_shipment(shipment)

    assert [r.carton.package_id for r in plan.rejected] == ["bad"]
    assert plan.missing_items == ["B"]
    assert plan.total_pallets == 2
    assert "Item B has no units per pallet" in caplog.text


def test_plan_notes():
    plan = plan_shipment(make_shipment())

    assert plan.notes() == "2 pallets created. Finished pallet creation"
    assert plan.notes(populated=2).endswith("populated 2 pallets")


def test_plan_to_dict_is_json_ready():
    payload = plan_shipment(make_shipment()).to_dict()

    assert payload["shipmentId"] == "IF1"
    assert payload["totalPallets"] == 2
    assert payload["flags"] == []
    assert len(payload["palletAssignments"]) == 2


def test_plan_shipments_keeps_order_and_skips_failures(caplog, monkeypatch):
    import pallet_assignment.planner as planner

    original = planner.plan_shipment

    def flaky(shipment, policy=None):
        if shipment.shipment_id == "boom":
            raise RuntimeError("broken shipment")
        return original(shipment, policy)

    monkeypatch.setattr(planner, "plan_shipment", flaky)
    shipments = [make_shipment("1"), make_shipment("boom"), make_shipment("3")]

    with caplog.at_level(logging.ERROR):
        plans = plan_shipments(shipments)

    assert [p.shipment.shipment_id for p in plans] == ["1", "3"]
    assert "Failed to plan pallets for shipment IF-boom" in caplog.text


def test_plan_shipments_concurrently_matches_sequential():
    shipments = [make_shipment(str(i)) for i in range(6)]

    sequential = plan_shipments(shipments)
    parallel = plan_shipments(shipments, PackingPolicy(max_workers=3))

    assert [p.to_dict() for p in parallel] == [p.to_dict() for p in sequential]


def test_assignments_carry_package_json():
    plan = plan_shipment(make_shipment())

    assignments = plan.assignments()

    assert assignments[0]["packageJson"] == {
        "items": [{"itemId": "A", "quantity": 24, "cartons": 4, "vpn": "VPN-A"}],
        "totalCartons": 4,
    }
    assert plan.to_dict()["palletAssignments"][1]["packageJson"]["totalCartons"] == 1
