import pytest

from pallet_assignment.algorithms import best_fit, first_fit, placement_rule
from pallet_assignment.capacity import item_capacity
from pallet_assignment.models import Carton, Pallet


def make_pallet(usage, **counts):
    return Pallet(cartons=[], item_counts=dict(counts), usage=usage)


def test_first_fit_takes_earliest_pallet_with_room():
    capacity = item_capacity("A", 4, 1)  # 25% per carton
    pallets = [make_pallet(90.0), make_pallet(30.0), make_pallet(70.0)]

    assert first_fit(pallets, capacity, 100.0, 1e-6) == 1


def test_best_fit_takes_fullest_pallet_with_room():
    capacity = item_capacity("A", 4, 1)
    pallets = [make_pallet(90.0), make_pallet(30.0), make_pallet(70.0)]

    assert best_fit(pallets, capacity, 100.0, 1e-6) == 2


def test_best_fit_ties_go_to_earliest():
    capacity = item_capacity("A", 4, 1)
    pallets = [make_pallet(50.0), make_pallet(50.0)]

    assert best_fit(pallets, capacity, 100.0, 1e-6) == 0


def test_rules_skip_pallets_at_item_cap():
    capacity = item_capacity("A", 2, 1)  # 50% per carton, two per pallet
    pallets = [make_pallet(0.0, A=2), make_pallet(50.0, A=1)]

    assert first_fit(pallets, capacity, 100.0, 1e-6) == 1
    assert best_fit(pallets, capacity, 100.0, 1e-6) == 1


def test_rules_return_none_when_nothing_fits():
    capacity = item_capacity("A", 1, 1)

    assert first_fit([make_pallet(10.0)], capacity, 100.0, 1e-6) is None
    assert best_fit([], capacity, 100.0, 1e-6) is None


def test_has_room_tolerates_rounding():
    capacity = item_capacity("A", 3, 1)
    pallet = Pallet()
    pallet.place(Carton("A", 1), capacity)
    pallet.place(Carton("A", 1), capacity)

    assert pallet.has_room(capacity, 100.0, 1e-6)
    pallet.place(Carton("A", 1), capacity)
    assert not pallet.has_room(capacity, 100.0, 1e-6)


def test_placement_rule_lookup():
    assert placement_rule("best_fit") is best_fit
    with pytest.raises(ValueError):
        placement_rule("random")
