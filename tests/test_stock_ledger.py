from types import SimpleNamespace

import pytest

from tulipa.exceptions import CapacityExceeded, UnknownVariety
from tulipa.models.order import STOCK_CAPACITY, VARIETIES
from tulipa.services.stock_ledger import (
    committed, remaining, validate_reservation, next_order_number, StockTally, stock_summary
)

CAPACITY = {'Circuit': 300, 'Tresor': 50}


def order(id=None, sort='Circuit', qty=0, number=None):
    return SimpleNamespace(id=id, sort=sort, flower_quantity=qty, order_number=number)


ORDERS = [
    order('a', 'Circuit', 100, 1),
    order('b', 'Circuit', 40, 2),
    order('c', 'Tresor', 30, 3),
    order('d', 'Laptop', 5, 4),
]


def test_capacity_table_has_fourteen_varieties():
    assert len(STOCK_CAPACITY) == 14
    assert VARIETIES[0] == 'Andre Citroen'
    assert all(isinstance(v, int) and v > 0 for v in STOCK_CAPACITY.values())


@pytest.mark.parametrize('variety', ['Circuit', 'Tresor', 'Laptop', 'Valdivia'])
def test_committed_is_sum_of_matching_quantities(variety):
    expected = sum(o.flower_quantity for o in ORDERS if o.sort == variety)
    assert committed(ORDERS, variety) == expected


def test_committed_skips_excluded_order():
    assert committed(ORDERS, 'Circuit', exclude_order_id='a') == 40
    assert committed(ORDERS, 'Circuit', exclude_order_id='zzz') == 140


def test_committed_of_empty_collection():
    assert committed([], 'Circuit') == 0


@pytest.mark.parametrize('qty, fits', [(0, True), (159, True), (160, True), (161, False)])
def test_reservation_fits_iff_within_capacity(qty, fits):
    if fits:
        assert validate_reservation(ORDERS, 'Circuit', qty, capacity=CAPACITY) == 160 - qty
    else:
        with pytest.raises(CapacityExceeded) as exc:
            validate_reservation(ORDERS, 'Circuit', qty, capacity=CAPACITY)
        assert exc.value.remaining == 160
        assert exc.value.variety == 'Circuit'


def test_remaining_is_capacity_minus_committed():
    assert remaining(ORDERS, 'Circuit', capacity=CAPACITY) == 160
    assert remaining(ORDERS, 'Tresor', capacity=CAPACITY) == 20


def test_remaining_goes_negative_when_overbooked():
    overbooked = ORDERS + [order('e', 'Tresor', 45)]
    assert remaining(overbooked, 'Tresor', capacity=CAPACITY) == -25


def test_remaining_uses_the_built_in_table_by_default():
    assert remaining([], 'Circuit') == STOCK_CAPACITY['Circuit']


def test_next_order_number():
    assert next_order_number([]) == 1
    assert next_order_number([order(number=3), order(number=7)]) == 8


def test_edit_does_not_count_against_itself():
    orders = [order('a', 'Circuit', 100)]
    assert validate_reservation(orders, 'Circuit', 250, exclude_order_id='a',
                                capacity={'Circuit': 300}) == 50

    with pytest.raises(CapacityExceeded) as exc:
        validate_reservation(orders, 'Circuit', 250, capacity={'Circuit': 300})
    assert exc.value.remaining == 200


def test_full_variety_rejects_one_more():
    orders = [order('a', 'Circuit', 300)]
    with pytest.raises(CapacityExceeded) as exc:
        validate_reservation(orders, 'Circuit', 1, capacity={'Circuit': 300})
    assert exc.value.remaining == 0
    assert exc.value.to_dict()['remaining'] == 0


def test_unknown_variety_fails_closed():
    with pytest.raises(UnknownVariety) as exc:
        validate_reservation([], 'Black Parrot', 1, capacity={'Circuit': 300})
    assert isinstance(exc.value, CapacityExceeded)
    assert exc.value.remaining == 0

    with pytest.raises(UnknownVariety):
        validate_reservation([], 'Black Parrot', 0)


def test_tally_matches_snapshot_functions():
    tally = StockTally.from_orders(ORDERS, CAPACITY)
    for variety in ('Circuit', 'Tresor', 'Laptop'):
        assert tally.committed(variety) == committed(ORDERS, variety)
        assert tally.remaining(variety) == remaining(ORDERS, variety, capacity=CAPACITY)


def test_tally_incremental_updates():
    tally = StockTally.from_orders(ORDERS, CAPACITY)
    tally.add('Tresor', 25)
    assert tally.remaining('Tresor') == -5
    tally.replace('Tresor', 25, 'Circuit', 10)
    assert tally.committed('Tresor') == 30
    assert tally.committed('Circuit') == 150
    tally.discard('Circuit', 100)
    assert tally.remaining('Circuit') == 250


def test_stock_summary_rows():
    rows = stock_summary(ORDERS + [order('e', 'Tresor', 45)], CAPACITY)
    assert [r['variety'] for r in rows] == ['Circuit', 'Tresor']
    tresor = rows[1]
    assert tresor == {'variety': 'Tresor', 'capacity': 50, 'committed': 75,
                      'remaining': -25, 'overbooked': True}
    assert rows[0]['overbooked'] is False
