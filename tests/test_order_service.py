from datetime import datetime

import pytest

from tulipa.exceptions import CapacityExceeded, OrderNotFound
from tulipa.models import Order, STOCK_CAPACITY
from tulipa.services.order_service import OrderService
from tulipa.services.order_store import order_store


def new_order(**fields):
    data = {'customer': 'Vera', 'price': 25, 'sort': 'Circuit', 'flower_quantity': 15}
    data.update(fields)
    return data


def test_create_assigns_sequential_numbers_and_defaults(app):
    first = OrderService.create_order(new_order())
    second = OrderService.create_order(new_order(customer='Oleg'))
    assert (first.order_number, second.order_number) == (1, 2)
    assert first.status == Order.STATUS_NEW
    assert first.created_by == Order.CREATED_BY_USER


def test_create_continues_after_highest_number(make_order):
    make_order(order_number=3)
    make_order(order_number=7)
    assert OrderService.create_order(new_order()).order_number == 8


def test_create_rejects_over_capacity(make_order):
    make_order(sort='Circuit', flower_quantity=STOCK_CAPACITY['Circuit'] - 5)
    with pytest.raises(CapacityExceeded) as exc:
        OrderService.create_order(new_order(flower_quantity=6))
    assert exc.value.remaining == 5
    assert len(order_store.list_orders()) == 1


def test_create_fills_remaining_stock_exactly(make_order):
    make_order(sort='Circuit', flower_quantity=STOCK_CAPACITY['Circuit'] - 5)
    order = OrderService.create_order(new_order(flower_quantity=5))
    assert order.flower_quantity == 5


def test_create_rejects_unknown_variety(app):
    with pytest.raises(CapacityExceeded):
        OrderService.create_order(new_order(sort='Black Parrot'))
    assert order_store.list_orders() == []


def test_update_excludes_the_edited_order(make_order):
    capacity = STOCK_CAPACITY['Circuit']
    order = make_order(sort='Circuit', flower_quantity=100)
    updated = OrderService.update_order(order.id, {'flower_quantity': capacity})
    assert updated.flower_quantity == capacity


def test_update_rejects_growth_past_capacity(make_order):
    capacity = STOCK_CAPACITY['Circuit']
    make_order(sort='Circuit', flower_quantity=100)
    order = make_order(sort='Circuit', flower_quantity=50)
    with pytest.raises(CapacityExceeded) as exc:
        OrderService.update_order(order.id, {'flower_quantity': capacity - 99})
    assert exc.value.remaining == capacity - 100


def test_update_checks_the_new_variety(make_order):
    make_order(sort='Tresor', flower_quantity=STOCK_CAPACITY['Tresor'])
    order = make_order(sort='Circuit', flower_quantity=10)
    with pytest.raises(CapacityExceeded) as exc:
        OrderService.update_order(order.id, {'sort': 'Tresor'})
    assert exc.value.variety == 'Tresor'
    assert exc.value.remaining == 0


def test_update_of_other_fields_allowed_on_overbooked_variety(make_order):
    # two writers raced past the limit
    make_order(sort='Tresor', flower_quantity=STOCK_CAPACITY['Tresor'])
    order = make_order(sort='Tresor', flower_quantity=10)
    updated = OrderService.update_order(order.id, {
        'customer': 'Renamed', 'delivery': 'yes',
        'delivery_address': 'Nevsky 1', 'delivery_time': datetime(2026, 3, 8, 9, 0),
    })
    assert updated.customer == 'Renamed'

    reduced = OrderService.update_order(order.id, {'flower_quantity': 5})
    assert reduced.flower_quantity == 5


def test_update_keeps_order_number(make_order):
    order = make_order(order_number=4)
    updated = OrderService.update_order(order.id, {'order_number': 99, 'customer': 'X'})
    assert updated.order_number == 4


def test_update_missing_order(app):
    with pytest.raises(OrderNotFound):
        OrderService.update_order(42, {'customer': 'Nobody'})


def test_mark_done_is_idempotent(make_order):
    order = make_order()
    assert OrderService.mark_done(order.id) is True
    assert order_store.get(order.id).status == Order.STATUS_DONE
    assert OrderService.mark_done(order.id) is False


def test_delete_frees_stock(make_order):
    order = make_order(sort='Circuit', flower_quantity=STOCK_CAPACITY['Circuit'])
    with pytest.raises(CapacityExceeded):
        OrderService.create_order(new_order(flower_quantity=1))

    OrderService.delete_order(order.id)
    assert OrderService.create_order(new_order(flower_quantity=1)).order_number == 1


def test_search_orders(make_order):
    make_order(customer='Anna Petrova', sort='Circuit')
    make_order(customer='Boris', sort='Tresor', delivery='yes', delivery_address='Sadovaya 5')
    make_order(customer='Clara', sort='Tresor', status=Order.STATUS_DONE)
    orders = order_store.list_orders()

    def names(**kw):
        return [o.customer for o in OrderService.search_orders(orders, **kw)]

    assert names() == ['Anna Petrova', 'Boris', 'Clara']
    assert names(q='anna') == ['Anna Petrova']
    assert names(q='sadovaya') == ['Boris']
    assert names(q='3') == ['Clara']
    assert names(sort='Tresor') == ['Boris', 'Clara']
    assert names(sort='Tresor', status=Order.STATUS_DONE) == ['Clara']
    assert names(delivery='yes') == ['Boris']
