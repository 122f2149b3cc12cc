"""
Stock ledger

Derives committed and remaining quantity per tulip variety from a snapshot
of orders. Nothing here touches the database: callers pass in whatever
collection they currently observe and get an answer computed from scratch.
"""
from collections import Counter
from typing import Iterable, Optional, Dict, List, Any

from tulipa.exceptions import CapacityExceeded, UnknownVariety
from tulipa.models.order import STOCK_CAPACITY


def committed(orders: Iterable, variety: str, exclude_order_id: Optional[int] = None) -> int:
    """
    Total flower_quantity ordered for `variety`.
    :param exclude_order_id: skip this order (the one being edited)
    """
    total = 0
    for order in orders:
        if order.sort != variety:
            continue
        if exclude_order_id is not None and order.id == exclude_order_id:
            continue
        total += order.flower_quantity or 0
    return total


def remaining(orders: Iterable, variety: str, capacity: Dict[str, int] = None) -> int:
    """
    Capacity left for `variety`. Not clamped: a negative value means the
    variety is already overbooked. Unknown varieties have capacity 0.
    """
    capacity = STOCK_CAPACITY if capacity is None else capacity
    return capacity.get(variety, 0) - committed(orders, variety)


def validate_reservation(orders: Iterable, variety: str, requested_qty: int,
                         exclude_order_id: Optional[int] = None,
                         capacity: Dict[str, int] = None) -> int:
    """
    Check that `requested_qty` more flowers of `variety` fit into stock.

    :return: capacity left once the reservation is written
    :raises UnknownVariety: variety is not in the capacity table
    :raises CapacityExceeded: committed + requested would exceed capacity;
        `remaining` on the exception is capacity - committed
    """
    capacity = STOCK_CAPACITY if capacity is None else capacity
    if variety not in capacity:
        raise UnknownVariety(variety, requested=requested_qty)

    already = committed(orders, variety, exclude_order_id)
    limit = capacity[variety]
    if already + requested_qty > limit:
        raise CapacityExceeded(variety, limit - already, requested=requested_qty)
    return limit - already - requested_qty


def next_order_number(orders: Iterable) -> int:
    return 1 + max((order.order_number or 0 for order in orders), default=0)


class StockTally:
    """
    Running committed total per variety.

    Answers the same questions as committed()/remaining() but can be kept up
    to date with add/discard/replace instead of rescanning the collection.
    """

    def __init__(self, capacity: Dict[str, int] = None):
        self.capacity = STOCK_CAPACITY if capacity is None else capacity
        self._totals = Counter()

    @classmethod
    def from_orders(cls, orders: Iterable, capacity: Dict[str, int] = None) -> 'StockTally':
        tally = cls(capacity)
        for order in orders:
            tally.add(order.sort, order.flower_quantity)
        return tally

    def add(self, variety: str, quantity: int):
        self._totals[variety] += quantity or 0

    def discard(self, variety: str, quantity: int):
        self._totals[variety] -= quantity or 0

    def replace(self, old_variety: str, old_quantity: int, new_variety: str, new_quantity: int):
        """Apply an in-place edit of one order"""
        self.discard(old_variety, old_quantity)
        self.add(new_variety, new_quantity)

    def committed(self, variety: str) -> int:
        return self._totals.get(variety, 0)

    def remaining(self, variety: str) -> int:
        return self.capacity.get(variety, 0) - self.committed(variety)

    def rows(self) -> List[Dict[str, Any]]:
        """One row per known variety, in capacity-table order"""
        rows = []
        for variety, limit in self.capacity.items():
            used = self.committed(variety)
            rows.append({
                'variety': variety,
                'capacity': limit,
                'committed': used,
                'remaining': limit - used,
                'overbooked': used > limit,
            })
        return rows


def stock_summary(orders: Iterable, capacity: Dict[str, int] = None) -> List[Dict[str, Any]]:
    """Per-variety roll-up of the given snapshot"""
    return StockTally.from_orders(orders, capacity).rows()
