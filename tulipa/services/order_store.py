"""
Order store

Thin layer over the orders table exposing the capabilities the rest of the
console relies on: read everything, read one, write one, delete one, and
observe changes. Every committed write pushes a fresh snapshot to
subscribers through the `orders-changed` signal.
"""
import hashlib
from blinker import ANY, Namespace
from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from tulipa.extensions import db
from tulipa.exceptions import StoreError, OrderNotFound
from tulipa.models.order import Order

_signals = Namespace()
orders_changed = _signals.signal('orders-changed')

# Columns callers may set through create/update
WRITABLE_FIELDS = (
    'order_number', 'customer', 'price', 'sort', 'flower_quantity',
    'packaging', 'delivery', 'delivery_address', 'delivery_time',
    'status', 'created_by',
)


class OrderStore:

    def list_orders(self):
        """Full current snapshot ordered by order number"""
        try:
            return Order.query.order_by(Order.order_number.asc()).all()
        except SQLAlchemyError as e:
            raise self._fail('load orders', e) from e

    def get(self, order_id):
        try:
            order = db.session.get(Order, order_id)
        except SQLAlchemyError as e:
            raise self._fail(f'load order {order_id}', e) from e
        if order is None:
            raise OrderNotFound(order_id)
        return order

    def create(self, data):
        """Persist a new order and return its id"""
        order = Order(**self._clean(data))
        try:
            db.session.add(order)
            db.session.commit()
        except SQLAlchemyError as e:
            raise self._fail('create order', e) from e
        self._notify()
        return order.id

    def update(self, order_id, changes):
        order = self.get(order_id)
        for key, value in self._clean(changes).items():
            setattr(order, key, value)
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            raise self._fail(f'update order {order_id}', e) from e
        self._notify()
        return order

    def delete(self, order_id):
        order = self.get(order_id)
        try:
            db.session.delete(order)
            db.session.commit()
        except SQLAlchemyError as e:
            raise self._fail(f'delete order {order_id}', e) from e
        self._notify()

    def snapshot_version(self):
        """Fingerprint of the collection; changes whenever any order does"""
        try:
            count, last_change, id_sum = db.session.query(
                func.count(Order.id),
                func.max(Order.updated_at),
                func.coalesce(func.sum(Order.id), 0),
            ).one()
        except SQLAlchemyError as e:
            raise self._fail('read order version', e) from e
        raw = f'{count}:{last_change.isoformat() if last_change else "-"}:{id_sum}'
        return hashlib.sha1(raw.encode('utf-8')).hexdigest()[:12]

    @staticmethod
    def subscribe(on_change, sender=None):
        """
        Call `on_change(orders)` after every committed write.
        Errors raised by `on_change` are logged, never returned to the writer.
        :param sender: only react to writes made inside this app
        :return: a callable that removes the subscription
        """
        def receiver(_sender, **extra):
            on_change(extra['orders'])

        orders_changed.connect(receiver, sender=ANY if sender is None else sender, weak=False)

        def unsubscribe():
            orders_changed.disconnect(receiver)
        return unsubscribe

    def _notify(self):
        """Runs after the commit; the write stands whatever happens here"""
        if not orders_changed.receivers:
            return
        try:
            orders_changed.send(current_app._get_current_object(), orders=self.list_orders())
        except Exception:
            current_app.logger.exception('Order change notification failed')

    @staticmethod
    def _clean(data):
        unknown = set(data) - set(WRITABLE_FIELDS)
        if unknown:
            raise ValueError(f'unknown order fields: {", ".join(sorted(unknown))}')
        return dict(data)

    @staticmethod
    def _fail(action, exc):
        db.session.rollback()
        current_app.logger.error(f'Order store failed to {action}: {exc}')
        return StoreError()


order_store = OrderStore()
