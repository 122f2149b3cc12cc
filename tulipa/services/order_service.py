from flask import current_app
from tulipa.exceptions import CapacityExceeded
from tulipa.models.order import Order, NO
from tulipa.services.order_store import order_store
from tulipa.services import stock_ledger


class OrderService:
    """
    Order workflows on top of the order store.

    Stock checks run against the snapshot read right before the write. There
    is no lock between the check and the write, so two operators saving at
    the same moment can still overbook a variety together.
    """

    @staticmethod
    def create_order(data: dict, store=order_store) -> Order:
        """
        Validate stock, assign the next order number and persist.
        :param data: order fields without id / order_number
        """
        orders = store.list_orders()
        order_data = dict(data)
        order_data.setdefault('status', Order.STATUS_NEW)
        order_data.setdefault('created_by', Order.CREATED_BY_USER)
        order_data.setdefault('packaging', NO)
        order_data.setdefault('delivery', NO)

        try:
            stock_ledger.validate_reservation(
                orders, order_data['sort'], order_data.get('flower_quantity') or 0)
        except CapacityExceeded as e:
            current_app.logger.info(f'Rejected new order: {e.message}')
            raise

        order_data['order_number'] = stock_ledger.next_order_number(orders)
        order_id = store.create(order_data)
        current_app.logger.info(
            f"Order #{order_data['order_number']} created "
            f"({order_data['sort']} x{order_data.get('flower_quantity') or 0})")
        return store.get(order_id)

    @staticmethod
    def update_order(order_id: int, changes: dict, store=order_store) -> Order:
        """
        Apply an edit. The stock check runs when the edit moves the order to
        another variety or asks for more flowers; the order's own current
        quantity is not counted against it.
        """
        orders = store.list_orders()
        current = next((o for o in orders if o.id == order_id), None)
        if current is None:
            current = store.get(order_id)  # raises OrderNotFound

        variety = changes.get('sort', current.sort)
        quantity = changes.get('flower_quantity', current.flower_quantity) or 0
        if variety != current.sort or quantity > (current.flower_quantity or 0):
            try:
                stock_ledger.validate_reservation(
                    orders, variety, quantity, exclude_order_id=order_id)
            except CapacityExceeded as e:
                current_app.logger.info(f'Rejected edit of order {order_id}: {e.message}')
                raise

        changes = {k: v for k, v in changes.items() if k != 'order_number'}
        return store.update(order_id, changes)

    @staticmethod
    def mark_done(order_id: int, store=order_store) -> bool:
        """
        Close an order from the tracking page.
        :return: False if it was already done
        """
        order = store.get(order_id)
        if order.is_done:
            return False
        store.update(order_id, {'status': Order.STATUS_DONE})
        current_app.logger.info(f'Order #{order.order_number} marked done')
        return True

    @staticmethod
    def delete_order(order_id: int, store=order_store):
        order = store.get(order_id)
        number = order.order_number
        store.delete(order_id)
        current_app.logger.info(f'Order #{number} deleted')

    @staticmethod
    def search_orders(orders, q=None, status=None, sort=None, delivery=None):
        """
        Filter an already loaded snapshot.
        `q` matches customer, delivery address or the order number.
        """
        keyword = (q or '').strip().lower()
        result = []
        for order in orders:
            if status and order.status != status:
                continue
            if sort and order.sort != sort:
                continue
            if delivery and order.delivery != delivery:
                continue
            if keyword:
                haystack = ' '.join([
                    str(order.order_number or ''),
                    order.customer or '',
                    order.delivery_address or '',
                ]).lower()
                if keyword not in haystack:
                    continue
            result.append(order)
        return result
