from datetime import datetime
from flask import render_template, request, flash, redirect, url_for, abort, send_file, jsonify, current_app

from tulipa.blueprints.orders import orders_bp
from tulipa.blueprints.orders.forms import OrderForm, OrderSearchForm
from tulipa.exceptions import ValidationError, StoreError, OrderNotFound, CapacityExceeded
from tulipa.services.order_service import OrderService
from tulipa.services.order_store import order_store
from tulipa.services.export_service import export_service, ORDER_COLUMNS
from tulipa.services import stock_ledger
from tulipa.utils.decorators import session_required


def _load_order(order_id):
    try:
        return order_store.get(order_id)
    except OrderNotFound:
        abort(404)


@orders_bp.route('/')
@session_required
def index():
    """
    Order list with search
    Filtering runs over the full snapshot in memory.
    """
    search_form = OrderSearchForm(formdata=request.args)
    try:
        version = order_store.snapshot_version()
        orders = order_store.list_orders()
    except StoreError as e:
        flash(e.message, 'danger')
        version, orders = None, []

    filtered = OrderService.search_orders(
        orders,
        q=search_form.q.data,
        status=search_form.status.data,
        sort=search_form.sort.data,
        delivery=search_form.delivery.data,
    )
    return render_template(
        'orders/index.html',
        orders=filtered,
        total=len(orders),
        search_form=search_form,
        stock=stock_ledger.stock_summary(orders),
        version=version,
        poll_seconds=current_app.config.get('ORDERS_POLL_SECONDS', 0),
    )


@orders_bp.route('/create', methods=['GET', 'POST'])
@session_required
def create():
    form = OrderForm()
    if form.validate_on_submit():
        try:
            order = OrderService.create_order(form.order_data())
            flash(f'Order #{order.order_number} created.', 'success')
            return redirect(url_for('orders.index'))
        except CapacityExceeded as e:
            form.flower_quantity.errors.append(e.message)
        except ValidationError as e:
            flash(e.message, 'danger')
        except StoreError:
            flash('Could not save the order, try again later.', 'danger')

    try:
        stock = stock_ledger.stock_summary(order_store.list_orders())
    except StoreError:
        stock = []
    return render_template('orders/form.html', form=form, order=None, stock=stock)


@orders_bp.route('/<int:order_id>/edit', methods=['GET', 'POST'])
@session_required
def edit(order_id):
    order = _load_order(order_id)
    form = OrderForm(obj=order)
    if form.validate_on_submit():
        try:
            OrderService.update_order(order_id, form.order_data())
            flash(f'Order #{order.order_number} updated.', 'success')
            return redirect(url_for('orders.index'))
        except CapacityExceeded as e:
            form.flower_quantity.errors.append(e.message)
        except OrderNotFound:
            abort(404)
        except StoreError:
            flash('Could not save the order, try again later.', 'danger')

    return render_template('orders/form.html', form=form, order=order, stock=None)


@orders_bp.route('/<int:order_id>/delete', methods=['POST'])
@session_required
def delete(order_id):
    try:
        OrderService.delete_order(order_id)
        flash('Order deleted.', 'success')
    except OrderNotFound:
        abort(404)
    except StoreError:
        flash('Could not delete the order, try again later.', 'danger')
    return redirect(url_for('orders.index'))


@orders_bp.route('/<int:order_id>/track')
@session_required
def track(order_id):
    """Order details plus what is left of its variety"""
    order = _load_order(order_id)
    orders = order_store.list_orders()
    return render_template(
        'orders/track.html',
        order=order,
        variety_remaining=stock_ledger.remaining(orders, order.sort),
        variety_committed=stock_ledger.committed(orders, order.sort),
    )


@orders_bp.route('/<int:order_id>/done', methods=['POST'])
@session_required
def mark_done(order_id):
    try:
        if OrderService.mark_done(order_id):
            flash('Order marked as done.', 'success')
        else:
            flash('Order is already done.', 'info')
    except OrderNotFound:
        abort(404)
    except StoreError:
        flash('Could not update the order, try again later.', 'danger')
    return redirect(url_for('orders.track', order_id=order_id))


@orders_bp.route('/api/snapshot')
@session_required
def snapshot():
    """Live-refresh feed for the list page"""
    try:
        orders = order_store.list_orders()
        version = order_store.snapshot_version()
    except StoreError as e:
        return jsonify(e.to_dict()), e.code
    return jsonify({
        'success': True,
        'version': version,
        'orders': [o.to_dict() for o in orders],
        'stock': stock_ledger.stock_summary(orders),
    })


@orders_bp.route('/export/<format>')
@session_required
def export_orders(format):
    """Download the order list as CSV or Excel"""
    if format not in ('csv', 'excel'):
        abort(404)
    try:
        data = export_service.order_rows(order_store.list_orders())
    except StoreError:
        flash('Export failed, try again later.', 'danger')
        return redirect(url_for('orders.index'))

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    if format == 'excel':
        output = export_service.export_to_excel(data=data, columns=ORDER_COLUMNS)
        filename = f'orders_{stamp}.xlsx'
        mimetype = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    else:
        output = export_service.export_to_csv(data=data, columns=ORDER_COLUMNS)
        filename = f'orders_{stamp}.csv'
        mimetype = 'text/csv'

    return send_file(output, mimetype=mimetype, as_attachment=True, download_name=filename)
