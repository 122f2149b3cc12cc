from collections import Counter
from flask import render_template

from tulipa.extensions import cache
from tulipa.models.order import STATUS_LABELS
from tulipa.services.order_store import order_store
from tulipa.services import stock_ledger
from tulipa.utils.decorators import session_required
from . import main_bp


def get_stock_summary(orders, version):
    """
    Per-variety roll-up of `orders`, cached under the store fingerprint.
    Any write, from this process or another one, changes the fingerprint
    and so the key.
    """
    key = f'stock_summary:{version}'
    summary = cache.get(key)
    if summary is None:
        summary = stock_ledger.stock_summary(orders)
        cache.set(key, summary)
    return summary


@main_bp.route('/')
@session_required
def index():
    # fingerprint first: a write landing in between only makes the key older
    version = order_store.snapshot_version()
    orders = order_store.list_orders()
    by_status = Counter(o.status for o in orders)
    kpi = {
        'total_orders': len(orders),
        'total_flowers': sum(o.flower_quantity or 0 for o in orders),
        'total_revenue': sum(float(o.price or 0) for o in orders),
        'deliveries': sum(1 for o in orders if o.needs_delivery and not o.is_done),
    }
    status_counts = [(label, by_status.get(status, 0)) for status, label in STATUS_LABELS.items()]
    recent = sorted(orders, key=lambda o: o.order_number, reverse=True)[:5]

    return render_template('main/dashboard.html',
                           kpi=kpi,
                           status_counts=status_counts,
                           recent=recent,
                           stock=get_stock_summary(orders, version))
