from tulipa.extensions import db
from .base import BaseModel

# Stock per tulip variety for the season. Fixed in code, operators cannot edit it.
STOCK_CAPACITY = {
    'Andre Citroen': 500,
    'Circuit': 300,
    'First star': 400,
    'Laptop': 250,
    'White Master': 350,
    'Triple A': 300,
    'Supemodel': 200,
    'Tresor': 250,
    'Strong Love': 450,
    'Strong Gold': 400,
    'Respectable': 300,
    'Montezuma': 200,
    'Columbus': 350,
    'Valdivia': 250,
}
VARIETIES = tuple(STOCK_CAPACITY)

YES = 'yes'
NO = 'no'
YES_NO_LABELS = {YES: 'Yes', NO: 'No'}


class Order(BaseModel):
    """Customer order for one tulip variety"""
    __tablename__ = 'orders'

    STATUS_NEW = 'new'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_DONE = 'done'

    CREATED_BY_SYSTEM = 'system'
    CREATED_BY_USER = 'user'

    # Assigned as max(existing) + 1 when the order is created
    order_number = db.Column(db.Integer, unique=True, index=True, nullable=False)

    customer = db.Column(db.String(128), nullable=False)
    price = db.Column(db.Numeric(10, 2), default=0)
    sort = db.Column(db.String(64), index=True, nullable=False)
    flower_quantity = db.Column(db.Integer, default=0, nullable=False)
    packaging = db.Column(db.String(3), default=NO)

    delivery = db.Column(db.String(3), default=NO)
    delivery_address = db.Column(db.String(255))
    delivery_time = db.Column(db.DateTime)

    status = db.Column(db.String(20), default=STATUS_NEW, index=True)
    created_by = db.Column(db.String(10), default=CREATED_BY_USER)

    @property
    def is_done(self):
        return self.status == self.STATUS_DONE

    @property
    def needs_delivery(self):
        return self.delivery == YES

    @property
    def status_label(self):
        return STATUS_LABELS.get(self.status, self.status)

    @property
    def created_by_label(self):
        return CREATOR_LABELS.get(self.created_by, self.created_by)

    def __repr__(self):
        return f'<Order #{self.order_number} {self.sort} x{self.flower_quantity}>'


STATUS_LABELS = {
    Order.STATUS_NEW: 'New',
    Order.STATUS_IN_PROGRESS: 'In progress',
    Order.STATUS_DONE: 'Done',
}

CREATOR_LABELS = {
    Order.CREATED_BY_SYSTEM: 'System',
    Order.CREATED_BY_USER: 'User',
}
