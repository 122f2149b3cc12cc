import pytest

from tulipa import create_app
from tulipa.extensions import db
from tulipa.models import User, Order
from tulipa.services.order_store import order_store


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def operator(app):
    user = User(email='florist@tulipa-flowers.com', username='florist', password='tulips')
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def auth_client(client, operator):
    resp = client.post('/auth/login', data={
        'email': 'florist@tulipa-flowers.com',
        'password': 'tulips',
    })
    assert resp.status_code == 302
    return client


@pytest.fixture
def make_order(app):
    """Insert an order straight through the store (no stock check)"""
    counter = {'n': 0}

    def _make(**fields):
        counter['n'] += 1
        data = {
            'order_number': counter['n'],
            'customer': f'Customer {counter["n"]}',
            'price': 10,
            'sort': 'Circuit',
            'flower_quantity': 10,
            'status': Order.STATUS_NEW,
            'created_by': Order.CREATED_BY_USER,
        }
        data.update(fields)
        return order_store.get(order_store.create(data))
    return _make
