import random
from datetime import datetime, timedelta

import click
from flask.cli import with_appcontext

from tulipa.extensions import db
from tulipa.exceptions import CapacityExceeded
from tulipa.models.auth import User
from tulipa.models.order import Order, YES, NO
from tulipa.services.order_service import OrderService
from tulipa.services.order_store import order_store
from tulipa.services import stock_ledger
from tulipa.utils.fake_gen import fake


@click.command('status')
@with_appcontext
def status():
    """Show order counts and what is left of each variety."""
    click.echo(click.style('Tulipa order store:', fg='cyan', bold=True))

    try:
        orders = order_store.list_orders()
        click.echo(f" - Operators: \t{User.query.count()}")
        click.echo(f" - Orders: \t{len(orders)}")
    except Exception as e:
        click.echo(click.style(f'Cannot read the database: {e}', fg='red'))
        click.echo("Did you run 'flask db upgrade' or 'flask init-db'?")
        return

    for row in stock_ledger.stock_summary(orders):
        color = 'red' if row['overbooked'] else 'green'
        click.echo(f"   {row['variety']:<14} {row['committed']:>5} / {row['capacity']:<5} " +
                   click.style(f"left {row['remaining']}", fg=color))


@click.command('init-db')
@with_appcontext
def init_db():
    """Create all tables."""
    db.create_all()
    click.echo(click.style('Tables created.', fg='green'))


@click.command('create-user')
@click.option('--email', prompt=True, help='Sign-in email')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
@click.option('--username', default=None, help='Display name (defaults to the email user part)')
@with_appcontext
def create_user(email, password, username):
    """Add a console operator."""
    email = email.strip().lower()
    if User.query.filter_by(email=email).first():
        raise click.ClickException(f'{email} already exists')

    user = User(email=email, username=username or email.split('@')[0], password=password)
    db.session.add(user)
    db.session.commit()
    click.echo(click.style(f'Operator {email} created.', fg='green'))


@click.command('seed')
@click.option('--count', default=20, help='How many demo orders to try to create')
@with_appcontext
def seed(count):
    """
    Fill the store with demo orders created by the system.
    Orders that would not fit into stock are skipped.
    """
    created = skipped = 0
    for _ in range(count):
        quantity = fake.bouquet_size()
        data = {
            'customer': fake.name(),
            'price': fake.bouquet_price(quantity),
            'sort': fake.tulip_variety(),
            'flower_quantity': quantity,
            'packaging': random.choice([YES, NO]),
            'status': random.choice([Order.STATUS_NEW, Order.STATUS_IN_PROGRESS, Order.STATUS_DONE]),
            'created_by': Order.CREATED_BY_SYSTEM,
        }
        if random.random() < 0.5:
            data.update({
                'delivery': YES,
                'delivery_address': fake.address().replace('\n', ', '),
                'delivery_time': datetime.now().replace(second=0, microsecond=0)
                                 + timedelta(hours=random.randint(2, 72)),
            })
        try:
            OrderService.create_order(data)
            created += 1
        except CapacityExceeded:
            skipped += 1

    click.echo(click.style(f'{created} orders created, {skipped} skipped (out of stock).', fg='green'))
