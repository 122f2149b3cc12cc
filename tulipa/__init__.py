import logging
import colorlog
from flask import Flask, render_template, request, jsonify
from config import config
from tulipa.extensions import db, migrate, login_manager, cache, csrf
from tulipa.exceptions import StoreError, OrderNotFound

from tulipa import commands


def create_app(config_name='default'):
    """Tulipa admin application factory"""
    app = Flask(__name__)

    # 1. Configuration
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    # 2. Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    cache.init_app(app)
    csrf.init_app(app)

    # 3. Logging
    configure_logging(app)

    # 4. Blueprints
    register_blueprints(app)

    # 5. Error handlers
    register_error_handlers(app)

    # 6. CLI commands
    register_commands(app)

    # 7. Order-change and session-change hooks
    register_subscriptions(app)

    # 8. First start: tables and bootstrap operator
    auto_init_database(app)

    return app


def auto_init_database(app):
    """Create tables and the bootstrap operator when ADMIN_EMAIL / ADMIN_PASSWORD are set"""
    email = app.config.get('ADMIN_EMAIL')
    password = app.config.get('ADMIN_PASSWORD')
    if not email or not password:
        return

    from tulipa.models.auth import User
    with app.app_context():
        db.create_all()
        email = email.strip().lower()
        if User.query.filter_by(email=email).first() is None:
            db.session.add(User(email=email, username=email.split('@')[0], password=password))
            db.session.commit()
            app.logger.info(f'Bootstrap operator {email} created')


def register_blueprints(app):
    from tulipa.blueprints.main import main_bp
    app.register_blueprint(main_bp)

    from tulipa.blueprints.auth import auth_bp
    app.register_blueprint(auth_bp, url_prefix='/auth')

    from tulipa.blueprints.orders import orders_bp
    app.register_blueprint(orders_bp, url_prefix='/orders')


def register_error_handlers(app):
    @app.errorhandler(404)
    def page_not_found(e):
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_server_error(e):
        return render_template('errors/500.html'), 500

    @app.errorhandler(OrderNotFound)
    def order_not_found(e):
        if request.path.startswith('/orders/api/'):
            return jsonify(e.to_dict()), 404
        return render_template('errors/404.html'), 404

    @app.errorhandler(StoreError)
    def store_unavailable(e):
        if request.path.startswith('/orders/api/'):
            return jsonify(e.to_dict()), e.code
        return render_template('errors/500.html', message=e.message), e.code


def register_commands(app):
    app.cli.add_command(commands.status)
    app.cli.add_command(commands.init_db)
    app.cli.add_command(commands.create_user)
    app.cli.add_command(commands.seed)


def register_subscriptions(app):
    from tulipa.services.order_store import order_store
    from tulipa.utils.session import on_session_change

    def log_orders_change(orders):
        app.logger.debug(f'Order store changed: {len(orders)} orders')

    order_store.subscribe(log_orders_change, sender=app)

    def log_session_change(state, user):
        who = getattr(user, 'email', None) or 'anonymous'
        app.logger.info(f'Session {state.value}: {who}')

    on_session_change(log_session_change, sender=app)


def configure_logging(app):
    """Coloured console logging in debug mode"""
    app.logger.setLevel(logging.INFO)
    if app.debug:
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)

        formatter = colorlog.ColoredFormatter(
            "%(log_color)s[%(asctime)s] %(levelname)-8s%(reset)s %(blue)s%(message)s",
            datefmt="%H:%M:%S",
            reset=True,
            log_colors={
                'DEBUG':    'cyan',
                'INFO':     'green',
                'WARNING':  'yellow',
                'ERROR':    'red',
                'CRITICAL': 'red,bg_white',
            },
            style='%'
        )
        handler.setFormatter(formatter)
        app.logger.addHandler(handler)
