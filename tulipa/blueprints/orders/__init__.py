from flask import Blueprint

# url_prefix is set when the blueprint is registered in tulipa/__init__.py
orders_bp = Blueprint('orders', __name__)

from . import routes
