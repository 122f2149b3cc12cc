from flask import Blueprint

# url_prefix is set when the blueprint is registered in tulipa/__init__.py
auth_bp = Blueprint('auth', __name__)

from . import routes
