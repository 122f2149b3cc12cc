from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_caching import Cache
from flask_wtf.csrf import CSRFProtect

# Extension objects (bound to the app in create_app)
db = SQLAlchemy()
migrate = Migrate()
cache = Cache()
login_manager = LoginManager()
csrf = CSRFProtect()

# LoginManager
login_manager.login_view = 'auth.login'  # where unauthenticated requests go
login_manager.login_message = 'Please sign in to manage orders.'
login_manager.login_message_category = 'warning'
login_manager.session_protection = 'strong'


@login_manager.user_loader
def load_user(user_id):
    """Flask-Login user loader callback"""
    from tulipa.models import User
    return db.session.get(User, int(user_id))
