import os
from dotenv import load_dotenv

# Load .env variables
load_dotenv()
basedir = os.path.abspath(os.path.dirname(__file__))

class Config:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'hard-to-guess-string'

    # Database
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Cache (SimpleCache by default, switch to Redis in production)
    CACHE_TYPE = "SimpleCache"
    CACHE_DEFAULT_TIMEOUT = 300

    # How often the order list polls for live changes (seconds, 0 disables)
    ORDERS_POLL_SECONDS = int(os.environ.get('ORDERS_POLL_SECONDS', 10))

    # Bootstrap operator, created on first start when both are set
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')

    @staticmethod
    def init_app(app):
        # Make sure the instance folder exists for the SQLite file
        os.makedirs(os.path.join(basedir, 'instance'), exist_ok=True)

class DevelopmentConfig(Config):
    """Development"""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'tulipa.db')

class ProductionConfig(Config):
    """Production"""
    DEBUG = False

    DATABASE_URL = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'tulipa_prod.db')
    # Hosted PostgreSQL still hands out postgres:// URLs
    if DATABASE_URL and DATABASE_URL.startswith('postgres://'):
        DATABASE_URL = DATABASE_URL.replace('postgres://', 'postgresql://', 1)

    SQLALCHEMY_DATABASE_URI = DATABASE_URL

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    @classmethod
    def init_app(cls, app):
        Config.init_app(app)

class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    WTF_CSRF_ENABLED = False
    ORDERS_POLL_SECONDS = 0
    ADMIN_EMAIL = None
    ADMIN_PASSWORD = None

    @staticmethod
    def init_app(app):
        pass

config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
