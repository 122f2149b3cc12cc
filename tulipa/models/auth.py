from datetime import datetime
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from tulipa.extensions import db
from .base import BaseModel

class User(UserMixin, BaseModel):
    """Console operator. Every active user may manage every order."""
    __tablename__ = 'auth_users'
    email = db.Column(db.String(128), unique=True, index=True, nullable=False)
    username = db.Column(db.String(64), index=True)
    password_hash = db.Column(db.String(256))

    is_active_user = db.Column(db.Boolean, default=True)
    last_login = db.Column(db.DateTime)

    @property
    def password(self):
        raise AttributeError('password is write-only')

    @password.setter
    def password(self, password):
        self.password_hash = generate_password_hash(password)

    def verify_password(self, password):
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def touch_login(self):
        self.last_login = datetime.utcnow()
        db.session.commit()

    # Flask-Login
    @property
    def is_active(self):
        return bool(self.is_active_user)

    def __repr__(self):
        return f'<User {self.email}>'
