from datetime import datetime
from decimal import Decimal
from tulipa.extensions import db

class BaseModel(db.Model):
    """
    Common model base
    Provides: integer primary key, created/updated timestamps, serialisation
    """
    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        """
        Turn the row into a JSON-friendly dict.
        Columns starting with '_' are skipped.
        """
        data = {}
        for c in self.__table__.columns:
            if c.name.startswith('_'):
                continue
            val = getattr(self, c.name)
            if isinstance(val, datetime):
                data[c.name] = val.isoformat()
            elif isinstance(val, Decimal):
                data[c.name] = float(val)
            else:
                data[c.name] = val
        return data
