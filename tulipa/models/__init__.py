from .base import BaseModel
from .auth import User
from .order import (
    Order, VARIETIES, STOCK_CAPACITY,
    YES, NO, YES_NO_LABELS,
    STATUS_LABELS, CREATOR_LABELS,
)
