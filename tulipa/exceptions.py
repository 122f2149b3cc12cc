class TulipaException(Exception):
    """Base exception for the order console"""
    def __init__(self, message, code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['code'] = self.code
        rv['success'] = False
        return rv

class ValidationError(TulipaException):
    """Rejected input"""
    def __init__(self, message="Invalid data", payload=None):
        super().__init__(message, code=400, payload=payload)

class CapacityExceeded(ValidationError):
    """
    A reservation would push a variety past its stock capacity.
    `remaining` is what is still free before the reservation (may be negative
    when the variety is already overbooked).
    """
    def __init__(self, variety, remaining, requested=None, message=None):
        self.variety = variety
        self.remaining = remaining
        self.requested = requested
        if message is None:
            message = f"Not enough stock for {variety}. Available: {remaining}"
        super().__init__(message, payload={
            'variety': variety,
            'remaining': remaining,
            'requested': requested,
        })

class UnknownVariety(CapacityExceeded):
    """Variety missing from the capacity table; treated as zero stock"""
    def __init__(self, variety, requested=None):
        super().__init__(variety, 0, requested=requested,
                         message=f"Unknown flower variety: {variety}")

class StoreError(TulipaException):
    """The order store could not complete a read or write"""
    def __init__(self, message="Order storage is unavailable", payload=None, code=503):
        super().__init__(message, code=code, payload=payload)

class OrderNotFound(StoreError):
    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found",
                         payload={'order_id': order_id}, code=404)
