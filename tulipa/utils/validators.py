"""
Form validators
"""
from wtforms.validators import ValidationError, StopValidation
from tulipa.models.order import YES


def validate_non_negative(form, field):
    """Reject negative numbers"""
    if field.data is not None and field.data < 0:
        raise ValidationError('Value cannot be negative')


def required_for_delivery(message):
    """
    Field becomes mandatory once the form's `delivery` is "yes".
    Put it before Optional() so it runs on empty input.
    """
    def _check(form, field):
        if form.delivery.data != YES:
            return
        value = field.data
        if value is None or (isinstance(value, str) and not value.strip()):
            field.errors[:] = []
            raise StopValidation(message)
    return _check
