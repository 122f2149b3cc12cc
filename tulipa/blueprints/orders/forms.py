from flask_wtf import FlaskForm
from wtforms import (
    StringField, DecimalField, IntegerField, SelectField, SubmitField, DateTimeLocalField
)
from wtforms.validators import DataRequired, InputRequired, Length, Optional

from tulipa.models.order import Order, VARIETIES, YES, NO, STATUS_LABELS, CREATOR_LABELS
from tulipa.utils.validators import validate_non_negative, required_for_delivery

YES_NO_CHOICES = [(NO, 'No'), (YES, 'Yes')]

# Form field -> Order attribute (same names)
ORDER_FIELDS = (
    'customer', 'price', 'sort', 'flower_quantity', 'packaging',
    'delivery', 'delivery_address', 'delivery_time', 'status', 'created_by',
)


class OrderForm(FlaskForm):
    """Create / edit an order"""
    customer = StringField('Customer', validators=[DataRequired(), Length(max=128)])
    price = DecimalField('Order price', places=2, validators=[
        InputRequired(), validate_non_negative])
    sort = SelectField('Variety', choices=[('', 'Choose a variety')] + [(v, v) for v in VARIETIES],
                       validators=[DataRequired(message="Choose a variety")])
    flower_quantity = IntegerField('Number of flowers', validators=[
        InputRequired(), validate_non_negative])
    packaging = SelectField('Packaging', choices=YES_NO_CHOICES, default=NO)
    delivery = SelectField('Delivery', choices=YES_NO_CHOICES, default=NO)
    delivery_address = StringField('Delivery address', validators=[
        required_for_delivery("Delivery address is required for delivery orders"),
        Optional(), Length(max=255)
    ])
    delivery_time = DateTimeLocalField('Delivery time', format='%Y-%m-%dT%H:%M', validators=[
        required_for_delivery("Delivery time is required for delivery orders"),
        Optional()
    ])
    status = SelectField('Status', choices=list(STATUS_LABELS.items()), default=Order.STATUS_NEW)
    created_by = SelectField('Created by', choices=list(CREATOR_LABELS.items()),
                             default=Order.CREATED_BY_USER)
    submit = SubmitField('Save order')

    def order_data(self):
        """Submitted values keyed by Order attribute"""
        data = {name: getattr(self, name).data for name in ORDER_FIELDS}
        data['delivery_address'] = (data['delivery_address'] or '').strip() or None
        return data


class OrderSearchForm(FlaskForm):
    """List filters (GET)"""
    class Meta:
        csrf = False

    q = StringField('Search', validators=[Length(max=64)],
                    render_kw={"placeholder": "Customer, address or number..."})
    status = SelectField('Status', choices=[('', 'Any status')] + list(STATUS_LABELS.items()),
                         validators=[Optional()])
    sort = SelectField('Variety', choices=[('', 'Any variety')] + [(v, v) for v in VARIETIES],
                       validators=[Optional()])
    delivery = SelectField('Delivery', choices=[('', 'Any')] + YES_NO_CHOICES, validators=[Optional()])
