"""Cart lines and the subtotal / tax / total calculation."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

TWO_PLACES = Decimal('0.01')


def to_decimal(value, default=None):
    """Convert form/JSON input (str, int, float, Decimal) to Decimal."""
    if value is None or value == '':
        if default is None:
            raise ValueError("A numeric value is required")
        return default
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {value!r}")
    if not number.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return number


def format_amount(value):
    """Money as shown on screen and on paper: two decimals, half-up."""
    return str(to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def format_percentage(value):
    """5.00 -> '5', 12.50 -> '12.5'"""
    return f"{to_decimal(value).normalize():f}"


@dataclass
class CartLine:
    menu_item_id: str
    name: str
    unit_price: Decimal
    quantity: int = 1
    category: str = ''

    @property
    def line_total(self):
        return self.unit_price * self.quantity

    def to_dict(self):
        return {
            'menu_item_id': self.menu_item_id,
            'name': self.name,
            'unit_price': str(self.unit_price),
            'quantity': self.quantity,
            'category': self.category,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            menu_item_id=str(data['menu_item_id']),
            name=data['name'],
            unit_price=to_decimal(data['unit_price']),
            quantity=int(data['quantity']),
            category=data.get('category', ''),
        )


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal

    def formatted(self):
        return {
            'subtotal': format_amount(self.subtotal),
            'tax_amount': format_amount(self.tax_amount),
            'total': format_amount(self.total),
        }


def calculate_totals(cart, tax_percentage, discount=Decimal('0')):
    """
    subtotal = sum(unit_price * quantity)
    tax_amount = subtotal * tax_percentage / 100
    total = subtotal + tax_amount - discount

    Nothing is rounded here. The discount is applied as given, so a negative
    discount or one larger than the bill produces an inflated or negative total.
    """
    tax_percentage = to_decimal(tax_percentage)
    if tax_percentage < 0:
        raise ValueError("Tax percentage cannot be negative")
    discount = to_decimal(discount, Decimal('0'))

    subtotal = sum((line.unit_price * line.quantity for line in cart), Decimal('0'))
    tax_amount = subtotal * tax_percentage / 100
    total = subtotal + tax_amount - discount
    return Totals(subtotal=subtotal, tax_amount=tax_amount, total=total)
