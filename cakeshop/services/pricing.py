"""
Money arithmetic shared by the cart, checkout and order services
"""
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal('0.01')


def line_total(price, quantity) -> Decimal:
    return Decimal(str(price)) * quantity


def items_total(items) -> Decimal:
    """Sum of price x quantity over objects exposing ``price`` and ``quantity``"""
    return sum((line_total(item.price, item.quantity) for item in items), Decimal('0'))


def to_money(amount) -> Decimal:
    return Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)


def to_minor_units(amount) -> int:
    """Amount in the smallest currency unit, rounded half up"""
    return int((Decimal(str(amount)) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))
