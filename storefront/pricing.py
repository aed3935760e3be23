"""
Price / discount derivations shared by the back office product form,
``Product.save()`` and the storefront display.

The two derivations are inverses of each other: the admin form uses
whichever one matches the field that was edited last.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

CENTS = Decimal('0.01')
HUNDRED = Decimal('100')

# Which field of the product form was edited last
SOURCE_DISCOUNT = 'discount'
SOURCE_PRICE = 'price'


def to_decimal(value):
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal('0')


def clamp_discount(value):
    """Discount percentages live in [0, 100]."""
    discount = int(to_decimal(value).to_integral_value(rounding=ROUND_HALF_UP))
    return min(100, max(0, discount))


def effective_price(base_price, discount):
    """Price charged after ``discount`` percent is taken off ``base_price``."""
    base = to_decimal(base_price)
    discount = clamp_discount(discount)
    if discount <= 0 or base <= 0:
        return base
    return (base * (HUNDRED - discount) / HUNDRED).quantize(CENTS, rounding=ROUND_HALF_UP)


def implied_discount(base_price, price):
    """Whole-number discount percentage that turns ``base_price`` into ``price``."""
    base = to_decimal(base_price)
    price = to_decimal(price)
    if base <= 0 or price >= base:
        return 0
    percent = ((base - price) / base * HUNDRED).to_integral_value(rounding=ROUND_HALF_UP)
    return clamp_discount(percent)


def resolve_pricing(base_price, discount, price, source=SOURCE_DISCOUNT):
    """
    Returns ``(base_price, discount, price)`` made consistent.

    ``source`` names the field the admin touched last: when it is the
    price, the discount is recomputed from it; otherwise the price is
    recomputed from the discount.
    """
    base = to_decimal(base_price) if base_price is not None else Decimal('0')
    if base <= 0:
        # No base price: nothing to discount from
        return base, 0, to_decimal(price)
    if source == SOURCE_PRICE:
        price = to_decimal(price)
        return base, implied_discount(base, price), price
    discount = clamp_discount(discount or 0)
    return base, discount, effective_price(base, discount)


def format_amount(value):
    """'270' for whole amounts, '269.50' otherwise."""
    amount = to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)
    if amount == amount.to_integral_value():
        return str(amount.to_integral_value())
    return str(amount)
