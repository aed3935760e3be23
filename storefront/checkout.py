"""
Checkout: turns the cart into a stored order.

    BROWSING -> CHECKOUT_FORM -> SUBMITTING -> SUCCESS | FAILED

Invalid forms stay in CHECKOUT_FORM without touching the order store.
A failed store call leaves the cart untouched so the customer can resubmit;
nothing is retried automatically.
"""

import enum
import logging

from django.db import DatabaseError

logger = logging.getLogger(__name__)


class CheckoutState(enum.Enum):
    BROWSING = 'browsing'
    CHECKOUT_FORM = 'checkout_form'
    SUBMITTING = 'submitting'
    SUCCESS = 'success'
    FAILED = 'failed'


class CheckoutResult:
    def __init__(self, state, order=None, error=None):
        self.state = state
        self.order = order
        self.error = error

    @property
    def success(self):
        return self.state is CheckoutState.SUCCESS


def order_items_from_cart(cart):
    return [
        {
            'product_id': line.product_id,
            'name': line.name,
            'price': line.price,
            'quantity': line.quantity,
            'image': line.image_url,
        }
        for line in cart
    ]


def submit_checkout(cart, form, order_store):
    if cart.is_empty():
        logger.debug("CHECKOUT — empty cart, nothing to submit")
        return CheckoutResult(CheckoutState.BROWSING, error="empty cart")

    if not form.is_valid():
        logger.debug("CHECKOUT — invalid form: %s", form.errors.as_json())
        return CheckoutResult(CheckoutState.CHECKOUT_FORM, error="invalid form")

    data = form.cleaned_data
    items = order_items_from_cart(cart)
    total = cart.grand_total()
    logger.info("CHECKOUT — submitting %d line(s) | total: %s", len(items), total)

    try:
        order = order_store.create(
            items=items,
            total_amount=total,
            customer_phone=data['customer_phone'],
            delivery_address=data['delivery_address'],
            payment_method=data['payment_method'],
        )
    except DatabaseError as e:
        logger.exception("CHECKOUT FAILED — order could not be saved")
        return CheckoutResult(CheckoutState.FAILED, error=str(e))

    cart.clear()
    logger.info("CHECKOUT — order %s saved, cart cleared", order.pk)
    return CheckoutResult(CheckoutState.SUCCESS, order=order)
