from decimal import Decimal

import pytest
from django.db import DatabaseError

from storefront.cart import Cart
from storefront.checkout import CheckoutState, order_items_from_cart, submit_checkout
from storefront.forms import CheckoutForm
from storefront.models import Order
from storefront.stores import DjangoOrderStore, OrderStore


class RecordingOrderStore(OrderStore):
    def __init__(self):
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        return Order(**{k: v for k, v in kwargs.items() if k != 'items'})


class FailingOrderStore(OrderStore):
    def create(self, **kwargs):
        raise DatabaseError("connection refused")


@pytest.fixture
def cart(session, serum):
    cart = Cart(session)
    cart.add(serum, 2)
    return cart


def checkout_form(**overrides):
    data = {'customer_phone': '01234567890', 'delivery_address': 'Cairo', 'payment_method': 'instapay'}
    data.update(overrides)
    return CheckoutForm(data)


def test_empty_cart_never_submits(session):
    store = RecordingOrderStore()
    result = submit_checkout(Cart(session), checkout_form(), store)

    assert result.state is CheckoutState.BROWSING
    assert store.calls == []


@pytest.mark.parametrize('field', ['customer_phone', 'delivery_address'])
def test_blank_contact_details_keep_the_form_open(cart, field):
    store = RecordingOrderStore()
    result = submit_checkout(cart, checkout_form(**{field: '   '}), store)

    assert result.state is CheckoutState.CHECKOUT_FORM
    assert not result.success
    assert store.calls == []
    assert not cart.is_empty()


def test_payment_method_defaults_to_cash_on_delivery(cart):
    store = RecordingOrderStore()
    result = submit_checkout(cart, checkout_form(payment_method=''), store)

    assert result.success
    assert store.calls[0]['payment_method'] == Order.PaymentMethod.COD


def test_successful_checkout_sends_cart_snapshot_and_clears_cart(cart, serum):
    store = RecordingOrderStore()
    result = submit_checkout(cart, checkout_form(), store)

    assert result.state is CheckoutState.SUCCESS
    call = store.calls[0]
    assert call['total_amount'] == Decimal('500')
    assert call['customer_phone'] == '01234567890'
    assert call['items'] == [{
        'product_id': str(serum.pk),
        'name': serum.name,
        'price': Decimal('250'),
        'quantity': 2,
        'image': serum.image_url,
    }]
    assert cart.is_empty()


def test_store_failure_keeps_the_cart(cart):
    result = submit_checkout(cart, checkout_form(), FailingOrderStore())

    assert result.state is CheckoutState.FAILED
    assert "connection refused" in result.error
    assert cart.item_count() == 2


@pytest.mark.django_db
def test_checkout_persists_pending_order(session, products):
    cart = Cart(session)
    cart.add(products['argan'], 2)
    cart.add(products['clay_mask'])

    result = submit_checkout(cart, checkout_form(), DjangoOrderStore())

    order = Order.objects.get(pk=result.order.pk)
    assert order.status == Order.Status.PENDING
    assert order.total_amount == Decimal('819.00')
    assert order.items.count() == 2
    assert order.get_total_price() == order.total_amount
    assert cart.is_empty()


def test_order_items_from_cart(session, serum, scrub):
    cart = Cart(session)
    cart.add(scrub, 3)
    items = order_items_from_cart(cart)

    assert [(i['product_id'], i['quantity']) for i in items] == [(str(scrub.pk), 3)]
