from decimal import Decimal

import pytest
from django.conf import settings

from storefront.cart import Cart


def test_add_new_line(session, serum):
    cart = Cart(session)
    cart.add(serum, 3)

    assert len(cart) == 1
    assert cart.quantity_of(serum.pk) == 3
    assert cart.grand_total() == Decimal('750')
    assert cart.item_count() == 3


def test_adding_twice_accumulates_quantity(session, serum):
    cart = Cart(session)
    cart.add(serum, 2)
    cart.add(serum, 5)

    assert len(cart) == 1
    assert cart.quantity_of(serum.pk) == 7
    assert session[settings.CART_SESSION_ID][str(serum.pk)]['total'] == '1750'


def test_negative_delta_reduces_quantity(session, serum):
    cart = Cart(session)
    cart.add(serum, 4)
    cart.add(serum, -3)
    assert cart.quantity_of(serum.pk) == 1


def test_delta_below_one_is_rejected_and_cart_unchanged(session, serum):
    cart = Cart(session)
    cart.add(serum, 2)

    with pytest.raises(ValueError):
        cart.add(serum, -2)
    assert cart.quantity_of(serum.pk) == 2


def test_cannot_add_new_line_with_zero_quantity(session, serum):
    with pytest.raises(ValueError):
        Cart(session).add(serum, 0)


def test_update_quantity_to_zero_removes_line(session, serum, scrub):
    cart = Cart(session)
    cart.add(serum)
    cart.add(scrub)

    cart.update_quantity(serum.pk, 0)

    assert serum.pk not in cart
    assert scrub.pk in cart


def test_update_quantity_sets_absolute_value(session, scrub):
    cart = Cart(session)
    cart.add(scrub)
    cart.update_quantity(scrub.pk, 4)

    assert cart.quantity_of(scrub.pk) == 4
    assert cart.grand_total() == Decimal('398.00')


def test_update_quantity_ignores_unknown_product(session, serum):
    cart = Cart(session)
    cart.update_quantity(serum.pk, 3)
    assert cart.is_empty()


def test_remove_missing_line_is_a_no_op(session):
    cart = Cart(session)
    cart.remove(42)
    assert cart.is_empty()


def test_totals_over_several_lines(session, serum, scrub):
    cart = Cart(session)
    cart.add(serum, 2)
    cart.add(scrub, 3)

    assert cart.item_count() == 5
    assert cart.grand_total() == Decimal('798.50')
    assert [line.total for line in cart] == [Decimal('500'), Decimal('298.50')]


def test_price_is_snapshotted_when_first_added(session, serum):
    cart = Cart(session)
    cart.add(serum)
    serum.price = Decimal('1')
    cart.add(serum)

    assert cart.grand_total() == Decimal('500')


def test_cart_survives_a_new_wrapper_over_the_same_session(session, serum):
    Cart(session).add(serum, 2)
    assert session.modified

    reloaded = Cart(session)
    assert reloaded.quantity_of(serum.pk) == 2


def test_cart_survives_a_signed_cookie_round_trip(session, serum):
    from django.contrib.sessions.backends.signed_cookies import SessionStore

    Cart(session).add(serum, 2)
    session.save()

    restored = SessionStore(session_key=session.session_key)
    assert Cart(restored).quantity_of(serum.pk) == 2


def test_clear_empties_the_cart(session, serum):
    cart = Cart(session)
    cart.add(serum)
    cart.clear()

    assert cart.is_empty()
    assert session[settings.CART_SESSION_ID] == {}


def test_two_product_scenario(session):
    from storefront.models import Product

    cart = Cart(session)
    cart.add(Product(pk=10, name="A", price=Decimal('100')), 2)
    cart.add(Product(pk=11, name="B", price=Decimal('50')), 1)

    assert cart.grand_total() == Decimal('250')
    assert cart.item_count() == 3


def test_grand_total_matches_lines_after_mixed_mutations(session, serum, scrub):
    cart = Cart(session)
    cart.add(serum, 3)
    cart.add(scrub, 2)
    cart.update_quantity(serum.pk, 1)
    cart.add(scrub, 4)
    cart.remove(serum.pk)
    cart.add(serum, 2)

    expected = sum((line.price * line.quantity for line in cart), Decimal('0'))
    assert cart.grand_total() == expected == Decimal('1097.00')
