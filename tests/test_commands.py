from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from storefront.management.commands.seed_store import CATEGORIES, PRODUCTS
from storefront.models import Category, Order, Product

pytestmark = pytest.mark.django_db


def run(*args):
    out = StringIO()
    call_command(*args, stdout=out)
    return out.getvalue()


def test_seed_store_is_idempotent():
    run('seed_store')
    run('seed_store')

    assert Category.objects.count() == len(CATEGORIES)
    assert Product.objects.count() == len(PRODUCTS)
    assert not Product.objects.filter(category__isnull=True).exists()


def test_seed_store_clear_wipes_orders():
    Order.objects.create(customer_phone='010', delivery_address='Cairo')
    Category.objects.create(name="قسم قديم")

    output = run('seed_store', '--clear')

    assert not Order.objects.exists()
    assert not Category.objects.filter(name="قسم قديم").exists()
    assert 'Cleared' in output


def test_create_admin_user_defaults():
    run('create_admin_user')

    user = get_user_model().objects.get(username='admin@ozera.com')
    assert user.check_password('admin123')
    assert user.is_staff


def test_create_admin_user_twice_warns():
    run('create_admin_user', '--email', 'owner@ozera.com', '--password', 's3cret-pass')
    output = run('create_admin_user', '--email', 'owner@ozera.com')

    assert 'already exists' in output
    assert get_user_model().objects.filter(username='owner@ozera.com').count() == 1
