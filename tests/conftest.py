from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.contrib.sessions.backends.signed_cookies import SessionStore

from storefront.models import Category, Product

ADMIN_EMAIL = 'admin@ozera.com'
ADMIN_PASSWORD = 'admin123'


@pytest.fixture
def session():
    return SessionStore()


@pytest.fixture
def serum():
    """Unsaved product; enough for cart arithmetic."""
    return Product(pk=1, name="سيرم فيتامين سي", price=Decimal('250'), image_url='https://example.com/serum.jpg')


@pytest.fixture
def scrub():
    return Product(pk=2, name="مقشر القهوة الطبيعي", price=Decimal('99.50'))


@pytest.fixture
def categories(db):
    return {
        'oils': Category.objects.create(name="زيوت الوجه"),
        'masks': Category.objects.create(name="أقنعة العناية"),
    }


@pytest.fixture
def products(categories):
    return {
        'rose_oil': Product.objects.create(
            name="زيت الورد والزيتون", price=Decimal('299'), base_price=Decimal('299'),
            category=categories['oils'],
        ),
        'argan': Product.objects.create(
            name="زيت الأرغان", price=Decimal('300'), base_price=Decimal('300'), discount=10,
            category=categories['oils'],
        ),
        'clay_mask': Product.objects.create(
            name="قناع الطين الأسود", price=Decimal('279'), category=categories['masks'],
        ),
    }


@pytest.fixture
def admin_user(db):
    return get_user_model().objects.create_user(
        username=ADMIN_EMAIL, email=ADMIN_EMAIL, password=ADMIN_PASSWORD, is_staff=True,
    )


@pytest.fixture
def admin_client(client, admin_user):
    client.force_login(admin_user)
    return client
