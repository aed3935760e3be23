# storefront/context_processors.py
from django.conf import settings

from .cart import Cart


def cart(request):
    """
    Exposes the session cart and its total item count to every template.
    """
    current = Cart(request.session)
    return {
        'cart': current,
        'cart_count': current.item_count(),
    }


def theme(request):
    value = request.COOKIES.get(settings.THEME_COOKIE_NAME)
    if value not in settings.THEMES:
        value = settings.THEMES[0]
    return {'theme': value}
