from django.shortcuts import render, redirect
from django.conf import settings
from django.contrib import messages
from django.db import DatabaseError
from django.http import Http404, JsonResponse
from django.utils.http import url_has_allowed_host_and_scheme
from django.utils.translation import gettext as _, ngettext
from django.views.decorators.http import require_POST
import json
import logging

from .cart import Cart
from .checkout import CheckoutState, submit_checkout
from .forms import AddToCartForm, CheckoutForm
from .pricing import format_amount
from .stores import get_category_store, get_order_store, get_product_store
from .whatsapp import CONTACT_GREETING, order_handoff_url, whatsapp_url

logger = logging.getLogger(__name__)

LAST_ORDER_SESSION_KEY = 'last_order_id'


def _safe_next(request, fallback='home'):
    next_url = request.POST.get('next') or request.GET.get('next')
    if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
        return next_url
    return fallback


# -------------------------------
# Basic Pages
# -------------------------------
def home(request):
    selected = request.GET.get('category', 'all')
    if selected != 'all' and not selected.isdigit():
        selected = 'all'

    categories, products = [], []
    try:
        categories = get_category_store().list()
        products = get_product_store().list(category_id=selected)
    except DatabaseError:
        logger.exception("Loading storefront catalogue failed (category=%s)", selected)

    return render(request, 'storefront/home.html', {
        'categories': categories,
        'products': products,
        'selected_category': selected,
        'contact_url': whatsapp_url(CONTACT_GREETING),
    })


def product_detail(request, pk):
    product = get_product_store().get(pk)
    if product is None:
        raise Http404("Product not found")
    cart = Cart(request.session)
    return render(request, 'storefront/product_detail.html', {
        'product': product,
        'form': AddToCartForm(initial={'quantity': cart.quantity_of(pk) or 1}),
        'in_cart': cart.quantity_of(pk),
    })


@require_POST
def toggle_theme(request):
    current = request.COOKIES.get(settings.THEME_COOKIE_NAME, settings.THEMES[0])
    new_theme = settings.THEMES[1] if current == settings.THEMES[0] else settings.THEMES[0]
    response = redirect(_safe_next(request))
    response.set_cookie(settings.THEME_COOKIE_NAME, new_theme, max_age=60 * 60 * 24 * 365, samesite='Lax')
    return response


# -------------------------------
# CART SYSTEM
# -------------------------------
@require_POST
def add_to_cart(request, product_id):
    product = get_product_store().get(product_id)
    if product is None:
        raise Http404("Product not found")

    form = AddToCartForm(request.POST)
    quantity = form.cleaned_data['quantity'] if form.is_valid() else 1

    cart = Cart(request.session)
    current = cart.quantity_of(product.pk)
    if current:
        # The card edits an in-cart product to an absolute quantity
        delta = quantity - current
        if delta != 0:
            cart.add(product, delta)
    else:
        cart.add(product, quantity)

    messages.success(request, ngettext(
        "Added %(count)d item of %(name)s to the cart",
        "Added %(count)d items of %(name)s to the cart",
        quantity,
    ) % {'count': quantity, 'name': product.name})
    return redirect(_safe_next(request))


@require_POST
def remove_from_cart(request):
    cart = Cart(request.session)
    cart.remove(request.POST.get('product_id', ''))
    return redirect('cart')


@require_POST
def update_cart_item(request):
    try:
        data = json.loads(request.body)
    except ValueError:
        return JsonResponse({'status': 'error', 'message': 'Invalid JSON'}, status=400)

    product_id = str(data.get('product_id', ''))
    action = data.get('action')
    cart = Cart(request.session)

    if product_id not in cart:
        return JsonResponse({'status': 'error', 'message': 'Item not in cart'}, status=404)

    current = cart.quantity_of(product_id)
    if action == 'increase':
        cart.update_quantity(product_id, current + 1)
    elif action == 'decrease':
        cart.update_quantity(product_id, current - 1)
    elif action == 'remove':
        cart.remove(product_id)
    elif action == 'set':
        try:
            quantity = int(data.get('quantity'))
        except (TypeError, ValueError):
            return JsonResponse({'status': 'error', 'message': 'Invalid quantity'}, status=400)
        cart.update_quantity(product_id, quantity)
    else:
        return JsonResponse({'status': 'error', 'message': 'Invalid action'}, status=400)

    # Return new count and total for the cart drawer to update
    return JsonResponse({
        'status': 'success',
        'cart_count': cart.item_count(),
        'quantity': cart.quantity_of(product_id),
        'total': format_amount(cart.grand_total()),
    })


def cart_view(request):
    cart = Cart(request.session)
    return render(request, 'storefront/cart.html', {
        'lines': list(cart),
        'total_price': cart.grand_total(),
    })


# -------------------------------
# CHECKOUT
# -------------------------------
def checkout(request):
    cart = Cart(request.session)
    if cart.is_empty():
        messages.info(request, _("Your cart is empty."))
        return redirect('home')

    if request.method != 'POST':
        return render(request, 'storefront/checkout.html', {
            'form': CheckoutForm(),
            'lines': list(cart),
            'total_price': cart.grand_total(),
        })

    form = CheckoutForm(request.POST)
    result = submit_checkout(cart, form, get_order_store())

    if result.state is CheckoutState.SUCCESS:
        request.session[LAST_ORDER_SESSION_KEY] = str(result.order.pk)
        messages.success(request, _(
            "Your order was received! Our team will contact you on %(phone)s"
        ) % {'phone': result.order.customer_phone})
        return redirect('checkout_success')

    if result.state is CheckoutState.FAILED:
        messages.error(request, _("Something went wrong while saving your order. Please try again."))

    return render(request, 'storefront/checkout.html', {
        'form': form,
        'lines': list(cart),
        'total_price': cart.grand_total(),
    }, status=200 if result.state is CheckoutState.CHECKOUT_FORM else 503)


def checkout_success(request):
    """Confirmation notice, then a timed hop to WhatsApp with the order summary."""
    order_id = request.session.pop(LAST_ORDER_SESSION_KEY, None)
    order = get_order_store().get(order_id) if order_id else None
    if order is None:
        return redirect('home')

    return render(request, 'storefront/checkout_success.html', {
        'order': order,
        'handoff_url': order_handoff_url(order),
        'redirect_delay_ms': settings.WHATSAPP_REDIRECT_DELAY_MS,
        'redirect_delay_s': settings.WHATSAPP_REDIRECT_DELAY_MS / 1000,
    })
