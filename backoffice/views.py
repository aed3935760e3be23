import asyncio
import logging

from asgiref.sync import sync_to_async
from django.conf import settings
from django.contrib import messages
from django.contrib.auth import views as auth_views
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.db import DatabaseError
from django.http import Http404
from django.shortcuts import redirect, render
from django.utils.translation import gettext as _
from django.views.decorators.http import require_POST

from storefront.models import Category, Product
from storefront.stores import get_category_store, get_order_store, get_product_store
from .forms import (
    CategoryForm,
    EmailAuthenticationForm,
    OrderEditForm,
    OrderFilterForm,
    OrderStatusForm,
    ProductForm,
)
from .stats import dashboard_stats

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────
#  Sign in / out
# ─────────────────────────────────────────
class LoginView(auth_views.LoginView):
    template_name = 'backoffice/login.html'
    authentication_form = EmailAuthenticationForm
    redirect_authenticated_user = True

    def post(self, request, *args, **kwargs):
        try:
            return super().post(request, *args, **kwargs)
        except DatabaseError:
            logger.exception("SIGN-IN UNAVAILABLE — username: %s", request.POST.get('username', ''))
            messages.error(request, _("Sign-in is unavailable right now. Please try again."))
            return redirect('backoffice:login')

    def form_invalid(self, form):
        logger.warning("SIGN-IN FAILED — username: %s", form.data.get('username', ''))
        return super().form_invalid(form)


# ─────────────────────────────────────────
#  Dashboard
# ─────────────────────────────────────────
@login_required
async def dashboard(request):
    try:
        products, categories, orders = await asyncio.gather(
            sync_to_async(get_product_store().list)(),
            sync_to_async(get_category_store().list)(),
            sync_to_async(get_order_store().list)(),
        )
    except asyncio.CancelledError:
        # Client went away mid-load; nothing to render
        logger.debug("Dashboard load cancelled")
        raise
    except DatabaseError:
        logger.exception("Loading dashboard stats failed")
        products, categories, orders = [], [], []

    return await sync_to_async(render)(request, 'backoffice/dashboard.html', {
        'stats': dashboard_stats(products, categories, orders),
        'recent_orders': orders[:5],
    })


# ─────────────────────────────────────────
#  Products
# ─────────────────────────────────────────
@login_required
def product_list(request):
    products, categories = [], []
    try:
        products = get_product_store().list()
        categories = get_category_store().list()
    except DatabaseError:
        logger.exception("Loading products failed")

    category_names = {c.pk: c.name for c in categories}
    return render(request, 'backoffice/product_list.html', {
        'rows': [(p, category_names.get(p.category_id)) for p in products],
    })


@login_required
def product_form(request, pk=None):
    store = get_product_store()
    product = None
    if pk is not None:
        product = store.get(pk)
        if product is None:
            raise Http404("Product not found")

    form = ProductForm(request.POST or None, instance=product or Product())
    if request.method == 'POST' and form.is_valid():
        try:
            store.save(form.save(commit=False))
        except DatabaseError:
            logger.exception("Saving product failed (id=%s)", pk)
        return redirect('backoffice:product_list')

    return render(request, 'backoffice/product_form.html', {'form': form, 'product': product})


@login_required
def product_delete(request, pk):
    store = get_product_store()
    product = store.get(pk)
    if product is None:
        raise Http404("Product not found")

    if request.method == 'POST':
        try:
            store.delete(pk)
        except DatabaseError:
            logger.exception("Deleting product failed (id=%s)", pk)
        return redirect('backoffice:product_list')

    return render(request, 'backoffice/confirm_delete.html', {
        'title': _("Delete this product?"),
        'object_label': product.name,
        'cancel_url': 'backoffice:product_list',
    })


# ─────────────────────────────────────────
#  Categories
# ─────────────────────────────────────────
@login_required
def category_list(request):
    categories = []
    try:
        categories = get_category_store().list()
    except DatabaseError:
        logger.exception("Loading categories failed")
    return render(request, 'backoffice/category_list.html', {'categories': categories})


@login_required
def category_form(request, pk=None):
    store = get_category_store()
    category = None
    if pk is not None:
        category = store.get(pk)
        if category is None:
            raise Http404("Category not found")

    form = CategoryForm(request.POST or None, instance=category or Category())
    if request.method == 'POST' and form.is_valid():
        try:
            store.save(form.save(commit=False))
        except DatabaseError:
            logger.exception("Saving category failed (id=%s)", pk)
        return redirect('backoffice:category_list')

    return render(request, 'backoffice/category_form.html', {'form': form, 'category': category})


@login_required
def category_delete(request, pk):
    store = get_category_store()
    category = store.get(pk)
    if category is None:
        raise Http404("Category not found")

    if request.method == 'POST':
        try:
            store.delete(pk)
        except DatabaseError:
            logger.exception("Deleting category failed (id=%s)", pk)
        return redirect('backoffice:category_list')

    return render(request, 'backoffice/confirm_delete.html', {
        'title': _("Delete this category? Its products are kept without a category."),
        'object_label': category.name,
        'cancel_url': 'backoffice:category_list',
    })


# ─────────────────────────────────────────
#  Orders
# ─────────────────────────────────────────
@login_required
def order_list(request):
    store = get_order_store()
    filter_form = OrderFilterForm(request.GET or None)

    orders, counts = [], {}
    try:
        orders = store.list(**filter_form.filters())
        counts = store.status_counts()
    except DatabaseError:
        logger.exception("Loading orders failed")

    # Changing a filter always lands on the first page (page is not part of the form)
    page = Paginator(orders, settings.ORDERS_PER_PAGE).get_page(request.GET.get('page'))
    query = request.GET.copy()
    query.pop('page', None)

    return render(request, 'backoffice/order_list.html', {
        'filter_form': filter_form,
        'is_filtered': filter_form.is_filtered(),
        'page': page,
        'counts': counts,
        'query': query.urlencode(),
    })


def _get_order_or_404(order_id):
    order = get_order_store().get(order_id)
    if order is None:
        raise Http404("Order not found")
    return order


@login_required
def order_detail(request, order_id):
    order = _get_order_or_404(order_id)
    return render(request, 'backoffice/order_detail.html', {
        'order': order,
        'status_form': OrderStatusForm(initial={'status': order.status}),
        'edit_form': OrderEditForm(initial={
            'customer_phone': order.customer_phone,
            'delivery_address': order.delivery_address,
            'payment_method': order.payment_method,
        }),
    })


@login_required
@require_POST
def order_status(request, order_id):
    """Any status may follow any other."""
    _get_order_or_404(order_id)
    form = OrderStatusForm(request.POST)
    if form.is_valid():
        try:
            get_order_store().update_status(order_id, form.cleaned_data['status'])
        except DatabaseError:
            logger.exception("Updating order status failed (id=%s)", order_id)
    return redirect('backoffice:order_detail', order_id=order_id)


@login_required
@require_POST
def order_edit(request, order_id):
    order = _get_order_or_404(order_id)
    form = OrderEditForm(request.POST)
    if not form.is_valid():
        return render(request, 'backoffice/order_detail.html', {
            'order': order,
            'status_form': OrderStatusForm(initial={'status': order.status}),
            'edit_form': form,
        })
    try:
        get_order_store().update(order_id, **form.cleaned_data)
    except DatabaseError:
        logger.exception("Editing order failed (id=%s)", order_id)
    else:
        messages.success(request, _("Order updated."))
    return redirect('backoffice:order_detail', order_id=order_id)


@login_required
def order_delete(request, order_id):
    order = _get_order_or_404(order_id)

    if request.method == 'POST':
        try:
            get_order_store().delete(order_id)
        except DatabaseError:
            logger.exception("Deleting order failed (id=%s)", order_id)
        return redirect('backoffice:order_list')

    return render(request, 'backoffice/confirm_delete.html', {
        'title': _("Delete order #%(ref)s? This cannot be undone.") % {'ref': order.short_id},
        'object_label': order.customer_phone,
        'cancel_url': 'backoffice:order_list',
    })
