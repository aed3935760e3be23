"""
Store gateways the views depend on.

Views never query the models directly; they go through ``get_product_store()``,
``get_category_store()`` and ``get_order_store()``, which build the class named
in settings. The Django ORM implementations below are the defaults.

Writes are last-write-wins: a save overwrites whatever another session
stored in between.
"""

import datetime
import logging

from django.conf import settings
from django.db import transaction
from django.db.models import Count
from django.utils import timezone
from django.utils.module_loading import import_string

from .models import Category, Order, OrderItem, Product

logger = logging.getLogger(__name__)


class ProductStore:

    def list(self, category_id=None):
        raise NotImplementedError

    def get(self, product_id):
        raise NotImplementedError

    def save(self, product):
        raise NotImplementedError

    def delete(self, product_id):
        raise NotImplementedError


class CategoryStore:

    def list(self):
        raise NotImplementedError

    def get(self, category_id):
        raise NotImplementedError

    def save(self, category):
        raise NotImplementedError

    def delete(self, category_id):
        raise NotImplementedError


class OrderStore:

    def create(self, items, total_amount, customer_phone, delivery_address, payment_method):
        raise NotImplementedError

    def get(self, order_id):
        raise NotImplementedError

    def list(self, status=None, phone=None, address=None, date_from=None, date_to=None):
        raise NotImplementedError

    def status_counts(self):
        raise NotImplementedError

    def update_status(self, order_id, status):
        raise NotImplementedError

    def update(self, order_id, **fields):
        raise NotImplementedError

    def delete(self, order_id):
        raise NotImplementedError


# -------------------------------
# Django ORM implementations
# -------------------------------
class DjangoProductStore(ProductStore):

    def list(self, category_id=None):
        """``None`` or ``"all"`` lists every product."""
        qs = Product.objects.select_related('category')
        if category_id and category_id != 'all':
            qs = qs.filter(category_id=category_id)
        return list(qs)

    def get(self, product_id):
        return Product.objects.select_related('category').filter(pk=product_id).first()

    def save(self, product):
        product.save()
        logger.info("PRODUCT SAVED — id: %s | price: %s", product.pk, product.price)
        return product

    def delete(self, product_id):
        deleted, _ = Product.objects.filter(pk=product_id).delete()
        logger.info("PRODUCT DELETED — id: %s | rows: %d", product_id, deleted)
        return deleted > 0


class DjangoCategoryStore(CategoryStore):

    def list(self):
        return list(Category.objects.all())

    def get(self, category_id):
        return Category.objects.filter(pk=category_id).first()

    def save(self, category):
        category.save()
        logger.info("CATEGORY SAVED — id: %s | name: %s", category.pk, category.name)
        return category

    def delete(self, category_id):
        # Products keep existing; their category is cleared (SET_NULL)
        deleted, _ = Category.objects.filter(pk=category_id).delete()
        logger.info("CATEGORY DELETED — id: %s", category_id)
        return deleted > 0


class DjangoOrderStore(OrderStore):

    def create(self, items, total_amount, customer_phone, delivery_address, payment_method):
        """
        ``items`` is a list of dicts with ``product_id``, ``name``, ``price``,
        ``quantity`` and ``image`` copied from the cart.
        """
        product_ids = set(
            Product.objects.filter(pk__in=[i['product_id'] for i in items]).values_list('pk', flat=True)
        )
        with transaction.atomic():
            order = Order.objects.create(
                total_amount=total_amount,
                status=Order.Status.PENDING,
                customer_phone=customer_phone,
                delivery_address=delivery_address,
                payment_method=payment_method,
            )
            OrderItem.objects.bulk_create([
                OrderItem(
                    order=order,
                    product_id=int(i['product_id']) if int(i['product_id']) in product_ids else None,
                    name=i['name'],
                    price=i['price'],
                    quantity=i['quantity'],
                    image=i.get('image') or '',
                )
                for i in items
            ])
        logger.info("ORDER CREATED — id: %s | items: %d | total: %s", order.pk, len(items), total_amount)
        return order

    def get(self, order_id):
        return Order.objects.prefetch_related('items').filter(pk=order_id).first()

    def list(self, status=None, phone=None, address=None, date_from=None, date_to=None):
        """Newest first. Dates are inclusive whole days in the current timezone."""
        qs = Order.objects.prefetch_related('items')
        if status and status != 'all':
            qs = qs.filter(status=status)
        if phone and phone.strip():
            qs = qs.filter(customer_phone__contains=phone.strip())
        if address and address.strip():
            qs = qs.filter(delivery_address__icontains=address.strip())
        if date_from:
            start = timezone.make_aware(datetime.datetime.combine(date_from, datetime.time.min))
            qs = qs.filter(created_at__gte=start)
        if date_to:
            end = timezone.make_aware(datetime.datetime.combine(date_to, datetime.time.max))
            qs = qs.filter(created_at__lte=end)
        return list(qs.order_by('-created_at'))

    def status_counts(self):
        counts = {status: 0 for status in Order.Status.values}
        for row in Order.objects.values('status').annotate(n=Count('id')):
            counts[row['status']] = row['n']
        counts['total'] = sum(counts.values())
        return counts

    def update_status(self, order_id, status):
        if status not in Order.Status.values:
            raise ValueError("Unknown order status: {}".format(status))
        updated = Order.objects.filter(pk=order_id).update(status=status, updated_at=timezone.now())
        logger.info("ORDER STATUS — id: %s | status: %s", order_id, status)
        return updated > 0

    def update(self, order_id, **fields):
        allowed = {'customer_phone', 'delivery_address', 'payment_method', 'status'}
        unknown = set(fields) - allowed
        if unknown:
            raise ValueError("Order fields cannot be edited: {}".format(", ".join(sorted(unknown))))
        updated = Order.objects.filter(pk=order_id).update(updated_at=timezone.now(), **fields)
        logger.info("ORDER UPDATED — id: %s | fields: %s", order_id, sorted(fields))
        return updated > 0

    def delete(self, order_id):
        deleted, _ = Order.objects.filter(pk=order_id).delete()
        logger.info("ORDER DELETED — id: %s", order_id)
        return deleted > 0


def get_product_store():
    return import_string(settings.PRODUCT_STORE)()


def get_category_store():
    return import_string(settings.CATEGORY_STORE)()


def get_order_store():
    return import_string(settings.ORDER_STORE)()
