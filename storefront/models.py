import uuid
from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .pricing import effective_price


# ------------------------------
# CATEGORY MODEL
# ------------------------------
class Category(models.Model):
    name = models.CharField(_("name"), max_length=100)

    class Meta:
        db_table = 'categories'
        ordering = ['name']
        verbose_name = _("category")
        verbose_name_plural = _("categories")

    def __str__(self):
        return self.name


# ------------------------------
# PRODUCT MODEL
# ------------------------------
class Product(models.Model):
    name = models.CharField(_("name"), max_length=255)
    description = models.TextField(_("description"), blank=True)

    # Current (charged) price, derived from base_price when a discount applies
    price = models.DecimalField(_("price"), max_digits=10, decimal_places=2)
    base_price = models.DecimalField(_("base price"), max_digits=10, decimal_places=2, null=True, blank=True)
    discount = models.PositiveSmallIntegerField(
        _("discount %"),
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )

    image_url = models.URLField(_("image URL"), max_length=500, blank=True)

    # Deleting a category keeps its products around with no category
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
        verbose_name=_("category"),
    )

    benefits = models.JSONField(_("benefits"), default=list, blank=True)
    usage_instructions = models.TextField(_("usage instructions"), blank=True)
    ingredients = models.JSONField(_("ingredients"), default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        ordering = ['-created_at']
        verbose_name = _("product")
        verbose_name_plural = _("products")

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        """
        The charged price always follows base price and discount
        whenever a discount is set.
        """
        if self.discount and self.discount > 0 and self.base_price:
            self.price = effective_price(self.base_price, self.discount)
        super().save(*args, **kwargs)

    @property
    def has_discount(self):
        return bool(self.discount and self.base_price and self.base_price > self.price)


# ------------------------------
# ORDER MODEL
# ------------------------------
class Order(models.Model):

    class Status(models.TextChoices):
        PENDING = 'pending', _('Pending')
        PAID = 'paid', _('Paid')
        IN_DELIVERY = 'in_delivery', _('In delivery')
        COMPLETED = 'completed', _('Completed')
        CANCELLED = 'cancelled', _('Cancelled')

    class PaymentMethod(models.TextChoices):
        COD = 'cod', _('Cash on delivery')
        INSTAPAY = 'instapay', _('InstaPay')
        WALLET = 'wallet', _('Mobile wallet')

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    total_amount = models.DecimalField(
        _("total"),
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )

    status = models.CharField(
        _("status"),
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING
    )

    customer_phone = models.CharField(_("customer phone"), max_length=32)
    delivery_address = models.TextField(_("delivery address"))
    payment_method = models.CharField(
        _("payment method"),
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.COD
    )

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        verbose_name = _("order")
        verbose_name_plural = _("orders")

    def __str__(self):
        return f"Order #{self.short_id} - {self.customer_phone}"

    @property
    def short_id(self):
        return self.id.hex[:8].upper()

    def get_total_price(self):
        total = Decimal('0.00')
        for item in self.items.all():
            total += item.total_price
        return total.quantize(Decimal('0.01'))


class OrderItem(models.Model):
    """Snapshot of a cart line taken at checkout time."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_items',
    )
    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(default=1)
    image = models.URLField(max_length=500, blank=True)

    class Meta:
        db_table = 'order_items'

    def __str__(self):
        return f"{self.name} × {self.quantity}"

    @property
    def total_price(self):
        return self.price * self.quantity
