from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import Category, Order, OrderItem, Product


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name',)
    search_fields = ('name',)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'price', 'base_price', 'discount', 'preview_image', 'created_at')
    list_filter = ('category',)
    search_fields = ('name', 'description')
    readonly_fields = ('created_at', 'updated_at')

    @admin.display(description=_("Image"))
    def preview_image(self, obj):
        if obj.image_url:
            return format_html('<img src="{}" width="60" style="border-radius:8px;" />', obj.image_url)
        return "—"


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ('product', 'name', 'price', 'quantity', 'image')


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('short_id', 'customer_phone', 'total_amount', 'payment_method', 'status', 'created_at')
    list_filter = ('status', 'payment_method', 'created_at')
    search_fields = ('customer_phone', 'delivery_address')
    inlines = [OrderItemInline]

    # Any status can be set from any other
    actions = ['mark_as_pending', 'mark_as_paid', 'mark_as_in_delivery', 'mark_as_completed', 'mark_as_cancelled']

    @admin.action(description=_("Mark as pending"))
    def mark_as_pending(self, request, queryset):
        queryset.update(status=Order.Status.PENDING)

    @admin.action(description=_("Mark as paid"))
    def mark_as_paid(self, request, queryset):
        queryset.update(status=Order.Status.PAID)

    @admin.action(description=_("Mark as in delivery"))
    def mark_as_in_delivery(self, request, queryset):
        queryset.update(status=Order.Status.IN_DELIVERY)

    @admin.action(description=_("Mark as completed"))
    def mark_as_completed(self, request, queryset):
        queryset.update(status=Order.Status.COMPLETED)

    @admin.action(description=_("Mark as cancelled"))
    def mark_as_cancelled(self, request, queryset):
        queryset.update(status=Order.Status.CANCELLED)
