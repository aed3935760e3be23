from decimal import Decimal

from storefront.models import Order


def dashboard_stats(products, categories, orders):
    """Revenue only counts completed orders."""
    completed = [o for o in orders if o.status == Order.Status.COMPLETED]
    return {
        'total_products': len(products),
        'total_categories': len(categories),
        'total_orders': len(orders),
        'pending_orders': sum(1 for o in orders if o.status == Order.Status.PENDING),
        'completed_orders': len(completed),
        'total_revenue': sum((o.total_amount or Decimal('0') for o in completed), Decimal('0')),
    }
