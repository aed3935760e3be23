from django import template

register = template.Library()


@register.simple_tag(takes_context=True)
def cart_quantity(context, product):
    """Quantity of ``product`` in the visitor's cart, 0 when absent."""
    cart = context.get('cart')
    return cart.quantity_of(product.pk) if cart is not None else 0
