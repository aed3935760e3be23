from django import template
from django.conf import settings

from ..pricing import format_amount

register = template.Library()


@register.filter
def currency(value):
    if value in (None, ''):
        return ''
    return f"{format_amount(value)} {settings.CURRENCY_LABEL}"


@register.filter
def amount(value):
    return format_amount(value)
