"""
Order summary text and wa.me deep links for the WhatsApp handoff.

The summary always goes to the store's Arabic-speaking staff, so it is
written in Arabic whatever language the customer browses in.
"""

import re
from urllib.parse import quote

from django.conf import settings

from .pricing import format_amount

PAYMENT_METHOD_LABELS = {
    'cod': ('🚚', 'الدفع عند الاستلام'),
    'instapay': ('💳', 'الدفع إنستا باي'),
    'wallet': ('📱', 'المحافظ الإلكترونية'),
}

CONTACT_GREETING = "مرحباً، أود الاستفسار عن منتجات OZERA"


def payment_method_label(method):
    emoji, label = PAYMENT_METHOD_LABELS.get(method, PAYMENT_METHOD_LABELS['cod'])
    return f"{emoji} {label}"


def generate_order_message(order):
    currency = settings.CURRENCY_LABEL
    items_list = "\n\n".join(
        f"• *{item.name}*\n  الكمية: {item.quantity}\n  السعر: {format_amount(item.total_price)} {currency}"
        for item in order.items.all()
    )

    return f"""🛍️ *طلب جديد من OZERA*

📄 *تفاصيل الطلب*
رقم الطلب: *{order.short_id}*

👤 *بيانات العميل*
• رقم الهاتف: {order.customer_phone}
• العنوان: {order.delivery_address}

📦 *المنتجات المطلوبة*
{items_list}

💰 *الإجمالي:* *{format_amount(order.total_amount)} {currency}*
💳 *طريقة الدفع:* {payment_method_label(order.payment_method)}

━━━━━━━━━━━━━
تم استلام الطلب عبر *تطبيق OZERA*
نشكر ثقتك بنا ✨"""


def whatsapp_url(text, phone=None):
    # wa.me wants the number as bare digits, country code first
    digits = re.sub(r'\D', '', phone or settings.WHATSAPP_ORDER_PHONE)
    return f"https://wa.me/{digits}?text={quote(text, safe='')}"


def order_handoff_url(order, phone=None):
    return whatsapp_url(generate_order_message(order), phone=phone)
