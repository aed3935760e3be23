from django import forms
from django.utils.translation import gettext_lazy as _

from .models import Order


class CheckoutForm(forms.Form):
    customer_phone = forms.CharField(
        label=_("Phone number"),
        max_length=32,
        widget=forms.TextInput(attrs={'inputmode': 'tel', 'autocomplete': 'tel', 'dir': 'ltr'}),
    )
    delivery_address = forms.CharField(
        label=_("Delivery address"),
        widget=forms.Textarea(attrs={'rows': 3}),
    )
    payment_method = forms.ChoiceField(
        label=_("Payment method"),
        choices=Order.PaymentMethod.choices,
        required=False,
        widget=forms.RadioSelect,
    )

    def clean_payment_method(self):
        return self.cleaned_data.get('payment_method') or Order.PaymentMethod.COD


class AddToCartForm(forms.Form):
    """Quantity chosen on a product card (absolute, not a delta)."""

    quantity = forms.IntegerField(min_value=1, max_value=99, initial=1)
