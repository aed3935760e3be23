from django import forms
from django.contrib.auth.forms import AuthenticationForm
from django.utils.translation import gettext_lazy as _

from storefront.models import Category, Order, Product
from storefront.pricing import SOURCE_DISCOUNT, SOURCE_PRICE, resolve_pricing


def split_lines(text):
    """One entry per line; blank lines are dropped."""
    return [line.strip() for line in (text or '').splitlines() if line.strip()]


class EmailAuthenticationForm(AuthenticationForm):
    username = forms.CharField(
        label=_("Email"),
        max_length=254,
        widget=forms.EmailInput(attrs={'autofocus': True, 'autocomplete': 'email', 'dir': 'ltr'}),
    )


class CategoryForm(forms.ModelForm):
    class Meta:
        model = Category
        fields = ['name']


class ProductForm(forms.ModelForm):
    """
    Base price, discount and price are kept consistent on clean. The hidden
    ``price_source`` field says which of discount / price the admin edited
    last; the other one is derived from it.
    """

    discount = forms.IntegerField(label=_("Discount %"), required=False, initial=0)
    price = forms.DecimalField(label=_("Price"), max_digits=10, decimal_places=2, required=False)
    price_source = forms.ChoiceField(
        choices=[(SOURCE_DISCOUNT, SOURCE_DISCOUNT), (SOURCE_PRICE, SOURCE_PRICE)],
        initial=SOURCE_DISCOUNT,
        required=False,
        widget=forms.HiddenInput,
    )
    benefits_text = forms.CharField(
        label=_("Benefits (one per line)"),
        required=False,
        widget=forms.Textarea(attrs={'rows': 4}),
    )
    ingredients_text = forms.CharField(
        label=_("Ingredients (one per line)"),
        required=False,
        widget=forms.Textarea(attrs={'rows': 4}),
    )

    class Meta:
        model = Product
        fields = ['name', 'description', 'category', 'base_price', 'discount', 'price',
                  'image_url', 'usage_instructions']
        widgets = {
            'description': forms.Textarea(attrs={'rows': 3}),
            'usage_instructions': forms.Textarea(attrs={'rows': 3}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['category'].empty_label = _("Unassigned")
        product = self.instance
        if product.pk:
            # Products saved without a base price start from their current price
            if not self.initial.get('base_price'):
                self.initial['base_price'] = product.price
            self.initial['benefits_text'] = "\n".join(product.benefits or [])
            self.initial['ingredients_text'] = "\n".join(product.ingredients or [])

    def clean(self):
        cleaned = super().clean()
        source = cleaned.get('price_source') or SOURCE_DISCOUNT
        base_price = cleaned.get('base_price')
        price = cleaned.get('price')

        if base_price is None and price is None:
            raise forms.ValidationError(_("Enter a base price or a price."))
        if not base_price:
            base_price = price

        base_price, discount, price = resolve_pricing(base_price, cleaned.get('discount'), price, source)
        cleaned['base_price'] = base_price
        cleaned['discount'] = discount
        cleaned['price'] = price
        return cleaned

    def save(self, commit=True):
        product = super().save(commit=False)
        product.base_price = self.cleaned_data['base_price']
        product.discount = self.cleaned_data['discount']
        product.price = self.cleaned_data['price']
        product.benefits = split_lines(self.cleaned_data.get('benefits_text'))
        product.ingredients = split_lines(self.cleaned_data.get('ingredients_text'))
        if commit:
            product.save()
        return product


class OrderStatusForm(forms.Form):
    status = forms.ChoiceField(label=_("Status"), choices=Order.Status.choices)


class OrderEditForm(forms.Form):
    customer_phone = forms.CharField(label=_("Phone number"), max_length=32)
    delivery_address = forms.CharField(label=_("Delivery address"), widget=forms.Textarea(attrs={'rows': 3}))
    payment_method = forms.ChoiceField(label=_("Payment method"), choices=Order.PaymentMethod.choices)


class OrderFilterForm(forms.Form):
    status = forms.ChoiceField(
        label=_("Status"),
        choices=[('all', _("All"))] + list(Order.Status.choices),
        required=False,
    )
    phone = forms.CharField(label=_("Phone"), required=False)
    address = forms.CharField(label=_("Address"), required=False)
    date_from = forms.DateField(label=_("From"), required=False, widget=forms.DateInput(attrs={'type': 'date'}, format='%Y-%m-%d'))
    date_to = forms.DateField(label=_("To"), required=False, widget=forms.DateInput(attrs={'type': 'date'}, format='%Y-%m-%d'))

    def filters(self):
        if not self.is_valid():
            return {}
        data = self.cleaned_data
        return {
            'status': data.get('status') or None,
            'phone': data.get('phone') or None,
            'address': data.get('address') or None,
            'date_from': data.get('date_from'),
            'date_to': data.get('date_to'),
        }

    def is_filtered(self):
        filters = self.filters()
        if filters.get('status') == 'all':
            filters['status'] = None
        return any(filters.values())
