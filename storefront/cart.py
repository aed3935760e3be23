from decimal import Decimal

from django.conf import settings

from .pricing import to_decimal


class CartLine:
    def __init__(self, product_id, name, price, quantity, image_url=''):
        self.product_id = product_id
        self.name = name
        self.price = price
        self.quantity = quantity
        self.image_url = image_url

    @property
    def total(self):
        return self.price * self.quantity

    def __repr__(self):
        return "CartLine({!r}, qty={})".format(self.product_id, self.quantity)


class Cart:
    """
    Product -> line mapping kept in the visitor's session.

    The session is cookie-backed, so the cart stays in the browser and
    survives reloads. Prices are snapshotted when a product is first added.
    Every mutation writes the whole snapshot back under ``CART_SESSION_ID``.
    """

    def __init__(self, session):
        self.session = session
        self.lines = session.get(settings.CART_SESSION_ID) or {}

    # -------------------------------
    # Mutations
    # -------------------------------
    def add(self, product, quantity=1):
        """
        Adds ``quantity`` of ``product``. A negative quantity is a delta used
        when an in-cart product is edited down; the resulting quantity must
        stay at 1 or more.
        """
        product_id = str(product.pk)
        line = self.lines.get(product_id)

        if line:
            new_quantity = line['quantity'] + quantity
            if new_quantity < 1:
                raise ValueError("Cart quantity for product {} would drop to {}".format(product_id, new_quantity))
            line['quantity'] = new_quantity
            line['total'] = str(to_decimal(line['price']) * new_quantity)
        else:
            if quantity < 1:
                raise ValueError("Cannot add {} of product {}".format(quantity, product_id))
            self.lines[product_id] = {
                'name': product.name,
                'price': str(product.price),
                'quantity': quantity,
                'image_url': product.image_url,
                'total': str(product.price * quantity),
            }
        self.save()

    def update_quantity(self, product_id, quantity):
        product_id = str(product_id)
        if quantity <= 0:
            self.remove(product_id)
            return
        line = self.lines.get(product_id)
        if not line:
            return
        line['quantity'] = quantity
        line['total'] = str(to_decimal(line['price']) * quantity)
        self.save()

    def remove(self, product_id):
        self.lines.pop(str(product_id), None)
        self.save()

    def clear(self):
        self.lines = {}
        self.save()

    def save(self):
        self.session[settings.CART_SESSION_ID] = self.lines
        self.session.modified = True

    # -------------------------------
    # Reads
    # -------------------------------
    def quantity_of(self, product_id):
        line = self.lines.get(str(product_id))
        return line['quantity'] if line else 0

    def grand_total(self):
        return sum((line.total for line in self), Decimal('0.00'))

    def item_count(self):
        return sum(line['quantity'] for line in self.lines.values())

    def is_empty(self):
        return not self.lines

    def __iter__(self):
        for product_id, line in self.lines.items():
            yield CartLine(
                product_id=product_id,
                name=line['name'],
                price=to_decimal(line['price']),
                quantity=line['quantity'],
                image_url=line.get('image_url', ''),
            )

    def __len__(self):
        return len(self.lines)

    def __contains__(self, product_id):
        return str(product_id) in self.lines
