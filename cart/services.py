from dataclasses import dataclass, field
from decimal import Decimal

from product.models import Product


@dataclass
class CartLine:
    product: Product
    quantity: int

    @property
    def product_id(self):
        return self.product.id

    @property
    def unit_price(self):
        return self.product.price

    @property
    def total(self):
        return self.product.price * self.quantity


@dataclass
class CartSummary:
    lines: list = field(default_factory=list)

    @property
    def total(self):
        return sum((line.total for line in self.lines), Decimal("0.00"))

    @property
    def item_count(self):
        return len(self.lines)


def summarize_cart(cart):
    """
    Resolve a raw cart against the active catalog, keeping cart order.

    Products that went inactive or were removed since they were added are
    left out of the summary (but stay in the stored cart; checkout rejects them).
    """
    products = Product.objects.active().in_bulk(list(cart))
    lines = [
        CartLine(product=products[product_id], quantity=quantity)
        for product_id, quantity in cart.items()
        if product_id in products
    ]
    return CartSummary(lines=lines)
