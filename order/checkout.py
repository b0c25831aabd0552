"""
Checkout: turn the requester's cart into a completed order.

The whole cart is validated against the active catalog before anything is
written, so a rejected checkout leaves no order rows behind and the cart
untouched. Prices are copied onto the order items, later catalog edits never
change a placed order.
"""
import logging
from decimal import Decimal

from django.db import transaction

from product.models import Product
from .exceptions import EmptyCart, ProductUnavailable
from .models import Order, OrderItem, generate_download_token

logger = logging.getLogger(__name__)


def price_cart(cart):
    """
    Return ``([(product, quantity), ...], total)`` for a raw cart, in cart order.

    Raises ProductUnavailable on the first product that is missing or inactive.
    """
    products = Product.objects.active().in_bulk(list(cart))

    lines = []
    total = Decimal("0.00")
    for product_id, quantity in cart.items():
        product = products.get(product_id)
        if product is None:
            raise ProductUnavailable(product_id)
        total += product.price * quantity
        lines.append((product, quantity))
    return lines, total


def place_order(store, key, customer_email, payment_session_id=None, user=None):
    cart = store.get(key)
    if not cart:
        raise EmptyCart()

    try:
        lines, total = price_cart(cart)
    except ProductUnavailable as exc:
        logger.warning("Checkout rejected for %s: product %s unavailable", key, exc.product_id)
        raise

    with transaction.atomic():
        order = Order.objects.create(
            user=user if user is not None and user.is_authenticated else None,
            # placeholder until payment webhooks move orders from pending to completed
            status=Order.Status.COMPLETED,
            total=total,
            customer_email=customer_email,
            payment_session_id=payment_session_id or None,
            download_token=generate_download_token(),
        )
        OrderItem.objects.bulk_create([
            OrderItem(order=order, product=product, quantity=quantity, unit_price=product.price)
            for product, quantity in lines
        ])

    store.clear(key)
    logger.info("Order %s placed by %s: %s item(s), total %s", order.id, key, len(lines), total)

    return Order.objects.prefetch_related("items__product").get(pk=order.pk)
