from decimal import Decimal

from django.conf import settings


def format_currency(amount):
    """Render a money amount the way the storefront shows it, e.g. ``$1,234.50``."""
    symbol = getattr(settings, "CURRENCY_SYMBOL", "$")
    return f"{symbol}{Decimal(amount or 0):,.2f}"


def client_ip(request):
    """
    IP address used to key guest carts.

    X-Forwarded-For is only trusted when CART_TRUST_FORWARDED_FOR is on,
    otherwise any client could pick someone else's cart.
    """
    if getattr(settings, "CART_TRUST_FORWARDED_FOR", False):
        forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.META.get("REMOTE_ADDR", "")
