"""
Cart storage.

A cart is a plain ``{product_id: quantity}`` dict kept in a Django cache
backend under a key derived from the requester. Every write stores the whole
dict again and pushes the expiry forward, so an idle cart disappears after
``CART_TTL``. Read-modify-write is not atomic: two concurrent writes to the
same key end up last-write-wins.
"""
import logging

from django.conf import settings
from django.core.cache import caches

from digital_store.utils import client_ip

logger = logging.getLogger(__name__)

MIN_QUANTITY = 1


def max_quantity():
    return getattr(settings, "CART_MAX_QUANTITY", 10)


def cart_key(user_id, ip_address):
    if user_id:
        return f"cart:user:{user_id}"
    return f"cart:guest:{ip_address}"


def cart_key_for_request(request):
    user = getattr(request, "user", None)
    user_id = user.id if user is not None and user.is_authenticated else None
    return cart_key(user_id, client_ip(request))


class InvalidQuantity(ValueError):
    pass


class CartStore:
    def __init__(self, cache=None, ttl=None):
        self.cache = cache if cache is not None else caches[settings.CART_CACHE_ALIAS]
        self.ttl = ttl if ttl is not None else settings.CART_TTL

    @property
    def timeout(self):
        return int(self.ttl.total_seconds())

    def get(self, key):
        cart = self.cache.get(key)
        if not cart:
            return {}
        return {int(product_id): int(qty) for product_id, qty in cart.items()}

    def _put(self, key, cart):
        self.cache.set(key, cart, timeout=self.timeout)
        return cart

    def add_item(self, key, product_id, quantity):
        limit = max_quantity()
        if not MIN_QUANTITY <= quantity <= limit:
            raise InvalidQuantity(f"quantity must be between {MIN_QUANTITY} and {limit}")

        cart = self.get(key)
        product_id = int(product_id)
        # anything above the limit is dropped, not rejected
        cart[product_id] = min(cart.get(product_id, 0) + quantity, limit)
        logger.debug("cart %s: product %s -> %s", key, product_id, cart[product_id])
        return self._put(key, cart)

    def set_quantity(self, key, product_id, quantity):
        limit = max_quantity()
        if not 0 <= quantity <= limit:
            raise InvalidQuantity(f"quantity must be between 0 and {limit}")

        cart = self.get(key)
        product_id = int(product_id)
        if quantity == 0:
            cart.pop(product_id, None)
        else:
            cart[product_id] = quantity
        logger.debug("cart %s: product %s set to %s", key, product_id, quantity)
        return self._put(key, cart)

    def remove_item(self, key, product_id):
        cart = self.get(key)
        cart.pop(int(product_id), None)
        return self._put(key, cart)

    def clear(self, key):
        self.cache.delete(key)
        logger.debug("cart %s cleared", key)
