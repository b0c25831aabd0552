"""Tests for checkout and order listing."""

from decimal import Decimal

import pytest
from django.core.cache import caches

from cart.store import CartStore, cart_key
from order.checkout import place_order
from order.exceptions import EmptyCart, ProductUnavailable
from order.models import Order, OrderItem

pytestmark = pytest.mark.django_db

CART_URL = "/api/v1/cart/"
CHECKOUT_URL = "/api/v1/orders/checkout/"
ORDERS_URL = "/api/v1/orders/"


def add(client, product, quantity):
    return client.post(CART_URL, {"product_id": product.id, "quantity": quantity}, format="json")


def checkout(client, email="customer@example.com", **extra):
    return client.post(CHECKOUT_URL, {"customer_email": email, **extra}, format="json")


class TestCheckoutApi:
    def test_authenticated_user_can_checkout(self, auth_client, user, make_product):
        first = make_product(price=Decimal("10.00"))
        second = make_product(price=Decimal("20.00"))
        add(auth_client, first, 2)
        add(auth_client, second, 1)

        response = checkout(auth_client)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Order created successfully"
        order = data["order"]
        assert order["total"] == 40.0
        assert order["formatted_total"] == "$40.00"
        assert order["status"] == "completed"
        assert order["customer_email"] == "customer@example.com"
        assert Order.objects.filter(
            user=user, customer_email="customer@example.com", status=Order.Status.COMPLETED
        ).count() == 1

    def test_order_items_follow_cart_order(self, auth_client, make_product):
        first = make_product(price=Decimal("10.00"))
        second = make_product(price=Decimal("20.00"))
        add(auth_client, first, 2)
        add(auth_client, second, 1)

        items = checkout(auth_client).json()["order"]["order_items"]

        assert [(i["product_id"], i["quantity"]) for i in items] == [(first.id, 2), (second.id, 1)]
        assert [i["unit_price"] for i in items] == [10.0, 20.0]
        assert [i["total"] for i in items] == [20.0, 20.0]

    def test_guest_checkout(self, api_client, make_product):
        add(api_client, make_product(), 1)

        response = checkout(api_client, payment_session_id="cs_test_123")

        assert response.status_code == 201
        order = Order.objects.get(pk=response.json()["order"]["id"])
        assert order.user is None
        assert order.payment_session_id == "cs_test_123"

    def test_order_has_download_token_and_url(self, auth_client, make_product):
        add(auth_client, make_product(), 1)

        data = checkout(auth_client).json()["order"]

        order = Order.objects.get(pk=data["id"])
        assert len(order.download_token) == 64
        assert data["download_url"].endswith(f"/api/v1/orders/{order.id}/download/?token={order.download_token}")
        assert data["download_url"].startswith("http://testserver/")

    def test_cart_is_cleared_after_checkout(self, auth_client, make_product):
        add(auth_client, make_product(), 1)

        checkout(auth_client)

        assert auth_client.get(CART_URL).json()["items"] == []

    def test_empty_cart(self, auth_client):
        response = checkout(auth_client)

        assert response.status_code == 400
        assert response.json() == {"detail": "Cart is empty", "code": "empty_cart"}

    def test_requires_valid_email(self, auth_client, make_product):
        add(auth_client, make_product(), 1)

        response = checkout(auth_client, email="invalid-email")

        assert response.status_code == 400
        assert "customer_email" in response.json()
        assert len(auth_client.get(CART_URL).json()["items"]) == 1

    def test_unavailable_product_aborts_everything(self, auth_client, user, make_product):
        available = make_product()
        retired = make_product()
        add(auth_client, available, 1)
        add(auth_client, retired, 2)
        retired.is_active = False
        retired.save()

        response = checkout(auth_client)

        assert response.status_code == 400
        assert response.json()["code"] == "product_unavailable"
        assert str(retired.id) in response.json()["detail"]
        assert Order.objects.count() == 0
        assert OrderItem.objects.count() == 0
        # the stored cart still holds both lines
        assert CartStore().get(cart_key(user.id, "127.0.0.1")) == {available.id: 1, retired.id: 2}


class TestPlaceOrder:
    @pytest.fixture
    def store(self):
        return CartStore(cache=caches["default"])

    def test_total_matches_price_snapshot(self, store, make_product):
        a = make_product(price=Decimal("10.00"))
        b = make_product(price=Decimal("19.99"))
        store.add_item("k", a.id, 3)
        store.add_item("k", b.id, 1)

        order = place_order(store, "k", customer_email="c@example.com")

        assert order.total == Decimal("49.99")
        assert order.total == sum(item.unit_price * item.quantity for item in order.items.all())

    def test_later_price_changes_do_not_touch_orders(self, store, make_product):
        product = make_product(price=Decimal("10.00"))
        store.add_item("k", product.id, 2)
        order = place_order(store, "k", customer_email="c@example.com")

        product.price = Decimal("99.00")
        product.save()

        order.refresh_from_db()
        item = order.items.get()
        assert order.total == Decimal("20.00")
        assert item.unit_price == Decimal("10.00")
        assert item.total == Decimal("20.00")

    def test_empty_cart_raises(self, store):
        with pytest.raises(EmptyCart):
            place_order(store, "k", customer_email="c@example.com")

    def test_unknown_product_raises_and_keeps_cart(self, store, make_product):
        product = make_product()
        store.add_item("k", product.id, 1)
        store.add_item("k", 987654, 1)

        with pytest.raises(ProductUnavailable) as excinfo:
            place_order(store, "k", customer_email="c@example.com")

        assert excinfo.value.product_id == 987654
        assert store.get("k") == {product.id: 1, 987654: 1}
        assert not Order.objects.exists()

    def test_cart_deleted_on_success(self, store, make_product):
        store.add_item("k", make_product().id, 1)

        place_order(store, "k", customer_email="c@example.com")

        assert store.cache.get("k") is None

    def test_tokens_are_unique(self, store, make_product):
        product = make_product()
        tokens = set()
        for _ in range(3):
            store.add_item("k", product.id, 1)
            tokens.add(place_order(store, "k", customer_email="c@example.com").download_token)

        assert len(tokens) == 3


class TestOrderList:
    def test_lists_only_own_orders(self, auth_client, user, make_user, make_product, make_order):
        product = make_product()
        for _ in range(3):
            make_order(products=[product], user=user)
        stranger = make_user()
        for _ in range(2):
            make_order(products=[product], user=stranger)
        make_order(products=[product])

        response = auth_client.get(ORDERS_URL)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        for order in data["results"]:
            for key in ("id", "status", "total", "customer_email", "order_items"):
                assert key in order

    def test_newest_first(self, auth_client, user, make_product, make_order):
        product = make_product()
        older = make_order(products=[product], user=user)
        newer = make_order(products=[product], user=user)

        ids = [o["id"] for o in auth_client.get(ORDERS_URL).json()["results"]]

        assert ids == [newer.id, older.id]

    def test_pending_order_has_no_download_url(self, auth_client, user, make_product, make_order):
        make_order(products=[make_product()], user=user, status=Order.Status.PENDING)

        order = auth_client.get(ORDERS_URL).json()["results"][0]

        assert "download_url" not in order

    def test_requires_authentication(self, api_client):
        response = api_client.get(ORDERS_URL)

        assert response.status_code == 401
        assert response.json()["code"] == "not_authenticated"
