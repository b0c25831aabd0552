"""Pytest fixtures for the digital store tests."""

import itertools
from decimal import Decimal

import pytest
from django.core.cache import caches
from django.core.files.base import ContentFile
from django.core.files.storage import storages
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from order.models import Order, OrderItem, generate_download_token
from product.models import Product
from user.models import User

_sequence = itertools.count(1)


@pytest.fixture(autouse=True)
def clear_cart_cache(settings):
    """Carts live in the cache, which outlives a test's database transaction."""
    caches[settings.CART_CACHE_ALIAS].clear()
    yield
    caches[settings.CART_CACHE_ALIAS].clear()


@pytest.fixture(autouse=True)
def product_storage(settings, tmp_path):
    """Point the purchased-files storage at a temporary directory."""
    settings.MEDIA_ROOT = str(tmp_path / "media")
    settings.STORAGES = {
        **settings.STORAGES,
        "products": {
            "BACKEND": "django.core.files.storage.FileSystemStorage",
            "OPTIONS": {"location": str(tmp_path / "products")},
        },
    }
    return storages[settings.PRODUCT_FILES_STORAGE]


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    def _make_user(email=None, password="s3cure-Passw0rd!", **extra):
        email = email or f"user{next(_sequence)}@example.com"
        return User.objects.create_user(email=email, name="Test User", password=password, **extra)

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user(email="test@example.com")


@pytest.fixture
def auth_client(user):
    client = APIClient()
    token = RefreshToken.for_user(user).access_token
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return client


@pytest.fixture
def make_product(db):
    def _make_product(**fields):
        n = next(_sequence)
        defaults = {
            "name": f"Product {n}",
            "description": "A product used in tests",
            "price": Decimal("10.00"),
            "file_path": f"products/product-{n}.psd",
            "file_type": "PSD",
            "file_size": 1024,
            "tags": ["test"],
            "category": "Graphics",
            "license_type": Product.LicenseType.STANDARD,
            "is_active": True,
        }
        defaults.update(fields)
        return Product.objects.create(**defaults)

    return _make_product


@pytest.fixture
def store_file(product_storage):
    """Write a purchased file into the product storage."""

    def _store_file(product, content=b"fake file content"):
        product_storage.save(product.file_path, ContentFile(content))
        return product.file_path

    return _store_file


@pytest.fixture
def make_order(db):
    def _make_order(products=(), user=None, status=Order.Status.COMPLETED,
                    customer_email="customer@example.com", download_token=None):
        order = Order.objects.create(
            user=user,
            status=status,
            total=sum((p.price for p in products), Decimal("0.00")),
            customer_email=customer_email,
            download_token=download_token or generate_download_token(),
        )
        for product in products:
            OrderItem.objects.create(order=order, product=product, quantity=1, unit_price=product.price)
        return order

    return _make_order
