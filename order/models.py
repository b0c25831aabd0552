from django.db import models
from django.conf import settings
from django.utils.crypto import get_random_string

from product.models import Product

User = settings.AUTH_USER_MODEL

DOWNLOAD_TOKEN_LENGTH = 64


def generate_download_token():
    return get_random_string(DOWNLOAD_TOKEN_LENGTH)


class Order(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"

    # null for guest checkouts
    user = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="orders"
    )
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True
    )
    total = models.DecimalField(max_digits=10, decimal_places=2)
    customer_email = models.EmailField()
    payment_session_id = models.CharField(max_length=255, blank=True, null=True)
    download_token = models.CharField(
        max_length=DOWNLOAD_TOKEN_LENGTH, unique=True, blank=True, null=True
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Order #{self.id} - {self.customer_email}"

    def is_completed(self):
        return self.status == self.Status.COMPLETED


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    # purchased products must outlive their order history
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="order_items")
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)  # price at time of purchase

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.product.name} x {self.quantity}"

    @property
    def total(self):
        return self.unit_price * self.quantity
