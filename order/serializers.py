# order/serializers.py
from urllib.parse import urlencode

from django.urls import reverse
from rest_framework import serializers

from digital_store.utils import format_currency
from product.serializers import ProductMiniSerializer
from .models import Order, OrderItem


class CheckoutSerializer(serializers.Serializer):
    customer_email = serializers.EmailField()
    payment_session_id = serializers.CharField(
        max_length=255, required=False, allow_null=True, allow_blank=True
    )


class OrderItemSerializer(serializers.ModelSerializer):
    product = ProductMiniSerializer(read_only=True)
    unit_price = serializers.FloatField(read_only=True)
    formatted_unit_price = serializers.SerializerMethodField()
    total = serializers.FloatField(read_only=True)
    formatted_total = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = [
            "id", "product", "product_id", "quantity",
            "unit_price", "formatted_unit_price", "total", "formatted_total",
        ]
        read_only_fields = fields

    def get_formatted_unit_price(self, obj) -> str:
        return format_currency(obj.unit_price)

    def get_formatted_total(self, obj) -> str:
        return format_currency(obj.total)


class OrderSerializer(serializers.ModelSerializer):
    order_items = OrderItemSerializer(source="items", many=True, read_only=True)
    total = serializers.FloatField(read_only=True)
    formatted_total = serializers.SerializerMethodField()
    download_url = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "status",
            "total",
            "formatted_total",
            "customer_email",
            "order_items",
            "download_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields  # output only

    def get_formatted_total(self, obj) -> str:
        return format_currency(obj.total)

    def get_download_url(self, obj):
        path = reverse("order-download", args=[obj.id])
        url = f"{path}?{urlencode({'token': obj.download_token})}"
        request = self.context.get("request")
        return request.build_absolute_uri(url) if request else url

    def to_representation(self, instance):
        data = super().to_representation(instance)
        # only completed orders can be downloaded
        if not instance.is_completed() or not instance.download_token:
            data.pop("download_url", None)
        return data
