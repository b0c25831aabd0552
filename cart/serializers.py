from rest_framework import serializers

from digital_store.utils import format_currency
from product.models import Product
from product.serializers import ProductMiniSerializer
from .store import max_quantity


class QuantityLimitMixin:
    def validate_quantity(self, value):
        limit = max_quantity()
        if value > limit:
            raise serializers.ValidationError(f"Ensure this value is less than or equal to {limit}.")
        return value


class AddCartItemSerializer(QuantityLimitMixin, serializers.Serializer):
    product_id = serializers.PrimaryKeyRelatedField(queryset=Product.objects.all())
    quantity = serializers.IntegerField(min_value=1)


class UpdateCartItemSerializer(QuantityLimitMixin, serializers.Serializer):
    # 0 removes the line
    quantity = serializers.IntegerField(min_value=0)


class CartLineSerializer(serializers.Serializer):
    product = ProductMiniSerializer(read_only=True)
    product_id = serializers.IntegerField(read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    unit_price = serializers.FloatField(read_only=True)
    formatted_unit_price = serializers.SerializerMethodField()
    total = serializers.FloatField(read_only=True)
    formatted_total = serializers.SerializerMethodField()

    def get_formatted_unit_price(self, obj) -> str:
        return format_currency(obj.unit_price)

    def get_formatted_total(self, obj) -> str:
        return format_currency(obj.total)


class CartSerializer(serializers.Serializer):
    items = CartLineSerializer(source="lines", many=True, read_only=True)
    total = serializers.FloatField(read_only=True)
    formatted_total = serializers.SerializerMethodField()
    item_count = serializers.IntegerField(read_only=True)

    def get_formatted_total(self, obj) -> str:
        return format_currency(obj.total)
