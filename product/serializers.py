from rest_framework import serializers

from digital_store.utils import format_currency
from .models import Product


class ProductMiniSerializer(serializers.ModelSerializer):
    # minimal product shape for cart lines and order items
    price = serializers.FloatField(read_only=True)
    formatted_price = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = ("id", "name", "slug", "price", "formatted_price", "file_type", "preview_image")

    def get_formatted_price(self, obj) -> str:
        return format_currency(obj.price)


class ProductSerializer(serializers.ModelSerializer):
    price = serializers.FloatField(read_only=True)
    formatted_price = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = (
            "id", "name", "slug", "description", "price", "formatted_price",
            "preview_image", "file_type", "file_size", "tags", "category",
            "license_type", "created_at", "updated_at",
        )
        read_only_fields = fields

    def get_formatted_price(self, obj) -> str:
        return format_currency(obj.price)
