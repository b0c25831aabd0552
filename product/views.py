from rest_framework import viewsets, permissions
from rest_framework.filters import OrderingFilter
from rest_framework.pagination import PageNumberPagination
from django_filters.rest_framework import DjangoFilterBackend

from .filters import ProductFilter
from .models import Product
from .serializers import ProductSerializer


class ProductPagination(PageNumberPagination):
    page_size = 15
    page_size_query_param = "per_page"
    max_page_size = 100


class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    """
    GET /api/v1/products/?search=&category=&file_type=&license_type=&min_price=&max_price=&ordering=-price
    GET /api/v1/products/<id>/

    Inactive products are invisible here, a direct lookup returns 404.
    """
    permission_classes = [permissions.AllowAny]
    queryset = Product.objects.active()
    serializer_class = ProductSerializer
    pagination_class = ProductPagination
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    filterset_class = ProductFilter
    ordering_fields = ["created_at", "price", "name", "file_size"]
    ordering = ["-created_at"]
