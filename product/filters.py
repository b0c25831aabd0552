import django_filters

from .models import Product


class ProductFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    category = django_filters.CharFilter(method="filter_category")
    file_type = django_filters.CharFilter(field_name="file_type", lookup_expr="iexact")
    license_type = django_filters.ChoiceFilter(choices=Product.LicenseType.choices)
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")

    class Meta:
        model = Product
        fields = ["search", "category", "file_type", "license_type", "min_price", "max_price"]

    def filter_search(self, queryset, name, value):
        return queryset.search(value.strip()) if value.strip() else queryset

    def filter_category(self, queryset, name, value):
        return queryset.in_category(value)
