# product/admin.py
from django.contrib import admin
from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "category", "price", "file_type", "license_type", "is_active", "created_at")
    list_filter = ("is_active", "category", "file_type", "license_type")
    search_fields = ("name", "description", "category")
    prepopulated_fields = {"slug": ("name",)}
    actions = ["deactivate"]

    @admin.action(description="Deactivate selected products")
    def deactivate(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f"{updated} product(s) deactivated.")
