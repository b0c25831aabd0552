# order/admin.py
from django.contrib import admin
from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ("product", "quantity", "unit_price")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "customer_email", "user", "status", "total", "created_at")
    list_filter = ("status", "created_at")
    search_fields = ("customer_email", "user__email", "payment_session_id")
    # everything but the status is fixed at checkout
    readonly_fields = ("user", "total", "customer_email", "payment_session_id", "download_token", "created_at", "updated_at")
    inlines = [OrderItemInline]
