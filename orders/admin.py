from django.contrib import admin
from django.utils.html import format_html
from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ("food_item", "quantity", "price")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Read-only order overview:
    - List: id, status badge, restaurant, customer, partner, total, created
    - Filter: status, payment method, created (date hierarchy)
    - Everything is read-only. Status changes go through the API so the
      lifecycle rules and side effects always apply; orders are never deleted.
    """
    list_display = (
        "id",
        "status_badge",
        "restaurant",
        "customer_username",
        "partner_username",
        "total",
        "delivery_fee",
        "payment_method",
        "created_at",
        "updated_at",
    )
    list_select_related = ("restaurant", "customer__user", "partner__user")
    list_filter = ("status", "payment_method", "created_at")
    date_hierarchy = "created_at"
    ordering = ("-created_at", "-id")
    search_fields = ("address", "phone", "restaurant__name", "customer__user__username")
    inlines = [OrderItemInline]

    readonly_fields = (
        "status",
        "customer",
        "restaurant",
        "partner",
        "total",
        "delivery_fee",
        "address",
        "phone",
        "payment_method",
        "estimated_delivery_time",
        "actual_delivery_time",
        "cancel_reason",
        "created_at",
        "updated_at",
    )
    fields = readonly_fields

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    # Badges & Shortcuts
    def status_badge(self, obj):
        color = {
            "pending": "#9ca3af",
            "processing": "#6366f1",
            "preparing": "#f59e0b",
            "ready": "#0ea5e9",
            "picked": "#8b5cf6",
            "delivered": "#22c55e",
            "cancelled": "#ef4444",
        }.get(obj.status, "#9ca3af")
        return format_html(
            '<span style="display:inline-block;padding:2px 8px;border-radius:999px;'
            'font-size:12px;font-weight:600;color:#fff;background:{};">{}</span>',
            color,
            obj.status,
        )
    status_badge.short_description = "status"
    status_badge.admin_order_field = "status"

    def customer_username(self, obj):
        return obj.customer.user.username if obj.customer_id else ""
    customer_username.short_description = "customer"

    def partner_username(self, obj):
        return obj.partner.user.username if obj.partner_id else ""
    partner_username.short_description = "partner"
