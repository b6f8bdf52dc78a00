from django.contrib import admin
from .models import FoodItem, Restaurant


class FoodItemInline(admin.TabularInline):
    model = FoodItem
    extra = 0
    fields = ("name", "price", "is_available")


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    """
    Restaurant approval happens here: admins move a restaurant from pending
    to open (or rejected). Menus are maintained inline.
    """
    list_display = ("id", "name", "location", "status", "owner", "created_at")
    list_select_related = ("owner", "owner__user")
    list_filter = ("status",)
    search_fields = ("name", "location", "owner__user__username")
    inlines = [FoodItemInline]
    actions = ["approve", "reject"]

    @admin.action(description="Approve (open) selected restaurants")
    def approve(self, request, queryset):
        queryset.update(status=Restaurant.Status.OPEN)

    @admin.action(description="Reject selected restaurants")
    def reject(self, request, queryset):
        queryset.update(status=Restaurant.Status.REJECTED)


@admin.register(FoodItem)
class FoodItemAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "restaurant", "price", "is_available")
    list_select_related = ("restaurant",)
    list_filter = ("is_available",)
    search_fields = ("name", "restaurant__name")
