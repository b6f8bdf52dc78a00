from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

User = get_user_model()

# The auth app registers User already; swap in the marketplace variant.
try:
    admin.site.unregister(User)
except admin.sites.NotRegistered:
    pass


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    """
    User list with id, marketplace role (Profile.type) and admin flags.
    """
    list_display = (
        "id",
        "username",
        "email",
        "role_display",
        "is_staff",
        "is_active",
        "date_joined",
        "last_login",
    )
    list_select_related = ("profile",)
    ordering = ("-date_joined", "-id")
    search_fields = ("username", "email", "profile__type")
    list_filter = ("is_staff", "is_active", "profile__type")

    def role_display(self, obj):
        if obj.is_staff:
            return "admin"
        prof = getattr(obj, "profile", None)
        return getattr(prof, "type", "") or ""
    role_display.short_description = "role"
    role_display.admin_order_field = "profile__type"
