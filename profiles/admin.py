from django.contrib import admin
from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """
    Profile list with own id, user id, role and partner availability.
    """
    list_display = ("id", "user", "type", "tel", "availability", "created_at")
    list_select_related = ("user",)
    list_filter = ("type", "availability")
    search_fields = ("user__username", "user__email", "tel")
