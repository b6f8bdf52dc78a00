"""Root URL configuration.

Every app exposes its endpoints below ``/api/``; the Django admin stays on
``/admin/`` and is where restaurants get approved and menus maintained.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("user_auth_app.api.urls")),
    path("api/", include("profiles.api.urls")),
    path("api/", include("orders.api.urls")),
]
