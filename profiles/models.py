"""Profiles app models.

Defines the Profile model that extends the base user with the marketplace
role (customer/owner/partner/admin) and the role specific fields the order
workflow needs. String fields default to empty strings to avoid nulls in API
responses.
"""

from django.conf import settings
from django.db import models


class Profile(models.Model):
    """
    Profile for a single user.

    The profile id is the role-specific identity used on orders: an order's
    customer and partner both point at a Profile. A profile is created at most
    once per user (OneToOne relationship).
    """

    class Type(models.TextChoices):
        CUSTOMER = "customer", "customer"
        OWNER = "owner", "owner"
        PARTNER = "partner", "partner"
        ADMIN = "admin", "admin"

    class Availability(models.TextChoices):
        AVAILABLE = "available", "available"
        BUSY = "busy", "busy"
        OFFLINE = "offline", "offline"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    type = models.CharField(max_length=20, choices=Type.choices)
    tel = models.CharField(max_length=50, blank=True, default="")
    location = models.CharField(max_length=255, blank=True, default="")

    # Delivery partners only.
    vehicle_number = models.CharField(max_length=50, blank=True, default="")
    availability = models.CharField(
        max_length=20,
        choices=Availability.choices,
        default=Availability.AVAILABLE,
    )

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        """Readable representation for admin and debugging."""
        return f"Profile<{self.id} {self.type}:{self.user.username}>"
