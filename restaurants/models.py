"""Restaurants app models.

Defines the Restaurant and FoodItem models. A restaurant has a lifecycle of its
own (pending -> open/closed/rejected, approved by an admin) that is independent
of order status; food items are the menu entries customers order from.
"""

from django.core.validators import MinValueValidator
from django.db import models

from profiles.models import Profile


class Restaurant(models.Model):
    """A restaurant run by exactly one owner profile."""

    class Status(models.TextChoices):
        PENDING = "pending", "pending"
        OPEN = "open", "open"
        BUSY = "busy", "busy"
        CLOSED = "closed", "closed"
        REJECTED = "rejected", "rejected"

    owner = models.OneToOneField(
        Profile,
        on_delete=models.CASCADE,
        related_name="restaurant",
        limit_choices_to={"type": Profile.Type.OWNER},
    )
    name = models.CharField(max_length=200)
    location = models.CharField(max_length=255)
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.PENDING
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "restaurants"
        ordering = ["name", "id"]

    def __str__(self):
        return f"{self.name} (#{self.pk})"


class FoodItem(models.Model):
    """A menu entry; price is an integer in the smallest currency unit."""

    restaurant = models.ForeignKey(
        Restaurant, on_delete=models.CASCADE, related_name="food_items"
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    price = models.PositiveIntegerField(validators=[MinValueValidator(0)])
    is_available = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "food_items"
        ordering = ["id"]

    def __str__(self):
        return f"{self.name} @ restaurant #{self.restaurant_id}"
