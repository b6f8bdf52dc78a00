"""Orders app models.

Defines the Order and OrderItem models. An Order is placed by a customer
against one restaurant and later bound to the delivery partner who picks it
up. OrderItem rows snapshot the unit price at the time of ordering so later
menu price changes don't alter historical orders.

Status is only ever changed through ``orders.store.OrderStore.apply_transition``.
"""

from django.core.validators import MinValueValidator
from django.db import models

from profiles.models import Profile
from restaurants.models import FoodItem, Restaurant

from .lifecycle import INITIAL_STATUS, OrderStatus


class Order(models.Model):
    """A customer's purchase from one restaurant, tracked through its lifecycle."""

    Status = OrderStatus

    class PaymentMethod(models.TextChoices):
        CASH = "cash", "cash"
        ESEWA = "esewa", "esewa"
        KHALTI = "khalti", "khalti"

    customer = models.ForeignKey(
        Profile,
        on_delete=models.PROTECT,
        related_name="orders_placed",
        limit_choices_to={"type": Profile.Type.CUSTOMER},
    )
    restaurant = models.ForeignKey(
        Restaurant,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    partner = models.ForeignKey(
        Profile,
        on_delete=models.PROTECT,
        related_name="deliveries",
        null=True,
        blank=True,
        limit_choices_to={"type": Profile.Type.PARTNER},
    )

    status = models.CharField(
        max_length=20, choices=OrderStatus.choices, default=INITIAL_STATUS
    )
    total = models.PositiveIntegerField(validators=[MinValueValidator(0)])
    delivery_fee = models.PositiveIntegerField(validators=[MinValueValidator(0)])
    address = models.TextField()
    phone = models.CharField(max_length=50)
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    estimated_delivery_time = models.PositiveIntegerField(null=True, blank=True)
    actual_delivery_time = models.PositiveIntegerField(null=True, blank=True)
    cancel_reason = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "orders"
        ordering = ("-created_at", "-id")
        indexes = [
            models.Index(fields=["status", "partner"], name="orders_pool_idx"),
        ]

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"Order<{self.id} {self.restaurant_id} {self.status}>"


class OrderItem(models.Model):
    """One line of an order: food item, quantity and the unit price paid."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    food_item = models.ForeignKey(
        FoodItem, on_delete=models.PROTECT, related_name="order_items"
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price = models.PositiveIntegerField(validators=[MinValueValidator(0)])

    class Meta:
        db_table = "order_items"
        ordering = ["id"]

    def __str__(self) -> str:
        return f"OrderItem<{self.order_id} {self.food_item_id} x{self.quantity}>"
