"""Orders API serializers.

Input serializers for placing orders and requesting status changes, and
output serializers for orders, their line items and the assignment pool.
Placement goes through the OrderStore passed in the serializer context; the
status serializer only validates the payload shape, the lifecycle engine
decides whether the change is allowed.
"""

from rest_framework import serializers

from orders.models import Order, OrderItem


class OrderItemInputSerializer(serializers.Serializer):
    """One requested line. ``price`` is accepted for client compatibility but
    the stored unit price always comes from the menu."""

    food_item_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)
    price = serializers.IntegerField(min_value=0, required=False)


class OrderCreateSerializer(serializers.Serializer):
    """Input serializer for POST /api/orders/.

    Validates the payload shape; catalog checks (restaurant open, items on its
    menu) and pricing happen in ``OrderStore.create_order``.
    """

    restaurant_id = serializers.IntegerField(min_value=1)
    items = OrderItemInputSerializer(many=True, allow_empty=False)
    total = serializers.IntegerField(min_value=0, required=False)
    delivery_fee = serializers.IntegerField(min_value=0, required=False)
    address = serializers.CharField(max_length=500)
    phone = serializers.CharField(max_length=50)
    payment_method = serializers.ChoiceField(choices=Order.PaymentMethod.choices)

    def create(self, validated_data):
        """Place the order through the store for the acting customer."""
        store = self.context["store"]
        actor = self.context["actor"]
        items = [
            {"food_item_id": i["food_item_id"], "quantity": i["quantity"]}
            for i in validated_data["items"]
        ]
        return store.create_order(
            actor,
            restaurant_id=validated_data["restaurant_id"],
            items=items,
            address=validated_data["address"],
            phone=validated_data["phone"],
            payment_method=validated_data["payment_method"],
            delivery_fee=validated_data.get("delivery_fee"),
            total=validated_data.get("total"),
        )


class OrderItemOutputSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source="food_item.name", read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "food_item", "name", "quantity", "price"]


class OrderOutputSerializer(serializers.ModelSerializer):
    """Read serializer for returning a complete order representation."""

    items = OrderItemOutputSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customer",
            "restaurant",
            "partner",
            "status",
            "total",
            "delivery_fee",
            "address",
            "phone",
            "payment_method",
            "created_at",
            "updated_at",
            "estimated_delivery_time",
            "actual_delivery_time",
            "cancel_reason",
            "items",
        ]


class AvailableOrderSerializer(OrderOutputSerializer):
    """Pool entry: the order plus where to pick it up."""

    restaurant_name = serializers.CharField(read_only=True)
    restaurant_location = serializers.CharField(read_only=True)

    class Meta(OrderOutputSerializer.Meta):
        fields = OrderOutputSerializer.Meta.fields + [
            "restaurant_name",
            "restaurant_location",
        ]


class OrderStatusPatchSerializer(serializers.Serializer):
    """Payload of PATCH /api/orders/{id}/status/."""

    status = serializers.ChoiceField(choices=Order.Status.choices)
    reason = serializers.CharField(
        max_length=500, required=False, allow_blank=True, allow_null=True
    )
