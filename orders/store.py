"""Order store.

Persistence and role-scoped querying of orders and their line items. The
store is a plain service object handed to the API views (see
``OrderStoreMixin.store_class``); the lifecycle rules themselves live in
``orders.lifecycle`` and the store only persists what the engine planned.

Every status change is written with one conditional UPDATE guarded by the
status and partner the engine saw. Two partners racing for the same ready
order therefore cannot both win: the loser's UPDATE matches no row.
"""

import logging
from functools import wraps
from typing import Iterable, List, Mapping, Optional

from django.conf import settings
from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone
from rest_framework import serializers
from rest_framework.exceptions import PermissionDenied

from profiles.directory import Actor, AdminActor, CustomerActor, OwnerActor, PartnerActor
from restaurants import catalog

from .exceptions import AssignmentConflict, OrderNotFound, StoreUnavailable
from .lifecycle import INITIAL_STATUS, OrderStatus, parse_status, plan_transition
from .models import Order, OrderItem

logger = logging.getLogger(__name__)


def _translate_db_errors(func):
    """Re-raise database failures as StoreUnavailable (503, retryable)."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as exc:
            logger.exception("Order store failure in %s", func.__name__)
            raise StoreUnavailable() from exc

    return wrapper


class OrderStore:
    """Reads and writes orders; the only place order rows are mutated."""

    def __init__(self, clock=timezone.now):
        self._clock = clock

    # ------------------------------ queries ------------------------------

    def _base_queryset(self):
        return (
            Order.objects.select_related("restaurant")
            .prefetch_related("items__food_item")
            .order_by("-created_at", "-id")
        )

    def _fetch(self, order_id: int) -> Order:
        try:
            return self._base_queryset().get(pk=order_id)
        except Order.DoesNotExist:
            raise OrderNotFound()

    @_translate_db_errors
    def get_order(self, order_id: int) -> Order:
        return self._fetch(order_id)

    @_translate_db_errors
    def orders_for_customer(self, customer_id: int) -> List[Order]:
        return list(self._base_queryset().filter(customer_id=customer_id))

    @_translate_db_errors
    def orders_for_restaurant(self, restaurant_id: int) -> List[Order]:
        return list(self._base_queryset().filter(restaurant_id=restaurant_id))

    @_translate_db_errors
    def orders_for_partner(self, partner_id: int) -> List[Order]:
        return list(self._base_queryset().filter(partner_id=partner_id))

    @_translate_db_errors
    def all_orders(self) -> List[Order]:
        return list(self._base_queryset())

    @_translate_db_errors
    def orders_for_actor(self, actor: Actor, status=None) -> List[Order]:
        """Orders visible to the actor, newest first, optionally by status."""
        qs = self._base_queryset()
        if isinstance(actor, CustomerActor):
            qs = qs.filter(customer_id=actor.customer_id)
        elif isinstance(actor, OwnerActor):
            if actor.restaurant_id is None:
                return []
            qs = qs.filter(restaurant_id=actor.restaurant_id)
        elif isinstance(actor, PartnerActor):
            qs = qs.filter(partner_id=actor.partner_id)
        elif not isinstance(actor, AdminActor):
            return []
        if status is not None:
            qs = qs.filter(status=parse_status(status))
        return list(qs)

    @_translate_db_errors
    def available_orders(self) -> List[Order]:
        """The assignment pool: ready orders nobody has claimed yet.

        Restaurant name and location are annotated for display.
        """
        qs = (
            Order.objects.filter(status=OrderStatus.READY, partner__isnull=True)
            .select_related("restaurant")
            .prefetch_related("items__food_item")
            .annotate(
                restaurant_name=F("restaurant__name"),
                restaurant_location=F("restaurant__location"),
            )
            .order_by("-updated_at", "-id")
        )
        return list(qs)

    @_translate_db_errors
    def get_order_for_actor(self, order_id: int, actor: Actor) -> Order:
        """Return the order if the actor is involved in it (404 otherwise).

        Partners may also look at unclaimed ready orders before accepting them.
        """
        order = self._fetch(order_id)
        if isinstance(actor, AdminActor):
            return order
        if isinstance(actor, CustomerActor) and order.customer_id == actor.customer_id:
            return order
        if isinstance(actor, OwnerActor) and order.restaurant_id == actor.restaurant_id:
            return order
        if isinstance(actor, PartnerActor):
            if order.partner_id == actor.partner_id:
                return order
            if order.partner_id is None and order.status == OrderStatus.READY:
                return order
        raise OrderNotFound()

    # ------------------------------ placement -----------------------------

    def _price_lines(self, restaurant_id: int, items: Iterable[Mapping]) -> List[dict]:
        """Resolve requested items against the catalog and copy unit prices."""
        items = list(items)
        food_items = catalog.food_items_for(
            restaurant_id, [item["food_item_id"] for item in items]
        )
        lines, errors = [], []
        for index, item in enumerate(items):
            food = food_items.get(item["food_item_id"])
            quantity = item["quantity"]
            if food is None:
                errors.append(f"Item {index}: food item {item['food_item_id']} is not on this restaurant's menu.")
            elif not food.is_available:
                errors.append(f"Item {index}: '{food.name}' is currently unavailable.")
            elif quantity < 1:
                errors.append(f"Item {index}: quantity must be at least 1.")
            else:
                lines.append({"food_item": food, "quantity": quantity, "price": food.price})
        if errors:
            raise serializers.ValidationError({"items": errors})
        return lines

    @_translate_db_errors
    def create_order(
        self,
        actor: Actor,
        restaurant_id: int,
        items: Iterable[Mapping],
        address: str,
        phone: str,
        payment_method: str,
        delivery_fee: Optional[int] = None,
        total: Optional[int] = None,
    ) -> Order:
        """Place a new order in the initial status.

        Unit prices and the total are computed from the catalog; a client
        supplied total is only compared and logged. The delivery fee never
        goes below ``settings.DELIVERY_FEE_MINIMUM``.
        """
        if not isinstance(actor, CustomerActor):
            raise PermissionDenied("Only customers can place orders.")

        items = list(items or [])
        if not items:
            raise serializers.ValidationError({"items": "At least one item is required."})
        if payment_method not in Order.PaymentMethod.values:
            allowed = ", ".join(Order.PaymentMethod.values)
            raise serializers.ValidationError({"payment_method": f"Must be one of: {allowed}."})

        restaurant = catalog.get_restaurant(restaurant_id)
        if restaurant is None:
            raise serializers.ValidationError({"restaurant_id": "Restaurant not found."})
        if settings.ORDERS_REQUIRE_OPEN_RESTAURANT and not catalog.accepts_orders(restaurant):
            raise serializers.ValidationError(
                {"restaurant_id": f"Restaurant is '{restaurant.status}' and does not accept orders."}
            )

        lines = self._price_lines(restaurant.id, items)

        floor = settings.DELIVERY_FEE_MINIMUM
        fee = max(delivery_fee or floor, floor)
        computed_total = sum(line["price"] * line["quantity"] for line in lines) + fee
        if total is not None and total != computed_total:
            logger.warning(
                "Ignoring client total %s for customer %s, computed %s",
                total, actor.customer_id, computed_total,
            )

        with transaction.atomic():
            order = Order.objects.create(
                customer_id=actor.customer_id,
                restaurant=restaurant,
                status=INITIAL_STATUS,
                total=computed_total,
                delivery_fee=fee,
                address=address.strip(),
                phone=phone.strip(),
                payment_method=payment_method,
                estimated_delivery_time=settings.ESTIMATED_DELIVERY_MINUTES,
            )
            OrderItem.objects.bulk_create(
                [OrderItem(order=order, **line) for line in lines]
            )

        logger.info(
            "Order %s placed by customer %s at restaurant %s (total=%s)",
            order.id, actor.customer_id, restaurant.id, computed_total,
        )
        return self._fetch(order.id)

    # ----------------------------- transitions ----------------------------

    @_translate_db_errors
    def apply_transition(
        self,
        order_id: int,
        requested_status,
        actor: Actor,
        reason: Optional[str] = None,
    ) -> Order:
        """Validate, authorize and persist one status transition.

        Raises OrderNotFound, ValidationError, InvalidTransition,
        TransitionPermissionDenied or AssignmentConflict; the row is unchanged
        whenever an error is raised.
        """
        order = self._fetch(order_id)
        changes = plan_transition(order, requested_status, actor, reason, now=self._clock())

        updated = Order.objects.filter(
            pk=order.pk,
            status=order.status,
            partner_id=order.partner_id,
        ).update(**changes)
        if not updated:
            self._lost_race(order, requested_status, actor, reason)

        logger.info(
            "Order %s: %s -> %s by %s %s",
            order.id, order.status, changes["status"], actor.role, actor.user_id,
        )
        if "partner_id" in changes:
            logger.info("Order %s assigned to partner %s", order.id, changes["partner_id"])
        elif changes["status"] == OrderStatus.PICKED and order.partner_id is None:
            logger.warning(
                "Order %s picked by %s %s without a partner; it is out of the pool and unassigned",
                order.id, actor.role, actor.user_id,
            )
        return self._fetch(order.id)

    def _lost_race(self, stale: Order, requested_status, actor: Actor, reason) -> None:
        """Explain why a guarded update matched nothing, then raise."""
        fresh = self._fetch(stale.pk)
        logger.warning(
            "Order %s changed concurrently (%s/%s -> %s/%s) while %s %s requested '%s'",
            stale.pk, stale.status, stale.partner_id, fresh.status, fresh.partner_id,
            actor.role, actor.user_id, requested_status,
        )
        # Raises InvalidTransition or TransitionPermissionDenied for the usual
        # lost claim; anything still allowed gets an explicit conflict.
        plan_transition(fresh, requested_status, actor, reason, now=self._clock())
        raise AssignmentConflict()
