"""Order lifecycle engine.

Validates a requested status change against the transition table, checks that
the acting role may drive it, and works out the side effects that go with it.
Nothing in here touches the database: ``plan_transition`` takes the current
order (any object with ``status``, ``customer_id``, ``restaurant_id``,
``partner_id`` and ``created_at``) and returns the field changes the store has
to persist in a single write.
"""

from datetime import datetime
from typing import Dict, FrozenSet, Optional, Tuple

from django.db import models
from django.utils import timezone
from rest_framework import serializers

from profiles.directory import Actor, AdminActor, CustomerActor, OwnerActor, PartnerActor

from .exceptions import InvalidTransition, TransitionPermissionDenied


class OrderStatus(models.TextChoices):
    PENDING = "pending", "pending"
    PROCESSING = "processing", "processing"
    PREPARING = "preparing", "preparing"
    READY = "ready", "ready"
    PICKED = "picked", "picked"
    DELIVERED = "delivered", "delivered"
    CANCELLED = "cancelled", "cancelled"


S = OrderStatus

INITIAL_STATUS = S.PENDING
TERMINAL_STATUSES = frozenset({S.DELIVERED, S.CANCELLED})

TRANSITIONS: Dict[str, FrozenSet[str]] = {
    S.PENDING: frozenset({S.PROCESSING, S.CANCELLED}),
    S.PROCESSING: frozenset({S.PREPARING, S.CANCELLED}),
    S.PREPARING: frozenset({S.READY, S.CANCELLED}),
    S.READY: frozenset({S.PICKED, S.CANCELLED}),
    S.PICKED: frozenset({S.DELIVERED}),
    S.DELIVERED: frozenset(),
    S.CANCELLED: frozenset(),
}

Edge = Tuple[str, str]

CUSTOMER_EDGES: FrozenSet[Edge] = frozenset({
    (S.PENDING, S.CANCELLED),
    (S.PROCESSING, S.CANCELLED),
})
OWNER_EDGES: FrozenSet[Edge] = frozenset({
    (S.PENDING, S.PROCESSING),
    (S.PROCESSING, S.PREPARING),
    (S.PREPARING, S.READY),
    (S.PENDING, S.CANCELLED),
    (S.PROCESSING, S.CANCELLED),
    (S.PREPARING, S.CANCELLED),
})
PARTNER_EDGES: FrozenSet[Edge] = frozenset({
    (S.READY, S.PICKED),
    (S.PICKED, S.DELIVERED),
})


def can_transition(current: str, requested: str) -> bool:
    """Return True if the table allows moving from ``current`` to ``requested``."""
    return requested in TRANSITIONS.get(current, frozenset())


def parse_status(value) -> OrderStatus:
    """Coerce a raw status value; unknown values are a validation error."""
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(OrderStatus.values)
        raise serializers.ValidationError({"status": f"Must be one of: {allowed}."})


# ------------------------------ authorization -------------------------------

def _deny(message: str):
    raise TransitionPermissionDenied(message)


def _authorize_customer(order, edge: Edge, actor: CustomerActor) -> None:
    if order.customer_id != actor.customer_id:
        _deny("You may only cancel your own orders.")
    if edge not in CUSTOMER_EDGES:
        _deny("Customers may only cancel orders that are pending or processing.")


def _authorize_owner(order, edge: Edge, actor: OwnerActor) -> None:
    if actor.restaurant_id is None or order.restaurant_id != actor.restaurant_id:
        _deny("This order belongs to another restaurant.")
    if edge not in OWNER_EDGES:
        _deny(f"Restaurant owners may not move an order from '{edge[0]}' to '{edge[1]}'.")


def _authorize_partner(order, edge: Edge, actor: PartnerActor) -> None:
    if edge not in PARTNER_EDGES:
        _deny(f"Delivery partners may not move an order from '{edge[0]}' to '{edge[1]}'.")
    if order.partner_id is not None and order.partner_id != actor.partner_id:
        _deny("This order is assigned to another delivery partner.")


def authorize(order, requested: str, actor: Actor) -> None:
    """Raise TransitionPermissionDenied unless ``actor`` may drive this edge."""
    edge = (order.status, requested)
    if isinstance(actor, AdminActor):
        return
    if isinstance(actor, CustomerActor):
        _authorize_customer(order, edge, actor)
    elif isinstance(actor, OwnerActor):
        _authorize_owner(order, edge, actor)
    elif isinstance(actor, PartnerActor):
        _authorize_partner(order, edge, actor)
    else:
        _deny("Unknown actor.")


# ------------------------------- side effects -------------------------------

def elapsed_minutes(since: datetime, now: datetime) -> int:
    """Whole minutes between two instants, rounded down."""
    return int((now - since).total_seconds() // 60)


def default_cancel_reason(actor: Actor) -> str:
    return f"Cancelled by {actor.role}"


def plan_transition(
    order,
    requested_status,
    actor: Actor,
    reason: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict:
    """Validate a transition and return the field changes to persist.

    Raises ValidationError for unknown statuses, InvalidTransition when the
    table does not allow the edge and TransitionPermissionDenied when the actor
    may not drive it. The order object is never modified.
    """
    requested = parse_status(requested_status)
    current = order.status

    if not can_transition(current, requested):
        raise InvalidTransition(
            f"Cannot change order status from '{current}' to '{requested}'."
        )
    authorize(order, requested, actor)

    now = now or timezone.now()
    changes = {"status": requested.value, "updated_at": now}

    if requested == S.CANCELLED:
        reason = (reason or "").strip()
        changes["cancel_reason"] = reason or default_cancel_reason(actor)

    # First partner to pick up (or deliver an unassigned order) gets it.
    if isinstance(actor, PartnerActor) and order.partner_id is None:
        changes["partner_id"] = actor.partner_id

    if requested == S.DELIVERED:
        changes["actual_delivery_time"] = elapsed_minutes(order.created_at, now)

    return changes
