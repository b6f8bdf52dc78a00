from datetime import datetime, timedelta, timezone as dt_timezone
from types import SimpleNamespace

from django.test import SimpleTestCase
from rest_framework.exceptions import ValidationError

from orders.exceptions import InvalidTransition, TransitionPermissionDenied
from orders.lifecycle import TERMINAL_STATUSES, TRANSITIONS, OrderStatus, can_transition, plan_transition
from profiles.directory import AdminActor, CustomerActor, OwnerActor, PartnerActor

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=dt_timezone.utc)

CUSTOMER = CustomerActor(user_id=1, customer_id=11)
OWNER = OwnerActor(user_id=2, restaurant_id=22)
PARTNER = PartnerActor(user_id=3, partner_id=33)
OTHER_PARTNER = PartnerActor(user_id=4, partner_id=44)
ADMIN = AdminActor(user_id=5)


def make_order(status, partner_id=None, **overrides):
    fields = dict(
        status=status,
        customer_id=CUSTOMER.customer_id,
        restaurant_id=OWNER.restaurant_id,
        partner_id=partner_id,
        created_at=T0,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def order_for_matrix(status):
    # Orders past pickup belong to the partner who picked them up.
    partner_id = PARTNER.partner_id if status in ("picked", "delivered") else None
    return make_order(status, partner_id=partner_id)


def producible(actor, status):
    """Every status the actor can move an order in ``status`` to."""
    result = set()
    for target in OrderStatus.values:
        try:
            plan_transition(order_for_matrix(status), target, actor, now=T0)
        except (InvalidTransition, TransitionPermissionDenied):
            continue
        result.add(target)
    return result


class TransitionMatrixTests(SimpleTestCase):
    EXPECTED = {
        "customer": {
            "pending": {"cancelled"},
            "processing": {"cancelled"},
        },
        "owner": {
            "pending": {"processing", "cancelled"},
            "processing": {"preparing", "cancelled"},
            "preparing": {"ready", "cancelled"},
        },
        "partner": {
            "ready": {"picked"},
            "picked": {"delivered"},
        },
        "admin": {
            "pending": {"processing", "cancelled"},
            "processing": {"preparing", "cancelled"},
            "preparing": {"ready", "cancelled"},
            "ready": {"picked", "cancelled"},
            "picked": {"delivered"},
        },
    }

    def test_producible_statuses_per_role_and_state(self):
        for actor in (CUSTOMER, OWNER, PARTNER, ADMIN):
            for status in OrderStatus.values:
                with self.subTest(role=actor.role, status=status):
                    expected = self.EXPECTED[actor.role].get(status, set())
                    self.assertEqual(producible(actor, status), expected)

    def test_admin_matches_transition_table_exactly(self):
        for status, allowed in TRANSITIONS.items():
            self.assertEqual(producible(ADMIN, status), set(allowed))

    def test_terminal_states_absorb_for_every_role(self):
        self.assertEqual(set(TERMINAL_STATUSES), {"delivered", "cancelled"})
        for status in TERMINAL_STATUSES:
            self.assertFalse(TRANSITIONS[status])
            for actor in (CUSTOMER, OWNER, PARTNER, ADMIN):
                for target in OrderStatus.values:
                    with self.subTest(status=status, role=actor.role, target=target):
                        with self.assertRaises(InvalidTransition):
                            plan_transition(order_for_matrix(status), target, actor)

    def test_can_transition(self):
        self.assertTrue(can_transition("pending", "processing"))
        self.assertFalse(can_transition("processing", "ready"))
        self.assertFalse(can_transition("picked", "cancelled"))


class TransitionRuleTests(SimpleTestCase):
    def test_skipping_a_state_is_invalid_not_forbidden(self):
        with self.assertRaises(InvalidTransition):
            plan_transition(make_order("processing"), "ready", OWNER)

    def test_unknown_status_is_validation_error(self):
        with self.assertRaises(ValidationError):
            plan_transition(make_order("pending"), "teleported", ADMIN)

    def test_customer_cannot_cancel_once_preparing(self):
        with self.assertRaises(TransitionPermissionDenied):
            plan_transition(make_order("preparing"), "cancelled", CUSTOMER)

    def test_customer_cannot_cancel_someone_elses_order(self):
        order = make_order("pending", customer_id=999)
        with self.assertRaises(TransitionPermissionDenied):
            plan_transition(order, "cancelled", CUSTOMER)

    def test_owner_of_other_restaurant_is_denied(self):
        order = make_order("pending", restaurant_id=999)
        with self.assertRaises(TransitionPermissionDenied):
            plan_transition(order, "processing", OWNER)

    def test_owner_without_restaurant_is_denied(self):
        with self.assertRaises(TransitionPermissionDenied):
            plan_transition(make_order("pending"), "processing", OwnerActor(user_id=9, restaurant_id=None))

    def test_owner_cannot_cancel_ready_order(self):
        with self.assertRaises(TransitionPermissionDenied):
            plan_transition(make_order("ready"), "cancelled", OWNER)

    def test_admin_bypasses_ownership(self):
        order = make_order("ready", customer_id=1000, restaurant_id=2000)
        changes = plan_transition(order, "cancelled", ADMIN, reason="fraud suspected", now=T0)
        self.assertEqual(changes["status"], "cancelled")
        self.assertEqual(changes["cancel_reason"], "fraud suspected")

    def test_order_object_is_not_modified(self):
        order = make_order("ready")
        plan_transition(order, "picked", PARTNER, now=T0)
        self.assertEqual(order.status, "ready")
        self.assertIsNone(order.partner_id)


class SideEffectTests(SimpleTestCase):
    def test_every_transition_bumps_updated_at(self):
        now = T0 + timedelta(minutes=3)
        changes = plan_transition(make_order("pending"), "processing", OWNER, now=now)
        self.assertEqual(changes, {"status": "processing", "updated_at": now})

    def test_cancel_uses_supplied_reason(self):
        changes = plan_transition(make_order("pending"), "cancelled", CUSTOMER, reason="  changed my mind ")
        self.assertEqual(changes["cancel_reason"], "changed my mind")

    def test_cancel_defaults_reason_to_acting_role(self):
        for actor, status in ((CUSTOMER, "processing"), (OWNER, "preparing"), (ADMIN, "ready")):
            with self.subTest(role=actor.role):
                changes = plan_transition(make_order(status), "cancelled", actor, reason="")
                self.assertEqual(changes["cancel_reason"], f"Cancelled by {actor.role}")

    def test_first_pickup_assigns_partner(self):
        changes = plan_transition(make_order("ready"), "picked", PARTNER)
        self.assertEqual(changes["partner_id"], PARTNER.partner_id)

    def test_pickup_by_already_assigned_partner_keeps_assignment(self):
        changes = plan_transition(make_order("ready", partner_id=PARTNER.partner_id), "picked", PARTNER)
        self.assertEqual(changes["status"], "picked")
        self.assertNotIn("partner_id", changes)

    def test_other_partner_cannot_touch_claimed_order(self):
        order = make_order("picked", partner_id=PARTNER.partner_id)
        with self.assertRaises(TransitionPermissionDenied):
            plan_transition(order, "delivered", OTHER_PARTNER)

    def test_admin_pickup_leaves_partner_unassigned(self):
        changes = plan_transition(make_order("ready"), "picked", ADMIN)
        self.assertNotIn("partner_id", changes)

    def test_partner_delivering_unassigned_order_gets_assigned(self):
        changes = plan_transition(make_order("picked"), "delivered", PARTNER, now=T0 + timedelta(minutes=5))
        self.assertEqual(changes["partner_id"], PARTNER.partner_id)

    def test_delivery_time_is_whole_minutes_rounded_down(self):
        order = make_order("picked", partner_id=PARTNER.partner_id)
        for elapsed, minutes in ((timedelta(minutes=47), 47),
                                 (timedelta(minutes=47, seconds=59), 47),
                                 (timedelta(seconds=59), 0)):
            with self.subTest(elapsed=elapsed):
                changes = plan_transition(order, "delivered", PARTNER, now=T0 + elapsed)
                self.assertEqual(changes["actual_delivery_time"], minutes)

    def test_only_cancel_sets_reason_and_only_delivery_sets_time(self):
        changes = plan_transition(make_order("preparing"), "ready", OWNER, reason="ignored")
        self.assertNotIn("cancel_reason", changes)
        self.assertNotIn("actual_delivery_time", changes)
