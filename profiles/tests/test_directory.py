from django.contrib.auth import get_user_model
from django.test import TestCase

from orders.tests.helpers import add_restaurant, create_admin, create_user_with_profile
from profiles.directory import (
    ActorNotResolved,
    AdminActor,
    CustomerActor,
    OwnerActor,
    PartnerActor,
    resolve_actor,
)

User = get_user_model()


class ResolveActorTests(TestCase):
    def test_customer(self):
        user, profile, _ = create_user_with_profile("cust", "customer")
        actor = resolve_actor(user.id)
        self.assertEqual(actor, CustomerActor(user_id=user.id, customer_id=profile.id))
        self.assertEqual(actor.role, "customer")

    def test_owner_carries_restaurant_id(self):
        user, profile, _ = create_user_with_profile("owner", "owner")
        restaurant = add_restaurant(profile)
        self.assertEqual(
            resolve_actor(user.id), OwnerActor(user_id=user.id, restaurant_id=restaurant.id)
        )

    def test_owner_without_restaurant(self):
        user, _, _ = create_user_with_profile("owner", "owner")
        actor = resolve_actor(user.id)
        self.assertIsInstance(actor, OwnerActor)
        self.assertIsNone(actor.restaurant_id)

    def test_partner(self):
        user, profile, _ = create_user_with_profile("partner", "partner")
        self.assertEqual(resolve_actor(user.id), PartnerActor(user_id=user.id, partner_id=profile.id))

    def test_admin_profile(self):
        user, _, _ = create_user_with_profile("ops", "admin")
        self.assertEqual(resolve_actor(user.id), AdminActor(user_id=user.id))

    def test_staff_user_is_admin_without_profile(self):
        user, _ = create_admin()
        self.assertEqual(resolve_actor(user.id), AdminActor(user_id=user.id))

    def test_user_without_profile_is_rejected(self):
        user = User.objects.create_user("ghost", "ghost@example.com", "pass1234")
        with self.assertRaises(ActorNotResolved):
            resolve_actor(user.id)

    def test_unknown_user_is_rejected(self):
        with self.assertRaises(ActorNotResolved):
            resolve_actor(424242)
