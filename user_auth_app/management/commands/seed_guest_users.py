from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from rest_framework.authtoken.models import Token

from profiles.models import Profile
from restaurants.models import FoodItem, Restaurant

GUESTS = {
    "customer": {"username": "andrey", "password": "Guest-Customer-24", "email": "andrey@example.com",
                 "profile": {"tel": "9800000001", "location": "Thamel, Kathmandu"}},
    "owner": {"username": "kevin", "password": "Guest-Owner-24", "email": "kevin@example.com",
              "profile": {"tel": "9800000002"}},
    "partner": {"username": "sita", "password": "Guest-Partner-24", "email": "sita@example.com",
                "profile": {"tel": "9800000003", "vehicle_number": "BA 2 PA 1234"}},
}
ADMIN = {"username": "admin", "password": "Guest-Admin-24", "email": "admin@example.com"}

RESTAURANT = {"name": "Himalayan Kitchen", "location": "Durbar Marg, Kathmandu"}
MENU = [
    ("Chicken Momo", 180),
    ("Veg Thukpa", 150),
    ("Dal Bhat Set", 300),
]


class Command(BaseCommand):
    help = "Create or update demo users (one per role) and an open restaurant with a menu."

    def _ensure_user(self, cfg, **extra):
        User = get_user_model()
        u, created = User.objects.get_or_create(
            username=cfg["username"],
            defaults={"email": cfg["email"], **extra},
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f"Created user '{u.username}'"))
        else:
            self.stdout.write(f"User '{u.username}' already exists")

        # set (or reset) password to the documented demo value
        u.set_password(cfg["password"])
        u.save(update_fields=["password"])
        return u

    @transaction.atomic
    def handle(self, *args, **options):
        for role, cfg in GUESTS.items():
            u = self._ensure_user(cfg)

            # ensure profile with correct role
            prof, _ = Profile.objects.get_or_create(user=u, defaults={"type": role, **cfg["profile"]})
            if prof.type != role:
                prof.type = role
                prof.save(update_fields=["type"])

            token, _ = Token.objects.get_or_create(user=u)
            self.stdout.write(f"  -> type={role}, profile={prof.id}, token={token.key}")

            if role == "owner":
                restaurant, _ = Restaurant.objects.get_or_create(
                    owner=prof, defaults={**RESTAURANT, "status": Restaurant.Status.OPEN}
                )
                for name, price in MENU:
                    FoodItem.objects.get_or_create(restaurant=restaurant, name=name, defaults={"price": price})
                self.stdout.write(f"  -> restaurant={restaurant.id} ({restaurant.status}), {len(MENU)} menu items")

        admin_user = self._ensure_user(ADMIN, is_staff=True)
        if not admin_user.is_staff:
            admin_user.is_staff = True
            admin_user.save(update_fields=["is_staff"])
        token, _ = Token.objects.get_or_create(user=admin_user)
        self.stdout.write(f"  -> type=admin, token={token.key}")

        self.stdout.write(self.style.SUCCESS("Guest users ready."))
