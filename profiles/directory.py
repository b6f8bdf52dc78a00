"""Account/role directory.

Maps an authenticated user to the acting role and the role-specific profile
id the order workflow needs for ownership checks. Each role is its own actor
class, so authorization code dispatches on the type instead of comparing role
strings.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from django.contrib.auth import get_user_model
from rest_framework.exceptions import PermissionDenied

from .models import Profile

User = get_user_model()


class ActorNotResolved(PermissionDenied):
    default_detail = "Authenticated user has no marketplace profile."
    default_code = "actor_not_resolved"


@dataclass(frozen=True)
class CustomerActor:
    role: ClassVar[str] = Profile.Type.CUSTOMER
    user_id: int
    customer_id: int


@dataclass(frozen=True)
class OwnerActor:
    role: ClassVar[str] = Profile.Type.OWNER
    user_id: int
    # None until the admin has set up a restaurant for this owner.
    restaurant_id: Optional[int]


@dataclass(frozen=True)
class PartnerActor:
    role: ClassVar[str] = Profile.Type.PARTNER
    user_id: int
    partner_id: int


@dataclass(frozen=True)
class AdminActor:
    role: ClassVar[str] = Profile.Type.ADMIN
    user_id: int


Actor = Union[CustomerActor, OwnerActor, PartnerActor, AdminActor]


def actor_for_user(user) -> Actor:
    """Build the actor for an already loaded user instance.

    Staff users always act as admins. Everyone else needs a profile; owners
    additionally carry the id of the restaurant they run.
    """
    if user.is_staff:
        return AdminActor(user_id=user.id)

    profile = getattr(user, "profile", None)
    if profile is None:
        raise ActorNotResolved()

    if profile.type == Profile.Type.CUSTOMER:
        return CustomerActor(user_id=user.id, customer_id=profile.id)
    if profile.type == Profile.Type.PARTNER:
        return PartnerActor(user_id=user.id, partner_id=profile.id)
    if profile.type == Profile.Type.ADMIN:
        return AdminActor(user_id=user.id)
    if profile.type == Profile.Type.OWNER:
        restaurant = getattr(profile, "restaurant", None)
        return OwnerActor(
            user_id=user.id,
            restaurant_id=restaurant.id if restaurant is not None else None,
        )
    raise ActorNotResolved(f"Unknown profile type '{profile.type}'.")


def resolve_actor(user_id: int) -> Actor:
    """Look up the user by id and return its actor."""
    try:
        user = User.objects.select_related("profile", "profile__restaurant").get(id=user_id)
    except User.DoesNotExist:
        raise ActorNotResolved("User not found.")
    return actor_for_user(user)
