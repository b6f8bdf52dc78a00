"""Orders API permissions.

Request-level role gates for the order endpoints. Who may change an order's
status is decided by the lifecycle engine, not here, because it depends on
the order's current state.
"""

from profiles.api.permissions import HasProfileType
from profiles.models import Profile


class IsCustomerUser(HasProfileType):
    """Intended for POST /api/orders/ to ensure only customers can place orders."""

    profile_type = Profile.Type.CUSTOMER
    message = "Only users with type 'customer' can place orders."


class IsPartnerUser(HasProfileType):
    """Intended for GET /api/orders/available/ (the assignment pool)."""

    profile_type = Profile.Type.PARTNER
    message = "Only delivery partners can view available orders."
