"""Profiles API permissions.

Role gates based on ``Profile.type``. Staff users have no profile and never
pass them; admin actions go through the lifecycle engine instead.
"""

from rest_framework.permissions import BasePermission

from ..models import Profile


class HasProfileType(BasePermission):
    """Allow authenticated users whose profile type equals ``profile_type``."""

    profile_type = ""

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        prof = getattr(user, "profile", None)
        return getattr(prof, "type", "") == self.profile_type


class IsPartnerUser(HasProfileType):
    profile_type = Profile.Type.PARTNER
    message = "Only delivery partners may change their availability."
