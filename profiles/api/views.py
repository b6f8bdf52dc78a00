"""Profiles API views.

Exposes the availability toggle for delivery partners. Availability is
consulted by the assignment pool: offline partners are not offered orders.
"""

import logging

from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .permissions import IsPartnerUser
from .serializers import PartnerAvailabilitySerializer

logger = logging.getLogger(__name__)


class PartnerAvailabilityView(generics.RetrieveUpdateAPIView):
    """
    GET `/api/partners/status/` returns the partner's availability.
    PATCH `/api/partners/status/` sets it to available, busy or offline.

    The profile is always the authenticated partner's own; it is never taken
    from the URL or payload.
    """

    serializer_class = PartnerAvailabilitySerializer
    permission_classes = [IsAuthenticated, IsPartnerUser]
    http_method_names = ["get", "patch", "head", "options"]

    def get_object(self):
        return self.request.user.profile

    def partial_update(self, request, *args, **kwargs):
        profile = self.get_object()
        # availability is the only writable field, so a PATCH must carry it.
        serializer = self.get_serializer(profile, data=request.data, partial=False)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info("Partner %s is now %s", profile.id, profile.availability)
        return Response(serializer.data, status=status.HTTP_200_OK)
