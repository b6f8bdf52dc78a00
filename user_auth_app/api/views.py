"""Auth API views.

Implements token-based registration and login. Registration also creates the
user's Profile with the requested role.
"""

import logging

from django.db import transaction
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from profiles.models import Profile

from .serializers import LoginSerializer, RegistrationSerializer

logger = logging.getLogger(__name__)


def _token_payload(user, token) -> dict:
    prof = getattr(user, "profile", None)
    return {
        "token": token.key,
        "username": user.username,
        "email": user.email,
        "user_id": user.id,
        "type": "admin" if user.is_staff else getattr(prof, "type", ""),
    }


class RegistrationView(APIView):
    """POST /api/registration/ -> create user, profile (role), return auth token."""

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = RegistrationSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        with transaction.atomic():
            user = serializer.save()
            Profile.objects.get_or_create(user=user, defaults=serializer.profile_data())
            token, _ = Token.objects.get_or_create(user=user)

        logger.info("Registered %s user %s", user.profile.type, user.id)
        return Response(_token_payload(user, token), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """POST /api/login/ -> validate credentials and return auth token."""

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        user = serializer.validated_data["user"]
        token, _ = Token.objects.get_or_create(user=user)
        return Response(_token_payload(user, token), status=status.HTTP_200_OK)
