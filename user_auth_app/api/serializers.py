"""Auth API serializers.

Provides serializers for user registration and login. Registration enforces
unique username/email and password validation and collects the role specific
profile fields; login authenticates credentials.
"""

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.validators import validate_email
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

User = get_user_model()

PROFILE_FIELDS = ("type", "tel", "location", "vehicle_number")


class RegistrationSerializer(serializers.Serializer):
    """Validate and create a new user; profile fields are returned, not stored on the user.

    Admin accounts are not self-service; they are staff users created through
    ``createsuperuser`` or the Django admin.
    """

    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    repeated_password = serializers.CharField(write_only=True, min_length=8)
    type = serializers.ChoiceField(choices=("customer", "owner", "partner"))
    tel = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    location = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    vehicle_number = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")

    def validate_username(self, value):
        if User.objects.filter(username__iexact=value).exists():
            raise serializers.ValidationError(_("Username already taken."))
        return value

    def validate_email(self, value):
        validate_email(value)
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError(_("Email already in use."))
        return value

    def validate(self, attrs):
        if attrs["password"] != attrs["repeated_password"]:
            raise serializers.ValidationError(
                {"repeated_password": _("Passwords do not match.")}
            )
        validate_password(attrs["password"])
        if attrs["type"] == "partner":
            missing = [f for f in ("tel", "vehicle_number") if not attrs.get(f)]
            if missing:
                raise serializers.ValidationError(
                    {f: _("Required for delivery partners.") for f in missing}
                )
        return attrs

    def profile_data(self) -> dict:
        return {f: self.validated_data.get(f, "") for f in PROFILE_FIELDS}

    def create(self, validated_data):
        # Only the account fields live on the user model.
        validated_data.pop("repeated_password", None)
        for f in PROFILE_FIELDS:
            validated_data.pop(f, None)
        raw_password = validated_data.pop("password")
        user = User(**validated_data)
        user.set_password(raw_password)
        user.save()
        return user


class LoginSerializer(serializers.Serializer):
    """Authenticate username/password and attach the user to validated data."""

    username = serializers.CharField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        user = authenticate(
            username=attrs.get("username"),
            password=attrs.get("password"),
        )
        if not user:
            raise serializers.ValidationError({"detail": "Invalid Credentials"})
        attrs["user"] = user
        return attrs
