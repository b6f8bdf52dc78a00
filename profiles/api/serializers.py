"""Profiles API serializers."""

from rest_framework import serializers

from ..models import Profile


class PartnerAvailabilitySerializer(serializers.ModelSerializer):
    """Read/patch the availability of the authenticated delivery partner."""

    class Meta:
        model = Profile
        fields = ["id", "availability"]
        read_only_fields = ["id"]
        extra_kwargs = {"availability": {"required": True}}
