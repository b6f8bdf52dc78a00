from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from orders.tests.helpers import create_user_with_profile
from profiles.models import Profile


class PartnerAvailabilityTests(APITestCase):
    def setUp(self):
        self.url = reverse("partner-status")
        _, self.partner, self.partner_token = create_user_with_profile("partner", "partner")
        _, _, self.cust_token = create_user_with_profile("cust", "customer")

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def test_get_own_availability(self):
        self.auth(self.partner_token)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, {"id": self.partner.id, "availability": "available"})

    def test_patch_sets_availability(self):
        self.auth(self.partner_token)
        res = self.client.patch(self.url, {"availability": "offline"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["availability"], "offline")
        self.partner.refresh_from_db()
        self.assertEqual(self.partner.availability, Profile.Availability.OFFLINE)

    def test_invalid_availability_400(self):
        self.auth(self.partner_token)
        res = self.client.patch(self.url, {"availability": "sleeping"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("availability", res.data)

    def test_missing_availability_400(self):
        self.auth(self.partner_token)
        res = self.client.patch(self.url, {}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_customer_forbidden_403(self):
        self.auth(self.cust_token)
        res = self.client.patch(self.url, {"availability": "offline"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_unauthenticated_401(self):
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
