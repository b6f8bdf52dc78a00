from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from profiles.models import Profile

User = get_user_model()


class LoginTests(APITestCase):
    def setUp(self):
        self.url = reverse("login")
        self.client = APIClient()
        self.user = User.objects.create_user(
            username="ram",
            email="ram@example.com",
            password="examplePassword"
        )
        Profile.objects.create(user=self.user, type=Profile.Type.PARTNER, vehicle_number="BA 1 PA 1")

    def test_login_success(self):
        payload = {
            "username": "ram",
            "password": "examplePassword"
        }
        resp = self.client.post(self.url, payload, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertIn("token", resp.data)
        self.assertEqual(resp.data["username"], "ram")
        self.assertEqual(resp.data["email"], "ram@example.com")
        self.assertEqual(resp.data["user_id"], self.user.id)
        self.assertEqual(resp.data["type"], "partner")

    def test_token_works_for_authenticated_endpoints(self):
        resp = self.client.post(
            self.url, {"username": "ram", "password": "examplePassword"}, format="json"
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {resp.data['token']}")
        resp = self.client.get(reverse("partner-status"))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

    def test_staff_login_reports_admin(self):
        User.objects.create_user("ops", "ops@example.com", "examplePassword", is_staff=True)
        resp = self.client.post(
            self.url, {"username": "ops", "password": "examplePassword"}, format="json"
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["type"], "admin")

    def test_login_wrong_password(self):
        payload = {
            "username": "ram",
            "password": "wrongPassword"
        }
        resp = self.client.post(self.url, payload, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("detail", resp.data)

    def test_login_unknown_user(self):
        payload = {
            "username": "doesnotexist",
            "password": "whatever123"
        }
        resp = self.client.post(self.url, payload, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("detail", resp.data)

    def test_login_missing_fields(self):
        resp = self.client.post(self.url, {"username": "ram"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", resp.data)
