from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from accounts.identity import Principal
from accounts.models import User
from accounts.profiles import DriverProfileRecord, UserRecordProfile, profile_for
from drivers.models import DriverProfile


class AccountApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def register(self, **overrides):
        payload = {
            "name": "Ada Obi",
            "email": "Ada@Example.com",
            "password": "password123",
            "role": User.STUDENT,
        }
        payload.update(overrides)
        return self.client.post(reverse("accounts:register"), payload, format="json")

    def test_register_student(self):
        response = self.register()

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["user"]["email"], "ada@example.com")
        self.assertEqual(response.data["user"]["profile"], {})
        self.assertIn("access", response.data["tokens"])
        self.assertFalse(DriverProfile.objects.exists())

    def test_register_driver_normalises_plate(self):
        response = self.register(email="drv@example.com", role=User.DRIVER, plate_number="abc-123de")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["user"]["profile"], {"plate_number": "ABC-123DE"})
        self.assertEqual(DriverProfile.objects.get().user.email, "drv@example.com")

    def test_register_driver_requires_valid_plate(self):
        response = self.register(email="drv@example.com", role=User.DRIVER, plate_number="12345")

        self.assertEqual(response.status_code, 400)
        self.assertIn("plate_number", response.data)
        self.assertFalse(User.objects.exists())

    def test_duplicate_email_rejected(self):
        self.register()
        response = self.register(email="ada@example.com")
        self.assertEqual(response.status_code, 400)
        self.assertIn("email", response.data)

    def test_login_and_refresh(self):
        self.register()

        response = self.client.post(
            reverse("accounts:login"),
            {"email": "ada@example.com", "password": "password123"},
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["user"]["role"], User.STUDENT)

        refreshed = self.client.post(
            reverse("accounts:refresh"), {"refresh": response.data["tokens"]["refresh"]}, format="json"
        )
        self.assertEqual(refreshed.status_code, 200)
        self.assertIn("access", refreshed.data)

    def test_login_wrong_password(self):
        self.register()
        response = self.client.post(
            reverse("accounts:login"),
            {"email": "ada@example.com", "password": "nope"},
            format="json",
        )
        self.assertEqual(response.status_code, 400)

    def test_refresh_with_garbage_token(self):
        response = self.client.post(reverse("accounts:refresh"), {"refresh": "garbage"}, format="json")
        self.assertEqual(response.status_code, 401)

    def test_me_with_bearer_token(self):
        tokens = self.register().data["tokens"]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.get(reverse("accounts:me"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["name"], "Ada Obi")

        response = self.client.put(reverse("accounts:me"), {"phone_number": "+2348031234567"}, format="json")
        self.assertEqual(response.data["phone_number"], "+2348031234567")

    def test_me_requires_auth(self):
        response = self.client.get(reverse("accounts:me"))
        self.assertEqual(response.status_code, 401)


class ProfileLookupTests(TestCase):
    def test_profile_for_roles(self):
        self.assertIsInstance(profile_for(User.DRIVER), DriverProfileRecord)
        self.assertIsInstance(profile_for(User.STUDENT), UserRecordProfile)
        self.assertIsInstance(profile_for(User.ADMIN), UserRecordProfile)
        with self.assertRaises(ValueError):
            profile_for("PILOT")

    def test_principal_from_user(self):
        user = User.objects.create_user(
            username="a@example.com", email="a@example.com", password="x", name="A", role=User.ADMIN
        )
        principal = Principal.from_user(user)

        self.assertEqual(principal.id, user.id)
        self.assertTrue(principal.is_admin)
        self.assertFalse(principal.is_student)
