from unittest.mock import patch

from django.db import OperationalError
from django.test import TestCase
from rest_framework.test import APIClient


class HealthCheckTests(TestCase):
    def test_healthy(self):
        response = APIClient().get("/health/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["services"]["database"], "healthy")

    @patch("app_backend.views.Ride.objects.exists", side_effect=OperationalError("down"))
    def test_database_down(self, _exists):
        response = APIClient().get("/health/")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.data["status"], "unhealthy")
