from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from accounts.models import User
from drivers.models import DriverProfile
from rides.models import Ride


class DriverViewTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.student = User.objects.create_user(
            username="student@example.com",
            email="student@example.com",
            password="pass1234",
            name="Student",
            role=User.STUDENT,
        )
        self.driver = User.objects.create_user(
            username="driver@example.com",
            email="driver@example.com",
            password="pass1234",
            name="Driver One",
            role=User.DRIVER,
        )
        self.profile = DriverProfile.objects.create(user=self.driver, plate_number="ABC-123DE")
        self.other_driver = User.objects.create_user(
            username="driver2@example.com",
            email="driver2@example.com",
            password="pass1234",
            name="Driver Two",
            role=User.DRIVER,
        )
        self.client.force_authenticate(user=self.driver)

    def make_ride(self, **kwargs):
        kwargs.setdefault("status", Ride.PENDING)
        return Ride.objects.create(
            student=self.student,
            pickup=kwargs.pop("pickup", "Hostel"),
            destination="Faculty",
            **kwargs
        )

    def test_profile(self):
        response = self.client.get(reverse("drivers:driver-profile"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["plate_number"], "ABC-123DE")
        self.assertEqual(response.data["user"]["email"], "driver@example.com")

    def test_profile_missing(self):
        self.client.force_authenticate(user=self.other_driver)
        response = self.client.get(reverse("drivers:driver-profile"))
        self.assertEqual(response.status_code, 404)

    def test_available_rides_lists_unassigned_pending_only(self):
        older = self.make_ride(pickup="Older", created_at=timezone.now() - timedelta(minutes=5))
        newer = self.make_ride(pickup="Newer")
        self.make_ride(status=Ride.ACCEPTED, driver=self.other_driver)
        self.make_ride(status=Ride.CANCELLED)

        response = self.client.get(reverse("drivers:available-rides"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["count"], 2)
        self.assertEqual([r["id"] for r in response.data["rides"]], [older.id, newer.id])

    def test_students_cannot_browse_pool(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.get(reverse("drivers:available-rides"))
        self.assertEqual(response.status_code, 403)

    def test_current_ride(self):
        response = self.client.get(reverse("drivers:current-ride"))
        self.assertIsNone(response.data["ride"])
        self.assertEqual(response.data["message"], "No current ride assigned")

        ride = self.make_ride(status=Ride.IN_PROGRESS, driver=self.driver)
        response = self.client.get(reverse("drivers:current-ride"))
        self.assertEqual(response.data["ride"]["id"], ride.id)
        self.assertEqual(response.data["ride"]["driver"]["plate_number"], "ABC-123DE")

    def test_stats_for_new_driver_are_zero(self):
        response = self.client.get(reverse("drivers:driver-stats"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {
            "today": {"rides": 0, "earning": 0.0, "distanceKm": 0.0},
            "allTime": {"completedRides": 0, "totalDistanceKm": 0.0},
            "week": {"totalBalance": 0.0},
        })

    def test_stats_count_completed_rides_only(self):
        self.make_ride(
            status=Ride.COMPLETED, driver=self.driver,
            price_naira=Decimal("500.00"), distance_km=2.5,
        )
        self.make_ride(
            status=Ride.CANCELLED, driver=self.driver,
            price_naira=Decimal("900.00"), distance_km=9,
        )

        response = self.client.get(reverse("drivers:driver-stats"))

        self.assertEqual(response.data["today"]["rides"], 1)
        self.assertEqual(response.data["today"]["earning"], 500.0)
        self.assertEqual(response.data["allTime"]["totalDistanceKm"], 2.5)

    def test_history_only_includes_assigned_rides(self):
        mine = self.make_ride(status=Ride.COMPLETED, driver=self.driver)
        self.make_ride(status=Ride.COMPLETED, driver=self.other_driver)
        self.make_ride()

        response = self.client.get(reverse("drivers:driver-history"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["totalRides"], 1)
        self.assertEqual(response.data["totalPages"], 1)
        self.assertEqual(response.data["limit"], 10)
        self.assertEqual(response.data["rides"][0]["id"], mine.id)

    def test_history_clamps_large_limit(self):
        response = self.client.get(reverse("drivers:driver-history"), {"limit": 5000})
        self.assertEqual(response.data["limit"], 100)
        self.assertEqual(response.data["totalPages"], 0)
