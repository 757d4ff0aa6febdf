from datetime import timedelta

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from accounts.models import User
from rides.models import Ride
from services.ride_management.cancellation_quota import ONE_REMAINING_WARNING


class StudentRideViewTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.student = User.objects.create_user(
            username="student@example.com",
            email="student@example.com",
            password="pass1234",
            name="Ada Student",
            role=User.STUDENT,
        )
        self.other_student = User.objects.create_user(
            username="other@example.com",
            email="other@example.com",
            password="pass1234",
            name="Other Student",
            role=User.STUDENT,
        )
        self.driver = User.objects.create_user(
            username="driver@example.com",
            email="driver@example.com",
            password="pass1234",
            name="Driver",
            role=User.DRIVER,
        )
        self.client.force_authenticate(user=self.student)

    def make_ride(self, student=None, status=Ride.PENDING, **kwargs):
        return Ride.objects.create(
            student=student or self.student,
            pickup=kwargs.pop("pickup", "Main Gate"),
            destination="Library",
            status=status,
            **kwargs
        )

    def test_request_ride(self):
        response = self.client.post(
            reverse("students:request-ride"),
            {"pickup": "A", "destination": "B", "distance_km": 2.5, "price_naira": "500"},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["ride"]["status"], Ride.PENDING)
        self.assertIsNone(response.data["ride"]["driver"])
        self.assertEqual(Ride.objects.get().student, self.student)

    def test_request_ride_requires_pickup_and_destination(self):
        response = self.client.post(reverse("students:request-ride"), {"pickup": "A"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "invalid_input")
        self.assertEqual(response.data["message"], "Pickup and destination are required")
        self.assertFalse(Ride.objects.exists())

    def test_request_ride_rejects_bad_numbers(self):
        response = self.client.post(
            reverse("students:request-ride"),
            {"pickup": "A", "destination": "B", "distance_km": "far"},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("distance_km", response.data)

        response = self.client.post(
            reverse("students:request-ride"),
            {"pickup": "A", "destination": "B", "duration_mins": 10**20},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("duration_mins", response.data)

    def test_drivers_cannot_request(self):
        self.client.force_authenticate(user=self.driver)
        response = self.client.post(
            reverse("students:request-ride"), {"pickup": "A", "destination": "B"}, format="json"
        )
        self.assertEqual(response.status_code, 403)

    def test_unauthenticated_request_is_rejected(self):
        self.client.force_authenticate(user=None)
        response = self.client.post(
            reverse("students:request-ride"), {"pickup": "A", "destination": "B"}, format="json"
        )
        self.assertEqual(response.status_code, 401)

    def test_cancel_sequence_with_warning_and_quota(self):
        rides = [self.make_ride(pickup=f"Stop {n}") for n in range(4)]
        url = lambda ride: reverse("students:cancel-ride", args=[ride.id])

        first = self.client.post(url(rides[0]))
        second = self.client.post(url(rides[1]))
        third = self.client.post(url(rides[2]))
        fourth = self.client.post(url(rides[3]))

        self.assertEqual(first.status_code, 200)
        self.assertNotIn("warning", first.data)
        self.assertEqual(second.data["warning"], ONE_REMAINING_WARNING)
        self.assertEqual(third.status_code, 200)
        self.assertEqual(fourth.status_code, 429)
        self.assertEqual(fourth.data["error"], "quota_exceeded")

        rides[3].refresh_from_db()
        self.assertEqual(rides[3].status, Ride.PENDING)

    def test_cancel_someone_elses_ride(self):
        ride = self.make_ride(student=self.other_student)
        response = self.client.post(reverse("students:cancel-ride", args=[ride.id]))
        self.assertEqual(response.status_code, 403)

    def test_cancel_completed_ride(self):
        ride = self.make_ride(status=Ride.COMPLETED, driver=self.driver)
        response = self.client.post(reverse("students:cancel-ride", args=[ride.id]))

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["error"], "already_terminal")

    def test_current_ride(self):
        response = self.client.get(reverse("students:current-ride"))
        self.assertFalse(response.data["has_active_ride"])

        ride = self.make_ride()
        response = self.client.get(reverse("students:current-ride"))
        self.assertTrue(response.data["has_active_ride"])
        self.assertEqual(response.data["ride"]["id"], ride.id)
        self.assertFalse(response.data["driver_assigned"])

    def test_history_pagination(self):
        base = timezone.now() - timedelta(days=1)
        for n in range(25):
            self.make_ride(pickup=f"Stop {n}", created_at=base + timedelta(minutes=n))
        self.make_ride(student=self.other_student)

        response = self.client.get(reverse("students:ride-history"), {"page": 3, "limit": 10})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["page"], 3)
        self.assertEqual(response.data["limit"], 10)
        self.assertEqual(response.data["totalPages"], 3)
        self.assertEqual(response.data["totalRides"], 25)
        self.assertEqual(len(response.data["rides"]), 5)
        self.assertEqual(response.data["rides"][0]["pickup"], "Stop 4")

    def test_history_bad_page(self):
        response = self.client.get(reverse("students:ride-history"), {"page": 0})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "invalid_input")
