from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from unittest.mock import patch

from django.db import OperationalError
from django.test import TestCase, override_settings
from django.utils import timezone

from accounts.identity import Principal
from accounts.models import User
from common.utils.time_windows import start_of_day, start_of_week
from rides.models import Ride
from services.ride_management import ride_lifecycle
from services.ride_management import (
    request_ride,
    accept_ride,
    reject_ride,
    update_ride_status,
    cancel_ride,
    get_ride_history,
    list_available_rides,
    get_current_driver_ride,
    get_current_student_ride,
    InvalidRideInputError,
    RideForbiddenError,
    RideNotFoundError,
    RideConflictError,
    ActiveRideExistsError,
    RideAlreadyTerminalError,
    CancellationQuotaExceededError,
    RideStoreUnavailableError,
)
from services.ride_management.cancellation_quota import ONE_REMAINING_WARNING
from services.ride_management.state_machine import TRANSITIONS, can_transition
from services.stats import get_driver_stats


def at(*args):
    """Aware datetime in the project's local time zone."""
    return timezone.make_aware(datetime(*args))


# Wednesday; the week started on Sunday 2026-10-18
NOW = at(2026, 10, 21, 12, 0)


def clock():
    return NOW


def make_user(username, role):
    return User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password="pass1234",
        name=username.title(),
        role=role,
    )


class RideServiceTestCase(TestCase):
    def setUp(self):
        self.student_user = make_user("student", User.STUDENT)
        self.other_student_user = make_user("other_student", User.STUDENT)
        self.driver_one_user = make_user("driver_one", User.DRIVER)
        self.driver_two_user = make_user("driver_two", User.DRIVER)
        self.admin_user = make_user("admin", User.ADMIN)

        self.student = Principal.from_user(self.student_user)
        self.other_student = Principal.from_user(self.other_student_user)
        self.driver_one = Principal.from_user(self.driver_one_user)
        self.driver_two = Principal.from_user(self.driver_two_user)
        self.admin = Principal.from_user(self.admin_user)

    def request(self, pickup="Hostel A", destination="Faculty of Science", **kwargs):
        return request_ride(self.student, pickup, destination, clock=clock, **kwargs).ride


class StateMachineTests(TestCase):
    def test_terminal_states_have_no_outgoing_edges(self):
        dead_ends = {status for status, targets in TRANSITIONS.items() if not targets}
        self.assertEqual(dead_ends, set(Ride.TERMINAL_STATUSES))

    def test_graph_covers_every_status(self):
        self.assertEqual(set(TRANSITIONS), {value for value, _ in Ride.STATUS_CHOICES})

    def test_happy_path_edges(self):
        self.assertTrue(can_transition(Ride.PENDING, Ride.ACCEPTED))
        self.assertTrue(can_transition(Ride.ACCEPTED, Ride.IN_PROGRESS))
        self.assertTrue(can_transition(Ride.IN_PROGRESS, Ride.COMPLETED))
        self.assertTrue(can_transition(Ride.ACCEPTED, Ride.PENDING))
        self.assertFalse(can_transition(Ride.PENDING, Ride.COMPLETED))
        self.assertFalse(can_transition(Ride.COMPLETED, Ride.CANCELLED))


@override_settings(TIME_ZONE="Africa/Lagos")
class TimeWindowTests(TestCase):
    def test_week_starts_on_sunday_midnight(self):
        self.assertEqual(start_of_week(NOW), at(2026, 10, 18, 0, 0))
        self.assertEqual(start_of_week(at(2026, 10, 18, 0, 0)), at(2026, 10, 18, 0, 0))
        self.assertEqual(start_of_week(at(2026, 10, 24, 23, 59)), at(2026, 10, 18, 0, 0))
        self.assertEqual(start_of_week(at(2026, 10, 17, 23, 59)), at(2026, 10, 11, 0, 0))

    def test_windows_use_local_time(self):
        # 23:30 UTC on Saturday is already Sunday 00:30 in Lagos
        instant = datetime(2026, 10, 17, 23, 30, tzinfo=dt_timezone.utc)
        self.assertEqual(start_of_day(instant), at(2026, 10, 18, 0, 0))
        self.assertEqual(start_of_week(instant), at(2026, 10, 18, 0, 0))


class RequestRideTests(RideServiceTestCase):
    def test_student_creates_pending_ride(self):
        result = request_ride(
            self.student, "A", "B",
            distance_km=4.2, duration_mins=12, price_naira="1500.00",
            clock=clock,
        )

        ride = Ride.objects.get(pk=result.ride.pk)
        self.assertEqual(ride.status, Ride.PENDING)
        self.assertIsNone(ride.driver_id)
        self.assertEqual(ride.student_id, self.student.id)
        self.assertEqual(ride.pickup, "A")
        self.assertEqual(ride.destination, "B")
        self.assertEqual(ride.distance_km, 4.2)
        self.assertEqual(ride.duration_mins, 12)
        self.assertEqual(ride.price_naira, Decimal("1500.00"))
        self.assertEqual(ride.created_at, NOW)
        self.assertEqual(ride.updated_at, NOW)

    def test_metadata_is_optional(self):
        ride = self.request()
        self.assertIsNone(ride.distance_km)
        self.assertIsNone(ride.duration_mins)
        self.assertIsNone(ride.price_naira)

    def test_missing_pickup_or_destination(self):
        with self.assertRaises(InvalidRideInputError):
            request_ride(self.student, "", "B")
        with self.assertRaises(InvalidRideInputError):
            request_ride(self.student, "A", "   ")
        with self.assertRaises(InvalidRideInputError):
            request_ride(self.student, None, "B")
        self.assertEqual(Ride.objects.count(), 0)

    def test_malformed_metadata(self):
        with self.assertRaises(InvalidRideInputError):
            request_ride(self.student, "A", "B", distance_km=-1)
        with self.assertRaises(InvalidRideInputError):
            request_ride(self.student, "A", "B", price_naira="a lot")
        with self.assertRaises(InvalidRideInputError):
            request_ride(self.student, "A", "B", duration_mins="soon")
        self.assertEqual(Ride.objects.count(), 0)

    def test_metadata_must_fit_the_columns(self):
        with self.assertRaises(InvalidRideInputError):
            request_ride(self.student, "A", "B", duration_mins=10**20)
        with self.assertRaises(InvalidRideInputError):
            request_ride(self.student, "A", "B", price_naira="100000000")
        with self.assertRaises(InvalidRideInputError):
            request_ride(self.student, "A", "B", distance_km=10**400)
        self.assertEqual(Ride.objects.count(), 0)

        ride = self.request(duration_mins=2147483647)
        self.assertEqual(ride.duration_mins, 2147483647)

    def test_duration_must_be_whole_minutes(self):
        with self.assertRaises(InvalidRideInputError):
            request_ride(self.student, "A", "B", duration_mins=2.7)
        with self.assertRaises(InvalidRideInputError):
            request_ride(self.student, "A", "B", duration_mins="2.5")
        self.assertEqual(Ride.objects.count(), 0)

        self.assertEqual(self.request(duration_mins=15.0).duration_mins, 15)
        self.assertEqual(self.request(duration_mins="20").duration_mins, 20)

    def test_only_students_can_request(self):
        with self.assertRaises(RideForbiddenError):
            request_ride(self.driver_one, "A", "B")
        with self.assertRaises(RideForbiddenError):
            request_ride(self.admin, "A", "B")


class AcceptRideTests(RideServiceTestCase):
    def test_driver_accepts_pending_ride(self):
        ride = self.request()
        later = NOW + timedelta(minutes=2)

        result = accept_ride(self.driver_one, ride.pk, clock=lambda: later)

        self.assertEqual(result.ride.status, Ride.ACCEPTED)
        self.assertEqual(result.ride.driver_id, self.driver_one.id)
        self.assertEqual(result.ride.updated_at, later)

    def test_second_driver_gets_conflict(self):
        ride = self.request()
        accept_ride(self.driver_one, ride.pk)

        with self.assertRaises(RideConflictError):
            accept_ride(self.driver_two, ride.pk)

        ride.refresh_from_db()
        self.assertEqual(ride.driver_id, self.driver_one.id)
        self.assertEqual(ride.status, Ride.ACCEPTED)

    def test_stale_read_loses_the_race(self):
        ride = self.request()
        # Both drivers read the ride while it was still pending
        stale = Ride.objects.get(pk=ride.pk)

        accept_ride(self.driver_one, ride.pk)

        with patch.object(ride_lifecycle.ride_store, "get_by_id", return_value=stale):
            with self.assertRaises(RideConflictError):
                accept_ride(self.driver_two, ride.pk)

        ride.refresh_from_db()
        self.assertEqual(ride.driver_id, self.driver_one.id)
        self.assertEqual(
            Ride.objects.filter(pk=ride.pk, driver__isnull=False).count(), 1
        )

    def test_driver_with_active_ride_cannot_accept_another(self):
        first = self.request()
        second = self.request(pickup="Library")
        accept_ride(self.driver_one, first.pk)

        with self.assertRaises(ActiveRideExistsError):
            accept_ride(self.driver_one, second.pk)

        update_ride_status(self.driver_one, first.pk, Ride.COMPLETED)
        result = accept_ride(self.driver_one, second.pk)
        self.assertEqual(result.ride.driver_id, self.driver_one.id)

    def test_missing_ride(self):
        with self.assertRaises(RideNotFoundError):
            accept_ride(self.driver_one, 9999)

    def test_only_drivers_can_accept(self):
        ride = self.request()
        with self.assertRaises(RideForbiddenError):
            accept_ride(self.student, ride.pk)
        with self.assertRaises(RideForbiddenError):
            accept_ride(self.admin, ride.pk)

    def test_terminal_ride_cannot_be_accepted(self):
        ride = self.request()
        cancel_ride(self.student, ride.pk, clock=clock)
        with self.assertRaises(RideConflictError):
            accept_ride(self.driver_one, ride.pk)


class RejectRideTests(RideServiceTestCase):
    def test_reject_leaves_ride_pending_without_driver(self):
        ride = self.request()
        later = NOW + timedelta(minutes=1)

        result = reject_ride(self.driver_one, ride.pk, clock=lambda: later)

        self.assertEqual(result.ride.status, Ride.PENDING)
        self.assertIsNone(result.ride.driver_id)
        self.assertEqual(result.ride.updated_at, later)

        # Still open to other drivers
        accept_ride(self.driver_two, ride.pk)

    def test_reject_accepted_ride_conflicts(self):
        ride = self.request()
        accept_ride(self.driver_one, ride.pk)

        with self.assertRaises(RideConflictError):
            reject_ride(self.driver_two, ride.pk)

        ride.refresh_from_db()
        self.assertEqual(ride.driver_id, self.driver_one.id)

    def test_only_drivers_can_reject(self):
        ride = self.request()
        with self.assertRaises(RideForbiddenError):
            reject_ride(self.student, ride.pk)


class UpdateStatusTests(RideServiceTestCase):
    def setUp(self):
        super().setUp()
        self.ride = self.request()
        accept_ride(self.driver_one, self.ride.pk)

    def test_assigned_driver_moves_ride_forward(self):
        update_ride_status(self.driver_one, self.ride.pk, Ride.IN_PROGRESS)
        result = update_ride_status(self.driver_one, self.ride.pk, Ride.COMPLETED)
        self.assertEqual(result.ride.status, Ride.COMPLETED)

    def test_override_is_permissive_by_default(self):
        result = update_ride_status(self.driver_one, self.ride.pk, Ride.COMPLETED)
        self.assertEqual(result.ride.status, Ride.COMPLETED)

    def test_admin_can_update_any_ride(self):
        pending = self.request(pickup="Gate")
        result = update_ride_status(self.admin, pending.pk, Ride.CANCELLED)
        self.assertEqual(result.ride.status, Ride.CANCELLED)

    def test_other_users_are_forbidden(self):
        for principal in (self.driver_two, self.student):
            with self.assertRaises(RideForbiddenError):
                update_ride_status(principal, self.ride.pk, Ride.IN_PROGRESS)
        self.ride.refresh_from_db()
        self.assertEqual(self.ride.status, Ride.ACCEPTED)

    def test_invalid_target_status(self):
        for target in (Ride.PENDING, Ride.ACCEPTED, "FLYING", None):
            with self.assertRaises(InvalidRideInputError):
                update_ride_status(self.driver_one, self.ride.pk, target)

    def test_invalid_target_checked_before_lookup(self):
        with self.assertRaises(InvalidRideInputError):
            update_ride_status(self.admin, 9999, "FLYING")
        with self.assertRaises(RideNotFoundError):
            update_ride_status(self.admin, 9999, Ride.COMPLETED)

    def test_terminal_ride_is_frozen(self):
        update_ride_status(self.driver_one, self.ride.pk, Ride.COMPLETED)
        for target in (Ride.IN_PROGRESS, Ride.CANCELLED, Ride.COMPLETED):
            with self.assertRaises(RideAlreadyTerminalError):
                update_ride_status(self.admin, self.ride.pk, target)

    def test_stale_read_conflicts_and_keeps_newer_status(self):
        stale = Ride.objects.get(pk=self.ride.pk)
        update_ride_status(self.driver_one, self.ride.pk, Ride.IN_PROGRESS)

        with patch.object(ride_lifecycle.ride_store, "get_by_id", return_value=stale):
            with self.assertRaises(RideConflictError):
                update_ride_status(self.driver_one, self.ride.pk, Ride.CANCELLED)

        self.ride.refresh_from_db()
        self.assertEqual(self.ride.status, Ride.IN_PROGRESS)

    @override_settings(RIDES_STRICT_STATUS_OVERRIDE=True)
    def test_strict_mode_follows_lifecycle_graph(self):
        with self.assertRaises(RideConflictError):
            update_ride_status(self.driver_one, self.ride.pk, Ride.COMPLETED)

        update_ride_status(self.driver_one, self.ride.pk, Ride.IN_PROGRESS)
        result = update_ride_status(self.driver_one, self.ride.pk, Ride.COMPLETED)
        self.assertEqual(result.ride.status, Ride.COMPLETED)


class CancelRideTests(RideServiceTestCase):
    def test_student_cancels_own_ride(self):
        ride = self.request()
        result = cancel_ride(self.student, ride.pk, clock=clock)

        self.assertEqual(result.ride.status, Ride.CANCELLED)
        self.assertEqual(result.ride.updated_at, NOW)
        self.assertIsNone(result.warning)

    def test_cancel_accepted_ride(self):
        ride = self.request()
        accept_ride(self.driver_one, ride.pk)
        result = cancel_ride(self.student, ride.pk, clock=clock)
        self.assertEqual(result.ride.status, Ride.CANCELLED)

    def test_cannot_cancel_someone_elses_ride(self):
        ride = self.request()
        with self.assertRaises(RideForbiddenError):
            cancel_ride(self.other_student, ride.pk)
        with self.assertRaises(RideForbiddenError):
            cancel_ride(self.driver_one, ride.pk)

    def test_missing_ride(self):
        with self.assertRaises(RideNotFoundError):
            cancel_ride(self.student, 9999)

    def test_repeat_cancellation_is_rejected(self):
        ride = self.request()
        cancel_ride(self.student, ride.pk, clock=clock)
        with self.assertRaises(RideAlreadyTerminalError):
            cancel_ride(self.student, ride.pk, clock=clock)

    def test_completed_ride_cannot_be_cancelled(self):
        ride = self.request()
        accept_ride(self.driver_one, ride.pk)
        update_ride_status(self.driver_one, ride.pk, Ride.COMPLETED)
        with self.assertRaises(RideAlreadyTerminalError):
            cancel_ride(self.student, ride.pk, clock=clock)

    def test_cancel_racing_a_completion(self):
        ride = self.request()
        accept_ride(self.driver_one, ride.pk)
        # Student read the ride just before the driver finished it
        stale = Ride.objects.get(pk=ride.pk)
        update_ride_status(self.driver_one, ride.pk, Ride.COMPLETED)
        completed = Ride.objects.get(pk=ride.pk)

        with patch.object(ride_lifecycle.ride_store, "get_by_id", side_effect=[stale, completed]):
            with self.assertRaises(RideAlreadyTerminalError):
                cancel_ride(self.student, ride.pk, clock=clock)

        ride.refresh_from_db()
        self.assertEqual(ride.status, Ride.COMPLETED)
        self.assertEqual(Ride.objects.filter(status=Ride.CANCELLED).count(), 0)

    def test_weekly_quota(self):
        rides = [self.request(pickup=f"Stop {n}") for n in range(5)]

        first = cancel_ride(self.student, rides[0].pk, clock=clock)
        second = cancel_ride(self.student, rides[1].pk, clock=clock)
        third = cancel_ride(self.student, rides[2].pk, clock=clock)

        self.assertIsNone(first.warning)
        self.assertEqual(second.warning, ONE_REMAINING_WARNING)
        self.assertIsNone(third.warning)

        with self.assertRaises(CancellationQuotaExceededError):
            cancel_ride(self.student, rides[3].pk, clock=clock)

        rides[3].refresh_from_db()
        self.assertEqual(rides[3].status, Ride.PENDING)

    def test_quota_resets_on_sunday(self):
        rides = [self.request(pickup=f"Stop {n}") for n in range(4)]
        for ride in rides[:3]:
            cancel_ride(self.student, ride.pk, clock=clock)

        next_week = at(2026, 10, 25, 0, 5)
        result = cancel_ride(self.student, rides[3].pk, clock=lambda: next_week)
        self.assertEqual(result.ride.status, Ride.CANCELLED)
        self.assertIsNone(result.warning)

    def test_quota_is_per_student(self):
        for n in range(3):
            cancel_ride(self.student, self.request(pickup=f"Stop {n}").pk, clock=clock)

        other_ride = request_ride(self.other_student, "A", "B", clock=clock).ride
        result = cancel_ride(self.other_student, other_ride.pk, clock=clock)
        self.assertEqual(result.ride.status, Ride.CANCELLED)

    @override_settings(RIDES_WEEKLY_CANCELLATION_LIMIT=1)
    def test_quota_limit_is_configurable(self):
        first, second = self.request(), self.request()
        cancel_ride(self.student, first.pk, clock=clock)
        with self.assertRaises(CancellationQuotaExceededError):
            cancel_ride(self.student, second.pk, clock=clock)


class ReadPathTests(RideServiceTestCase):
    def test_available_rides_are_pending_and_oldest_first(self):
        older = request_ride(self.student, "A", "B", clock=lambda: NOW - timedelta(hours=1)).ride
        newer = self.request()
        taken = self.request(pickup="Taken")
        accept_ride(self.driver_one, taken.pk)

        rides = list_available_rides(self.driver_two)
        self.assertEqual([ride.pk for ride in rides], [older.pk, newer.pk])

    def test_available_rides_are_for_drivers(self):
        with self.assertRaises(RideForbiddenError):
            list_available_rides(self.student)

    def test_current_rides(self):
        self.assertIsNone(get_current_driver_ride(self.driver_one))
        self.assertIsNone(get_current_student_ride(self.student))

        ride = self.request()
        self.assertEqual(get_current_student_ride(self.student).pk, ride.pk)

        accept_ride(self.driver_one, ride.pk)
        self.assertEqual(get_current_driver_ride(self.driver_one).pk, ride.pk)

        update_ride_status(self.driver_one, ride.pk, Ride.COMPLETED)
        self.assertIsNone(get_current_driver_ride(self.driver_one))
        self.assertIsNone(get_current_student_ride(self.student))

    def test_history_pagination(self):
        for n in range(25):
            request_ride(self.student, f"Stop {n}", "B", clock=lambda n=n: NOW + timedelta(minutes=n))

        page = get_ride_history(self.student, page=3, limit=10)
        self.assertEqual(page.total_rides, 25)
        self.assertEqual(page.total_pages, 3)
        self.assertEqual(len(page.rides), 5)
        self.assertEqual(page.rides[-1].pickup, "Stop 0")

        first = get_ride_history(self.student)
        self.assertEqual(first.page, 1)
        self.assertEqual(first.limit, 10)
        self.assertEqual(first.rides[0].pickup, "Stop 24")

    def test_history_is_scoped_to_caller(self):
        ride = self.request()
        accept_ride(self.driver_one, ride.pk)

        self.assertEqual(get_ride_history(self.driver_one).total_rides, 1)
        self.assertEqual(get_ride_history(self.driver_two).total_rides, 0)
        self.assertEqual(get_ride_history(self.other_student).total_rides, 0)
        with self.assertRaises(RideForbiddenError):
            get_ride_history(self.admin)

    def test_history_rejects_bad_paging(self):
        for page, limit in ((0, 10), ("x", 10), (1, 0), (1, "-5")):
            with self.assertRaises(InvalidRideInputError):
                get_ride_history(self.student, page=page, limit=limit)

    def test_history_past_the_last_page_is_empty(self):
        self.request()

        for page in (2, "99999999999999999999"):
            ride_page = get_ride_history(self.student, page=page, limit=10)
            self.assertEqual(ride_page.rides, [])
            self.assertEqual(ride_page.total_rides, 1)
            self.assertEqual(ride_page.total_pages, 1)

    @override_settings(RIDES_HISTORY_MAX_LIMIT=5)
    def test_history_limit_is_capped(self):
        self.assertEqual(get_ride_history(self.student, limit=50).limit, 5)


class StoreFailureTests(RideServiceTestCase):
    def test_database_outage_is_reported_as_unavailable(self):
        with patch.object(Ride.objects, "create", side_effect=OperationalError("server closed the connection")):
            with self.assertRaises(RideStoreUnavailableError) as ctx:
                request_ride(self.student, "A", "B")
        self.assertTrue(ctx.exception.retryable)

    def test_failed_write_leaves_ride_unchanged(self):
        ride = self.request()
        with patch.object(
            ride_lifecycle.ride_store,
            "conditional_update",
            side_effect=RideStoreUnavailableError(),
        ):
            with self.assertRaises(RideStoreUnavailableError):
                accept_ride(self.driver_one, ride.pk)

        ride.refresh_from_db()
        self.assertEqual(ride.status, Ride.PENDING)
        self.assertIsNone(ride.driver_id)


class RideLifecycleScenarioTests(RideServiceTestCase):
    def test_request_accept_complete_then_cancel(self):
        ride = request_ride(self.student, "A", "B", clock=clock).ride
        self.assertEqual(ride.status, Ride.PENDING)
        self.assertIsNone(ride.driver_id)

        ride = accept_ride(self.driver_one, ride.pk).ride
        self.assertEqual(ride.status, Ride.ACCEPTED)
        self.assertEqual(ride.driver_id, self.driver_one.id)

        with self.assertRaises(RideConflictError):
            accept_ride(self.driver_two, ride.pk)

        ride = update_ride_status(self.admin, ride.pk, Ride.COMPLETED).ride
        self.assertEqual(ride.status, Ride.COMPLETED)

        with self.assertRaises(RideAlreadyTerminalError):
            cancel_ride(self.student, ride.pk, clock=clock)

        ride.refresh_from_db()
        self.assertEqual(ride.status, Ride.COMPLETED)
        self.assertEqual(ride.driver_id, self.driver_one.id)


class DriverStatsTests(RideServiceTestCase):
    def completed(self, driver, created_at, price=None, distance=None):
        return Ride.objects.create(
            student=self.student_user,
            driver=driver,
            pickup="A",
            destination="B",
            price_naira=price,
            distance_km=distance,
            status=Ride.COMPLETED,
            created_at=created_at,
            updated_at=created_at,
        )

    def test_no_rides_gives_zeros(self):
        stats = get_driver_stats(self.driver_one, clock=clock)
        self.assertEqual(stats, {
            "today": {"rides": 0, "earning": 0, "distanceKm": 0},
            "allTime": {"completedRides": 0, "totalDistanceKm": 0},
            "week": {"totalBalance": 0},
        })

    def test_rollups(self):
        self.completed(self.driver_one_user, at(2026, 10, 21, 9, 0), Decimal("1500.00"), 5.5)
        self.completed(self.driver_one_user, at(2026, 10, 21, 0, 0), None, None)
        self.completed(self.driver_one_user, at(2026, 10, 19, 8, 0), Decimal("2000.00"), 10.0)
        self.completed(self.driver_one_user, at(2026, 10, 15, 8, 0), Decimal("3000.00"), 7.0)
        # Not counted: other driver, unfinished ride
        self.completed(self.driver_two_user, at(2026, 10, 21, 9, 0), Decimal("900.00"), 3.0)
        Ride.objects.create(
            student=self.student_user, driver=self.driver_one_user, pickup="A", destination="B",
            price_naira=Decimal("800.00"), distance_km=2.0, status=Ride.ACCEPTED,
            created_at=at(2026, 10, 21, 10, 0),
        )

        stats = get_driver_stats(self.driver_one, clock=clock)

        self.assertEqual(stats["today"], {"rides": 2, "earning": 1500.0, "distanceKm": 5.5})
        self.assertEqual(stats["allTime"], {"completedRides": 4, "totalDistanceKm": 22.5})
        self.assertEqual(stats["week"], {"totalBalance": 3500.0})

    def test_only_drivers(self):
        with self.assertRaises(RideForbiddenError):
            get_driver_stats(self.student, clock=clock)
