"""
Core ride lifecycle operations.

This module contains all the business logic for moving a ride through
PENDING -> ACCEPTED -> IN_PROGRESS -> COMPLETED (or CANCELLED), kept out of
the views layer so it can be called and tested without HTTP.

Every operation takes the acting `Principal` first and an optional `clock`
(a zero-argument callable returning an aware datetime) last.
"""

import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Optional, Dict, Any, List

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from accounts.identity import Principal
from accounts.models import User
from common.utils.pagination import page_bounds, parse_positive_int, total_pages
from rides.models import Ride
from .cancellation_quota import check_cancellation_quota
from .exceptions import (
    InvalidRideInputError,
    RideForbiddenError,
    RideConflictError,
    ActiveRideExistsError,
    RideAlreadyTerminalError,
)
from .state_machine import INITIAL_STATUS, OVERRIDE_TARGETS, can_transition
from .store import RideStore

logger = logging.getLogger(__name__)

ride_store = RideStore()

# Largest values the ride columns can hold
MAX_PRICE_NAIRA = Decimal('99999999.99')
MAX_DURATION_MINS = 2147483647


@dataclass
class RideResult:
    """Result object for ride operations."""
    ride: Ride
    message: str = ""
    warning: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RidePage:
    """One page of a ride history listing."""
    page: int
    limit: int
    total_rides: int
    total_pages: int
    rides: List[Ride]


def _now(clock=None):
    return clock() if clock is not None else timezone.now()


def _require_role(principal: Principal, role: str, action: str):
    if principal.role != role:
        raise RideForbiddenError(f"Only {role.lower()}s can {action}")


def _optional_number(name: str, value, cast, max_value=None):
    """Validate optional, non-negative numeric trip metadata."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidRideInputError(f"{name} must be a number")
    try:
        number = cast(value)
        finite = math.isfinite(float(number))
    except (TypeError, ValueError, InvalidOperation, OverflowError):
        raise InvalidRideInputError(f"{name} must be a number")
    if not finite or number < 0:
        raise InvalidRideInputError(f"{name} must be a non-negative number")
    if max_value is not None and number > max_value:
        raise InvalidRideInputError(f"{name} is too large")
    return number


def _whole_number(value):
    """int() that refuses to drop a fractional part."""
    number = Decimal(str(value))
    if not number.is_finite() or number != number.to_integral_value():
        raise ValueError("not a whole number")
    return int(number)


# ===================== Student Operations =====================

@transaction.atomic
def request_ride(
    principal: Principal,
    pickup: str,
    destination: str,
    distance_km=None,
    duration_mins=None,
    price_naira=None,
    clock=None,
) -> RideResult:
    """
    Create a new ride request in the open pool.

    Args:
        principal: Requesting student
        pickup: Free-form pickup description
        destination: Free-form destination description
        distance_km: Optional trip distance, stored as given
        duration_mins: Optional trip duration, stored as given
        price_naira: Optional quoted price, stored as given
        clock: Optional time source

    Returns:
        RideResult with the created ride (status PENDING, no driver)

    Raises:
        RideForbiddenError: If the principal is not a student
        InvalidRideInputError: If pickup/destination are missing or metadata is malformed
    """
    _require_role(principal, User.STUDENT, "request rides")

    pickup = str(pickup).strip() if pickup is not None else ""
    destination = str(destination).strip() if destination is not None else ""
    if not pickup or not destination:
        raise InvalidRideInputError("Pickup and destination are required")

    now = _now(clock)
    ride = ride_store.create(
        student_id=principal.id,
        pickup=pickup,
        destination=destination,
        distance_km=_optional_number("distance_km", distance_km, float),
        duration_mins=_optional_number(
            "duration_mins",
            duration_mins,
            _whole_number,
            max_value=MAX_DURATION_MINS,
        ),
        price_naira=_optional_number(
            "price_naira",
            price_naira,
            lambda v: Decimal(str(v)),
            max_value=MAX_PRICE_NAIRA,
        ),
        status=INITIAL_STATUS,
        created_at=now,
        updated_at=now,
    )

    logger.info("Ride %s requested by student %s", ride.id, principal.id)
    return RideResult(ride=ride, message="Ride requested successfully")


@transaction.atomic
def cancel_ride(principal: Principal, ride_id: int, clock=None) -> RideResult:
    """
    Cancel a ride by its owning student, subject to the weekly quota.

    Returns:
        RideResult; `warning` is set when only one cancellation is left this week

    Raises:
        RideNotFoundError, RideForbiddenError, RideAlreadyTerminalError,
        CancellationQuotaExceededError, RideConflictError
    """
    _require_role(principal, User.STUDENT, "cancel rides")

    ride = ride_store.get_by_id(ride_id)
    if ride.student_id != principal.id:
        raise RideForbiddenError("You can only cancel your own rides")
    if ride.is_terminal:
        raise RideAlreadyTerminalError(f"Cannot cancel - ride is already {ride.status}")

    now = _now(clock)

    # Serializes cancellations of one student so the quota count stays honest
    ride_store.lock_user(principal.id)
    warning = check_cancellation_quota(ride_store, principal.id, now)

    try:
        ride = ride_store.conditional_update(
            ride.id,
            ride.status,
            status=Ride.CANCELLED,
            updated_at=now,
        )
    except RideConflictError:
        current = ride_store.get_by_id(ride.id)
        if current.is_terminal:
            raise RideAlreadyTerminalError(f"Cannot cancel - ride is already {current.status}")
        raise

    logger.info("Ride %s cancelled by student %s", ride.id, principal.id)
    return RideResult(
        ride=ride,
        message="Ride cancelled successfully",
        warning=warning,
    )


def get_current_student_ride(principal: Principal) -> Optional[Ride]:
    """Get the student's latest ride that is still in progress somewhere."""
    _require_role(principal, User.STUDENT, "view their current ride")
    rides = ride_store.find_many(
        order_by=('-created_at',),
        limit=1,
        student_id=principal.id,
        status__in=[Ride.PENDING, Ride.ACCEPTED, Ride.IN_PROGRESS],
    )
    return rides[0] if rides else None


# ===================== Driver Operations =====================

@transaction.atomic
def accept_ride(principal: Principal, ride_id: int, clock=None) -> RideResult:
    """
    Accept a pending ride.

    The write is conditioned on the ride still being PENDING, so of two
    drivers accepting the same ride exactly one wins and the other gets
    RideConflictError.

    Raises:
        RideForbiddenError: If the principal is not a driver
        RideNotFoundError: If the ride does not exist
        RideConflictError: If the ride is no longer pending
        ActiveRideExistsError: If the driver already has an active ride
    """
    _require_role(principal, User.DRIVER, "accept rides")

    ride = ride_store.get_by_id(ride_id)
    if ride.status != Ride.PENDING:
        raise RideConflictError("Ride is not available for acceptance")

    # One active ride per driver; the lock serializes this driver's accepts
    ride_store.lock_user(principal.id)
    if ride_store.count(driver_id=principal.id, status__in=Ride.ACTIVE_DRIVER_STATUSES):
        raise ActiveRideExistsError("Finish your current ride before accepting another")

    try:
        ride = ride_store.conditional_update(
            ride.id,
            Ride.PENDING,
            driver_id=principal.id,
            status=Ride.ACCEPTED,
            updated_at=_now(clock),
        )
    except RideConflictError:
        logger.warning("Driver %s lost the race for ride %s", principal.id, ride_id)
        raise RideConflictError("Ride was already accepted by another driver")

    logger.info("Ride %s accepted by driver %s", ride.id, principal.id)
    return RideResult(ride=ride, message="Ride accepted")


@transaction.atomic
def reject_ride(principal: Principal, ride_id: int, clock=None) -> RideResult:
    """
    Decline a ride still in the open pool.

    Leaves the ride PENDING with no driver so other drivers can take it.
    """
    _require_role(principal, User.DRIVER, "reject rides")

    ride = ride_store.get_by_id(ride_id)
    if ride.status != Ride.PENDING:
        raise RideConflictError("Ride is not available for rejection")

    ride = ride_store.conditional_update(
        ride.id,
        Ride.PENDING,
        driver=None,
        status=Ride.PENDING,
        updated_at=_now(clock),
    )

    logger.info("Ride %s rejected by driver %s", ride.id, principal.id)
    return RideResult(ride=ride, message="Ride rejected, available for other drivers")


def list_available_rides(principal: Principal) -> List[Ride]:
    """Pending rides without a driver, oldest first. May be stale by the time it is read."""
    _require_role(principal, User.DRIVER, "browse available rides")
    return ride_store.find_many(
        order_by=('created_at',),
        status=Ride.PENDING,
        driver__isnull=True,
    )


def get_current_driver_ride(principal: Principal) -> Optional[Ride]:
    """Get driver's current accepted or in-progress ride."""
    _require_role(principal, User.DRIVER, "view their current ride")
    rides = ride_store.find_many(
        order_by=('-updated_at',),
        limit=1,
        driver_id=principal.id,
        status__in=Ride.ACTIVE_DRIVER_STATUSES,
    )
    return rides[0] if rides else None


# ===================== Status Override =====================

@transaction.atomic
def update_ride_status(principal: Principal, ride_id: int, target_status: str, clock=None) -> RideResult:
    """
    Set IN_PROGRESS, COMPLETED or CANCELLED directly.

    Open to the assigned driver and to admins. Unless
    RIDES_STRICT_STATUS_OVERRIDE is on, any non-terminal ride may be moved to
    any of the three targets; this is the only place that skips the
    lifecycle graph.

    Raises:
        InvalidRideInputError: target_status is not one of the settable values
        RideNotFoundError, RideForbiddenError, RideAlreadyTerminalError,
        RideConflictError
    """
    if target_status not in OVERRIDE_TARGETS:
        raise InvalidRideInputError(f"Status must be one of: {', '.join(OVERRIDE_TARGETS)}")

    ride = ride_store.get_by_id(ride_id)

    if principal.id != ride.driver_id and not principal.is_admin:
        raise RideForbiddenError("You are not allowed to update this ride")

    if ride.is_terminal:
        raise RideAlreadyTerminalError(f"Ride is already {ride.status}")

    if settings.RIDES_STRICT_STATUS_OVERRIDE and not can_transition(ride.status, target_status):
        raise RideConflictError(f"Cannot move ride from {ride.status} to {target_status}")

    previous_status = ride.status
    try:
        ride = ride_store.conditional_update(
            ride.id,
            previous_status,
            status=target_status,
            updated_at=_now(clock),
        )
    except RideConflictError:
        logger.warning("Status update on ride %s lost a race (%s -> %s)", ride_id, previous_status, target_status)
        raise

    logger.info(
        "Ride %s moved %s -> %s by %s %s",
        ride.id, previous_status, target_status, principal.role.lower(), principal.id,
    )
    return RideResult(ride=ride, message="Ride status updated")


# ===================== Shared Reads =====================

def get_ride(principal: Principal, ride_id: int) -> Ride:
    """
    Ride details, including student and driver.

    Any authenticated principal may read any ride; `principal` is taken so
    every operation shares the same calling convention.
    """
    return ride_store.get_by_id(ride_id)


def get_ride_history(principal: Principal, page=None, limit=None) -> RidePage:
    """
    Paginated ride history, newest first.

    Students see rides they requested, drivers see rides assigned to them.
    """
    if principal.is_student:
        filters = {'student_id': principal.id}
    elif principal.is_driver:
        filters = {'driver_id': principal.id}
    else:
        raise RideForbiddenError("Only students and drivers have a ride history")

    try:
        page = parse_positive_int(page, 1, "page")
        limit = parse_positive_int(limit, settings.RIDES_HISTORY_DEFAULT_LIMIT, "limit")
    except ValueError as exc:
        raise InvalidRideInputError(str(exc))
    limit = min(limit, settings.RIDES_HISTORY_MAX_LIMIT)

    total = ride_store.count(**filters)
    offset, limit = page_bounds(page, limit)
    if offset >= total:
        # Past the last page; also keeps oversized offsets away from the database
        rides = []
    else:
        rides = ride_store.find_many(
            order_by=('-created_at', '-id'),
            offset=offset,
            limit=limit,
            **filters,
        )

    return RidePage(
        page=page,
        limit=limit,
        total_rides=total,
        total_pages=total_pages(total, limit),
        rides=rides,
    )
