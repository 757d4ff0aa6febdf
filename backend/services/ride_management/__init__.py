"""
Ride management service - Core ride lifecycle operations.

This module handles:
    - Requesting rides
    - Accepting/rejecting rides
    - Overriding ride status (driver/admin)
    - Cancelling rides within the weekly quota
    - Querying rides and ride history
"""

from .ride_lifecycle import (
    RideResult,
    RidePage,
    request_ride,
    accept_ride,
    reject_ride,
    update_ride_status,
    cancel_ride,
    get_ride,
    get_ride_history,
    list_available_rides,
    get_current_student_ride,
    get_current_driver_ride,
)

from .exceptions import (
    RideError,
    InvalidRideInputError,
    RideForbiddenError,
    RideNotFoundError,
    RideConflictError,
    ActiveRideExistsError,
    RideAlreadyTerminalError,
    CancellationQuotaExceededError,
    RideStoreUnavailableError,
)

__all__ = [
    # Lifecycle operations
    "RideResult",
    "RidePage",
    "request_ride",
    "accept_ride",
    "reject_ride",
    "update_ride_status",
    "cancel_ride",
    "get_ride",
    "get_ride_history",
    "list_available_rides",
    "get_current_student_ride",
    "get_current_driver_ride",
    # Exceptions
    "RideError",
    "InvalidRideInputError",
    "RideForbiddenError",
    "RideNotFoundError",
    "RideConflictError",
    "ActiveRideExistsError",
    "RideAlreadyTerminalError",
    "CancellationQuotaExceededError",
    "RideStoreUnavailableError",
]
