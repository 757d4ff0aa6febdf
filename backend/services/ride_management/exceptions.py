"""Custom exceptions for ride management."""


class RideError(Exception):
    """Base class for every failure a ride operation can report."""
    error_code = "ride_error"
    default_message = "Ride operation failed"
    retryable = False

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class InvalidRideInputError(RideError):
    """Raised when required fields are missing or malformed."""
    error_code = "invalid_input"
    default_message = "Invalid ride input"


class RideForbiddenError(RideError):
    """Raised when the caller's role or ownership does not allow the operation."""
    error_code = "forbidden"
    default_message = "You are not allowed to perform this action on this ride"


class RideNotFoundError(RideError):
    """Raised when a ride cannot be found."""
    error_code = "not_found"
    default_message = "Ride not found"


class RideConflictError(RideError):
    """Raised when the ride is not in the state the transition requires."""
    error_code = "conflict"
    default_message = "Ride was modified by another request"
    retryable = True


class ActiveRideExistsError(RideConflictError):
    """Raised when a driver already holds an accepted or in-progress ride."""
    error_code = "active_ride_exists"
    default_message = "You already have an active ride"
    retryable = False


class RideAlreadyTerminalError(RideError):
    """Raised when a completed or cancelled ride is mutated."""
    error_code = "already_terminal"
    default_message = "Ride is already finished"


class CancellationQuotaExceededError(RideError):
    """Raised when a student has used up this week's cancellations."""
    error_code = "quota_exceeded"
    default_message = "Weekly cancellation limit reached"


class RideStoreUnavailableError(RideError):
    """Raised when the ride store cannot be reached."""
    error_code = "unavailable"
    default_message = "Ride service is temporarily unavailable, please retry"
    retryable = True
