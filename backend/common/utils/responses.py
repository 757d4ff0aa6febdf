"""Translate ride service failures into API responses."""

from rest_framework import status
from rest_framework.response import Response

from services.ride_management.exceptions import (
    RideError,
    InvalidRideInputError,
    RideForbiddenError,
    RideNotFoundError,
    RideConflictError,
    RideAlreadyTerminalError,
    CancellationQuotaExceededError,
    RideStoreUnavailableError,
)

ERROR_STATUS = {
    InvalidRideInputError: status.HTTP_400_BAD_REQUEST,
    RideForbiddenError: status.HTTP_403_FORBIDDEN,
    RideNotFoundError: status.HTTP_404_NOT_FOUND,
    RideConflictError: status.HTTP_409_CONFLICT,
    RideAlreadyTerminalError: status.HTTP_409_CONFLICT,
    CancellationQuotaExceededError: status.HTTP_429_TOO_MANY_REQUESTS,
    RideStoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(exc: RideError) -> int:
    for klass in type(exc).__mro__:
        if klass in ERROR_STATUS:
            return ERROR_STATUS[klass]
    return status.HTTP_400_BAD_REQUEST


def ride_error_response(exc: RideError) -> Response:
    body = {
        'success': False,
        'error': exc.error_code,
        'message': str(exc),
    }
    if exc.retryable:
        body['retryable'] = True
    return Response(body, status=status_for(exc))
