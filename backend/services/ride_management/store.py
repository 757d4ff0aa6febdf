"""
Ride store: the persistence contract the lifecycle engine relies on.

Every write that changes a ride's status goes through `conditional_update`,
which is an `UPDATE ... WHERE id = X AND status = <expected>`. Zero affected
rows means somebody else moved the ride first, so the caller gets a conflict
instead of silently overwriting their change.
"""

import functools
import logging
from typing import Iterable, List, Optional

from django.contrib.auth import get_user_model
from django.db import InterfaceError, OperationalError

from rides.models import Ride
from .exceptions import RideConflictError, RideNotFoundError, RideStoreUnavailableError

logger = logging.getLogger(__name__)


def _store_call(func):
    """Translate database connectivity failures into RideStoreUnavailableError."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            logger.exception("Ride store call %s failed", func.__name__)
            raise RideStoreUnavailableError() from exc
    return wrapper


class RideStore:

    def _queryset(self):
        return Ride.objects.select_related('student', 'driver', 'driver__driver_profile')

    @_store_call
    def create(self, **fields) -> Ride:
        return Ride.objects.create(**fields)

    @_store_call
    def get_by_id(self, ride_id) -> Ride:
        try:
            return self._queryset().get(pk=ride_id)
        except (Ride.DoesNotExist, ValueError, TypeError):
            raise RideNotFoundError()

    @_store_call
    def conditional_update(self, ride_id, expected_status: Optional[str], **patch) -> Ride:
        """
        Apply `patch` only if the ride is still in `expected_status`.

        Passing ``expected_status=None`` skips the status guard.

        Raises:
            RideNotFoundError: the ride does not exist
            RideConflictError: the ride's status changed since it was read
        """
        queryset = Ride.objects.filter(pk=ride_id)
        if expected_status is not None:
            queryset = queryset.filter(status=expected_status)

        if not queryset.update(**patch):
            if not Ride.objects.filter(pk=ride_id).exists():
                raise RideNotFoundError()
            raise RideConflictError()

        return self._queryset().get(pk=ride_id)

    @_store_call
    def find_many(
        self,
        order_by: Iterable[str] = ('-created_at',),
        offset: int = 0,
        limit: Optional[int] = None,
        **filters,
    ) -> List[Ride]:
        queryset = self._queryset().filter(**filters).order_by(*order_by)
        if limit is not None:
            queryset = queryset[offset:offset + limit]
        elif offset:
            queryset = queryset[offset:]
        return list(queryset)

    @_store_call
    def count(self, **filters) -> int:
        return Ride.objects.filter(**filters).count()

    @_store_call
    def lock_user(self, user_id) -> None:
        """Row-lock a user for the rest of the current transaction."""
        User = get_user_model()
        User.objects.select_for_update().filter(pk=user_id).first()
