"""Weekly cancellation quota for students."""

import logging
from typing import Optional

from django.conf import settings

from common.utils.time_windows import start_of_week
from rides.models import Ride
from .exceptions import CancellationQuotaExceededError

logger = logging.getLogger(__name__)

ONE_REMAINING_WARNING = "You have one cancellation remaining this week"


def weekly_cancellation_limit() -> int:
    return settings.RIDES_WEEKLY_CANCELLATION_LIMIT


def count_weekly_cancellations(store, student_id: int, now) -> int:
    """Cancelled rides of this student touched since Sunday 00:00 local time."""
    return store.count(
        student_id=student_id,
        status=Ride.CANCELLED,
        updated_at__gte=start_of_week(now),
    )


def check_cancellation_quota(store, student_id: int, now) -> Optional[str]:
    """
    Make sure the student may cancel one more ride this week.

    Returns an advisory warning when this cancellation leaves exactly one
    more for the week, otherwise None.

    Raises:
        CancellationQuotaExceededError: the weekly limit is already used up
    """
    limit = weekly_cancellation_limit()
    used = count_weekly_cancellations(store, student_id, now)

    if used >= limit:
        logger.warning("Student %s hit the weekly cancellation limit (%s)", student_id, limit)
        raise CancellationQuotaExceededError(
            f"You have reached the limit of {limit} cancellations this week"
        )

    if limit - used - 1 == 1:
        return ONE_REMAINING_WARNING
    return None
