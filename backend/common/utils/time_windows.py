"""
Calendar windows in the server's local time zone (settings.TIME_ZONE).

Weeks start on Sunday at 00:00, matching how the weekly cancellation quota
and driver earnings are reported to users.
"""

from datetime import datetime, timedelta

from django.utils import timezone


def start_of_day(now: datetime) -> datetime:
    local = timezone.localtime(now)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: datetime) -> datetime:
    day = start_of_day(now)
    # weekday(): Monday == 0 ... Sunday == 6
    days_since_sunday = (day.weekday() + 1) % 7
    return day - timedelta(days=days_since_sunday)
