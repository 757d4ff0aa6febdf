"""
Driver earnings and distance rollups.

Read-only view over a driver's COMPLETED rides, bucketed by the ride's
creation time:

    today    -> created since 00:00 local time
    week     -> created since Sunday 00:00 local time
    all-time -> everything
"""

from django.utils import timezone

from accounts.identity import Principal
from common.utils.time_windows import start_of_day, start_of_week
from rides.models import Ride
from services.ride_management.exceptions import RideForbiddenError
from services.ride_management.store import RideStore

ride_store = RideStore()


def _sum(rides, attr):
    return sum((getattr(ride, attr) or 0 for ride in rides), 0)


def get_driver_stats(principal: Principal, clock=None) -> dict:
    if not principal.is_driver:
        raise RideForbiddenError("Only drivers can view ride statistics")

    now = clock() if clock is not None else timezone.now()
    day_start = start_of_day(now)
    week_start = start_of_week(now)

    completed = ride_store.find_many(driver_id=principal.id, status=Ride.COMPLETED)
    todays_rides = [ride for ride in completed if ride.created_at >= day_start]
    week_rides = [ride for ride in completed if ride.created_at >= week_start]

    return {
        "today": {
            "rides": len(todays_rides),
            "earning": float(_sum(todays_rides, "price_naira")),
            "distanceKm": float(_sum(todays_rides, "distance_km")),
        },
        "allTime": {
            "completedRides": len(completed),
            "totalDistanceKm": float(_sum(completed, "distance_km")),
        },
        "week": {
            "totalBalance": float(_sum(week_rides, "price_naira")),
        },
    }
