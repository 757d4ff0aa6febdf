from django.urls import path
from .views import (
    DriverProfileView,
    AvailableRidesView,
    DriverCurrentRideView,
    DriverStatsView,
    DriverRideHistoryView,
)

app_name = "drivers"

urlpatterns = [
    path("profile/", DriverProfileView.as_view(), name="driver-profile"),
    path("rides/available/", AvailableRidesView.as_view(), name="available-rides"),
    path("rides/current/", DriverCurrentRideView.as_view(), name="current-ride"),
    path("stats/", DriverStatsView.as_view(), name="driver-stats"),
    path("history/", DriverRideHistoryView.as_view(), name="driver-history"),
]
