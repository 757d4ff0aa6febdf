# students/urls.py

from django.urls import path

from .views.rides import (
    StudentRequestRideView,
    StudentCurrentRideView,
    StudentCancelRideView,
    StudentRideHistoryView,
)

app_name = "students"

urlpatterns = [
    path("request/", StudentRequestRideView.as_view(), name="request-ride"),
    path("current/", StudentCurrentRideView.as_view(), name="current-ride"),
    path("history/", StudentRideHistoryView.as_view(), name="ride-history"),
    path("<int:ride_id>/cancel/", StudentCancelRideView.as_view(), name="cancel-ride"),
]
