from .rides import (
    StudentRequestRideView,
    StudentCurrentRideView,
    StudentCancelRideView,
    StudentRideHistoryView,
)

__all__ = [
    "StudentRequestRideView",
    "StudentCurrentRideView",
    "StudentCancelRideView",
    "StudentRideHistoryView",
]
