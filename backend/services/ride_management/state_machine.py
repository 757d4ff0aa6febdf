"""Ride lifecycle graph."""

from rides.models import Ride

INITIAL_STATUS = Ride.PENDING

TRANSITIONS = {
    Ride.PENDING: {Ride.ACCEPTED, Ride.PENDING, Ride.CANCELLED},
    Ride.ACCEPTED: {Ride.PENDING, Ride.IN_PROGRESS, Ride.CANCELLED},
    Ride.IN_PROGRESS: {Ride.COMPLETED},
    Ride.COMPLETED: set(),
    Ride.CANCELLED: set(),
}

# Targets the status override endpoint may write
OVERRIDE_TARGETS = (Ride.IN_PROGRESS, Ride.COMPLETED, Ride.CANCELLED)


def can_transition(current: str, target: str) -> bool:
    return target in TRANSITIONS.get(current, ())
