"""Driver statistics built on the ride store's read path."""

from .driver_stats import get_driver_stats

__all__ = ["get_driver_stats"]
