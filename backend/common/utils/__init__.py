"""Common utility functions."""

from .pagination import page_bounds, parse_positive_int, total_pages
from .time_windows import start_of_day, start_of_week

__all__ = [
    "page_bounds",
    "parse_positive_int",
    "total_pages",
    "start_of_day",
    "start_of_week",
]
