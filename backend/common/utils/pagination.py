"""Page arithmetic for history listings."""

import math


def parse_positive_int(value, default: int, name: str) -> int:
    """Parse a query parameter that must be an integer >= 1."""
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a positive integer")
    if number < 1:
        raise ValueError(f"{name} must be a positive integer")
    return number


def page_bounds(page: int, limit: int):
    """Return (offset, limit) for a 1-based page number."""
    return (page - 1) * limit, limit


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)
