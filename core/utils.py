"""Utility functions for mindforge."""

import math
import time
import uuid
from datetime import date, datetime, timedelta


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Used everywhere a percentage or score is rounded so the same input always
    produces the same stored value.
    """
    return int(math.floor(value + 0.5))


def clamp(value, lower, upper):
    return max(lower, min(upper, value))


def date_key(day: date) -> str:
    """Calendar-day key used for streaks and the daily plan."""
    return day.isoformat()


def previous_day_key(day: date) -> str:
    return date_key(day - timedelta(days=1))


def timestamp(moment: datetime) -> str:
    return moment.isoformat()


def generate_result_id() -> str:
    """Unique id for a stored game result: millis plus a random suffix."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"
