"""
Render Strava activities as fixed-width summary lines.

A line looks like ``Run  | 2023-04-01 | 5.00km | 06:40/km``.
Pace is rounded to whole seconds before it is split into minutes and seconds,
so ``59.6`` seconds becomes ``01:00`` rather than ``00:60``.
"""

import math
from collections.abc import Iterable, Mapping

from .config import DATE_WIDTH, LINE_SEPARATOR, TYPE_WIDTH, UNKNOWN_PACE
from .exceptions import MalformedResponseError
from .type_defs import ActivityDict

REQUIRED_FIELDS = ("type", "start_date", "distance", "average_speed")


def format_distance(meters: float) -> str:
    return f"{meters / 1000:.2f}"


def format_pace(average_speed: float) -> str:
    """
    Minutes and seconds per kilometre for a speed in metres per second.

    Stationary activities (speed of zero) have no pace and get ``--:--``.
    """
    if average_speed <= 0 or not math.isfinite(average_speed):
        return UNKNOWN_PACE
    seconds_per_km = 1000 / average_speed
    # Subnormal speeds overflow to infinity
    if not math.isfinite(seconds_per_km):
        return UNKNOWN_PACE
    total_seconds = round(seconds_per_km)
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def format_type(activity_type: str) -> str:
    # Longer types such as "WeightTraining" are cut to keep the column aligned
    return activity_type[:TYPE_WIDTH].ljust(TYPE_WIDTH)


def format_date(start_date: str) -> str:
    return start_date[:DATE_WIDTH]


def format_activity_line(activity: ActivityDict) -> str:
    if not isinstance(activity, Mapping):
        raise MalformedResponseError(f"Activity must be an object, got {type(activity).__name__}")
    missing = [field for field in REQUIRED_FIELDS if activity.get(field) is None]
    if missing:
        raise MalformedResponseError(f"Activity {activity.get('id', '?')} is missing fields: {', '.join(missing)}")

    try:
        distance = format_distance(float(activity["distance"]))
        pace = format_pace(float(activity["average_speed"]))
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"Activity {activity.get('id', '?')} has non-numeric values: {e}") from e

    return LINE_SEPARATOR.join(
        [
            format_type(str(activity["type"])),
            format_date(str(activity["start_date"])),
            f"{distance}km",
            f"{pace}/km",
        ]
    )


def format_activities(activities: Iterable[ActivityDict]) -> str:
    """Join one line per activity, keeping the order the API returned them in."""
    return "\n".join(format_activity_line(activity) for activity in activities)
