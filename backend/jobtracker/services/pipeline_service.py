"""Display ordering and ghosting detection over application records.

The functions here are pure: they read ``status``, ``priority``,
``is_bookmarked``, ``date_applied`` and ``is_reminder_sent`` attributes and
work the same on ORM rows and on API response models.
"""
import math
from datetime import datetime

from jobtracker.config import settings
from jobtracker.models.enums import ApplicationStatus, Priority
from jobtracker.utils.timestamps import parse_ts, utc_now

PRIORITY_RANK = {
    Priority.HIGH.value: 3,
    Priority.MEDIUM.value: 2,
    Priority.LOW.value: 1,
}
DEFAULT_PRIORITY_RANK = PRIORITY_RANK[Priority.MEDIUM.value]

SECONDS_PER_DAY = 24 * 60 * 60


def _value(member) -> str | None:
    return getattr(member, "value", member)


def priority_rank(priority) -> int:
    """HIGH=3, MEDIUM=2, LOW=1. Unset or unknown priorities rank as MEDIUM."""
    return PRIORITY_RANK.get(_value(priority), DEFAULT_PRIORITY_RANK)


def _sort_key(application) -> tuple:
    applied = parse_ts(application.date_applied)
    applied_ts = applied.timestamp() if applied else float("-inf")
    return (
        0 if application.is_bookmarked else 1,
        -priority_rank(application.priority),
        -applied_ts,
    )


def sort_applications(applications) -> list:
    """Bookmarked first, then priority descending, then newest ``date_applied``.

    Returns a new list; equal keys keep their input order.
    """
    return sorted(applications, key=_sort_key)


def days_since(when: datetime | str, now: datetime | None = None) -> int:
    """Whole days between ``when`` and ``now``, rounding partial days up."""
    moment = parse_ts(when)
    current = parse_ts(now) if now is not None else utc_now()
    elapsed = abs((current - moment).total_seconds())
    return math.ceil(elapsed / SECONDS_PER_DAY)


def is_ghosted(application, now: datetime | None = None, threshold_days: int | None = None) -> bool:
    threshold = settings.ghosting_threshold_days if threshold_days is None else threshold_days
    if _value(application.status) != ApplicationStatus.APPLIED.value:
        return False
    if application.is_reminder_sent:
        return False
    if not application.date_applied:
        return False
    return days_since(application.date_applied, now) >= threshold


def ghosted_applications(applications, now: datetime | None = None) -> list:
    return [a for a in sort_applications(applications) if is_ghosted(a, now)]
