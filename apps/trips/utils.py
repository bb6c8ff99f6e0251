"""
Date helpers for building trip schedules.
"""
import re
from datetime import datetime, timedelta

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

TIME_RE = re.compile(r'^\d{2}:\d{2}$')


def parse_trip_date(value):
    """
    Parse ``YYYY-MM-DD`` or a full ISO timestamp into a ``date``.

    Returns ``None`` for empty or unparseable input.
    """
    if not value:
        return None
    try:
        parsed = parse_date(value)
    except ValueError:
        return None
    if parsed is not None:
        return parsed
    try:
        moment = parse_datetime(value)
    except ValueError:
        return None
    return moment.date() if moment else None


def build_day_dates(start_date, end_date=None):
    """
    Every date from ``start_date`` to ``end_date`` inclusive.

    A missing end means a single-day trip; a missing start means no days.
    """
    return [start_date + timedelta(days=offset) for offset in range(day_span(start_date, end_date))]


def day_span(start_date, end_date=None):
    """Number of days from ``start_date`` to ``end_date`` inclusive (0 without a start)."""
    if start_date is None:
        return 0
    end = end_date or start_date
    if end < start_date:
        return 0
    return (end - start_date).days + 1


def combine_date_with_time(day, time_value):
    """
    Combine a trip day's date with an ``HH:MM`` clock time.

    Returns an aware datetime in the current timezone, or ``None`` when the
    time is malformed or out of range.
    """
    if not isinstance(time_value, str) or not TIME_RE.match(time_value):
        return None
    try:
        clock = datetime.strptime(time_value, '%H:%M').time()
    except ValueError:
        return None
    return timezone.make_aware(datetime.combine(day, clock), timezone.get_current_timezone())
