"""
Period presets for the commission filters.

Dashboard quick filters (calendar dates):
- 7d / 30d => today minus N days through today
- month => first through last day of the current month
- last-month => the whole previous month
- year => Jan 1 through Dec 31 of the current year

Commission item presets (datetimes, start of first day to end of last day):
- day, week (Monday start), month, year, custom
"""

import calendar
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple

QUICK_FILTERS = ["7d", "30d", "month", "last-month", "year"]
PERIOD_PRESETS = ["day", "week", "month", "year", "custom"]


def month_bounds(day: date) -> Tuple[date, date]:
    """Return the first and last day of the month containing `day`."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def previous_month(day: date) -> date:
    """Return the first day of the month before `day`."""
    first = day.replace(day=1)
    return (first - timedelta(days=1)).replace(day=1)


def quick_range(name: str, today: Optional[date] = None) -> Tuple[date, date]:
    """
    Resolve a dashboard quick filter into an inclusive date window.

    Args:
        name: One of QUICK_FILTERS
        today: Current date (defaults to date.today())

    Returns:
        (date_start, date_end)
    """
    if today is None:
        today = date.today()

    if name == "7d":
        return today - timedelta(days=7), today
    if name == "30d":
        return today - timedelta(days=30), today
    if name == "month":
        return month_bounds(today)
    if name == "last-month":
        return month_bounds(previous_month(today))
    if name == "year":
        return date(today.year, 1, 1), date(today.year, 12, 31)

    raise ValueError(f"Unknown period '{name}'")


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max)


def preset_range(
    preset: str,
    now: Optional[datetime] = None,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
) -> Tuple[datetime, datetime]:
    """Resolve a commission-item period preset into a datetime window."""
    if now is None:
        now = datetime.utcnow()
    today = now.date()
    month_start, month_end = month_bounds(today)

    if preset == "day":
        first, last = today, today
    elif preset == "week":
        first = today - timedelta(days=today.weekday())
        last = first + timedelta(days=6)
    elif preset == "year":
        first, last = date(today.year, 1, 1), date(today.year, 12, 31)
    elif preset == "custom":
        # Each missing bound falls back to the current month
        first = custom_start or month_start
        last = custom_end or month_end
    else:
        first, last = month_start, month_end

    return start_of_day(first), end_of_day(last)
