"""Date manipulation utilities for reporting periods"""

from datetime import date, timedelta
from typing import Tuple
from fintrack.domain.exceptions import InvalidPeriodError

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# Period name -> number of calendar months covered, counting the current one
PERIOD_MONTHS = {
    "month": 1,
    "3months": 3,
    "6months": 6,
}


def month_label(day: date) -> str:
    """Format a day as its month label, e.g. 'Oct 2026'"""
    return f"{MONTH_ABBREVIATIONS[day.month - 1]} {day.year:04d}"


def first_of_month(day: date, months_back: int = 0) -> date:
    """First day of the month `months_back` months before `day`'s month"""
    index = day.year * 12 + (day.month - 1) - months_back
    return date(index // 12, index % 12 + 1, 1)


def end_of_month(day: date) -> date:
    """Last day of `day`'s month"""
    next_month = first_of_month(day, months_back=-1)
    return next_month - timedelta(days=1)


def current_month_range(today: date | None = None) -> Tuple[date, date]:
    """First and last day of the current month"""
    today = today or date.today()
    return first_of_month(today), end_of_month(today)


def last_n_months_range(n: int, today: date | None = None) -> Tuple[date, date]:
    """Range covering the last `n` calendar months, including the current one"""
    today = today or date.today()
    return first_of_month(today, months_back=n - 1), end_of_month(today)


def period_date_range(period: str, today: date | None = None) -> Tuple[date, date]:
    """
    Resolve a reporting period name to an inclusive (start, end) date range.

    Periods end today:
    - month:   1st of the current month
    - 3months: 1st of the month two months back
    - 6months: 1st of the month five months back
    - year:    January 1st of the current year

    Raises:
        InvalidPeriodError: Unknown period name
    """
    today = today or date.today()

    if period == "year":
        return date(today.year, 1, 1), today

    if period not in PERIOD_MONTHS:
        raise InvalidPeriodError(f"Unknown period: {period}")

    start, _ = last_n_months_range(PERIOD_MONTHS[period], today)
    return start, today
