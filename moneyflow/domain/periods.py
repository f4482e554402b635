"""Reporting periods - the date windows transactions are fetched for"""

from datetime import date
from typing import Optional

from moneyflow.domain.exceptions import InvalidPeriodError
from moneyflow.domain.models import ReportingPeriod
from moneyflow.utils.date_utils import last_day_of_month, shift_month


def month_period(year: int, month: int) -> ReportingPeriod:
    """
    Calendar month window, first to last day inclusive.

    Raises:
        InvalidPeriodError: month outside 1..12 or year outside the calendar range
    """
    if not 1 <= month <= 12:
        raise InvalidPeriodError(f"Month must be between 1 and 12, got {month}")
    if not 1 <= year <= 9999:
        raise InvalidPeriodError(f"Year out of range: {year}")

    return ReportingPeriod(
        start_date=date(year, month, 1),
        end_date=last_day_of_month(year, month),
        label=f"{year:04d}-{month:02d}",
    )


def current_month_period(today: Optional[date] = None) -> ReportingPeriod:
    today = today or date.today()
    return month_period(today.year, today.month)


def adjacent_period(period: ReportingPeriod, delta: int) -> ReportingPeriod:
    """Period delta months before (negative) or after (positive) the given one"""
    year, month = shift_month(period.start_date.year, period.start_date.month, delta)
    return month_period(year, month)


def validate_range(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise InvalidPeriodError(f"Start date {start_date} is after end date {end_date}")


def month_to_date_range(today: Optional[date] = None) -> tuple[date, date]:
    """Default transactions-page window: first of the current month to today"""
    today = today or date.today()
    return today.replace(day=1), today
