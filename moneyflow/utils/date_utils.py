"""Date manipulation utilities"""

import calendar
from datetime import date, timedelta
from typing import List, Tuple


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move a (year, month) pair by delta months, crossing year boundaries"""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
