from datetime import date, datetime
from typing import Union

from ..exceptions import DomainError

# Start day in year of each month, for a non leap year.
_START_DAY = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334, 365)

def is_leap_year(year: int) -> bool:
    """Gregorian leap year test."""
    return (year % 4 == 0) and ((year % 100 != 0) or (year % 400 == 0))

def decimal_year(day: int, month: int, year: int) -> float:
    """
    Convert a calendar date to a decimal year.

    Args:
        day: Day in the month, in [1, 31]
        month: Month of the year, in [1, 12]
        year: Year number, e.g. 2016

    Returns:
        The decimal year, e.g. 2016.5

    Raises:
        DomainError: If the month or the day is not valid
    """
    if (month < 1) or (month > 12):
        raise DomainError(f"invalid month `{month}`")

    leap = 1 if is_leap_year(year) else 0
    days_in_month = _START_DAY[month] - _START_DAY[month - 1]
    if month == 2:
        days_in_month += leap
    if (day < 1) or (day > days_in_month):
        raise DomainError(f"invalid day `{day}` for month `{month}`")

    day_in_year = _START_DAY[month - 1] + day + (leap if month > 2 else 0)
    return year + day_in_year / (365. + leap)

def date_to_decimal_year(value: Union[date, datetime]) -> float:
    """Convert a date (or datetime, time of day ignored) to a decimal year."""
    return decimal_year(value.day, value.month, value.year)
