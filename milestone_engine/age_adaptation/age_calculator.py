"""Child age calculations.

Two views of a child's age are used across the engine:

- Fractional months (one decimal place), used for every milestone
  comparison. The fraction is measured against the length of the
  reference month, not a fixed 30-day month.
- Calendar breakdown (complete months + remaining days), used for display.

Neither reads the clock: callers always pass the reference date.
"""

import calendar
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..logging_config import get_logger

logger = get_logger(__name__)

DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> date:
    """
    Normalize a date, datetime or ISO string to a calendar date.

    Time-of-day is dropped. A trailing ``Z`` on ISO strings is accepted.

    Args:
        value: Date, datetime or ISO-8601 string

    Returns:
        Calendar date

    Raises:
        ValueError: If a string cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
    raise TypeError(f"Expected date, datetime or ISO string, got {type(value).__name__}")


def round_tenth(value: float) -> float:
    """Round to one decimal place, halves away from negative infinity."""
    return math.floor(value * 10 + 0.5) / 10


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month, leap years included."""
    return calendar.monthrange(year, month)[1]


def age_in_months(birth_date: DateLike, reference_date: DateLike) -> float:
    """
    Calculate a child's age in fractional months.

    Whole months are counted on the calendar; if the reference day-of-month
    is before the birth day-of-month the current month is not complete yet.
    The remaining days become a fraction of the reference month's length.

    Args:
        birth_date: Child's birth date
        reference_date: Date to measure the age at

    Returns:
        Age in months rounded to one decimal place. Negative when the
        reference date is before the birth date.
    """
    birth = to_date(birth_date)
    reference = to_date(reference_date)

    years_diff = reference.year - birth.year
    months_diff = reference.month - birth.month
    days_diff = reference.day - birth.day

    total_months = years_diff * 12 + months_diff

    if days_diff < 0:
        total_months -= 1

    month_length = days_in_month(reference.year, reference.month)
    elapsed_days = days_diff if days_diff >= 0 else month_length + days_diff
    fractional_month = elapsed_days / month_length

    age = round_tenth(total_months + fractional_month)

    if age < 0:
        logger.warning(
            "reference_before_birth",
            birth_date=birth.isoformat(),
            reference_date=reference.isoformat(),
            age_months=age,
        )

    return age


@dataclass
class Age:
    """Age as complete calendar months plus remaining days."""
    months: int
    days: int
    total_days: int

    def to_dict(self) -> dict:
        return {
            "months": self.months,
            "days": self.days,
            "totalDays": self.total_days,
        }


def calculate_age(birth_date: DateLike, reference_date: Optional[DateLike] = None) -> Age:
    """
    Calculate age in complete months and remaining days.

    Args:
        birth_date: Child's birth date
        reference_date: Date to measure the age at (default: today)

    Returns:
        Age breakdown. A birth date in the future yields all zeros.
    """
    birth = to_date(birth_date)
    reference = to_date(reference_date) if reference_date is not None else date.today()

    if birth > reference:
        return Age(months=0, days=0, total_days=0)

    total_days = (reference - birth).days

    months = (reference.year - birth.year) * 12 + (reference.month - birth.month)
    if reference.day < birth.day:
        months -= 1

    # Start of the current partial month: the most recent "month-birthday"
    if reference.day >= birth.day:
        anchor = date(reference.year, reference.month, birth.day)
    else:
        year, month = (reference.year, reference.month - 1) if reference.month > 1 else (reference.year - 1, 12)
        # Born on a day the previous month doesn't have (e.g. the 31st)
        anchor = date(year, month, min(birth.day, days_in_month(year, month)))

    days = (reference - anchor).days

    return Age(
        months=max(0, months),
        days=max(0, days),
        total_days=max(0, total_days),
    )


def format_age(age: Age) -> str:
    """
    Format an age for display.

    Examples: "Newborn", "12 days", "1 month", "6 months, 5 days".
    """
    month_str = "1 month" if age.months == 1 else f"{age.months} months"
    day_str = "1 day" if age.days == 1 else f"{age.days} days"

    if age.months == 0 and age.days == 0:
        return "Newborn"
    if age.months == 0:
        return day_str
    if age.days == 0:
        return month_str
    return f"{month_str}, {day_str}"
