"""Age calculations in fractional months and calendar months/days."""

from .age_calculator import (
    Age,
    age_in_months,
    calculate_age,
    days_in_month,
    format_age,
    round_tenth,
    to_date,
)

__all__ = [
    "Age",
    "age_in_months",
    "calculate_age",
    "days_in_month",
    "format_age",
    "round_tenth",
    "to_date",
]
