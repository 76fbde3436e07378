"""
Temporal checks module.

- date: m/d/y or m-d-y with Gregorian leap-year handling
- time: hh:mm[:ss][am|pm], 12- or 24-hour depending on the suffix
"""

import re
from typing import Any, Sequence

from formcheck.checks.common import is_blank
from formcheck.core.fields import Field
from formcheck.core.registry import builtin_test

DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

DATE_PART_PATTERN = re.compile(r"\s*\d+\s*", re.ASCII)

TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{2})(?::(\d{2}))?([ap]m)?", re.ASCII)


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(month: int, year: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_IN_MONTH[month - 1]


@builtin_test("date")
def date(field: Field, args: Sequence[str], validator: Any = None) -> bool:
    """
    Check that the value is a valid date in the format m/d/y or m-d-y.

    The value is split on "/" when present, otherwise on "-". Exactly three
    integer parts are required and the day may not exceed the month's
    length (February has 29 days in leap years). Blank passes.
    """
    value = field.text
    if is_blank(value):
        return True

    parts = value.split("/") if "/" in value else value.split("-")
    if len(parts) != 3:
        return False

    if not all(DATE_PART_PATTERN.fullmatch(part) for part in parts):
        return False

    month, day, year = (int(part) for part in parts)
    if not 1 <= month <= 12:
        return False

    return day <= days_in_month(month, year)


@builtin_test("time")
def time(field: Field, args: Sequence[str], validator: Any = None) -> bool:
    """
    Check that the value is a valid time in the format hh:mm[:ss][am|pm].

    With an am/pm suffix the hour must be 1-12, otherwise 0-23. Minutes and
    seconds must be 0-59. Blank passes.
    """
    value = field.text
    if is_blank(value):
        return True

    match = TIME_PATTERN.fullmatch(value.lower())
    if match is None:
        return False

    hour, minute, second, meridiem = match.groups()

    if meridiem:
        hour_range = range(1, 13)
    else:
        hour_range = range(0, 24)

    if int(hour) not in hour_range:
        return False
    if int(minute) > 59:
        return False
    if second is not None and int(second) > 59:
        return False

    return True
