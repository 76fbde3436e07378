"""
Pattern checks module.

Regex-based format tests. Blank values always pass; combine with
'required' to make a field mandatory.
"""

import re
from typing import Any, Sequence

from formcheck.checks.common import is_blank
from formcheck.core.fields import Field
from formcheck.core.registry import builtin_test

EMAIL_PATTERN = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,4}", re.IGNORECASE | re.ASCII)

# 10 digits with optional leading +1 and optional separators/parentheses
PHONE_US_PATTERN = re.compile(r"(?:\+?1[-. ]?)?\(?([0-9]{3})\)?[-. ]?([0-9]{3})[-. ]?([0-9]{4})")

ZIP_US_PATTERN = re.compile(r"\d{5}(-\d{4})?", re.ASCII)

# First letter excludes D, F, I, O, Q, U, W, Z
ZIP_CA_PATTERN = re.compile(r"[ABCEGHJKLMNPRSTVXY]\d[A-Z] *\d[A-Z]\d", re.IGNORECASE | re.ASCII)


def _matches(field: Field, pattern: re.Pattern) -> bool:
    value = field.text
    if is_blank(value):
        return True
    return pattern.fullmatch(value) is not None


@builtin_test("email")
def email(field: Field, args: Sequence[str], validator: Any = None) -> bool:
    return _matches(field, EMAIL_PATTERN)


@builtin_test("phone-us")
def phone_us(field: Field, args: Sequence[str], validator: Any = None) -> bool:
    """U.S. phone number; allows a leading +1."""
    return _matches(field, PHONE_US_PATTERN)


@builtin_test("zip-us")
def zip_us(field: Field, args: Sequence[str], validator: Any = None) -> bool:
    """U.S. zip code, optionally followed by a dash and 4 digits."""
    return _matches(field, ZIP_US_PATTERN)


@builtin_test("zip-ca")
def zip_ca(field: Field, args: Sequence[str], validator: Any = None) -> bool:
    """Canadian postal code (A1A 1A1), case-insensitive."""
    return _matches(field, ZIP_CA_PATTERN)


@builtin_test("zip-us-ca")
def zip_us_ca(field: Field, args: Sequence[str], validator: Any = None) -> bool:
    return _matches(field, ZIP_US_PATTERN) or _matches(field, ZIP_CA_PATTERN)
