"""
Payment checks module.

creditcard: Luhn checksum plus issuer classification. Returns a structured
TestOutcome rather than a bare bool so that "passed, issuer unknown" is
never mistaken for a failure.
"""

import re
from typing import Any, Optional, Sequence

from formcheck.checks.common import is_blank
from formcheck.core.base import TestOutcome
from formcheck.core.fields import Field
from formcheck.core.registry import builtin_test

DIGITS_PATTERN = re.compile(r"\d+", re.ASCII)


def luhn_valid(number: str) -> bool:
    """
    Luhn checksum.

    Starting from the second-to-last digit and moving left, every other
    digit is doubled; the digits of the doubled values are summed with the
    untouched digits and the total must be divisible by 10.
    """
    total = 0
    for position, char in enumerate(reversed(number)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def classify_card(number: str) -> Optional[str]:
    """Card issuer from prefix and length, or None when nothing matches."""
    length = len(number)
    two_digit_prefix = int(number[:2]) if length >= 2 else -1

    if 51 <= two_digit_prefix <= 55 and length == 16:
        return "mastercard"
    if two_digit_prefix in (34, 37) and length == 15:
        return "amex"
    if number.startswith("4") and length in (13, 16):
        return "visa"
    if number.startswith("6011") and length == 16:
        return "discover"
    return None


@builtin_test("creditcard")
def creditcard(field: Field, args: Sequence[str], validator: Any = None) -> TestOutcome:
    value = field.text
    if is_blank(value):
        return TestOutcome(valid=True)

    if DIGITS_PATTERN.fullmatch(value) is None or not luhn_valid(value):
        return TestOutcome(valid=False)

    return TestOutcome(valid=True, card_type=classify_card(value))
