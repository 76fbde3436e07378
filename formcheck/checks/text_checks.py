"""
Text checks module.

Contains tests that operate on a field's text value:
- required: Value is not empty (or whitespace-only)
- number: Value parses as a decimal number
- length / min / max: Character length constraints
- values: Value is one of a fixed set of literals
"""

import re
from typing import Any, Sequence

from formcheck.checks.common import flag_arg, int_arg, is_blank
from formcheck.core.fields import Field
from formcheck.core.registry import builtin_test

NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


@builtin_test("required")
def required(field: Field, args: Sequence[str], validator: Any = None) -> bool:
    """
    Check that the field is not empty.

    Whitespace-only values ('', ' ', '\\n') count as empty unless the first
    argument is truthy.

    Syntax:
        required
        required:true   # allow whitespace-only values
    """
    value = field.text

    if flag_arg(args):
        return value != ""
    return not is_blank(value)


@builtin_test("number")
def number(field: Field, args: Sequence[str], validator: Any = None) -> bool:
    """
    Check that the value is a decimal number ("12", "-3.5", "1e3").

    Surrounding whitespace is ignored. Blank and whitespace-only values
    fail, so an optional numeric field needs a pretest that skips it while
    empty.
    """
    return NUMBER_PATTERN.fullmatch(field.text.strip()) is not None


@builtin_test("length")
def length(field: Field, args: Sequence[str], validator: Any = None) -> bool:
    """
    Check that the value is exactly n characters long. Blank passes.

    Syntax:
        length:7
    """
    expected = int_arg("length", args)
    value = field.text
    if is_blank(value):
        return True
    return len(value) == expected


@builtin_test("min")
def min_length(field: Field, args: Sequence[str], validator: Any = None) -> bool:
    """At least n characters; blank passes. Syntax: min:5"""
    minimum = int_arg("min", args)
    value = field.text
    if is_blank(value):
        return True
    return len(value) >= minimum


@builtin_test("max")
def max_length(field: Field, args: Sequence[str], validator: Any = None) -> bool:
    """At most n characters. Syntax: max:10"""
    maximum = int_arg("max", args)
    return len(field.text) <= maximum


@builtin_test("values")
def values(field: Field, args: Sequence[str], validator: Any = None) -> bool:
    """
    Check that the value equals one of the arguments.

    Arguments are compared as raw strings and are never quoted.

    Syntax:
        values:1:2:3:all good children go to heaven
    """
    value = field.text
    if is_blank(value):
        return True
    return value in args
