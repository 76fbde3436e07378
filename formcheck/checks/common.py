"""Helpers shared by the built-in tests."""

from typing import Any, Sequence

from formcheck.core.exceptions import TestArgumentError

TRUTHY_ARGS = {"true", "1", "yes"}


def is_blank(value: Any) -> bool:
    """True for None, "" and whitespace-only strings."""
    if value is None:
        return True
    return str(value).strip() == ""


def int_arg(test_name: str, args: Sequence[str], position: int = 0) -> int:
    """Parse a required integer argument, e.g. the 5 in "length:5"."""
    try:
        return int(args[position].strip())
    except IndexError:
        raise TestArgumentError(
            f"Test '{test_name}' requires an integer argument, e.g. '{test_name}:5'"
        )
    except ValueError:
        raise TestArgumentError(
            f"Test '{test_name}' expects an integer argument, got {args[position]!r}"
        )


def flag_arg(args: Sequence[str], position: int = 0) -> bool:
    if len(args) <= position:
        return False
    return args[position].strip().lower() in TRUTHY_ARGS
