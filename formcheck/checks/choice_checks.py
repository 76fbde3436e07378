"""
Choice checks module.

Tests for checkbox and radio fields.
"""

from typing import Any, Sequence

from formcheck.core.fields import Field
from formcheck.core.registry import builtin_test


@builtin_test("checked")
def checked(field: Field, args: Sequence[str], validator: Any = None) -> bool:
    """Check that the radio button or checkbox is checked."""
    return field.checked


@builtin_test("any-checked")
def any_checked(field: Field, args: Sequence[str], validator: Any = None) -> bool:
    """Check that at least one element in the field's group is checked."""
    return any(field.group_states())
