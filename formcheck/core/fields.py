"""
Field model.

A Field wraps one logical input: a single element or a group of elements
(radio/checkbox groups, repeated inputs), its ordered tests, an optional
pretest gate and interaction tracking.
"""

from enum import Enum
from typing import Any, Callable, List, Optional, Sequence

from formcheck.core.base import TestSpec
from formcheck.core.interfaces import ValueSource


class FieldKind(str, Enum):
    """Element semantics for value access"""
    TEXT = "text"
    CHECKBOX = "checkbox"
    RADIO = "radio"

    @property
    def checkable(self) -> bool:
        return self in (FieldKind.CHECKBOX, FieldKind.RADIO)


class Field:
    """
    One validated logical input.

    The value accessor goes through the bound ValueSource: checkable fields
    report their checked-state, grouped fields an ordered list of
    per-element values. The default is recorded once, at construction.
    """

    def __init__(
        self,
        name: str,
        source: ValueSource,
        binding: Any = None,
        tests: Sequence[TestSpec] = (),
        pretest: Optional[Callable[[], bool]] = None,
        label: Any = None,
        kind: FieldKind = FieldKind.TEXT,
        grouped: bool = False,
        group: Optional[str] = None,
    ):
        self._name = name
        self.source = source
        self.binding = binding if binding is not None else name
        self.tests: List[TestSpec] = list(tests)
        self.pretest = pretest
        self.label = label
        self.kind = FieldKind(kind)
        self.grouped = grouped
        self.group = group if group is not None else self.binding
        self.interaction_count = 0

        self.default = self.value

    @property
    def name(self) -> str:
        return self._name

    @property
    def checkable(self) -> bool:
        return self.kind.checkable

    @property
    def value(self) -> Any:
        if self.checkable:
            return self.source.is_checked(self)
        return self.source.get_value(self)

    @property
    def text(self) -> str:
        """Scalar string view used by text tests (first element of a group)."""
        value = self.source.get_value(self)
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        return "" if value is None else str(value)

    @property
    def checked(self) -> bool:
        state = self.source.is_checked(self)
        if isinstance(state, (list, tuple)):
            return bool(state) and bool(state[0])
        return bool(state)

    def group_states(self) -> List[bool]:
        return list(self.source.group_states(self.group))

    def is_dirty(self) -> bool:
        return self.value != self.default

    def should_check(self) -> bool:
        """False when a pretest is present and does not return True."""
        return self.pretest is None or self.pretest() is True

    def record_interaction(self) -> int:
        self.interaction_count += 1
        return self.interaction_count

    def __repr__(self) -> str:
        tests = ", ".join(str(t) for t in self.tests)
        return f"Field(name={self._name!r}, kind={self.kind.value!r}, tests=[{tests}])"
