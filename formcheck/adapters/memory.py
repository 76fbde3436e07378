"""
In-memory UI collaborator.

MemoryForm implements both ValueSource and ErrorPresenter over plain Python
objects. It backs headless use (server-side validation of submitted values)
and the test suite, and records every presentation side effect so callers
can inspect what a real UI would show.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from formcheck.core.base import ErrorLabel
from formcheck.core.fields import Field
from formcheck.core.interfaces import ErrorPresenter, ValueSource


@dataclass
class MemoryElement:
    """One input element"""
    value: Any = ""
    checked: bool = False
    group: Optional[str] = None


class MemoryForm(ValueSource, ErrorPresenter):
    """
    Dictionary-backed form.

    Elements are keyed by binding. A binding may own several elements
    (grouped fields); its value is then the list of per-element values.

    Example:
        form = MemoryForm()
        form.add("Zip", "")
        form.add_group("Color", ["red", "green"], group="color", checked=[False, True])
    """

    def __init__(self):
        self.elements: Dict[Any, List[MemoryElement]] = {}
        self.focused: Optional[Any] = None

        # Presentation state
        self.errors: Set[str] = set()
        self.labels: Dict[str, str] = {}
        self.messages: Dict[str, str] = {}
        self.visible_messages: Set[str] = set()

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def add(self, binding: Any, value: Any = "", checked: bool = False, group: Optional[str] = None) -> MemoryElement:
        element = MemoryElement(value=value, checked=checked, group=group)
        self.elements[binding] = [element]
        return element

    def add_group(
        self,
        binding: Any,
        values: List[Any],
        group: Optional[str] = None,
        checked: Optional[List[bool]] = None
    ) -> List[MemoryElement]:
        checked = checked or [False] * len(values)
        if len(checked) != len(values):
            raise ValueError(
                f"Group {binding!r}: {len(values)} values but {len(checked)} checked states"
            )
        elements = [
            MemoryElement(value=value, checked=state, group=group)
            for value, state in zip(values, checked)
        ]
        self.elements[binding] = elements
        return elements

    def _elements(self, field: Field) -> List[MemoryElement]:
        try:
            return self.elements[field.binding]
        except KeyError:
            raise KeyError(f"No element bound to {field.binding!r} (field '{field.name}')") from None

    # ------------------------------------------------------------------
    # User simulation
    # ------------------------------------------------------------------

    def enter(self, binding: Any, value: Any) -> None:
        """Replace the value of the element(s) under a binding."""
        elements = self.elements[binding]
        if isinstance(value, (list, tuple)):
            if len(value) != len(elements):
                raise ValueError(f"{binding!r} has {len(elements)} elements, got {len(value)} values")
            for element, item in zip(elements, value):
                element.value = item
        else:
            elements[0].value = value

    def toggle(self, binding: Any, checked: bool = True, index: int = 0) -> None:
        self.elements[binding][index].checked = checked

    def focus(self, binding: Optional[Any]) -> None:
        self.focused = binding

    # ------------------------------------------------------------------
    # ValueSource
    # ------------------------------------------------------------------

    def get_value(self, field: Field) -> Any:
        elements = self._elements(field)
        if field.grouped:
            return [element.value for element in elements]
        return elements[0].value

    def set_value(self, field: Field, value: Any) -> None:
        elements = self._elements(field)
        if field.grouped and isinstance(value, (list, tuple)):
            if len(value) != len(elements):
                raise ValueError(f"Field '{field.name}' has {len(elements)} elements, got {len(value)} values")
            for element, item in zip(elements, value):
                element.value = item
        else:
            elements[0].value = value

    def is_checked(self, field: Field) -> Any:
        elements = self._elements(field)
        if field.grouped:
            return [element.checked for element in elements]
        return elements[0].checked

    def set_checked(self, field: Field, checked: bool) -> None:
        for element in self._elements(field):
            element.checked = checked

    def group_states(self, group: str) -> List[bool]:
        states = []
        for binding, elements in self.elements.items():
            for element in elements:
                if (element.group or binding) == group:
                    states.append(element.checked)
        return states

    def is_focused(self, field: Field) -> bool:
        return self.focused is not None and self.focused == field.binding

    # ------------------------------------------------------------------
    # ErrorPresenter
    # ------------------------------------------------------------------

    def mark_error(self, field: Field, label: ErrorLabel) -> None:
        self.errors.add(field.name)
        self.labels.setdefault(field.name, label.render())

    def clear_error(self, field: Field) -> None:
        self.errors.discard(field.name)
        self.labels.pop(field.name, None)
        self.messages.pop(field.name, None)
        self.visible_messages.discard(field.name)

    def set_message(self, field: Field, message: str) -> None:
        self.messages[field.name] = message

    def show_message(self, field: Field) -> None:
        # Only fields with a badge have something to show
        if field.name in self.labels:
            self.visible_messages.add(field.name)

    def hide_message(self, field: Field) -> None:
        self.visible_messages.discard(field.name)

    def reset_all(self) -> None:
        self.errors.clear()
        self.labels.clear()
        self.messages.clear()
        self.visible_messages.clear()
