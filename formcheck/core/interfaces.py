"""
Capability interfaces between the engine and its UI collaborator.

The engine never touches a concrete UI. It reads and writes values through
a ValueSource, asks an ErrorPresenter to show or clear error state, and is
driven by explicit InteractionNotifier calls instead of event listeners.
"""

from abc import ABC, abstractmethod
from typing import Any, List, TYPE_CHECKING

if TYPE_CHECKING:
    from formcheck.buttons import ButtonOutcome
    from formcheck.core.base import ErrorLabel, Result
    from formcheck.core.fields import Field


class ValueSource(ABC):
    """Reads and writes the displayed state of a field's element(s)."""

    @abstractmethod
    def get_value(self, field: "Field") -> Any:
        """
        Return the field's current value.

        Scalar text for a single element; an ordered list of per-element
        values for grouped fields.
        """
        pass

    @abstractmethod
    def set_value(self, field: "Field", value: Any) -> None:
        pass

    @abstractmethod
    def is_checked(self, field: "Field") -> Any:
        """Checked-state: bool, or a list of bools for grouped fields."""
        pass

    @abstractmethod
    def set_checked(self, field: "Field", checked: bool) -> None:
        """Set the checked-state of every element the field covers."""
        pass

    @abstractmethod
    def group_states(self, group: str) -> List[bool]:
        """Checked-state of every element sharing the group name."""
        pass

    def is_focused(self, field: "Field") -> bool:
        return False


class ErrorPresenter(ABC):
    """Presentation side effects requested by the engine."""

    @abstractmethod
    def mark_error(self, field: "Field", label: "ErrorLabel") -> None:
        """Put the field's container into the error state and attach the badge."""
        pass

    @abstractmethod
    def clear_error(self, field: "Field") -> None:
        """Remove error state and badge from the field's container."""
        pass

    @abstractmethod
    def set_message(self, field: "Field", message: str) -> None:
        """Bind a message to the field's error badge."""
        pass

    @abstractmethod
    def show_message(self, field: "Field") -> None:
        pass

    @abstractmethod
    def hide_message(self, field: "Field") -> None:
        pass

    @abstractmethod
    def reset_all(self) -> None:
        """Remove every error marker and badge, whatever the field state."""
        pass


class InteractionNotifier(ABC):
    """
    Entry points the UI collaborator calls when the user interacts.

    Implemented by Validator.
    """

    @abstractmethod
    def notify_focus(self, field: Any) -> None:
        pass

    @abstractmethod
    def notify_blur(self, field: Any) -> "Result":
        pass

    @abstractmethod
    def notify_hover(self, field: Any, entered: bool) -> None:
        pass

    @abstractmethod
    def request_check(self, field: Any) -> "Result":
        pass

    @abstractmethod
    def notify_click(self, binding: Any) -> "ButtonOutcome":
        pass
