"""
Button bindings.

Declarative contract between a UI action (submit/clear) and Validator
outcomes. The UI collaborator forwards clicks; the returned ButtonOutcome
tells it whether the native default action (e.g. a real form submission)
may proceed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from formcheck.core.base import RunResult


def _noop() -> None:
    return None


class ButtonType(str, Enum):
    """Recognized button roles"""
    SUBMIT = "submit"
    CLEAR = "clear"


class ButtonBinding:
    """
    One configured button.

    success/fail/always are zero-argument callables invoked synchronously.
    async_ only decides whether the native default action proceeds after a
    successful submit; it never defers the callbacks.
    """

    def __init__(
        self,
        type: ButtonType,
        binding: Any = None,
        success: Optional[Callable[[], Any]] = None,
        fail: Optional[Callable[[], Any]] = None,
        always: Optional[Callable[[], Any]] = None,
        async_: bool = False,
    ):
        self.type = ButtonType(type)
        self.binding = binding
        self.success = success or _noop
        self.fail = fail or _noop
        self.always = always or _noop
        self.async_ = async_

    def __repr__(self) -> str:
        return f"ButtonBinding(type={self.type.value!r}, binding={self.binding!r}, async_={self.async_})"


@dataclass
class ButtonOutcome:
    """Result of triggering a button"""
    button: ButtonBinding
    proceed: bool
    run_result: Optional[RunResult] = None

    @property
    def passed(self) -> bool:
        return self.run_result is None or self.run_result.passed
