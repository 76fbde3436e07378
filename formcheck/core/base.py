"""
Base data models for the validation engine.

This module provides the value types shared by every component:
- TestSpec: A parsed "name:arg1:arg2" test reference
- TestOutcome: Normalized outcome of a single test
- Result: Outcome of checking one field
- RunResult: Aggregated outcome of checking every field
- ErrorLabel: Error badge template handed to the presenter
"""

from dataclasses import dataclass, field as dataclass_field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from formcheck.core.fields import Field


DEFAULT_ERROR_LABEL = (
    "<span class='badge badge-important'>"
    "<i class='icon-exclamation-sign icon-white'></i>"
    "</span>"
)

DEFAULT_ERROR_LABEL_STYLES: Dict[str, str] = {
    "padding": "1px",
    "margin-left": "5px",
}


@dataclass(frozen=True)
class TestSpec:
    """
    A single test reference from a field's test list.

    "length:5" parses to TestSpec(name="length", args=("5",), raw="length:5").
    Arguments are raw strings; values are never quoted.
    """
    __test__ = False  # not a pytest test class

    name: str
    args: Tuple[str, ...] = ()
    raw: str = ""

    @classmethod
    def parse(cls, token: str) -> "TestSpec":
        token = token.strip()
        if ":" not in token:
            return cls(name=token, args=(), raw=token)

        name, *args = token.split(":")
        return cls(name=name.strip(), args=tuple(args), raw=token)

    def __str__(self) -> str:
        return self.raw or self.name


def parse_tests(tests: Union[None, str, Iterable[str]]) -> List[TestSpec]:
    """
    Parse a field's test configuration into TestSpecs.

    Accepts a comma-separated string ("required, zip-us") or a list of
    tokens. Empty entries are ignored.
    """
    if tests is None:
        return []

    if isinstance(tests, str):
        tokens = tests.split(",")
    else:
        tokens = list(tests)

    return [TestSpec.parse(token) for token in tokens if token and token.strip()]


@dataclass(frozen=True)
class TestOutcome:
    """
    Normalized outcome of one test.

    Only valid=False is a failure. A passing test may carry metadata, e.g.
    creditcard reports card_type ("visa", "amex", ...) or None when the
    number is Luhn-valid but matches no known issuer.
    """
    __test__ = False  # not a pytest test class

    valid: bool
    card_type: Optional[str] = None
    details: Dict[str, Any] = dataclass_field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def coerce(cls, value: Union[bool, "TestOutcome"]) -> "TestOutcome":
        if isinstance(value, TestOutcome):
            return value
        if isinstance(value, bool):
            return cls(valid=value)
        raise TypeError(
            f"Tests must return bool or TestOutcome, got {type(value).__name__}"
        )

    def metadata(self) -> Dict[str, Any]:
        data = dict(self.details)
        if self.card_type is not None:
            data["card_type"] = self.card_type
        return data


@dataclass
class Result:
    """
    Outcome of checking one field.

    failed_test names the first test that failed and is only set when
    passed is False.
    """
    field: Optional["Field"]
    passed: bool
    failed_test: Optional[str] = None
    message: Optional[str] = None
    details: Dict[str, Any] = dataclass_field(default_factory=dict)

    @property
    def field_name(self) -> Optional[str]:
        return self.field.name if self.field is not None else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "field": self.field_name,
            "passed": self.passed,
            "failed_test": self.failed_test,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass
class RunResult:
    """
    Aggregated outcome of Validator.run().

    passed is True only when no field failed; failures keep field
    declaration order.
    """
    failures: List[Result] = dataclass_field(default_factory=list)
    successes: List[Result] = dataclass_field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures

    def __bool__(self) -> bool:
        return self.passed

    @property
    def failed_fields(self) -> List[str]:
        return [r.field_name for r in self.failures]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "failures": [r.to_dict() for r in self.failures],
            "checked": len(self.failures) + len(self.successes),
        }


@dataclass
class ErrorLabel:
    """Error badge markup and inline styles."""
    template: str = DEFAULT_ERROR_LABEL
    styles: Dict[str, str] = dataclass_field(
        default_factory=lambda: dict(DEFAULT_ERROR_LABEL_STYLES)
    )

    def __post_init__(self):
        if not self.template or not self.template.strip():
            self.template = DEFAULT_ERROR_LABEL

    @property
    def style_attribute(self) -> str:
        return "; ".join(f"{key}: {value}" for key, value in self.styles.items())

    def render(self) -> str:
        """Wrap the badge template in a span.error-label element."""
        style = self.style_attribute
        style_attr = f' style="{style}"' if style else ""
        return f'<span class="error-label"{style_attr}>{self.template}</span>'
