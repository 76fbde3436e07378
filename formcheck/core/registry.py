"""
Test registry system.

Built-in tests self-register into BUILTIN_TESTS through the @builtin_test
decorator. Each Validator owns its own TestRegistry instance seeded from
that table, so custom tests registered on one validator never leak into
another.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Union, TYPE_CHECKING

from formcheck.core.base import TestOutcome
from formcheck.core.exceptions import ConfigurationError, UnknownTestError
from shared.utils.logger import setup_logger

if TYPE_CHECKING:
    from formcheck.core.fields import Field

logger = setup_logger(__name__)

TestFunc = Callable[["Field", Sequence[str], Any], Union[bool, TestOutcome]]

# Built-in tests, populated when formcheck.checks is imported
BUILTIN_TESTS: Dict[str, TestFunc] = {}


def builtin_test(name: str):
    """
    Decorator to declare a built-in test.

    Usage:
        @builtin_test("zip-us")
        def zip_us(field, args, validator):
            ...

    Args:
        name: Test name as used in a field's test list
    """
    def decorator(func: TestFunc) -> TestFunc:
        if name in BUILTIN_TESTS:
            logger.warning(
                f"Built-in test '{name}' is already declared. "
                f"Overwriting with {func.__name__}"
            )

        BUILTIN_TESTS[name] = func
        logger.debug(f"Declared built-in test: {name} -> {func.__name__}")
        return func

    return decorator


class TestRegistry:
    """
    Mapping from test name to predicate.

    Predicates take (field, args, validator) and return a bool or a
    TestOutcome.

    Example:
        registry = TestRegistry.with_builtins()

        @registry.test("even-length")
        def even_length(field, args, validator):
            return len(field.text) % 2 == 0
    """
    __test__ = False  # not a pytest test class

    def __init__(self, tests: Optional[Dict[str, TestFunc]] = None):
        self._tests: Dict[str, TestFunc] = dict(tests or {})

    @classmethod
    def with_builtins(cls) -> "TestRegistry":
        # Importing the package runs the @builtin_test declarations
        from formcheck import checks  # noqa: F401

        return cls(BUILTIN_TESTS)

    def register(self, name: str, func: TestFunc, overwrite: bool = False) -> None:
        """
        Register a test under a name.

        Raises:
            ConfigurationError: If the name is taken and overwrite is False
        """
        if not name or ":" in name or "," in name:
            raise ConfigurationError(f"Invalid test name: {name!r}")

        if name in self._tests:
            if not overwrite:
                raise ConfigurationError(
                    f"Test '{name}' is already registered; pass overwrite=True to replace it"
                )
            logger.warning(f"Test '{name}' is already registered. Overwriting with {func.__name__}")

        self._tests[name] = func
        logger.debug(f"Registered test: {name} -> {func.__name__}")

    def test(self, name: str, overwrite: bool = False):
        """Decorator form of register()."""
        def decorator(func: TestFunc) -> TestFunc:
            self.register(name, func, overwrite=overwrite)
            return func

        return decorator

    def unregister(self, name: str) -> None:
        if name not in self._tests:
            raise UnknownTestError(name, self._tests)
        del self._tests[name]

    def get(self, name: str) -> Optional[TestFunc]:
        return self._tests.get(name)

    def is_registered(self, name: str) -> bool:
        return name in self._tests

    def names(self) -> List[str]:
        return list(self._tests.keys())

    def copy(self) -> "TestRegistry":
        return TestRegistry(self._tests)

    def evaluate(
        self,
        test_name: str,
        field: "Field",
        args: Sequence[str] = (),
        validator: Any = None
    ) -> TestOutcome:
        """
        Run one test against a field.

        Returns:
            Normalized TestOutcome; only valid=False is a failure

        Raises:
            UnknownTestError: If no test is registered under test_name
        """
        func = self._tests.get(test_name)
        if func is None:
            raise UnknownTestError(test_name, self._tests)

        return TestOutcome.coerce(func(field, list(args), validator))

    def __contains__(self, name: object) -> bool:
        return name in self._tests

    def __len__(self) -> int:
        return len(self._tests)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tests)
