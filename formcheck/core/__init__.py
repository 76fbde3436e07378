"""
Validation core module.

Contains the data model, registry, interfaces and configuration for the
validation engine.
"""

from formcheck.core.base import ErrorLabel, Result, RunResult, TestOutcome, TestSpec, parse_tests
from formcheck.core.exceptions import (
    ConfigurationError,
    FieldNotFoundError,
    FormCheckError,
    SchedulerError,
    TestArgumentError,
    UnknownTestError,
)
from formcheck.core.fields import Field, FieldKind
from formcheck.core.interfaces import ErrorPresenter, InteractionNotifier, ValueSource
from formcheck.core.registry import BUILTIN_TESTS, TestRegistry, builtin_test
from formcheck.core.snapshot import FormSnapshot

__all__ = [
    'ErrorLabel',
    'Result',
    'RunResult',
    'TestOutcome',
    'TestSpec',
    'parse_tests',
    'ConfigurationError',
    'FieldNotFoundError',
    'FormCheckError',
    'SchedulerError',
    'TestArgumentError',
    'UnknownTestError',
    'Field',
    'FieldKind',
    'ErrorPresenter',
    'InteractionNotifier',
    'ValueSource',
    'BUILTIN_TESTS',
    'TestRegistry',
    'builtin_test',
    'FormSnapshot',
]
