"""
Declarative, rule-based field validation engine.

Main components:
- Validator: Main orchestrator (check/run/clear/reset/form)
- TestRegistry: Named test predicates, one instance per validator
- ValidationScheduler: Periodic re-check of dirty, touched fields
- ButtonBinding: Submit/clear button contract

Usage:
    from formcheck import Validator
    from formcheck.adapters import MemoryForm

    form = MemoryForm()
    form.add("Zip", "1234")

    validator = Validator(
        {"fields": [{"name": "Zip", "tests": "required, zip-us"}]},
        source=form,
        presenter=form,
    )

    outcome = validator.run()
    if not outcome.passed:
        for failure in outcome.failures:
            print(f"{failure.field_name} failed '{failure.failed_test}'")
"""

from formcheck.buttons import ButtonBinding, ButtonOutcome, ButtonType
from formcheck.core.base import ErrorLabel, Result, RunResult, TestOutcome, TestSpec
from formcheck.core.config_loader import (
    ValidatorConfig,
    ValidatorConfigLoader,
    load_validator_config,
)
from formcheck.core.exceptions import (
    ConfigurationError,
    FieldNotFoundError,
    FormCheckError,
    SchedulerError,
    TestArgumentError,
    UnknownTestError,
)
from formcheck.core.fields import Field, FieldKind
from formcheck.core.registry import TestRegistry
from formcheck.core.snapshot import FormSnapshot
from formcheck.engine import Validator
from formcheck.scheduler import ValidationScheduler

__all__ = [
    'Validator',
    'ValidationScheduler',
    'TestRegistry',
    'ButtonBinding',
    'ButtonOutcome',
    'ButtonType',
    'ErrorLabel',
    'Result',
    'RunResult',
    'TestOutcome',
    'TestSpec',
    'ValidatorConfig',
    'ValidatorConfigLoader',
    'load_validator_config',
    'ConfigurationError',
    'FieldNotFoundError',
    'FormCheckError',
    'SchedulerError',
    'TestArgumentError',
    'UnknownTestError',
    'Field',
    'FieldKind',
    'FormSnapshot',
]
