"""Shared fixtures for the validation engine tests."""

import pytest

from formcheck import TestRegistry, Validator
from formcheck.adapters import MemoryForm
from formcheck.core.base import parse_tests
from formcheck.core.fields import Field, FieldKind


@pytest.fixture
def form():
    return MemoryForm()


@pytest.fixture
def registry():
    return TestRegistry.with_builtins()


@pytest.fixture
def evaluate(form, registry):
    """Run one test token ("length:5") against a throwaway single-element field."""
    def _evaluate(token, value="", kind=FieldKind.TEXT, checked=False):
        form.add("subject", value, checked=checked)
        field = Field("subject", source=form, kind=kind)
        spec = parse_tests(token)[0]
        return registry.evaluate(spec.name, field, spec.args)

    return _evaluate


@pytest.fixture
def make_validator(form):
    def _make(config, registry=None):
        return Validator(config, source=form, presenter=form, registry=registry)

    return _make


@pytest.fixture
def spy_registry():
    """Built-in registry plus a 'spy' test that records every call and passes."""
    registry = TestRegistry.with_builtins()
    registry.calls = []

    @registry.test("spy")
    def spy(field, args, validator):
        registry.calls.append(field.name)
        return True

    return registry
