"""
Custom exceptions for the validation engine.

Validation failures are never raised; they are reported as Result objects.
These exceptions cover programmer and configuration errors only.
"""


class FormCheckError(Exception):
    """Base exception for the validation engine."""
    pass


class ConfigurationError(FormCheckError):
    """Exception raised for invalid validator configuration."""
    pass


class UnknownTestError(ConfigurationError):
    """Exception raised when a field references an unregistered test."""

    def __init__(self, test_name: str, available=None):
        self.test_name = test_name
        self.available = sorted(available or [])
        message = f"Test '{test_name}' is not registered"
        if self.available:
            message += f". Available: {self.available}"
        super().__init__(message)


class TestArgumentError(ConfigurationError):
    """Exception raised when a test receives arguments it cannot parse."""

    __test__ = False  # not a pytest test class


class FieldNotFoundError(FormCheckError):
    """Exception raised when a field name is not known to the validator."""
    pass


class SchedulerError(FormCheckError):
    """Exception raised when the re-check scheduler cannot be started."""
    pass
