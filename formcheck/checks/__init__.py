"""
Built-in tests.

Organized by category:
- text_checks: required, number, length, min, max, values
- pattern_checks: email, phone-us, zip-us, zip-ca, zip-us-ca
- choice_checks: checked, any-checked
- temporal_checks: date, time
- payment_checks: creditcard

All tests are declared via the @builtin_test decorator on import.
"""

# Import all checks to trigger declaration
from formcheck.checks import text_checks
from formcheck.checks import pattern_checks
from formcheck.checks import choice_checks
from formcheck.checks import temporal_checks
from formcheck.checks import payment_checks

__all__ = ['text_checks', 'pattern_checks', 'choice_checks', 'temporal_checks', 'payment_checks']
