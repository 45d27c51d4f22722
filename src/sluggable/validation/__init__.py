"""Column validation rules and field-scoped error collection."""

from .errors import ErrorCollection
from .rules import LengthRule, ValidationRules, compile_rules


__all__ = [
    "ErrorCollection",
    "LengthRule",
    "ValidationRules",
    "compile_rules",
]
