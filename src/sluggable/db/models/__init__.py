"""Models package initializer.

Contains the declarative base and the validation lifecycle mixin.
"""

from .base_database_model import BaseDatabaseModel
from .validated_model import ValidatedModel

__all__ = [
    "BaseDatabaseModel",
    "ValidatedModel",
]
