"""Validation lifecycle for ORM models.

SQLAlchemy has no notion of record validation, so models that need one mix
in :class:`ValidatedModel`. A validation cycle runs every
``before_validation`` hook registered on the class, then checks the column
rulesets and collects field-scoped messages in :attr:`ValidatedModel.errors`.

The mixin also lets a class guard plain attribute assignment to a column.
Guards see ``record.column = value`` and constructor keywords only. The
ORM populates instances through its instrumentation, so loading, refresh
and ``Session.merge`` bypass them.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar

from sluggable.core.exceptions import RecordInvalidError
from sluggable.observability.logging import get_logger, validation_context
from sluggable.validation import ErrorCollection, ValidationRules, compile_rules


if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = get_logger(__name__)

BeforeValidationHook = Callable[[Any], None]
WriteGuard = Callable[[Any, str, Any], Any]


class ValidatedModel:
    """Mixin adding a before_validation → validate → save lifecycle."""

    __before_validation__: ClassVar[tuple[BeforeValidationHook, ...]] = ()
    __validation_rules__: ClassVar[Mapping[str, ValidationRules]] = MappingProxyType({})
    __write_guards__: ClassVar[Mapping[str, WriteGuard]] = MappingProxyType({})

    @classmethod
    def before_validation(cls, hook: BeforeValidationHook) -> BeforeValidationHook:
        """Register a hook run at the start of every validation cycle.

        Hooks are stored per class; registering on a subclass does not
        affect its parent.
        """
        cls.__before_validation__ = (*cls.__before_validation__, hook)
        return hook

    @classmethod
    def validates(
        cls,
        column: str,
        ruleset: Mapping[str, Any] | ValidationRules,
    ) -> ValidationRules:
        """Attach a ruleset to ``column``."""
        rules = compile_rules(ruleset)
        cls.__validation_rules__ = MappingProxyType(
            {**cls.__validation_rules__, column: rules}
        )
        return rules

    @classmethod
    def remove_validation(cls, column: str) -> None:
        """Detach the ruleset of ``column``, if any."""
        cls.__validation_rules__ = MappingProxyType(
            {key: rules for key, rules in cls.__validation_rules__.items() if key != column}
        )

    @classmethod
    def guard_writes(cls, column: str, guard: WriteGuard) -> WriteGuard:
        """Route assignments to ``column`` through ``guard``.

        ``guard(record, column, value)`` returns the value to store, or
        raises to reject the write.
        """
        cls.__write_guards__ = MappingProxyType({**cls.__write_guards__, column: guard})
        return guard

    def __setattr__(self, name: str, value: Any) -> None:
        guard = type(self).__write_guards__.get(name)
        if guard is not None:
            value = guard(self, name, value)
        super().__setattr__(name, value)

    @property
    def errors(self) -> ErrorCollection:
        """Messages from the most recent validation cycle."""
        errors = self.__dict__.get("_errors")
        if errors is None:
            errors = ErrorCollection()
            self._errors = errors
        return errors

    def run_before_validation_hooks(self) -> None:
        for hook in type(self).__before_validation__:
            hook(self)

    def is_valid(self) -> bool:
        """Run a full validation cycle and report whether it passed."""
        with validation_context(self):
            self.run_before_validation_hooks()

            errors = ErrorCollection()
            for column, rules in type(self).__validation_rules__.items():
                for message in rules.check(getattr(self, column)):
                    errors.add(column, message)
            self._errors = errors

            if errors:
                logger.debug(
                    "{} failed validation: {}",
                    type(self).__name__,
                    errors.messages,
                )
        return not errors

    def validate(self) -> None:
        """Run a validation cycle.

        Raises:
            RecordInvalidError: If any rule failed.
        """
        if not self.is_valid():
            raise RecordInvalidError(self, self.errors)

    def save(self, session: Session) -> None:
        """Validate, add to ``session`` and flush.

        Raises:
            RecordInvalidError: If validation fails; nothing is flushed.
        """
        self.validate()
        session.add(self)
        # The flush hook skips records that were just validated here
        self._validated_for_flush = True
        try:
            session.flush()
        finally:
            self._validated_for_flush = False
