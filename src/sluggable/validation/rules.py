"""Validation rules attached to a model column.

A ruleset is declared as a plain mapping, for example::

    {"presence": True, "length": {"in": (4, 14)}, "format": r"^[a-z_]+$"}

and checked by pydantic string constraints. Failures are reported as short
field-scoped messages ("can't be blank", "is too short (minimum is 4
characters)", ...).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from functools import lru_cache
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)


def _characters(count: int) -> str:
    return "1 character" if count == 1 else f"{count} characters"


@lru_cache(maxsize=128)
def _length_adapter(low: int | None, high: int | None) -> TypeAdapter[str]:
    return TypeAdapter(
        Annotated[str, StringConstraints(min_length=low, max_length=high)]
    )


@lru_cache(maxsize=128)
def _format_adapter(pattern: str) -> TypeAdapter[str]:
    return TypeAdapter(
        Annotated[str, StringConstraints(pattern=pattern)],
        config=ConfigDict(regex_engine="python-re"),
    )


class LengthRule(BaseModel):
    """Length bounds, inclusive on both ends."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    minimum: int | None = Field(default=None, ge=0)
    maximum: int | None = Field(default=None, ge=0)
    exactly: int | None = Field(default=None, ge=0, alias="is")

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, data: Any) -> Any:
        if isinstance(data, (range, tuple)):
            data = {"in": data}
        if not isinstance(data, Mapping):
            return data

        expanded = dict(data)
        if "min" in expanded:
            expanded["minimum"] = expanded.pop("min")
        if "max" in expanded:
            expanded["maximum"] = expanded.pop("max")

        if "in" in expanded and "within" in expanded:
            msg = "length accepts either 'in' or 'within', not both"
            raise ValueError(msg)
        bounds = expanded.pop("in", None)
        if bounds is None:
            bounds = expanded.pop("within", None)
        if isinstance(bounds, range):
            expanded["minimum"] = bounds.start
            expanded["maximum"] = bounds.stop - 1
        elif bounds is not None:
            low, high = bounds
            expanded["minimum"] = low
            expanded["maximum"] = high
        return expanded

    @model_validator(mode="after")
    def _check_bounds(self) -> LengthRule:
        if self.exactly is not None and (
            self.minimum is not None or self.maximum is not None
        ):
            msg = "length 'is' cannot be combined with minimum/maximum"
            raise ValueError(msg)
        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            msg = f"length minimum {self.minimum} exceeds maximum {self.maximum}"
            raise ValueError(msg)
        return self


class ValidationRules(BaseModel):
    """Parsed ruleset for a single column."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    presence: bool = False
    length: LengthRule | None = None
    format: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap_pattern(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and isinstance(data.get("format"), re.Pattern):
            data = {**data, "format": data["format"].pattern}
        return data

    @field_validator("format")
    @classmethod
    def _compiles(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                re.compile(value)
            except re.error as exc:
                msg = f"format {value!r} is not a valid regular expression: {exc}"
                raise ValueError(msg) from exc
        return value

    def _length_messages(self, value: str) -> list[str]:
        if self.length is None:
            return []
        low = self.length.minimum
        high = self.length.maximum
        if self.length.exactly is not None:
            low = high = self.length.exactly
        try:
            _length_adapter(low, high).validate_python(value)
        except ValidationError as exc:
            messages = []
            for error in exc.errors():
                if self.length.exactly is not None:
                    messages.append(
                        "is the wrong length "
                        f"(should be {_characters(self.length.exactly)})"
                    )
                elif error["type"] == "string_too_short":
                    minimum = error["ctx"]["min_length"]
                    messages.append(f"is too short (minimum is {_characters(minimum)})")
                elif error["type"] == "string_too_long":
                    maximum = error["ctx"]["max_length"]
                    messages.append(f"is too long (maximum is {_characters(maximum)})")
            return messages
        return []

    def _format_messages(self, value: str) -> list[str]:
        if self.format is None:
            return []
        try:
            _format_adapter(self.format).validate_python(value)
        except ValidationError:
            return ["is invalid"]
        return []

    def check(self, value: Any) -> list[str]:
        """Return the failure messages for ``value`` (empty when valid)."""
        text = "" if value is None else str(value)

        messages = []
        if self.presence and not text.strip():
            messages.append("can't be blank")
        messages.extend(self._length_messages(text))
        messages.extend(self._format_messages(text))
        return messages


def compile_rules(ruleset: Mapping[str, Any] | ValidationRules) -> ValidationRules:
    """Parse a ruleset mapping into :class:`ValidationRules`.

    Raises:
        pydantic.ValidationError: If the ruleset has unknown keys or bad values.
    """
    if isinstance(ruleset, ValidationRules):
        return ruleset
    return ValidationRules.model_validate(ruleset)
