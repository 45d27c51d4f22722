"""Field-scoped validation error collection."""

from __future__ import annotations

from collections.abc import Iterator

from sluggable.core.exceptions import ErrorDetail


class ErrorCollection:
    """Validation messages grouped by field name.

    Missing fields read as an empty list, so callers can check
    ``errors["slug"]`` without guarding for absence.
    """

    def __init__(self) -> None:
        self._messages: dict[str, list[str]] = {}

    def add(self, field: str, message: str) -> None:
        self._messages.setdefault(field, []).append(message)

    def __getitem__(self, field: str) -> list[str]:
        return list(self._messages.get(field, []))

    def __contains__(self, field: object) -> bool:
        return field in self._messages

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __repr__(self) -> str:
        return f"ErrorCollection({self._messages!r})"

    @property
    def messages(self) -> dict[str, list[str]]:
        """Copy of the field → messages mapping."""
        return {field: list(messages) for field, messages in self._messages.items()}

    def full_messages(self) -> list[str]:
        """Messages prefixed with a humanized field name."""
        return [
            f"{field.replace('_', ' ').capitalize()} {message}"
            for field, messages in self._messages.items()
            for message in messages
        ]

    def details(self) -> list[ErrorDetail]:
        return [
            ErrorDetail(code="VALIDATION_ERROR", message=message, field=field)
            for field, messages in self._messages.items()
            for message in messages
        ]

    def clear(self) -> None:
        self._messages.clear()
