"""Lock state for manually assigned slugs."""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class LockState(StrEnum):
    """Whether derivation may overwrite the cached slug.

    - UNLOCKED: the slug is recomputed on every validation cycle
    - LOCKED: a manually assigned slug is kept until the lock is cleared
    """

    UNLOCKED = "unlocked"
    LOCKED = "locked"


class LockGuard:
    """Reads and writes the lock column of a record.

    With ``enabled`` false the guard always reports UNLOCKED and never
    touches the record.
    """

    def __init__(self, lock_column: str, *, enabled: bool) -> None:
        self.lock_column = lock_column
        self.enabled = enabled

    def state(self, record: Any) -> LockState:
        if self.enabled and getattr(record, self.lock_column):
            return LockState.LOCKED
        return LockState.UNLOCKED

    def is_locked(self, record: Any) -> bool:
        return self.state(record) is LockState.LOCKED

    def lock(self, record: Any) -> None:
        setattr(record, self.lock_column, True)

    def unlock(self, record: Any) -> None:
        setattr(record, self.lock_column, False)
