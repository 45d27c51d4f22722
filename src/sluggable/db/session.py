"""Database session management.

Builds engines and session factories from settings and installs the flush
hook that keeps cached columns current for records flushed without going
through :meth:`ValidatedModel.save`.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from sluggable.core.config import get_settings
from sluggable.db.models.validated_model import ValidatedModel
from sluggable.observability.logging import get_logger, validation_context

_log = get_logger(__name__)


def _run_hooks_before_flush(
    session: Session,
    _flush_context: Any,
    _instances: Any,
) -> None:
    for record in (*session.new, *session.dirty):
        if not isinstance(record, ValidatedModel):
            continue
        if record.__dict__.get("_validated_for_flush"):
            continue
        with validation_context(record):
            record.run_before_validation_hooks()


def install_flush_hook(target: Any = Session) -> None:
    """Run before_validation hooks for pending and dirty records on flush.

    Args:
        target: A Session class, sessionmaker or Session instance. Defaults to
            every Session.
    """
    if not event.contains(target, "before_flush", _run_hooks_before_flush):
        event.listen(target, "before_flush", _run_hooks_before_flush)
        _log.debug("Installed before_flush hook on {}", target)


def remove_flush_hook(target: Any = Session) -> None:
    if event.contains(target, "before_flush", _run_hooks_before_flush):
        event.remove(target, "before_flush", _run_hooks_before_flush)


def create_engine_from_settings(url: str | None = None) -> Engine:
    """Create an engine from the `database` settings section."""
    config = get_settings().database
    return create_engine(url or config.url, echo=config.echo)


def create_session_factory(
    url: str | None = None,
    *,
    engine: Engine | None = None,
) -> sessionmaker[Session]:
    """Create a sessionmaker with the flush hook installed."""
    factory = sessionmaker(
        bind=engine or create_engine_from_settings(url),
        autoflush=False,
    )
    install_flush_hook(factory)
    return factory
