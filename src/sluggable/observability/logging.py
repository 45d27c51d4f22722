"""Loguru configuration for the sluggable package.

Records logged inside :func:`validation_context` carry the model name and
table, so every derivation, lock and rejection line can be traced back to
the record type that produced it. Two renderings exist: one JSON object per
line for shipped logs, and a colorized line for local work.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import orjson
from loguru import logger


if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Any


# SQLAlchemy echoes every statement and checkout at INFO
_NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "sqlalchemy.orm")

_FORMATS = ("json", "text")

_TEXT_LINE = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{line}</cyan>"
    "{extra[model_suffix]} - <level>{message}</level>\n"
)


class InterceptHandler(logging.Handler):
    """Route standard library records (SQLAlchemy, drivers) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so loguru reports the real call site
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(name=record.name).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


def _json_payload(record: dict[str, Any]) -> dict[str, Any]:
    extra = record["extra"]
    payload = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": extra.get("name", record["name"]),
        "function": record["function"],
        "line": record["line"],
    }
    payload.update(
        (key, value)
        for key, value in extra.items()
        if key not in ("name", "serialized", "model_suffix")
    )

    error = record["exception"]
    if error is not None:
        payload["exception"] = {
            "type": error.type.__name__ if error.type else None,
            "value": str(error.value) if error.value else None,
        }
    return payload


def _format_json(record: dict[str, Any]) -> str:
    record["extra"]["serialized"] = orjson.dumps(
        _json_payload(record), default=str
    ).decode()
    return "{extra[serialized]}\n"


def _format_text(record: dict[str, Any]) -> str:
    extra = record["extra"]
    extra.setdefault("name", record["name"])
    model = extra.get("model")
    extra["model_suffix"] = f" [{model}]" if model else ""
    if record["exception"]:
        return _TEXT_LINE + "{exception}\n"
    return _TEXT_LINE


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    *,
    log_file: Path | str | None = None,
) -> None:
    """Replace loguru's handlers with the package's sinks.

    Args:
        log_level: Minimum level for every sink.
        log_format: "json" or "text" for stdout. The file sink, when
            enabled, always writes JSON.
        log_file: Path for a rotated, gzip-retained log file.

    Raises:
        ValueError: If ``log_format`` is not one of "json" or "text".
    """
    if log_format not in _FORMATS:
        msg = f"log_format must be one of {_FORMATS}, got {log_format!r}"
        raise ValueError(msg)

    level = log_level.upper()
    logger.remove()

    as_json = log_format == "json"
    logger.add(
        sys.stdout,
        format=_format_json if as_json else _format_text,
        level=level,
        colorize=not as_json,
        backtrace=True,
        diagnose=not as_json,
    )

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            path,
            format=_format_json,
            level=level,
            rotation="100 MB",
            retention="7 days",
            compression="gz",
            backtrace=True,
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging_from_settings() -> None:
    """Configure logging from the `logging` settings section."""
    from sluggable.core.config import get_settings

    config = get_settings().logging
    setup_logging(config.level, config.format, log_file=config.file)


def get_logger(name: str) -> "logger":  # type: ignore[valid-type]
    """Return the loguru logger bound to ``name`` (usually ``__name__``)."""
    return logger.bind(name=name)


@contextmanager
def validation_context(record: Any) -> Iterator[None]:
    """Tag every line logged in the block with the record's model and table."""
    model = type(record)
    with logger.contextualize(
        model=model.__name__,
        table=getattr(model, "__tablename__", None),
    ):
        yield


__all__ = [
    "InterceptHandler",
    "get_logger",
    "logger",
    "setup_logging",
    "setup_logging_from_settings",
    "validation_context",
]
