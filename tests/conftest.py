"""Shared test fixtures for the sluggable test suite.

Provides an in-memory SQLite engine with every test model's table created,
and a session bound to it.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from sluggable import BaseDatabaseModel
from sluggable.core.config import get_settings

# Importing the module maps the models onto BaseDatabaseModel.metadata
import tests.fixtures.models  # noqa: F401


@pytest.fixture
def engine() -> Iterator[Engine]:
    """In-memory SQLite engine with all test tables created."""
    db_engine = create_engine("sqlite://")
    BaseDatabaseModel.metadata.create_all(db_engine)
    yield db_engine
    BaseDatabaseModel.metadata.drop_all(db_engine)
    db_engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    """Session bound to the test engine, rolled back after each test."""
    with Session(engine) as db_session:
        yield db_session
        db_session.rollback()


@pytest.fixture
def fresh_settings() -> Iterator[None]:
    """Clear the settings cache before and after a test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
