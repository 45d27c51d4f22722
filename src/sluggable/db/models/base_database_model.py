"""Base database models and common ORM definitions.

Defines the declarative base used by the package's own tests and examples.
Applications may use their own declarative base instead; the sluggable
behavior only needs :class:`~sluggable.db.models.validated_model.ValidatedModel`.
"""

import enum
import json

from sqlalchemy import inspect
from sqlalchemy.orm import DeclarativeBase


class BaseDatabaseModel(DeclarativeBase):
    """Base class for SQLAlchemy ORM models.

    Inherits from:
        DeclarativeBase: SQLAlchemy's declarative base class for ORM models.
    """

    def __repr__(self) -> str:
        """Return a string representation of the instance."""
        return f"{type(self).__name__}({self._to_json()})"

    def _to_json(self) -> str:
        """Return a JSON representation of the mapped column values."""

        def serialize(obj: object) -> object:
            if isinstance(obj, enum.Enum):
                return obj.value
            # Handle UUID, Decimal, datetime, etc.
            if hasattr(obj, "isoformat"):
                return obj.isoformat()
            return obj

        state = inspect(self)
        data = {
            attr.key: serialize(state.dict.get(attr.key))
            for attr in state.mapper.column_attrs
        }
        return json.dumps(data, default=str, ensure_ascii=False)
