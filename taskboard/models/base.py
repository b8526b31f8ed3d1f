"""
Base configurations and mixins for database models.

Provides the declarative base shared by every model plus the primary key mixin.
"""

import uuid

from sqlalchemy import Column, String, inspect
from sqlalchemy.orm import declarative_base


class CustomBase:
    """
    Custom base class for SQLAlchemy models with dictionary serialization.

    Columns listed in ``__private_columns__`` are never included by ``to_dict``.
    """

    __private_columns__: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        d = {}
        if not self:
            return d
        for column in inspect(self).mapper.column_attrs:
            if column.key in self.__private_columns__:
                continue
            value = getattr(self, column.key)
            if isinstance(value, uuid.UUID):
                d[column.key] = str(value)
            else:
                d[column.key] = value
        return d


# Create the base class for all models
Base = declarative_base(cls=CustomBase)


def generate_id() -> str:
    return str(uuid.uuid4())


class UUIDMixin:
    """
    Mixin class that adds a UUID4 string primary key to models.

    Stored as a 36-character string so the same schema works on SQLite and PostgreSQL.
    """

    id = Column(
        String(36),
        primary_key=True,
        default=generate_id,
        comment="Primary key using UUID4 format",
    )


__all__ = ["Base", "UUIDMixin", "generate_id"]
