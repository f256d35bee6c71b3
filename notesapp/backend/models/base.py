"""
SQLAlchemy Base Model.

Declarative base plus the columns every table here shares: a UUID string
primary key and naive-UTC created/updated stamps, all assigned server side.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from notesapp.backend.core.utils import utc_now


def _new_id() -> str:
    return str(uuid4())


class Base(DeclarativeBase):
    pass


class UUIDMixin:
    id: Mapped[str] = mapped_column(primary_key=True, default=_new_id)


class TimestampMixin:
    """
    created_at is indexed because both list endpoints sort on it.

    Repositories also stamp updated_at explicitly on update, so a save that
    changes nothing still counts.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
