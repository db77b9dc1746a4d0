from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UUIDMixin:
    """Adds a client-generated UUID primary key."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)


class CreatedAtMixin:
    """Adds created_at. Submission rows are append-only, so no updated_at.

    Set from Python with microsecond precision: SQLite's CURRENT_TIMESTAMP
    only resolves to the second, which ties rows written in the same second.
    """

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
