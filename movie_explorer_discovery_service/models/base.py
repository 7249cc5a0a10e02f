"""Declarative base and timestamp helpers shared by all models."""
from datetime import UTC, datetime

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from backends that drop tzinfo (SQLite, MySQL)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)
