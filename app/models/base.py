"""SQLAlchemy declarative Base and shared model configuration."""

from sqlalchemy.orm import DeclarativeBase

# Primary keys are Integer columns: signed 32-bit on PostgreSQL, the narrower of the two backends.
MAX_INTEGER_ID = 2**31 - 1


def is_storable_id(value: int) -> bool:
    """True if value fits an Integer primary key; anything else cannot name a row."""
    return 1 <= value <= MAX_INTEGER_ID


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass
