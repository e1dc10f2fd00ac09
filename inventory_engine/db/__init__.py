"""Database module."""
from inventory_engine.db.base import (
    Base,
    TimestampMixin,
    engine,
    async_session_maker,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "engine",
    "async_session_maker",
]
