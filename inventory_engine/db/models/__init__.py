"""Database models for the variant catalog."""
from inventory_engine.db.models.variant import Variant

__all__ = [
    "Variant",
]
