"""Error handling module."""
from inventory_engine.errors.exceptions import (
    InventoryError,
    StoreUnavailableError,
    InventoryValidationError,
)

__all__ = [
    "InventoryError",
    "StoreUnavailableError",
    "InventoryValidationError",
]
