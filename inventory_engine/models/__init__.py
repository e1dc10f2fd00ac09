"""Pydantic validation models."""
from inventory_engine.models.inventory import (
    AVAILABILITY_DEPENDENT_FIELDS,
    DEFAULT_INFO,
    InventoryField,
    InventoryInfo,
    ProductConfiguration,
    ProductConfigurationInventory,
    VariantRecord,
)

__all__ = [
    "AVAILABILITY_DEPENDENT_FIELDS",
    "DEFAULT_INFO",
    "InventoryField",
    "InventoryInfo",
    "ProductConfiguration",
    "ProductConfigurationInventory",
    "VariantRecord",
]
