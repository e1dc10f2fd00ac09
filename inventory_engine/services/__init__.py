"""Business logic services for the inventory engine.

Available Services:
    - inventory: Variant inventory aggregation for product configurations
"""
from inventory_engine.services.inventory import (
    InventoryContext,
    inventory_context,
    inventory_for_product_configuration,
    inventory_for_product_configurations,
)

__all__: list[str] = [
    "InventoryContext",
    "inventory_context",
    "inventory_for_product_configuration",
    "inventory_for_product_configurations",
]
