"""Variant inventory aggregation service.

This module computes derived inventory metrics for product configurations
from variants and their options:
    - inventoryInStock / inventoryReserved / inventoryAvailableToSell
    - isSoldOut / isBackorder / isLowQuantity

Key Components:
    - inventory_for_product_configurations: Batch entry point
    - VariantIndex: Per-batch parent/option lookup
    - Quantity calculators and low-quantity policies
"""
from inventory_engine.services.inventory.hierarchy import VariantIndex
from inventory_engine.services.inventory.policies import (
    LowQuantityPolicy,
    get_low_quantity_policy,
    option_availability_policy,
    target_availability_policy,
)
from inventory_engine.services.inventory.quantities import (
    get_variant_available_to_sell_quantity,
    get_variant_can_backorder,
    get_variant_in_stock_quantity,
    get_variant_reserved_quantity,
)
from inventory_engine.services.inventory.service import (
    InventoryContext,
    compute_inventory_info,
    inventory_context,
    inventory_for_product_configuration,
    inventory_for_product_configurations,
    log_inconsistencies,
)

__all__ = [
    "VariantIndex",
    "LowQuantityPolicy",
    "get_low_quantity_policy",
    "option_availability_policy",
    "target_availability_policy",
    "get_variant_available_to_sell_quantity",
    "get_variant_can_backorder",
    "get_variant_in_stock_quantity",
    "get_variant_reserved_quantity",
    "InventoryContext",
    "compute_inventory_info",
    "inventory_context",
    "inventory_for_product_configuration",
    "inventory_for_product_configurations",
    "log_inconsistencies",
]
