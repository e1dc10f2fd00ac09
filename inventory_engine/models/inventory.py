"""Pydantic models for variant inventory aggregation.

This module defines the caller-facing contract of the aggregation engine:
product configuration references in, per-configuration inventory info out.
Field names are snake_case in Python and camelCase on the wire.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import FrozenSet, Iterable, List, Optional, Union
from enum import Enum

from inventory_engine.errors.exceptions import InventoryValidationError


class InventoryField(str, Enum):
    """Output fields a caller may request from the engine."""
    INVENTORY_AVAILABLE_TO_SELL = "inventoryAvailableToSell"
    INVENTORY_IN_STOCK = "inventoryInStock"
    INVENTORY_RESERVED = "inventoryReserved"
    IS_BACKORDER = "isBackorder"
    IS_LOW_QUANTITY = "isLowQuantity"
    IS_SOLD_OUT = "isSoldOut"
    CAN_BACKORDER = "canBackorder"

    @classmethod
    def parse_many(
        cls,
        fields: Optional[Iterable[Union[str, "InventoryField"]]],
    ) -> FrozenSet["InventoryField"]:
        """Normalize a requested field list into a set of InventoryField.

        None requests every field. Unknown names raise InventoryValidationError.
        """
        if fields is None:
            return frozenset(cls)
        if isinstance(fields, str):
            fields = [fields]

        parsed = set()
        for name in fields:
            try:
                parsed.add(cls(name))
            except ValueError:
                raise InventoryValidationError(f"Unknown inventory field: {name!r}") from None
        return frozenset(parsed)


# Fields whose value depends on inventoryAvailableToSell
AVAILABILITY_DEPENDENT_FIELDS = frozenset({
    InventoryField.INVENTORY_AVAILABLE_TO_SELL,
    InventoryField.IS_BACKORDER,
    InventoryField.IS_LOW_QUANTITY,
    InventoryField.IS_SOLD_OUT,
})


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ProductConfiguration(_CamelModel):
    """Reference to exactly one variant or variant option.

    Attributes:
        variant_id: Identifier of the referenced variant or option
        product_id: Optional identifier of the owning product
    """

    variant_id: str = Field(..., min_length=1)
    product_id: Optional[str] = None


class VariantRecord(_CamelModel):
    """Read-only snapshot of a variant or option as held in the store.

    Attributes:
        id: Variant identifier (``_id`` on the wire)
        product_id: Owning product identifier
        ancestors: Ancestor identifiers; an option lists its parent variant
        inventory_in_stock: Quantity physically on hand
        inventory_reserved: Quantity held against unfulfilled orders
        low_inventory_warning_threshold: Low-quantity threshold (None = never low)
        can_backorder: Whether selling past zero availability is permitted
        is_enabled: Whether inventory is tracked for this record; untracked
            records hold no stock and always allow backorder
        is_deleted: Soft-deleted records are excluded from option rollups
    """

    id: str = Field(..., alias="_id", min_length=1)
    product_id: Optional[str] = None
    ancestors: List[str] = Field(default_factory=list)
    inventory_in_stock: int = 0
    inventory_reserved: int = 0
    low_inventory_warning_threshold: Optional[int] = None
    can_backorder: bool = False
    is_enabled: bool = True
    is_deleted: bool = False

    @field_validator("ancestors", mode="before")
    @classmethod
    def none_ancestors_to_empty(cls, v):
        """Top-level variants may carry no ancestors at all."""
        return [] if v is None else v

    @field_validator("inventory_in_stock", "inventory_reserved", mode="before")
    @classmethod
    def none_quantity_to_zero(cls, v):
        return 0 if v is None else v

    @field_validator("can_backorder", "is_deleted", mode="before")
    @classmethod
    def none_flag_to_false(cls, v):
        return False if v is None else v

    @field_validator("is_enabled", mode="before")
    @classmethod
    def none_tracking_to_enabled(cls, v):
        return True if v is None else v


class InventoryInfo(_CamelModel):
    """Derived inventory metrics for one product configuration.

    A field left as None was not requested and was not computed.
    """

    inventory_available_to_sell: Optional[int] = None
    inventory_in_stock: Optional[int] = None
    inventory_reserved: Optional[int] = None
    is_backorder: Optional[bool] = None
    is_low_quantity: Optional[bool] = None
    is_sold_out: Optional[bool] = None
    can_backorder: Optional[bool] = None


# Returned for configurations whose variant cannot be resolved
DEFAULT_INFO = InventoryInfo(
    inventory_available_to_sell=0,
    inventory_in_stock=0,
    inventory_reserved=0,
    is_backorder=True,
    is_low_quantity=True,
    is_sold_out=True,
    can_backorder=True,
)


class ProductConfigurationInventory(_CamelModel):
    """Result pair: inventory info alongside the configuration it answers."""

    inventory_info: InventoryInfo
    product_configuration: ProductConfiguration
