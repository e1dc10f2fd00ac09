"""Per-variant quantity calculators.

Each calculator is a pure function of a target variant and the batch's
VariantIndex. A variant with options reports the aggregate over its
options; a variant without options reports its own stored figures.
Recursion resolves options from the index only, never from the store.

Only leaves carry their own inventory tracking. A leaf with tracking
disabled holds no stock, has no reservations and always allows backorder.
"""
from typing import FrozenSet, Iterator, Optional

from inventory_engine.models.inventory import VariantRecord
from inventory_engine.services.inventory.hierarchy import VariantIndex


def iter_leaves(
    variant: VariantRecord,
    index: VariantIndex,
    visited: FrozenSet[str] = frozenset(),
) -> Iterator[VariantRecord]:
    """Yield the option-less records beneath ``variant`` (or ``variant`` itself).

    Records already on the current path yield nothing, which cuts cycles
    in malformed ancestor data.
    """
    if variant.id in visited:
        return

    options = index.options_of(variant.id)
    if not options:
        yield variant
        return

    path = visited | {variant.id}
    for option in options:
        yield from iter_leaves(option, index, path)


def _in_stock(variant: VariantRecord) -> int:
    if not variant.is_enabled:
        return 0
    return variant.inventory_in_stock


def _reserved(variant: VariantRecord) -> int:
    if not variant.is_enabled:
        return 0
    # A negative reservation is inconsistent data, not a credit
    return max(variant.inventory_reserved, 0)


def _available_to_sell(variant: VariantRecord) -> int:
    return _in_stock(variant) - _reserved(variant)


def _can_backorder(variant: VariantRecord) -> bool:
    return not variant.is_enabled or variant.can_backorder


def get_variant_in_stock_quantity(variant: VariantRecord, index: VariantIndex) -> int:
    """Quantity physically on hand for a variant or option."""
    return sum(_in_stock(leaf) for leaf in iter_leaves(variant, index))


def get_variant_reserved_quantity(variant: VariantRecord, index: VariantIndex) -> int:
    """Quantity held against unfulfilled orders and therefore not available to sell."""
    return sum(_reserved(leaf) for leaf in iter_leaves(variant, index))


def get_variant_available_to_sell_quantity(variant: VariantRecord, index: VariantIndex) -> int:
    """In-stock minus reserved.

    Not clamped: a negative result means more is held than is on hand, and
    flag derivation treats anything ``<= 0`` as sold out.
    """
    return sum(_available_to_sell(leaf) for leaf in iter_leaves(variant, index))


def get_variant_can_backorder(variant: VariantRecord, index: VariantIndex) -> bool:
    """Whether any leaf beneath the variant may be sold past zero availability."""
    return any(_can_backorder(leaf) for leaf in iter_leaves(variant, index))


def effective_threshold(variant: VariantRecord) -> Optional[int]:
    """Low-inventory threshold with negative values treated as 0.

    None means no threshold is configured and the variant is never low.
    An untracked record's threshold is 0.
    """
    if not variant.is_enabled:
        return 0
    threshold = variant.low_inventory_warning_threshold
    if threshold is None:
        return None
    return max(threshold, 0)
