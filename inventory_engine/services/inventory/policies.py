"""Low-quantity policies.

A policy decides ``isLowQuantity`` for a resolved variant given its
options and its already-computed available-to-sell quantity.
"""
from typing import Callable, Dict, Sequence

from inventory_engine.errors.exceptions import InventoryValidationError
from inventory_engine.models.inventory import VariantRecord
from inventory_engine.services.inventory.hierarchy import VariantIndex
from inventory_engine.services.inventory.quantities import (
    effective_threshold,
    get_variant_available_to_sell_quantity,
)

LowQuantityPolicy = Callable[
    [VariantRecord, Sequence[VariantRecord], int, VariantIndex],
    bool,
]


def _at_or_below(available: int, variant: VariantRecord) -> bool:
    threshold = effective_threshold(variant)
    return threshold is not None and available <= threshold


def target_availability_policy(
    variant: VariantRecord,
    options: Sequence[VariantRecord],
    available: int,
    index: VariantIndex,
) -> bool:
    """Compare the target's availability against every option's threshold.

    With options, the variant is low if its own available-to-sell is at or
    below ANY option's threshold. Option availability is not consulted.
    Without options, the variant's own threshold applies.
    """
    if options:
        return any(_at_or_below(available, option) for option in options)
    return _at_or_below(available, variant)


def option_availability_policy(
    variant: VariantRecord,
    options: Sequence[VariantRecord],
    available: int,
    index: VariantIndex,
) -> bool:
    """Compare each option's own availability against its own threshold."""
    if options:
        return any(
            _at_or_below(get_variant_available_to_sell_quantity(option, index), option)
            for option in options
        )
    return _at_or_below(available, variant)


LOW_QUANTITY_POLICIES: Dict[str, LowQuantityPolicy] = {
    "target": target_availability_policy,
    "option": option_availability_policy,
}


def get_low_quantity_policy(name: str) -> LowQuantityPolicy:
    """Look up a low-quantity policy by its configured name.

    Raises:
        InventoryValidationError: If no policy has that name
    """
    try:
        return LOW_QUANTITY_POLICIES[name]
    except KeyError:
        raise InventoryValidationError(
            f"Unknown low quantity policy: {name!r} "
            f"(expected one of {sorted(LOW_QUANTITY_POLICIES)})"
        ) from None
