"""Inventory aggregation service for product configurations.

Computes derived inventory metrics (stock on hand, reserved, available to
sell, sold-out/backorder/low-quantity flags) for a batch of product
configuration references.

Key Functions:
    - inventory_for_product_configurations: Batch entry point, one store round trip
    - inventory_for_product_configuration: Single-configuration convenience wrapper
    - compute_inventory_info: Field-gated assembly for one resolved variant
    - inventory_context: Opens a pooled session wrapped in an InventoryContext

Failure Policy:
    - A failed or timed-out store fetch aborts the whole batch
    - A configuration whose variant is absent gets DEFAULT_INFO
    - Inconsistent hierarchy data degrades to zero/false; logging it is opt-in
      (INVENTORY_LOG_INCONSISTENCIES) and otherwise left to the caller
"""
import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Union

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_engine.config import InventorySettings, inventory_settings
from inventory_engine.db.base import async_session_maker
from inventory_engine.db.operations import fetch_variants_with_options
from inventory_engine.errors.exceptions import InventoryValidationError, StoreUnavailableError
from inventory_engine.models.inventory import (
    AVAILABILITY_DEPENDENT_FIELDS,
    DEFAULT_INFO,
    InventoryField,
    InventoryInfo,
    ProductConfiguration,
    ProductConfigurationInventory,
    VariantRecord,
)
from inventory_engine.services.inventory.hierarchy import VariantIndex
from inventory_engine.services.inventory.policies import (
    LowQuantityPolicy,
    get_low_quantity_policy,
)
from inventory_engine.services.inventory.quantities import (
    get_variant_available_to_sell_quantity,
    get_variant_can_backorder,
    get_variant_in_stock_quantity,
    get_variant_reserved_quantity,
)

logger = structlog.get_logger(__name__)

ConfigurationInput = Union[ProductConfiguration, Mapping[str, Any]]
VariantInput = Union[VariantRecord, Mapping[str, Any]]


@dataclass
class InventoryContext:
    """Collaborators for one aggregation call.

    Attributes:
        session: Async session used for the bulk variant fetch. May be None
            when the caller always supplies pre-resolved variants.
        settings: Inventory settings (concurrency bound, fetch timeout, policy)
        low_quantity_policy: Overrides the policy named in settings
    """
    session: Optional[AsyncSession] = None
    settings: InventorySettings = field(default_factory=lambda: inventory_settings)
    low_quantity_policy: Optional[LowQuantityPolicy] = None

    def resolve_low_quantity_policy(self) -> LowQuantityPolicy:
        if self.low_quantity_policy is not None:
            return self.low_quantity_policy
        return get_low_quantity_policy(self.settings.low_quantity_policy)


def _to_configuration(value: ConfigurationInput) -> ProductConfiguration:
    if isinstance(value, ProductConfiguration):
        return value
    return ProductConfiguration.model_validate(value)


def _to_variant(value: VariantInput) -> VariantRecord:
    if isinstance(value, VariantRecord):
        return value
    return VariantRecord.model_validate(value)


def compute_inventory_info(
    variant: VariantRecord,
    index: VariantIndex,
    fields: FrozenSet[InventoryField],
    low_quantity_policy: LowQuantityPolicy,
) -> InventoryInfo:
    """Compute the requested metrics for one resolved variant.

    Only calculators needed for ``fields`` run. Available-to-sell is
    computed at most once and shared by every flag that depends on it.

    Args:
        variant: The configuration's target variant
        index: Lookup over the batch's resolved variant set
        fields: Requested output fields
        low_quantity_policy: Decides isLowQuantity for the variant

    Returns:
        InventoryInfo with unrequested fields left as None
    """
    values: Dict[str, Any] = {}

    available: Optional[int] = None
    if fields & AVAILABILITY_DEPENDENT_FIELDS:
        available = get_variant_available_to_sell_quantity(variant, index)

    if InventoryField.INVENTORY_AVAILABLE_TO_SELL in fields:
        values["inventory_available_to_sell"] = available

    if InventoryField.INVENTORY_IN_STOCK in fields:
        values["inventory_in_stock"] = get_variant_in_stock_quantity(variant, index)

    if InventoryField.INVENTORY_RESERVED in fields:
        values["inventory_reserved"] = get_variant_reserved_quantity(variant, index)

    if InventoryField.IS_SOLD_OUT in fields:
        values["is_sold_out"] = available <= 0

    if InventoryField.IS_BACKORDER in fields:
        values["is_backorder"] = available <= 0

    if InventoryField.CAN_BACKORDER in fields:
        values["can_backorder"] = get_variant_can_backorder(variant, index)

    if InventoryField.IS_LOW_QUANTITY in fields:
        options = index.options_of(variant.id)
        values["is_low_quantity"] = low_quantity_policy(variant, options, available, index)

    return InventoryInfo(**values)


def log_inconsistencies(index: VariantIndex, variant_ids: Iterable[str]) -> None:
    """Debug-log data the calculators silently degrade around.

    Each resolved target and each of its options is inspected once, however
    many configurations reference it.
    """
    records: Dict[str, VariantRecord] = {}
    for variant_id in variant_ids:
        variant = index.get(variant_id)
        if variant is None:
            continue
        for record in (variant, *index.options_of(variant_id)):
            records.setdefault(record.id, record)

    for record in records.values():
        threshold = record.low_inventory_warning_threshold
        if threshold is not None and threshold < 0:
            logger.debug("negative_low_inventory_threshold", variant_id=record.id, threshold=threshold)
        if record.inventory_reserved < 0:
            logger.debug("negative_inventory_reserved", variant_id=record.id, reserved=record.inventory_reserved)
        elif record.inventory_reserved > record.inventory_in_stock:
            logger.debug(
                "reserved_exceeds_in_stock",
                variant_id=record.id,
                reserved=record.inventory_reserved,
                in_stock=record.inventory_in_stock,
            )


async def _resolve_variants(
    context: InventoryContext,
    variant_ids: List[str],
) -> List[VariantRecord]:
    """Run the single bulk fetch under the configured timeout."""
    if context.session is None:
        raise InventoryValidationError("A session is required when variants are not supplied")

    try:
        return await asyncio.wait_for(
            fetch_variants_with_options(context.session, variant_ids),
            timeout=context.settings.fetch_timeout_seconds,
        )
    except asyncio.TimeoutError as e:
        logger.error(
            "fetch_variants_timed_out",
            variant_count=len(variant_ids),
            timeout_seconds=context.settings.fetch_timeout_seconds,
        )
        raise StoreUnavailableError(
            f"Variant fetch timed out after {context.settings.fetch_timeout_seconds}s"
        ) from e


async def inventory_for_product_configurations(
    context: InventoryContext,
    product_configurations: Sequence[ConfigurationInput],
    fields: Optional[Iterable[Union[str, InventoryField]]] = None,
    variants: Optional[Iterable[VariantInput]] = None,
) -> List[ProductConfigurationInventory]:
    """Compute inventory info for one or more product configurations.

    Calling this once for a batch is cheaper than calling the singular
    variant in a loop: all variants and their options are resolved with one
    store query.

    Args:
        context: Session, settings and optional low-quantity policy
        product_configurations: Configurations to answer, in caller order
        fields: Output fields to compute. None computes all of them.
        variants: Pre-resolved variants (target variants plus their options).
            When given, even if empty, no store query is made.

    Returns:
        One ProductConfigurationInventory per input, in input order

    Raises:
        StoreUnavailableError: If the bulk fetch fails or times out
        InventoryValidationError: If ``fields`` names an unknown field
    """
    requested = InventoryField.parse_many(fields)
    configurations = [_to_configuration(c) for c in product_configurations]
    policy = context.resolve_low_quantity_policy()

    log = logger.bind(
        configuration_count=len(configurations),
        fields=sorted(f.value for f in requested),
        prefetched=variants is not None,
    )

    if not configurations:
        log.debug("inventory_batch_empty")
        return []

    log.info("inventory_batch_started")

    variant_ids = [c.variant_id for c in configurations]
    if variants is None:
        records = await _resolve_variants(context, variant_ids)
    else:
        records = [_to_variant(v) for v in variants]

    index = VariantIndex(records)
    if context.settings.log_inconsistencies:
        log_inconsistencies(index, variant_ids)

    semaphore = asyncio.Semaphore(context.settings.max_concurrency)

    async def compute_one(configuration: ProductConfiguration) -> ProductConfigurationInventory:
        variant = index.get(configuration.variant_id)
        if variant is None:
            log.warning("variant_not_found", variant_id=configuration.variant_id)
            return ProductConfigurationInventory(
                inventory_info=DEFAULT_INFO,
                product_configuration=configuration,
            )

        # Worker threads share the read-only index
        async with semaphore:
            info = await asyncio.to_thread(compute_inventory_info, variant, index, requested, policy)
        return ProductConfigurationInventory(
            inventory_info=info,
            product_configuration=configuration,
        )

    # gather preserves input order
    results = await asyncio.gather(*(compute_one(c) for c in configurations))

    unresolved_count = sum(1 for c in configurations if c.variant_id not in index)
    log.info(
        "inventory_batch_completed",
        resolved_variant_count=len(index),
        unresolved_count=unresolved_count,
    )
    return list(results)


async def inventory_for_product_configuration(
    context: InventoryContext,
    product_configuration: ConfigurationInput,
    fields: Optional[Iterable[Union[str, InventoryField]]] = None,
    variants: Optional[Iterable[VariantInput]] = None,
) -> ProductConfigurationInventory:
    """Compute inventory info for a single product configuration.

    Prefer the batch function when answering several configurations.
    """
    results = await inventory_for_product_configurations(
        context,
        [product_configuration],
        fields=fields,
        variants=variants,
    )
    return results[0]


@asynccontextmanager
async def inventory_context(
    settings: Optional[InventorySettings] = None,
    low_quantity_policy: Optional[LowQuantityPolicy] = None,
) -> AsyncIterator[InventoryContext]:
    """Open a session from the shared pool and wrap it in an InventoryContext.

    Example:
        async with inventory_context() as context:
            results = await inventory_for_product_configurations(context, configs)
    """
    async with async_session_maker() as session:
        yield InventoryContext(
            session=session,
            settings=settings or inventory_settings,
            low_quantity_policy=low_quantity_policy,
        )
