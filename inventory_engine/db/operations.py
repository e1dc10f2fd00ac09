"""Database operations for the inventory aggregation engine.

The engine issues exactly one read per batch: every referenced variant
plus every option beneath it, resolved with a single SELECT.
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, or_
from typing import Iterable, List
import structlog

from inventory_engine.db.models.variant import Variant
from inventory_engine.errors.exceptions import StoreUnavailableError
from inventory_engine.models.inventory import VariantRecord

logger = structlog.get_logger(__name__)


async def fetch_variants_with_options(
    session: AsyncSession,
    variant_ids: Iterable[str],
) -> List[VariantRecord]:
    """Fetch variants by id together with all of their descendant options.

    Args:
        session: Async database session
        variant_ids: Variant identifiers to resolve (duplicates allowed)

    Returns:
        VariantRecord for every row whose id is in ``variant_ids`` or whose
        ancestors overlap ``variant_ids``

    Raises:
        StoreUnavailableError: If the query fails
    """
    ids = list(dict.fromkeys(variant_ids))
    if not ids:
        return []

    stmt = select(Variant).where(
        or_(
            Variant.id.in_(ids),
            Variant.ancestors.overlap(ids),
        )
    )

    try:
        result = await session.execute(stmt)
        rows = result.scalars().all()
    except (SQLAlchemyError, OSError) as e:
        logger.error(
            "fetch_variants_failed",
            variant_count=len(ids),
            error=str(e),
            error_type=type(e).__name__,
        )
        raise StoreUnavailableError(f"Failed to fetch variants: {e}") from e

    records = [row.to_record() for row in rows]
    logger.debug(
        "variants_fetched",
        requested_count=len(ids),
        fetched_count=len(records),
    )
    return records
