"""Parent/child lookup over a resolved variant set.

Built once per batch; every per-configuration computation reads from the
same index and never mutates it. ``ancestors`` is ordered root first, so
the last entry is a record's direct parent.
"""
from typing import Dict, Iterable, List, Optional, Tuple

from inventory_engine.models.inventory import VariantRecord


class VariantIndex:
    """Id lookup plus parent -> options adjacency derived from ``ancestors``."""

    def __init__(self, variants: Iterable[VariantRecord]):
        by_id: Dict[str, VariantRecord] = {}
        children: Dict[str, List[VariantRecord]] = {}

        for variant in variants:
            # First occurrence wins when the caller passes duplicates
            if variant.id in by_id:
                continue
            by_id[variant.id] = variant

        for variant in by_id.values():
            if variant.is_deleted or not variant.ancestors:
                continue
            parent_id = variant.ancestors[-1]
            if parent_id == variant.id:
                continue
            children.setdefault(parent_id, []).append(variant)

        self._by_id = by_id
        self._children: Dict[str, Tuple[VariantRecord, ...]] = {
            parent_id: tuple(options) for parent_id, options in children.items()
        }

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, variant_id: str) -> bool:
        return variant_id in self._by_id

    def get(self, variant_id: str) -> Optional[VariantRecord]:
        return self._by_id.get(variant_id)

    def options_of(self, variant_id: str) -> Tuple[VariantRecord, ...]:
        """Non-deleted records whose direct parent is ``variant_id``."""
        return self._children.get(variant_id, ())

    def has_options(self, variant_id: str) -> bool:
        return bool(self._children.get(variant_id))
