"""Variant ORM model for the two-level variant/option catalog hierarchy."""
from sqlalchemy import String, Integer, Boolean, Index, CheckConstraint
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import Mapped, mapped_column
from typing import List, Optional

from inventory_engine.db.base import Base, TimestampMixin
from inventory_engine.models.inventory import VariantRecord


class Variant(Base, TimestampMixin):
    """Variant model representing a purchasable variant or one of its options.

    Attributes:
        id: Opaque variant identifier
        product_id: Owning product identifier
        ancestors: Ancestor ids; options list their parent variant id
        title: Display title
        inventory_in_stock: Quantity physically on hand
        inventory_reserved: Quantity held against unfulfilled orders
        low_inventory_warning_threshold: Low-quantity threshold
        can_backorder: Whether selling past zero availability is permitted
        is_enabled: Whether inventory is tracked for this record
        is_deleted: Soft delete marker
    """

    __tablename__ = "catalog_variants"
    __table_args__ = (
        # Serves the `ancestors && ARRAY[...]` overlap lookup
        Index("ix_catalog_variants_ancestors", "ancestors", postgresql_using="gin"),
        CheckConstraint("inventory_reserved >= 0", name="check_reserved_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    product_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    ancestors: Mapped[List[str]] = mapped_column(
        postgresql.ARRAY(String(64)),
        nullable=False,
        server_default="{}",
    )
    title: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    inventory_in_stock: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    inventory_reserved: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    low_inventory_warning_threshold: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    can_backorder: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="true")
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")

    def to_record(self) -> VariantRecord:
        """Detach this row into an immutable VariantRecord snapshot."""
        return VariantRecord(
            id=self.id,
            product_id=self.product_id,
            ancestors=list(self.ancestors or []),
            inventory_in_stock=self.inventory_in_stock,
            inventory_reserved=self.inventory_reserved,
            low_inventory_warning_threshold=self.low_inventory_warning_threshold,
            can_backorder=self.can_backorder,
            is_enabled=self.is_enabled,
            is_deleted=self.is_deleted,
        )

    def __repr__(self) -> str:
        return f"<Variant(id='{self.id}', ancestors={self.ancestors}, in_stock={self.inventory_in_stock})>"
