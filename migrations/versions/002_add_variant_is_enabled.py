"""Add is_enabled inventory tracking flag to catalog_variants.

Variants with tracking disabled hold no stock and always allow backorder.

Revision ID: 002_add_variant_is_enabled
Revises: 001_create_catalog_variants
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers
revision: str = '002_add_variant_is_enabled'
down_revision: Union[str, None] = '001_create_catalog_variants'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Add is_enabled column, tracked by default."""
    op.add_column(
        'catalog_variants',
        sa.Column('is_enabled', sa.Boolean(), nullable=False, server_default='true')
    )


def downgrade() -> None:
    """Remove is_enabled column."""
    op.drop_column('catalog_variants', 'is_enabled')
