"""Create catalog_variants table.

Stores variants and their options in one table; options reference their
parent variant through the ``ancestors`` array.

Revision ID: 001_create_catalog_variants
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers
revision: str = '001_create_catalog_variants'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create catalog_variants with a GIN index on ancestors."""
    op.create_table(
        'catalog_variants',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('product_id', sa.String(length=64), nullable=True),
        sa.Column(
            'ancestors',
            postgresql.ARRAY(sa.String(length=64)),
            nullable=False,
            server_default='{}',
        ),
        sa.Column('title', sa.String(length=500), nullable=True),
        sa.Column('inventory_in_stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('inventory_reserved', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('low_inventory_warning_threshold', sa.Integer(), nullable=True),
        sa.Column('can_backorder', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('inventory_reserved >= 0', name='check_reserved_non_negative'),
    )
    op.create_index('ix_catalog_variants_product_id', 'catalog_variants', ['product_id'])
    op.create_index(
        'ix_catalog_variants_ancestors',
        'catalog_variants',
        ['ancestors'],
        postgresql_using='gin',
    )


def downgrade() -> None:
    """Drop catalog_variants and its indexes."""
    op.drop_index('ix_catalog_variants_ancestors', table_name='catalog_variants')
    op.drop_index('ix_catalog_variants_product_id', table_name='catalog_variants')
    op.drop_table('catalog_variants')
