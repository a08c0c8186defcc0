"""Create orders, order_items and order_sequences

Revision ID: 3f2a9c1d4e58
Revises: 
Create Date: 2026-10-19 10:02:41.518204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# Revision identifiers used by Alembic
revision: str = '3f2a9c1d4e58'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('order_number', sa.String(), nullable=True),
        sa.Column('client', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('currency', sa.String(), nullable=True),
        sa.Column('payment_terms', sa.String(), nullable=True),
        sa.Column('planned_start', sa.String(), nullable=True),
        sa.Column('planned_end', sa.String(), nullable=True),
        sa.Column('actual_ship', sa.String(), nullable=True),
        sa.Column('logistics', sa.Text(), nullable=True),
        sa.Column('discount_percent', sa.Float(), nullable=True),
        sa.Column('extra_costs', sa.Float(), nullable=True),
        sa.Column('wedrive_folder', sa.String(), nullable=True),
        sa.Column('attachments', sa.Text(), nullable=True),
        sa.Column('total_sale', sa.Float(), nullable=True),
        sa.Column('total_cost', sa.Float(), nullable=True),
        sa.Column('gross_profit', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_orders_id'), 'orders', ['id'], unique=False)
    op.create_index(op.f('ix_orders_order_number'), 'orders', ['order_number'], unique=True)

    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('product', sa.String(), nullable=True),
        sa.Column('sku', sa.String(), nullable=True),
        sa.Column('color', sa.String(), nullable=True),
        sa.Column('size', sa.String(), nullable=True),
        sa.Column('quantity', sa.Float(), nullable=True),
        sa.Column('cost', sa.Float(), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('discount_percent', sa.Float(), nullable=True),
        sa.Column('line_sale', sa.Float(), nullable=True),
        sa.Column('line_cost', sa.Float(), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_order_items_id'), 'order_items', ['id'], unique=False)
    op.create_index(op.f('ix_order_items_order_id'), 'order_items', ['order_id'], unique=False)

    # Month-scoped counter for ORD-YYYYMM-#### numbers
    op.create_table(
        'order_sequences',
        sa.Column('period', sa.String(length=6), nullable=False),
        sa.Column('last_value', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('period'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('order_sequences')
    op.drop_index(op.f('ix_order_items_order_id'), table_name='order_items')
    op.drop_index(op.f('ix_order_items_id'), table_name='order_items')
    op.drop_table('order_items')
    op.drop_index(op.f('ix_orders_order_number'), table_name='orders')
    op.drop_index(op.f('ix_orders_id'), table_name='orders')
    op.drop_table('orders')
