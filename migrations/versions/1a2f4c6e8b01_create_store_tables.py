"""create product, cart, order and line_item tables

Revision ID: 1a2f4c6e8b01
Revises:
Create Date: 2025-08-04 09:30:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '1a2f4c6e8b01'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'product',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('image_url', sa.String(length=255), nullable=False),
        sa.Column('price', sa.Numeric(8, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_table(
        'cart',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_table(
        'order',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('pay_type', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='new'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('shipped_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_order_created_at', 'order', ['created_at'])
    op.create_table(
        'line_item',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('product_id', sa.BigInteger(), sa.ForeignKey('product.id'), nullable=False),
        sa.Column('cart_id', sa.BigInteger(), sa.ForeignKey('cart.id', ondelete='CASCADE'), nullable=True),
        sa.Column('order_id', sa.BigInteger(), sa.ForeignKey('order.id', ondelete='CASCADE'), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('price', sa.Numeric(8, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('(cart_id IS NULL) <> (order_id IS NULL)', name='ck_line_item_single_owner'),
    )
    op.create_index('ix_line_item_cart', 'line_item', ['cart_id'])
    op.create_index('ix_line_item_order', 'line_item', ['order_id'])


def downgrade():
    op.drop_index('ix_line_item_order', table_name='line_item')
    op.drop_index('ix_line_item_cart', table_name='line_item')
    op.drop_table('line_item')
    op.drop_index('ix_order_created_at', table_name='order')
    op.drop_table('order')
    op.drop_table('cart')
    op.drop_table('product')
