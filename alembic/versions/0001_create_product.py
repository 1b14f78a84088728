"""create product table

Revision ID: 0001_create_product
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_create_product'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'product',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
    )


def downgrade():
    op.drop_table('product')
