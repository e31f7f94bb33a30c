"""Create products table

Revision ID: 001
Revises: None
Create Date: 2024-04-12 00:00:00.000000+00:00

What:  Creates the `products` table backing the /products resource.
How:   Mirrors catalog/models/product.py; ids are generated by the
       application, so the table carries no server-side UUID default.

Rollback: downgrade() drops the table (all product data is lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column(
            "id",
            sa.Uuid(as_uuid=True),
            nullable=False,
            comment="Unique identifier, assigned once on creation",
        ),
        sa.Column(
            "name",
            sa.Text(),
            nullable=False,
            comment="Product name",
        ),
        sa.Column(
            "description",
            sa.Text(),
            nullable=False,
            comment="Free-text product description",
        ),
        sa.Column(
            "price",
            sa.Float(),
            nullable=False,
            comment="Unit price, non-negative",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When this product was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When this product was last modified (UTC)",
        ),
        sa.CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("idx_products_created_at", "products", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_products_created_at", table_name="products")
    op.drop_table("products")
