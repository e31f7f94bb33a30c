"""
Product Catalog Backend — Product SQLAlchemy Model
====================================================

What:  ORM model representing the `products` table.
How:   Inherits from the shared DeclarativeBase; Alembic's migration 001
       mirrors these columns.
Who:   Used by ProductRepository for CRUD operations.

Column notes:
    - id: UUID generated in Python on insert, so the same model works on
      PostgreSQL and on the SQLite files used by the test suite
    - price: double precision; non-negativity is enforced by the request
      schemas and by a CHECK constraint
    - created_at / updated_at: timezone-aware UTC timestamps
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Float, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    """
    A product in the catalog.

    Lifecycle:
        1. Created by POST /products (id, created_at, updated_at assigned)
        2. Partially updated by PUT /products/{id} (updated_at refreshed)
        3. Hard-deleted by DELETE /products/{id}
    """

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier, assigned once on creation",
    )

    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Product name",
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Free-text product description",
    )

    price: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Unit price, non-negative",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When this product was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        comment="When this product was last modified (UTC)",
    )

    # created_at index: GET /products returns rows in insertion order
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        Index("idx_products_created_at", created_at),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"
