"""
Product Catalog Backend — Product Repository (Data Access Layer)
=================================================================

What:  Thin wrapper exposing create / list / get / update / delete for
       products against an async SQLAlchemy session.
How:   Every method works inside the session handed to the constructor.
       Write methods commit before returning, so a failed commit surfaces
       as DatabaseError while the request is still being answered. Rollback
       on error belongs to whoever owns the session (`get_db_session`).
Who:   Built per request by `get_product_repository`; used by the routes.

Error Handling:
    - Missing row, or an id that is not a well-formed UUID → NotFoundError
    - Any SQLAlchemy failure → DatabaseError (original type kept in context)
    Payload validation has already happened in the request schemas.
"""

import logging
import uuid
from typing import List

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.database import get_db_session
from catalog.exceptions import DatabaseError, NotFoundError
from catalog.models.product import Product, utcnow
from catalog.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


def parse_product_id(product_id: str) -> uuid.UUID:
    """
    Convert a path parameter into a UUID.

    A string that cannot be a UUID cannot name a stored product, so it is
    reported as not found instead of as a bad request.
    """
    try:
        return uuid.UUID(product_id)
    except (ValueError, AttributeError, TypeError):
        raise NotFoundError(resource="Product", resource_id=str(product_id)) from None


class ProductRepository:
    """
    Store operations for the products resource.

    Responsibilities:
        - create():        insert a validated payload, return the new row
        - list_all():      every product, oldest first
        - get_by_id():     one product or NotFoundError
        - update_by_id():  apply supplied fields only, refresh updated_at
        - delete_by_id():  hard delete or NotFoundError
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payload: ProductCreate) -> Product:
        now = utcnow()
        product = Product(
            id=uuid.uuid4(),
            created_at=now,
            updated_at=now,
            **payload.model_dump(),
        )
        try:
            self.session.add(product)
            await self.session.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating product: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the product. Please try again.",
                context={"operation": "create", "error_type": type(e).__name__},
            ) from e

        logger.info("Product created: %s", product.id)
        return product

    async def list_all(self) -> List[Product]:
        """Return every product in insertion order; an empty store yields []."""
        try:
            result = await self.session.execute(
                select(Product).order_by(Product.created_at.asc())
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve products. Please try again.",
                context={"operation": "list", "error_type": type(e).__name__},
            ) from e

    async def get_by_id(self, product_id: str) -> Product:
        """
        Fetch a single product.

        Raises:
            NotFoundError: no product with this id, or id is not a UUID (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        key = parse_product_id(product_id)
        try:
            product = await self.session.get(Product, key)
        except SQLAlchemyError as e:
            logger.error("Database error fetching product %s: %s", product_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the product. Please try again.",
                context={"operation": "get", "product_id": product_id},
            ) from e

        if product is None:
            raise NotFoundError(resource="Product", resource_id=product_id)
        return product

    async def update_by_id(self, product_id: str, payload: ProductUpdate) -> Product:
        """
        Apply a partial update.

        Only fields present in the request body change; the rest keep their
        stored values. An empty body still refreshes updated_at.
        """
        product = await self.get_by_id(product_id)

        changes = payload.changes()
        for field, value in changes.items():
            setattr(product, field, value)
        product.updated_at = utcnow()

        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating product %s: %s", product_id, str(e))
            raise DatabaseError(
                message="Could not update the product. Please try again.",
                context={"operation": "update", "product_id": product_id},
            ) from e

        logger.info("Product %s updated: %s", product.id, sorted(changes))
        return product

    async def delete_by_id(self, product_id: str) -> None:
        """Remove the product row. A second delete of the same id is a 404."""
        product = await self.get_by_id(product_id)
        try:
            await self.session.delete(product)
            await self.session.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting product %s: %s", product_id, str(e))
            raise DatabaseError(
                message="Could not delete the product. Please try again.",
                context={"operation": "delete", "product_id": product_id},
            ) from e

        logger.info("Product deleted: %s", product_id)


# ── FastAPI Dependency ────────────────────────────────────────────────────
def get_product_repository(
    session: AsyncSession = Depends(get_db_session),
) -> ProductRepository:
    """Build a repository bound to the request's session."""
    return ProductRepository(session)
