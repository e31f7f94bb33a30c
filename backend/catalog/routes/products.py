"""
Product Catalog Backend — Products Route Handlers
===================================================

What:  The five CRUD endpoints of the /products resource.
How:   Request bodies are validated by the Pydantic schemas before a handler
       runs; each handler makes one ProductRepository call and shapes the
       response. Handlers never catch errors: NotFoundError, ValidationError
       and everything else flow to the translation table in catalog.errors.

Route Inventory:
    POST   /products        → 201 {id}            | 400
    GET    /products        → 200 [Product, ...]
    GET    /products/{id}   → 200 Product         | 404
    PUT    /products/{id}   → 200 Product         | 400 | 404
    DELETE /products/{id}   → 204                 | 404
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from catalog.schemas.product import (
    ErrorResponse,
    ProductCreate,
    ProductCreatedResponse,
    ProductResponse,
    ProductUpdate,
)
from catalog.services.product_repository import ProductRepository, get_product_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])

_NOT_FOUND = {404: {"description": "Product not found", "model": ErrorResponse}}
_INVALID = {400: {"description": "Payload failed validation", "model": ErrorResponse}}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductCreatedResponse,
    responses={**_INVALID},
    summary="Create a product",
)
async def create_product(
    payload: ProductCreate,
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductCreatedResponse:
    """Persist a new product and return its generated id."""
    product = await repository.create(payload)
    return ProductCreatedResponse(id=product.id)


@router.get(
    "",
    response_model=List[ProductResponse],
    summary="List all products",
)
async def list_products(
    repository: ProductRepository = Depends(get_product_repository),
) -> List[ProductResponse]:
    products = await repository.list_all()
    return [ProductResponse.model_validate(product) for product in products]


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**_NOT_FOUND},
    summary="Get a product by id",
)
async def get_product(
    product_id: str,
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductResponse:
    """
    Return one product.

    `product_id` is taken as a plain string: an id that is not a UUID gets
    the same 404 as a missing one, not FastAPI's 422.
    """
    product = await repository.get_by_id(product_id)
    return ProductResponse.model_validate(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**_INVALID, **_NOT_FOUND},
    summary="Partially update a product",
)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductResponse:
    """Change only the supplied fields and return the updated product."""
    product = await repository.update_by_id(product_id, payload)
    return ProductResponse.model_validate(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND},
    summary="Delete a product",
)
async def delete_product(
    product_id: str,
    repository: ProductRepository = Depends(get_product_repository),
) -> Response:
    await repository.delete_by_id(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
