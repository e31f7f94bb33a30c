"""
Product Catalog Backend — Pydantic Request/Response Schemas
=============================================================

What:  Pydantic models defining the API contract for the products resource.
How:   FastAPI validates request bodies against ProductCreate/ProductUpdate
       before a route handler runs, and serializes responses through
       ProductResponse. A body that fails validation never reaches the
       repository.
Who:   Used by route handlers and by ProductRepository.

Validation rules:
    name:         string, required, not blank, stored unchanged
    description:  string, required, not blank, stored unchanged
    price:        number (int or float, not bool or string), finite, >= 0
    unknown keys: ignored
"""

import uuid
from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel


def reject_blank(v: str) -> str:
    # Stored exactly as sent; whitespace only counts as empty
    if not v.strip():
        raise ValueError("must not be blank")
    return v


ProductName = Annotated[
    str, StringConstraints(strict=True, min_length=1), AfterValidator(reject_blank)
]
ProductDescription = Annotated[
    str, StringConstraints(strict=True, min_length=1), AfterValidator(reject_blank)
]
ProductPrice = Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False)]


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class ProductCreate(BaseModel):
    """
    Body of POST /products.

    All three fields are required. Extra keys are dropped silently.
    """
    name: ProductName = Field(description="Product name", examples=["iPhone SE"])
    description: ProductDescription = Field(
        description="Product description", examples=["Good phone"]
    )
    price: ProductPrice = Field(description="Unit price (non-negative)", examples=[9001])

    model_config = ConfigDict(extra="ignore")


class ProductUpdate(BaseModel):
    """
    Body of PUT /products/{id}: any subset of the product fields.

    Only keys present in the body are validated and applied. An explicit
    null is rejected rather than treated as "leave unchanged".
    """
    name: Optional[ProductName] = Field(default=None, description="New product name")
    description: Optional[ProductDescription] = Field(
        default=None, description="New product description"
    )
    price: Optional[ProductPrice] = Field(default=None, description="New unit price")

    model_config = ConfigDict(extra="ignore")

    @field_validator("name", "description", "price", mode="before")
    @classmethod
    def reject_null(cls, v: Any, info: ValidationInfo) -> Any:
        # Runs only for keys the client actually sent (defaults are not validated)
        if v is None:
            raise ValueError(f"{info.field_name} may not be null")
        return v

    def changes(self) -> Dict[str, Any]:
        """Fields the client supplied, keyed by column name."""
        return self.model_dump(exclude_unset=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class ProductResponse(BaseModel):
    """
    Full representation of a product.

    Serialized with camelCase keys:
        {"id", "name", "description", "price", "createdAt", "updatedAt"}
    """
    id: uuid.UUID = Field(description="Unique product identifier (UUID)")
    name: str = Field(description="Product name")
    description: str = Field(description="Product description")
    price: float = Field(description="Unit price")
    created_at: datetime = Field(description="When the product was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="When the product was last updated (UTC ISO 8601)")

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # SQLite hands timestamps back without tzinfo; everything is stored in UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class ProductCreatedResponse(BaseModel):
    """Returned by POST /products with HTTP 201."""
    id: uuid.UUID = Field(description="Identifier assigned to the new product")


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body shared by every failing endpoint.

    Example:
        {"message": "Product with id 6436b60c28268a437baf0b7e not found!"}
    """
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
