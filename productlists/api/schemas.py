"""API schemas for the product lists service.

Pydantic models for request/response validation and serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class ReferenceSchema(BaseModel):
    """Referenced record with its display text."""

    id: str | None = None
    name: str | None = None


# ============================================================================
# Product List Schemas
# ============================================================================


class ItemSchema(BaseModel):
    """Catalog item of a product list line."""

    internalid: str
    displayname: str
    sku: str | None = None
    details: dict[str, Any] = Field(
        default_factory=dict, description="Store item details, when requested"
    )


class ProductListLineSchema(BaseModel):
    """Line of a product list."""

    internalid: str
    item: ItemSchema
    quantity: int
    description: str = ""
    priority: ReferenceSchema | None = None
    created: str | None = None
    lastmodified: str | None = None


class ProductListResponse(BaseModel):
    """Product list representation."""

    internalid: str | None = Field(
        default=None, description="List id, null for lists backed by a template"
    )
    template_id: str | None = None
    name: str | None = None
    description: str = ""
    owner: ReferenceSchema | None = None
    scope: ReferenceSchema
    type: ReferenceSchema
    created: str | None = None
    lastmodified: str | None = None
    lastmodifieddate: str | None = None
    items: list[ProductListLineSchema] = Field(default_factory=list)


class ProductListsResponse(BaseModel):
    """List of product lists."""

    product_lists: list[ProductListResponse]
    total: int


class ProductListRequest(BaseModel):
    """Fields accepted when creating or updating a product list."""

    template_id: str | None = Field(default=None, max_length=50)
    scope_id: str | None = Field(default=None, max_length=10)
    type_id: str | None = Field(default=None, max_length=10)
    name: str | None = Field(default=None, max_length=300)
    description: str | None = Field(default=None, max_length=4000)


class ProductListIdResponse(BaseModel):
    """Id of a created or deleted product list."""

    internalid: str
