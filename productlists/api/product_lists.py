"""Product list API endpoints.

Provides endpoints for listing, reading, creating, updating and
deleting the product lists of the current customer.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from productlists.api.schemas import (
    ErrorResponse,
    ItemSchema,
    ProductListIdResponse,
    ProductListLineSchema,
    ProductListRequest,
    ProductListResponse,
    ProductListsResponse,
    ReferenceSchema,
)
from productlists.application.product_list_service import (
    ProductListService,
    get_product_list_service,
)
from productlists.domain.entities import ProductList
from productlists.domain.exceptions import DomainError, ErrorKind
from productlists.domain.value_objects import ProductListInput

router = APIRouter(prefix="/product-lists", tags=["Product Lists"])

ERROR_STATUS = {
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


# ============================================================================
# Dependencies
# ============================================================================


def get_service(request: Request) -> ProductListService:
    """Get product list service for the current customer."""
    return get_product_list_service(
        customer_id=getattr(request.state, "customer_id", None),
        request_id=getattr(request.state, "request_id", None),
    )


def get_customer_id(request: Request) -> int | None:
    """Get the customer resolved by the session middleware."""
    return getattr(request.state, "customer_id", None)


# ============================================================================
# Converters
# ============================================================================


def product_list_to_response(product_list: ProductList) -> ProductListResponse:
    """Convert ProductList entity to response schema."""
    return ProductListResponse(
        internalid=product_list.internalid,
        template_id=product_list.template_id,
        name=product_list.name,
        description=product_list.description,
        owner=(
            ReferenceSchema(
                id=_as_str(product_list.owner.id),
                name=product_list.owner.name,
            )
            if product_list.owner
            else None
        ),
        scope=ReferenceSchema(id=product_list.scope.id, name=product_list.scope.name),
        type=ReferenceSchema(id=product_list.type.id, name=product_list.type.name),
        created=product_list.created,
        lastmodified=product_list.lastmodified,
        lastmodifieddate=product_list.lastmodifieddate,
        items=[
            ProductListLineSchema(
                internalid=line.internalid,
                item=ItemSchema(
                    internalid=line.item.internalid,
                    displayname=line.item.displayname,
                    sku=line.item.sku,
                    details=dict(line.item.details),
                ),
                quantity=line.quantity,
                description=line.description,
                priority=(
                    ReferenceSchema(id=line.priority.id, name=line.priority.name)
                    if line.priority
                    else None
                ),
                created=line.created,
                lastmodified=line.lastmodified,
            )
            for line in product_list.items
        ],
    )


def request_to_input(request: ProductListRequest) -> ProductListInput:
    """Convert request schema to the domain input."""
    return ProductListInput(
        template_id=request.template_id,
        scope_id=request.scope_id,
        type_id=request.type_id,
        name=request.name,
        description=request.description,
    )


def domain_error_to_http(error: DomainError) -> HTTPException:
    """Map a domain error to an HTTP error with the standard envelope."""
    return HTTPException(
        status_code=ERROR_STATUS.get(error.kind, status.HTTP_400_BAD_REQUEST),
        detail={
            "error_code": error.kind.value,
            "message": error.message,
        },
    )


def _as_str(value: object) -> str | None:
    return None if value is None else str(value)


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=ProductListsResponse,
    responses={401: {"model": ErrorResponse}},
    summary="List product lists",
    description="Get the customer's product lists, including predefined lists from configuration.",
)
def list_product_lists(
    service: Annotated[ProductListService, Depends(get_service)],
    customer_id: Annotated[int | None, Depends(get_customer_id)],
    order: Annotated[
        str | None,
        Query(description="Sort token 'column:direction', e.g. 'name:ASC'"),
    ] = None,
    export: Annotated[
        bool,
        Query(description="E-mail the result as a spreadsheet"),
    ] = False,
) -> ProductListsResponse:
    """List the customer's product lists.

    Args:
        service: Product list service.
        customer_id: Current customer.
        order: Sort token.
        export: Whether to export the result.

    Returns:
        Product lists.
    """
    try:
        product_lists = service.search(customer_id, order=order, export=export)
    except DomainError as e:
        raise domain_error_to_http(e) from e

    return ProductListsResponse(
        product_lists=[product_list_to_response(pl) for pl in product_lists],
        total=len(product_lists),
    )


@router.get(
    "/saved-for-later",
    response_model=ProductListResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Get saved-for-later list",
)
def get_saved_for_later(
    service: Annotated[ProductListService, Depends(get_service)],
    customer_id: Annotated[int | None, Depends(get_customer_id)],
) -> ProductListResponse:
    """Get the customer's saved-for-later list."""
    try:
        product_list = service.get_saved_for_later_product_list(customer_id)
    except DomainError as e:
        raise domain_error_to_http(e) from e
    return product_list_to_response(product_list)


@router.get(
    "/request-a-quote",
    response_model=ProductListResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Get request-a-quote list",
)
def get_request_a_quote(
    service: Annotated[ProductListService, Depends(get_service)],
    customer_id: Annotated[int | None, Depends(get_customer_id)],
) -> ProductListResponse:
    """Get the customer's request-a-quote list."""
    try:
        product_list = service.get_request_a_quote_product_list(customer_id)
    except DomainError as e:
        raise domain_error_to_http(e) from e
    return product_list_to_response(product_list)


@router.get(
    "/{product_list_id}",
    response_model=ProductListResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Get product list",
)
def get_product_list(
    product_list_id: str,
    service: Annotated[ProductListService, Depends(get_service)],
    customer_id: Annotated[int | None, Depends(get_customer_id)],
) -> ProductListResponse:
    """Get a product list by ID.

    Raises:
        HTTPException: If the list is not found or access is refused.
    """
    try:
        product_list = service.get(customer_id, product_list_id)
    except DomainError as e:
        raise domain_error_to_http(e) from e
    return product_list_to_response(product_list)


@router.post(
    "",
    response_model=ProductListIdResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Create product list",
)
def create_product_list(
    request: ProductListRequest,
    service: Annotated[ProductListService, Depends(get_service)],
    customer_id: Annotated[int | None, Depends(get_customer_id)],
) -> ProductListIdResponse:
    """Create a product list owned by the current customer."""
    try:
        internalid = service.create(customer_id, request_to_input(request))
    except DomainError as e:
        raise domain_error_to_http(e) from e
    return ProductListIdResponse(internalid=internalid)


@router.put(
    "/{product_list_id}",
    response_model=ProductListResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Update product list",
)
def update_product_list(
    product_list_id: str,
    request: ProductListRequest,
    service: Annotated[ProductListService, Depends(get_service)],
    customer_id: Annotated[int | None, Depends(get_customer_id)],
) -> ProductListResponse:
    """Update an active product list and return it as stored."""
    try:
        service.get(customer_id, product_list_id)
        service.update(customer_id, product_list_id, request_to_input(request))
        product_list = service.get(customer_id, product_list_id)
    except DomainError as e:
        raise domain_error_to_http(e) from e
    return product_list_to_response(product_list)


@router.delete(
    "/{product_list_id}",
    response_model=ProductListIdResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Delete product list",
)
def delete_product_list(
    product_list_id: str,
    service: Annotated[ProductListService, Depends(get_service)],
    customer_id: Annotated[int | None, Depends(get_customer_id)],
) -> ProductListIdResponse:
    """Deactivate a product list."""
    try:
        internalid = service.delete(customer_id, product_list_id)
    except DomainError as e:
        raise domain_error_to_http(e) from e
    return ProductListIdResponse(internalid=internalid)
