"""Domain exceptions.

All domain-level errors raised by the product list model. Each error
carries a closed ``ErrorKind`` so callers (the HTTP layer, scripts) can
branch on the kind instead of on the concrete exception class.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of error kinds produced by the domain."""

    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    kind: ErrorKind

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UnauthorizedError(DomainError):
    """Raised when there is no session or the user does not own the list."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(
        self,
        reason: str = "Not authorized",
        user: int | str | None = None,
        product_list_id: str | None = None,
    ) -> None:
        """Initialize unauthorized error.

        Args:
            reason: Why access was refused.
            user: Acting user, when known.
            product_list_id: Target product list, when known.
        """
        details: dict[str, Any] = {}
        if user is not None:
            details["user"] = user
        if product_list_id is not None:
            details["product_list_id"] = product_list_id
        super().__init__(reason, details=details)


class NotFoundError(DomainError):
    """Raised when no product list (or fallback template) matches a lookup."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        user: int | str | None = None,
        product_list_id: str | None = None,
        type_id: str | None = None,
    ) -> None:
        """Initialize not found error.

        Args:
            user: User the lookup was scoped to.
            product_list_id: Requested list id, for lookups by id.
            type_id: Requested list type, for special-type lookups.
        """
        if product_list_id is not None:
            message = f"Product list {product_list_id} not found"
        elif type_id is not None:
            message = f"Product list of type {type_id} not found"
        else:
            message = "Product list not found"
        details: dict[str, Any] = {"user": user}
        if product_list_id is not None:
            details["product_list_id"] = product_list_id
        if type_id is not None:
            details["type_id"] = type_id
        super().__init__(message, details=details)
