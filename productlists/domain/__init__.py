"""Domain layer - Entities, value objects and exceptions.

This module exports the core domain building blocks:

- **Entities**: Objects with identity (ProductList, ProductListLine)
- **Value Objects**: Immutable objects compared by value (Reference, ItemRef,
  ProductListInput, ItemSortOptions)
- **Exceptions**: Domain errors with a closed ``ErrorKind``

Example usage:
    from productlists.domain import ProductListInput, ProductListType

    data = ProductListInput(name="Birthday", type_id=ProductListType.DEFAULT.value)
"""

# Base classes
from productlists.domain.base import Entity, ValueObject

# Entities
from productlists.domain.entities import ProductList, ProductListLine

# Exceptions
from productlists.domain.exceptions import (
    DomainError,
    ErrorKind,
    NotFoundError,
    UnauthorizedError,
)

# Value Objects
from productlists.domain.value_objects import (
    SCOPE_NAMES,
    SPECIAL_TYPE_IDS,
    TYPE_NAMES,
    ItemRef,
    ItemSortOptions,
    ProductListInput,
    ProductListScope,
    ProductListType,
    Reference,
)

__all__ = [
    # Base
    "Entity",
    "ValueObject",
    # Entities
    "ProductList",
    "ProductListLine",
    # Exceptions
    "DomainError",
    "ErrorKind",
    "NotFoundError",
    "UnauthorizedError",
    # Value Objects
    "ItemRef",
    "ItemSortOptions",
    "ProductListInput",
    "ProductListScope",
    "ProductListType",
    "Reference",
    "SCOPE_NAMES",
    "SPECIAL_TYPE_IDS",
    "TYPE_NAMES",
]
