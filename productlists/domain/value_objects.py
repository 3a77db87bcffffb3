"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity. They are interchangeable when their values are equal.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from productlists.domain.base import ValueObject


# ============================================================================
# Classifications
# ============================================================================


class ProductListType(str, Enum):
    """Well-known product list type ids."""

    DEFAULT = "1"
    LATER = "2"
    PREDEFINED = "3"
    QUOTE = "4"


class ProductListScope(str, Enum):
    """Product list visibility ids."""

    PUBLIC = "1"
    PRIVATE = "2"


TYPE_NAMES: dict[str, str] = {
    ProductListType.DEFAULT.value: "default",
    ProductListType.LATER.value: "later",
    ProductListType.PREDEFINED.value: "predefined",
    ProductListType.QUOTE.value: "quote",
}

SCOPE_NAMES: dict[str, str] = {
    ProductListScope.PUBLIC.value: "public",
    ProductListScope.PRIVATE.value: "private",
}

# Special-purpose lists: at most one per customer, never in general listings.
SPECIAL_TYPE_IDS: frozenset[str] = frozenset(
    {ProductListType.LATER.value, ProductListType.QUOTE.value}
)


# ============================================================================
# References
# ============================================================================


@dataclass(frozen=True)
class Reference(ValueObject):
    """A record reference rendered with its display text.

    Attributes:
        id: Referenced record id.
        name: Display text of the referenced record.
    """

    id: str | None
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class ItemRef(ValueObject):
    """Catalog item attached to a product list line.

    Attributes:
        internalid: Catalog item id.
        displayname: Item display name.
        sku: Stock keeping unit, used for line ordering.
        details: Store item details, only filled when store items are requested.
    """

    internalid: str
    displayname: str
    sku: str | None = None
    details: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        data: dict[str, Any] = dict(self.details)
        data.update(
            {
                "internalid": self.internalid,
                "displayname": self.displayname,
                "sku": self.sku,
            }
        )
        return data


# ============================================================================
# Inputs
# ============================================================================


@dataclass(frozen=True)
class ProductListInput(ValueObject):
    """Fields accepted by create and update.

    Every field is optional; falsy values are treated as "not provided"
    except for the description on update, which is always written.
    """

    template_id: str | None = None
    scope_id: str | None = None
    type_id: str | None = None
    name: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class ItemSortOptions(ValueObject):
    """Sort and paging options for the line item search.

    Attributes:
        sort: Line field to sort by.
        order: "1" for ascending, "-1" for descending.
        page: 1-based page number, -1 for every line.
    """

    sort: str = "sku"
    order: str = "1"
    page: int = -1

    @property
    def descending(self) -> bool:
        """Whether lines are returned in descending order."""
        return self.order == "-1"

    @property
    def paged(self) -> bool:
        """Whether a single page is requested."""
        return self.page != -1
