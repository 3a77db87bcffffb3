"""Domain entities.

Contains the product list aggregate and the line items attached to it.
Both are view-friendly shapes: raw record values have already been
normalized by the model before these objects are built.
"""

from dataclasses import dataclass, field
from typing import Any

from productlists.domain.base import Entity
from productlists.domain.value_objects import (
    SPECIAL_TYPE_IDS,
    ItemRef,
    Reference,
)


# ============================================================================
# Product List Line
# ============================================================================


@dataclass(eq=False)
class ProductListLine(Entity[str]):
    """A catalog item saved in a product list.

    Attributes:
        internalid: Line id.
        item: The catalog item.
        quantity: Requested quantity.
        description: Free-text note for the line.
        priority: Line priority reference.
        created: Raw creation timestamp.
        lastmodified: Raw last-modified timestamp.
    """

    item: ItemRef
    quantity: int = 1
    description: str = ""
    priority: Reference | None = None
    created: str | None = None
    lastmodified: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "internalid": self.internalid,
            "item": self.item.to_dict(),
            "quantity": self.quantity,
            "description": self.description,
            "priority": self.priority.to_dict() if self.priority else None,
            "created": self.created,
            "lastmodified": self.lastmodified,
        }


# ============================================================================
# Product List
# ============================================================================


@dataclass(eq=False)
class ProductList(Entity[str | None]):
    """A named, owned collection of catalog items.

    Lists synthesized from configuration templates have no ``internalid``
    and no owner until the customer saves something into them.

    Attributes:
        internalid: Record id, None for template-backed lists.
        template_id: Template the list was created from.
        name: List name.
        description: Description with line breaks rendered as ``<br>``.
        owner: Owning customer.
        scope: Visibility of the list.
        type: List kind (default, later, predefined, quote).
        created: Raw creation timestamp.
        lastmodified: Raw last-modified timestamp.
        lastmodifieddate: Last-modified date in the configured display format.
        items: Lines ordered as returned by the item search.
    """

    template_id: str | None = None
    name: str | None = None
    description: str = ""
    owner: Reference | None = None
    scope: Reference = field(default_factory=lambda: Reference(id=None))
    type: Reference = field(default_factory=lambda: Reference(id=None))
    created: str | None = None
    lastmodified: str | None = None
    lastmodifieddate: str | None = None
    items: list[ProductListLine] = field(default_factory=list)

    @property
    def is_special(self) -> bool:
        """Whether this is a saved-for-later or request-a-quote list."""
        return self.type.id in SPECIAL_TYPE_IDS

    @property
    def is_predefined(self) -> bool:
        """Whether the list is a predefined (template-driven) list."""
        return self.type.name == "predefined"

    @property
    def is_persisted(self) -> bool:
        """Whether the list exists in the record store."""
        return self.internalid is not None

    @property
    def item_count(self) -> int:
        """Number of lines in the list."""
        return len(self.items)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<ProductList(internalid={self.internalid}, "
            f"template_id={self.template_id}, name={self.name!r})>"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "internalid": self.internalid,
            "templateId": self.template_id,
            "name": self.name,
            "description": self.description,
            "owner": self.owner.to_dict() if self.owner else None,
            "scopeId": self.scope.id,
            "scopeName": self.scope.name,
            "typeId": self.type.id,
            "typeName": self.type.name,
            "created": self.created,
            "lastmodified": self.lastmodified,
            "lastmodifieddate": self.lastmodifieddate,
            "items": [line.to_dict() for line in self.items],
        }
