"""Product list line item search.

Lines are stored separately from the lists they belong to; the model
fetches them per list through ``ProductListItemSearch``.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from productlists.domain.entities import ProductListLine
from productlists.domain.value_objects import ItemSortOptions

# Store item details keyed by catalog item id.
StoreItemCatalog = Mapping[str, Mapping[str, Any]]

SORTABLE_FIELDS = ("sku", "quantity", "created", "priority", "displayname")


class ProductListItemSearch(ABC):
    """Search the line items of a product list."""

    def __init__(
        self,
        store_items: StoreItemCatalog | None = None,
        page_size: int = 20,
    ) -> None:
        """Initialize item search.

        Args:
            store_items: Catalog used to enrich items when store items are requested.
            page_size: Lines per page for paged requests.
        """
        self.store_items = store_items
        self.page_size = page_size

    def search(
        self,
        owner: str | int | None,
        product_list_id: str,
        include_store_items: bool,
        sort_options: ItemSortOptions,
    ) -> list[ProductListLine]:
        """Return the lines of a product list owned by ``owner``.

        Args:
            owner: Owner of the list.
            product_list_id: List whose lines are returned.
            include_store_items: Attach store item details to each line.
            sort_options: Sort field, direction and page.

        Returns:
            Ordered lines.
        """
        lines = self._fetch(owner, product_list_id)
        lines = sort_lines(lines, sort_options)

        if sort_options.paged:
            start = (sort_options.page - 1) * self.page_size
            lines = lines[start : start + self.page_size]

        if include_store_items and self.store_items is not None:
            lines = [self._with_store_item(line) for line in lines]

        return lines

    @abstractmethod
    def _fetch(self, owner: str | int | None, product_list_id: str) -> list[ProductListLine]:
        """Load the unsorted lines of a list."""

    def _with_store_item(self, line: ProductListLine) -> ProductListLine:
        details = self.store_items.get(line.item.internalid) if self.store_items else None
        if not details:
            return line
        return replace(line, item=replace(line.item, details=dict(details)))


def sort_lines(
    lines: list[ProductListLine], sort_options: ItemSortOptions
) -> list[ProductListLine]:
    """Sort lines by one of the sortable fields.

    Unknown sort fields keep the incoming order.
    """
    if sort_options.sort not in SORTABLE_FIELDS:
        return list(lines)

    def key(line: ProductListLine) -> tuple[int, Any]:
        if sort_options.sort == "sku":
            value: Any = line.item.sku
        elif sort_options.sort == "displayname":
            value = line.item.displayname
        elif sort_options.sort == "priority":
            value = line.priority.id if line.priority else None
        else:
            value = getattr(line, sort_options.sort)
        if value is None:
            return (0, "")
        if isinstance(value, int):
            return (1, value)
        return (2, str(value).lower())

    return sorted(lines, key=key, reverse=sort_options.descending)


class InMemoryProductListItemSearch(ProductListItemSearch):
    """Item search over lines registered in memory."""

    def __init__(
        self,
        store_items: StoreItemCatalog | None = None,
        page_size: int = 20,
    ) -> None:
        super().__init__(store_items=store_items, page_size=page_size)
        self._lines: dict[tuple[str, str], list[ProductListLine]] = {}

    def add(
        self, owner: str | int, product_list_id: str, line: ProductListLine
    ) -> ProductListLine:
        """Register a line for a list."""
        self._lines.setdefault((str(owner), str(product_list_id)), []).append(line)
        return line

    def _fetch(self, owner: str | int | None, product_list_id: str) -> list[ProductListLine]:
        return list(self._lines.get((str(owner), str(product_list_id)), []))
