"""Product list application service.

Handles creating, fetching, updating and deactivating product lists
(wishlists, saved-for-later and request-a-quote lists) on top of the
record store, and merges configuration templates into listings so that
predefined lists always show up.
"""

from typing import Any

import structlog

from productlists.application.export_service import ProductListExporter
from productlists.domain.entities import ProductList
from productlists.domain.exceptions import NotFoundError, UnauthorizedError
from productlists.domain.value_objects import (
    SPECIAL_TYPE_IDS,
    TYPE_NAMES,
    ItemSortOptions,
    ProductListInput,
    ProductListScope,
    ProductListType,
    Reference,
)
from productlists.infrastructure.config import (
    ListTemplate,
    ProductListConfiguration,
    settings,
)
from productlists.infrastructure.formatting import format_date
from productlists.infrastructure.item_search import ProductListItemSearch
from productlists.infrastructure.records import (
    PRODUCT_LIST_RECORD,
    Record,
    RecordStore,
    SearchColumn,
    SearchFilter,
)
from productlists.infrastructure.session import CustomerSession, SessionProvider

logger = structlog.get_logger()

DEFAULT_ORDER = "name:ASC"

# Lines are always returned unpaged, by ascending SKU.
ITEM_SORT_OPTIONS = ItemSortOptions(sort="sku", order="1", page=-1)

# Alias -> record field
COLUMN_FIELDS = {
    "internalid": "internalid",
    "templateid": "templateid",
    "name": "name",
    "description": "description",
    "owner": "owner",
    "scope": "scope",
    "type": "type",
    "created": "created",
    "lastmodified": "lastmodified",
}


# ============================================================================
# Product List Service
# ============================================================================


class ProductListService:
    """Application service for product lists.

    Every operation takes the acting user explicitly; reads are scoped to
    lists owned by that user and mutations require ownership.

    Example usage:
        service = ProductListService(
            configuration=ProductListConfiguration(),
            record_store=InMemoryRecordStore(),
            item_search=InMemoryProductListItemSearch(),
            session=CustomerSession(customer_id=42),
        )
        list_id = service.create(42, ProductListInput(name="Birthday"))
        lists = service.search(42, order="lastmodified:DESC")
    """

    later_type_id = ProductListType.LATER.value
    quote_type_id = ProductListType.QUOTE.value

    def __init__(
        self,
        configuration: ProductListConfiguration,
        record_store: RecordStore,
        item_search: ProductListItemSearch,
        session: SessionProvider,
        exporter: ProductListExporter | None = None,
        date_format: str = "%m/%d/%Y",
        request_id: str | None = None,
    ) -> None:
        """Initialize service.

        Args:
            configuration: Login, addition and template configuration.
            record_store: Persistence for product list records.
            item_search: Search for the lines of a list.
            session: Current customer session.
            exporter: Spreadsheet exporter used when a search asks for an export.
            date_format: Display format of the last-modified date.
            request_id: Request ID for correlation.
        """
        self.configuration = configuration
        self.record_store = record_store
        self.item_search = item_search
        self.session = session
        self.exporter = exporter
        self.date_format = date_format
        self.request_id = request_id

    # ------------------------------------------------------------------
    # Guards and builders
    # ------------------------------------------------------------------

    def verify_session(self) -> None:
        """Require a logged-in customer when the configuration asks for one.

        Raises:
            UnauthorizedError: If login is required and nobody is logged in.
        """
        if self.configuration.login_required and not self.session.is_logged_in():
            raise UnauthorizedError("Login required")

    def get_columns(self) -> dict[str, SearchColumn]:
        """Columns retrieved by every product list search, keyed by alias."""
        return {alias: SearchColumn(name) for alias, name in COLUMN_FIELDS.items()}

    def _owner_filters(self, user: int | str | None) -> list[SearchFilter]:
        return [
            SearchFilter("isinactive", "is", False),
            SearchFilter("owner", "is", user),
        ]

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get(self, user: int | str | None, product_list_id: str) -> ProductList:
        """Get an active product list owned by ``user``.

        Args:
            user: Acting user.
            product_list_id: List id.

        Returns:
            The product list with its lines.

        Raises:
            UnauthorizedError: If the session check fails.
            NotFoundError: If the user has no such active list.
        """
        self.verify_session()

        filters = [
            SearchFilter("internalid", "is", product_list_id),
            *self._owner_filters(user),
        ]
        product_lists = self.search_helper(filters, self.get_columns(), True)

        if product_lists:
            return product_lists[0]
        raise NotFoundError(user=user, product_list_id=str(product_list_id))

    def get_saved_for_later_product_list(self, user: int | str | None) -> ProductList:
        """Get the user's saved-for-later list."""
        return self.get_special_type_product_list(user, self.later_type_id)

    def get_request_a_quote_product_list(self, user: int | str | None) -> ProductList:
        """Get the user's request-a-quote list."""
        return self.get_special_type_product_list(user, self.quote_type_id)

    def get_special_type_product_list(
        self, user: int | str | None, type_id: str
    ) -> ProductList:
        """Get the user's list of a well-known type.

        Falls back to the first configured template of that type when the
        user has no stored list yet.

        Args:
            user: Acting user.
            type_id: Product list type id.

        Returns:
            Stored list, or a list synthesized from the template.

        Raises:
            UnauthorizedError: If the session check fails.
            NotFoundError: If there is neither a stored list nor a template.
        """
        self.verify_session()

        filters = [
            SearchFilter("type", "is", type_id),
            *self._owner_filters(user),
        ]
        product_lists = self.search_helper(filters, self.get_columns(), True)

        if product_lists:
            return product_lists[0]

        template = next(
            (t for t in self.configuration.list_templates if t.type_id and t.type_id == type_id),
            None,
        )
        if template is not None:
            # Missing scope reuses the type id as scope id.
            if template.scope_id:
                scope = Reference(id=str(template.scope_id), name=template.scope_name)
            else:
                scope = Reference(id=type_id, name="private")
            return ProductList(
                internalid=None,
                template_id=template.template_id,
                name=template.name,
                description=template.description or "",
                scope=scope,
                type=Reference(
                    id=template.type_id,
                    name=template.type_name or TYPE_NAMES.get(type_id),
                ),
            )

        raise NotFoundError(user=user, type_id=type_id)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    @staticmethod
    def sanitize(text: str | None) -> str:
        """Sanitize free text before it is persisted.

        ``<br>`` becomes a newline first, then angle brackets are escaped,
        so line breaks survive while any other markup is neutralized.

        Args:
            text: Raw user input.

        Returns:
            Sanitized text, empty for falsy input.
        """
        if not text:
            return ""
        return text.replace("<br>", "\n").replace("<", "&lt;").replace(">", "&gt;")

    def search_helper(
        self,
        filters: list[SearchFilter],
        columns: dict[str, SearchColumn],
        include_store_items: bool,
        order: str | None = None,
        template_ids: list[str] | None = None,
    ) -> list[ProductList]:
        """Run a product list search and normalize the rows.

        Args:
            filters: Search predicates.
            columns: Columns by alias, as returned by ``get_columns``.
            include_store_items: Attach store item details to the lines.
            order: "column:direction" token, defaults to "name:ASC".
            template_ids: When given, receives the template id of every row.

        Returns:
            Product lists in search order.
        """
        order_tokens = (order or DEFAULT_ORDER).split(":")
        sort_column = order_tokens[0] or "name"
        sort_direction = order_tokens[1] if len(order_tokens) > 1 and order_tokens[1] else "ASC"

        if sort_column in columns:
            columns[sort_column].set_sort(sort_direction == "DESC")

        rows = self.record_store.search(PRODUCT_LIST_RECORD, filters, list(columns.values()))

        product_lists = []
        for row in rows:
            owner_id = row.get_value("owner")
            description = row.get_value("description")
            template_id = row.get_value("templateid")

            product_list = ProductList(
                internalid=row.id,
                template_id=template_id,
                name=row.get_value("name"),
                description=description.replace("\n", "<br>") if description else "",
                owner=Reference(id=owner_id, name=row.get_text("owner")),
                scope=Reference(id=row.get_value("scope"), name=row.get_text("scope")),
                type=Reference(id=row.get_value("type"), name=row.get_text("type")),
                created=row.get_value("created"),
                lastmodified=row.get_value("lastmodified"),
                lastmodifieddate=format_date(row.get_value("lastmodified"), self.date_format),
                items=self.item_search.search(
                    owner_id,
                    row.id,
                    include_store_items,
                    ITEM_SORT_OPTIONS,
                ),
            )

            if template_ids is not None and template_id:
                template_ids.append(template_id)

            product_lists.append(product_list)

        return product_lists

    def search(
        self,
        user: int | str | None,
        order: str | None = None,
        export: bool = False,
    ) -> list[ProductList]:
        """List the user's product lists.

        Stored lists are merged with every configured template the user has
        no list for yet. Special-purpose lists (saved for later, request a
        quote) are left out, unless the store runs in single-list mode where
        only predefined lists are returned.

        Args:
            user: Acting user.
            order: "column:direction" sort token.
            export: Also export the result as a spreadsheet by e-mail;
                ignored in single-list mode.

        Returns:
            Product lists.

        Raises:
            UnauthorizedError: If the session check fails.
        """
        self.verify_session()

        template_ids: list[str] = []
        product_lists = self.search_helper(
            self._owner_filters(user),
            self.get_columns(),
            False,
            order,
            template_ids,
        )

        for template in self.configuration.list_templates:
            if template.template_id in template_ids:
                continue
            if not template.template_id or not template.name:
                logger.error(
                    "Wrong predefined product list, check backend configuration",
                    template_id=template.template_id,
                    name=template.name,
                    request_id=self.request_id,
                )
                continue
            product_lists.append(self._from_template(template))

        if self.is_single_list():
            return [pl for pl in product_lists if pl.is_predefined]

        results = [pl for pl in product_lists if pl.type.id not in SPECIAL_TYPE_IDS]

        if export:
            self._export(results)

        return results

    def is_single_list(self) -> bool:
        """Whether the store only offers one predefined list.

        True when adding lists is disabled and exactly one configured
        template is not a special-purpose list.
        """
        templates = self.configuration.list_templates
        if self.configuration.addition_enabled or not templates:
            return False
        regular = [t for t in templates if not t.type_id or t.type_id not in SPECIAL_TYPE_IDS]
        return len(regular) == 1

    def _from_template(self, template: ListTemplate) -> ProductList:
        if template.scope_id:
            scope = Reference(id=str(template.scope_id), name=template.scope_name)
        else:
            scope = Reference(id=ProductListScope.PRIVATE.value, name="private")

        if template.type_id:
            list_type = Reference(
                id=template.type_id,
                name=template.type_name or TYPE_NAMES.get(template.type_id),
            )
        else:
            list_type = Reference(id=ProductListType.PREDEFINED.value, name="predefined")

        return ProductList(
            internalid=None,
            template_id=template.template_id,
            name=template.name,
            description=template.description or "",
            scope=scope,
            type=list_type,
        )

    def _export(self, product_lists: list[ProductList]) -> None:
        if self.exporter is None:
            logger.warning(
                "Product list export requested but no exporter is configured",
                request_id=self.request_id,
            )
            return
        result = self.exporter.export(product_lists)
        logger.info(
            "Product lists exported",
            file_id=result.file_id,
            recipient=result.recipient,
            list_count=result.list_count,
            request_id=self.request_id,
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, user: int | str, data: ProductListInput) -> str:
        """Create a product list owned by ``user``.

        Args:
            user: Acting user, forced as owner.
            data: List fields; falsy fields are not set.

        Returns:
            Id of the new list.

        Raises:
            UnauthorizedError: If the session check fails.
        """
        self.verify_session()

        product_list = self.record_store.create(PRODUCT_LIST_RECORD)

        if data.template_id:
            product_list.set_field_value("templateid", data.template_id)
        if data.scope_id:
            product_list.set_field_value("scope", data.scope_id)
        if data.type_id:
            product_list.set_field_value("type", data.type_id)
        if data.name:
            product_list.set_field_value("name", self.sanitize(data.name))
        if data.description:
            product_list.set_field_value("description", self.sanitize(data.description))

        product_list.set_field_value("owner", user)

        product_list_id = self.record_store.submit(product_list)

        logger.info(
            "Product list created",
            product_list_id=product_list_id,
            user=user,
            request_id=self.request_id,
        )
        return product_list_id

    def update(self, user: int | str, product_list_id: str, data: ProductListInput) -> None:
        """Update a product list owned by ``user``.

        Template, scope, type and name are only overwritten when given;
        the description is always overwritten, with "" when absent.

        Raises:
            UnauthorizedError: If the session check fails or the user does not own the list.
        """
        self.verify_session()

        product_list = self.record_store.load(PRODUCT_LIST_RECORD, product_list_id)
        self._check_owner(product_list, user)

        if data.template_id:
            product_list.set_field_value("templateid", data.template_id)
        if data.scope_id:
            product_list.set_field_value("scope", data.scope_id)
        if data.type_id:
            product_list.set_field_value("type", data.type_id)
        if data.name:
            product_list.set_field_value("name", self.sanitize(data.name))
        product_list.set_field_value(
            "description",
            self.sanitize(data.description) if data.description else "",
        )

        self.record_store.submit(product_list)

        logger.info(
            "Product list updated",
            product_list_id=product_list_id,
            user=user,
            request_id=self.request_id,
        )

    def delete(self, user: int | str, product_list_id: str) -> str:
        """Deactivate a product list owned by ``user``.

        Returns:
            Id of the deactivated list.

        Raises:
            UnauthorizedError: If the session check fails or the user does not own the list.
        """
        self.verify_session()

        product_list = self.record_store.load(PRODUCT_LIST_RECORD, product_list_id)
        self._check_owner(product_list, user)

        product_list.set_field_value("isinactive", True)

        internalid = self.record_store.submit(product_list)

        logger.info(
            "Product list deleted",
            product_list_id=internalid,
            user=user,
            request_id=self.request_id,
        )
        return internalid

    def _check_owner(self, product_list: Record, user: int | str) -> None:
        if not _same_user(product_list.get_field_value("owner"), user):
            logger.warning(
                "Product list owner mismatch",
                product_list_id=product_list.id,
                user=user,
                request_id=self.request_id,
            )
            raise UnauthorizedError(
                "Product list belongs to another customer",
                user=user,
                product_list_id=product_list.id,
            )


def _same_user(owner: Any, user: Any) -> bool:
    """Compare owner ids as integers."""
    try:
        return int(owner) == int(user)
    except (TypeError, ValueError):
        return False


# ============================================================================
# Service Factory
# ============================================================================


_record_store: RecordStore | None = None
_item_search: ProductListItemSearch | None = None
_exporter: ProductListExporter | None = None


def get_record_store() -> RecordStore:
    """Get record store singleton."""
    global _record_store
    if _record_store is None:
        from productlists.infrastructure.database import session_factory
        from productlists.infrastructure.sql_store import SqlRecordStore

        _record_store = SqlRecordStore(session_factory)
    return _record_store


def get_item_search() -> ProductListItemSearch:
    """Get item search singleton."""
    global _item_search
    if _item_search is None:
        from productlists.infrastructure.database import session_factory
        from productlists.infrastructure.sql_store import SqlProductListItemSearch

        _item_search = SqlProductListItemSearch(
            session_factory,
            page_size=settings.item_page_size,
        )
    return _item_search


def get_exporter() -> ProductListExporter | None:
    """Get exporter singleton, None when exports are disabled."""
    global _exporter
    if _exporter is None and settings.export_enabled:
        _exporter = ProductListExporter.from_settings(settings)
    return _exporter


def get_product_list_service(
    customer_id: int | None = None,
    request_id: str | None = None,
) -> ProductListService:
    """Build a product list service for one request.

    Args:
        customer_id: Logged-in customer, None for guests.
        request_id: Request ID for correlation.

    Returns:
        Configured service.
    """
    return ProductListService(
        configuration=settings.product_list_configuration(),
        record_store=get_record_store(),
        item_search=get_item_search(),
        session=CustomerSession(customer_id),
        exporter=get_exporter(),
        date_format=settings.date_format,
        request_id=request_id,
    )
