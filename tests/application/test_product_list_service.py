"""Tests for the product list application service."""

from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest

from productlists.application.export_service import ExportResult, ProductListExporter
from productlists.application.product_list_service import ProductListService
from productlists.domain.exceptions import ErrorKind, NotFoundError, UnauthorizedError
from productlists.domain.value_objects import ItemSortOptions, ProductListInput, Reference
from productlists.infrastructure.config import ListTemplate, ProductListConfiguration
from productlists.infrastructure.item_search import ProductListItemSearch
from productlists.infrastructure.records import (
    PRODUCT_LIST_RECORD,
    RecordNotFoundError,
    RecordStore,
    RecordStoreError,
    SearchFilter,
)

CUSTOMER_ID = 42
OTHER_CUSTOMER_ID = 7

SERVICE_LOGGER = "productlists.application.product_list_service.logger"


def no_templates(**kwargs) -> ProductListConfiguration:
    """Configuration without list templates."""
    return ProductListConfiguration(list_templates=[], **kwargs)


# ============================================================================
# Sanitize
# ============================================================================


class TestSanitize:
    """Tests for free-text sanitizing."""

    def test_converts_line_breaks_then_escapes(self) -> None:
        """<br> becomes a newline and other brackets are escaped."""
        assert ProductListService.sanitize("a<br>b<c>") == "a\nb&lt;c&gt;"

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_input(self, text: str | None) -> None:
        """Falsy input yields an empty string."""
        assert ProductListService.sanitize(text) == ""

    def test_plain_text_unchanged(self) -> None:
        """Text without markup is kept as is."""
        assert ProductListService.sanitize("Birthday ideas") == "Birthday ideas"


# ============================================================================
# Session Guard
# ============================================================================


class TestVerifySession:
    """Tests for the session guard."""

    def test_guest_rejected_when_login_required(self, make_service) -> None:
        """Guests cannot use the service when login is required."""
        service = make_service(customer_id=None)

        with pytest.raises(UnauthorizedError) as exc_info:
            service.verify_session()
        assert exc_info.value.kind == ErrorKind.UNAUTHORIZED

    def test_guest_allowed_when_login_optional(self, make_service) -> None:
        """Guests pass the guard when login is optional."""
        service = make_service(
            customer_id=None,
            configuration_override=no_templates(login_required=False),
        )
        service.verify_session()

    @pytest.mark.parametrize(
        "call",
        [
            lambda s: s.get(CUSTOMER_ID, "1"),
            lambda s: s.search(CUSTOMER_ID),
            lambda s: s.get_saved_for_later_product_list(CUSTOMER_ID),
            lambda s: s.create(CUSTOMER_ID, ProductListInput(name="x")),
            lambda s: s.update(CUSTOMER_ID, "1", ProductListInput(name="x")),
            lambda s: s.delete(CUSTOMER_ID, "1"),
        ],
    )
    def test_every_operation_is_guarded(self, make_service, call) -> None:
        """All operations check the session first."""
        service = make_service(customer_id=None)

        with pytest.raises(UnauthorizedError):
            call(service)


# ============================================================================
# Columns
# ============================================================================


class TestGetColumns:
    """Tests for the column builder."""

    def test_columns(self, service: ProductListService) -> None:
        """Every persisted field is requested."""
        columns = service.get_columns()
        assert list(columns) == [
            "internalid",
            "templateid",
            "name",
            "description",
            "owner",
            "scope",
            "type",
            "created",
            "lastmodified",
        ]
        assert all(column.sort is None for column in columns.values())

    def test_columns_are_fresh(self, service: ProductListService) -> None:
        """Sorting one column set does not leak into the next."""
        service.get_columns()["name"].set_sort(True)
        assert service.get_columns()["name"].sort is None


# ============================================================================
# Get
# ============================================================================


class TestGet:
    """Tests for single list lookup."""

    def test_get_owned_list(self, service, add_list) -> None:
        """Owned active list is returned with display names."""
        list_id = add_list(name="Wishlist", type_id="1", scope_id="2")

        product_list = service.get(CUSTOMER_ID, list_id)

        assert product_list.internalid == list_id
        assert product_list.name == "Wishlist"
        assert product_list.owner.name == "Jane Doe"
        assert product_list.scope == Reference(id="2", name="private")
        assert product_list.type == Reference(id="1", name="default")

    def test_list_of_other_user_not_found(self, service, add_list) -> None:
        """Lists owned by someone else are never returned."""
        list_id = add_list(owner=OTHER_CUSTOMER_ID)

        with pytest.raises(NotFoundError) as exc_info:
            service.get(CUSTOMER_ID, list_id)
        assert exc_info.value.kind == ErrorKind.NOT_FOUND

    def test_inactive_list_not_found(self, service, add_list) -> None:
        """Deactivated lists are never returned."""
        list_id = add_list(inactive=True)

        with pytest.raises(NotFoundError):
            service.get(CUSTOMER_ID, list_id)

    def test_missing_list_not_found(self, service) -> None:
        """Unknown ids raise NotFoundError."""
        with pytest.raises(NotFoundError) as exc_info:
            service.get(CUSTOMER_ID, "999")
        assert exc_info.value.details["product_list_id"] == "999"

    def test_description_line_breaks_rendered(self, service, add_list) -> None:
        """Stored newlines are rendered as <br>."""
        list_id = add_list(description="line one\nline two")

        assert service.get(CUSTOMER_ID, list_id).description == "line one<br>line two"

    def test_missing_description_is_empty(self, service, add_list) -> None:
        """Lists without description read back as empty string."""
        list_id = add_list()

        assert service.get(CUSTOMER_ID, list_id).description == ""

    def test_last_modified_formatted(self, service, add_list) -> None:
        """Last-modified date uses the configured display format."""
        list_id = add_list()

        product_list = service.get(CUSTOMER_ID, list_id)

        expected = datetime.fromisoformat(product_list.lastmodified).strftime("%m/%d/%Y")
        assert product_list.lastmodifieddate == expected

    def test_custom_date_format(self, make_service, add_list) -> None:
        """The display format is configurable."""
        service = make_service(date_format="%Y-%m-%d")
        list_id = add_list()

        product_list = service.get(CUSTOMER_ID, list_id)

        expected = datetime.fromisoformat(product_list.lastmodified).strftime("%Y-%m-%d")
        assert product_list.lastmodifieddate == expected

    def test_items_sorted_by_sku(self, service, add_list, item_search, make_line) -> None:
        """Lines are attached in ascending SKU order."""
        list_id = add_list()
        item_search.add(CUSTOMER_ID, list_id, make_line("1", "SKU-B"))
        item_search.add(CUSTOMER_ID, list_id, make_line("2", "SKU-A"))

        product_list = service.get(CUSTOMER_ID, list_id)

        assert [line.item.sku for line in product_list.items] == ["SKU-A", "SKU-B"]

    def test_get_includes_store_items(self, make_service, add_list) -> None:
        """Single lookups ask for store item details."""
        item_search = MagicMock(spec=ProductListItemSearch)
        item_search.search.return_value = []
        service = make_service()
        service.item_search = item_search
        list_id = add_list()

        service.get(CUSTOMER_ID, list_id)

        item_search.search.assert_called_once_with(
            CUSTOMER_ID, list_id, True, ItemSortOptions(sort="sku", order="1", page=-1)
        )


# ============================================================================
# Special Type Lists
# ============================================================================


class TestSpecialTypeLists:
    """Tests for saved-for-later and request-a-quote lookups."""

    def test_stored_saved_for_later(self, service, add_list) -> None:
        """A stored saved-for-later list wins over the template."""
        list_id = add_list(name="Later", type_id="2")

        product_list = service.get_saved_for_later_product_list(CUSTOMER_ID)

        assert product_list.internalid == list_id
        assert product_list.name == "Later"

    def test_stored_request_a_quote(self, service, add_list) -> None:
        """A stored request-a-quote list is returned."""
        list_id = add_list(name="Quote", type_id="4")

        product_list = service.get_request_a_quote_product_list(CUSTOMER_ID)

        assert product_list.internalid == list_id

    def test_falls_back_to_template(self, service) -> None:
        """Without a stored list the configured template is returned."""
        product_list = service.get_saved_for_later_product_list(CUSTOMER_ID)

        assert product_list.internalid is None
        assert product_list.template_id == "1"
        assert product_list.name == "Saved For Later"
        assert product_list.description == ""
        assert product_list.scope == Reference(id="2", name="private")
        assert product_list.type == Reference(id="2", name="later")
        assert product_list.items == []

    def test_template_without_scope_reuses_type_id(self, make_service) -> None:
        """Missing template scope defaults to the type id, named private."""
        configuration = ProductListConfiguration(
            list_templates=[ListTemplate(templateId="9", name="Quote", typeId="4")],
        )
        service = make_service(configuration_override=configuration)

        product_list = service.get_request_a_quote_product_list(CUSTOMER_ID)

        assert product_list.scope == Reference(id="4", name="private")
        assert product_list.type == Reference(id="4", name="quote")
        assert configuration.list_templates[0].scope_id is None

    def test_inactive_list_falls_back_to_template(self, service, add_list) -> None:
        """Deactivated special lists are ignored."""
        add_list(name="Old later", type_id="2", inactive=True)

        product_list = service.get_saved_for_later_product_list(CUSTOMER_ID)

        assert product_list.internalid is None

    def test_other_users_list_ignored(self, service, add_list) -> None:
        """Special lists of other users are never returned."""
        add_list(owner=OTHER_CUSTOMER_ID, name="Theirs", type_id="2")

        product_list = service.get_saved_for_later_product_list(CUSTOMER_ID)

        assert product_list.name == "Saved For Later"

    def test_not_found_without_template(self, make_service) -> None:
        """No stored list and no template raises NotFoundError."""
        service = make_service(configuration_override=no_templates())

        with pytest.raises(NotFoundError) as exc_info:
            service.get_saved_for_later_product_list(CUSTOMER_ID)
        assert exc_info.value.details["type_id"] == "2"


# ============================================================================
# Search Helper
# ============================================================================


class TestSearchHelper:
    """Tests for the search and normalize routine."""

    def test_collects_template_ids(self, service, add_list) -> None:
        """Template ids of the rows are appended to the accumulator."""
        add_list(name="a", template_id="10")
        add_list(name="b")
        template_ids: list[str] = []

        service.search_helper(
            [SearchFilter("owner", "is", CUSTOMER_ID)],
            service.get_columns(),
            False,
            None,
            template_ids,
        )

        assert template_ids == ["10"]

    def test_default_order_is_name_ascending(self, make_service, add_list) -> None:
        """Rows are sorted by name ascending by default."""
        service = make_service(configuration_override=no_templates())
        for name in ("b", "A", "c"):
            add_list(name=name)

        names = [pl.name for pl in service.search(CUSTOMER_ID)]

        assert names == ["A", "b", "c"]

    def test_descending_order(self, make_service, add_list) -> None:
        """DESC direction reverses the sort."""
        service = make_service(configuration_override=no_templates())
        for name in ("b", "A", "c"):
            add_list(name=name)

        names = [pl.name for pl in service.search(CUSTOMER_ID, order="name:DESC")]

        assert names == ["c", "b", "A"]

    def test_unknown_sort_column_keeps_store_order(self, make_service, add_list) -> None:
        """Sorting on a column that is not retrieved is ignored."""
        service = make_service(configuration_override=no_templates())
        for name in ("b", "A", "c"):
            add_list(name=name)

        names = [pl.name for pl in service.search(CUSTOMER_ID, order="bogus:DESC")]

        assert names == ["b", "A", "c"]

    def test_store_errors_propagate(self, make_service) -> None:
        """Record store failures reach the caller unchanged."""
        service = make_service()
        service.record_store = MagicMock(spec=RecordStore)
        service.record_store.search.side_effect = RecordStoreError("boom")

        with pytest.raises(RecordStoreError, match="boom"):
            service.search(CUSTOMER_ID)

    def test_item_search_errors_propagate(self, make_service, add_list) -> None:
        """Item search failures reach the caller unchanged."""
        service = make_service()
        service.item_search = MagicMock(spec=ProductListItemSearch)
        service.item_search.search.side_effect = RuntimeError("items down")
        list_id = add_list()

        with pytest.raises(RuntimeError, match="items down"):
            service.get(CUSTOMER_ID, list_id)


# ============================================================================
# Search
# ============================================================================


class TestSearch:
    """Tests for listing a user's product lists."""

    def test_synthesizes_valid_templates_and_skips_invalid(self, make_service) -> None:
        """Templates without id or name are logged and skipped."""
        configuration = ProductListConfiguration(
            list_templates=[
                ListTemplate(name="Nameless id"),
                ListTemplate(templateId="10", name="Gift Ideas"),
            ],
        )
        service = make_service(configuration_override=configuration)

        with patch(SERVICE_LOGGER) as mock_logger:
            product_lists = service.search(CUSTOMER_ID)

        assert len(product_lists) == 1
        gift_ideas = product_lists[0]
        assert gift_ideas.internalid is None
        assert gift_ideas.template_id == "10"
        assert gift_ideas.name == "Gift Ideas"
        assert gift_ideas.description == ""
        assert gift_ideas.scope == Reference(id="2", name="private")
        assert gift_ideas.type == Reference(id="3", name="predefined")
        mock_logger.error.assert_called_once()

    def test_scope_id_coerced_to_string(self, make_service) -> None:
        """Numeric template scope ids become strings."""
        configuration = ProductListConfiguration(
            list_templates=[
                ListTemplate(templateId="10", name="Public", scopeId=1, scopeName="public"),
            ],
        )
        service = make_service(configuration_override=configuration)

        product_lists = service.search(CUSTOMER_ID)

        assert product_lists[0].scope == Reference(id="1", name="public")

    def test_stored_list_replaces_its_template(self, make_service, add_list) -> None:
        """A stored list created from a template suppresses that template."""
        configuration = ProductListConfiguration(
            list_templates=[ListTemplate(templateId="10", name="Gift Ideas")],
        )
        service = make_service(configuration_override=configuration)
        list_id = add_list(name="Gift Ideas", template_id="10", type_id="3")

        product_lists = service.search(CUSTOMER_ID)

        assert [pl.internalid for pl in product_lists] == [list_id]

    def test_special_types_excluded(self, service, add_list) -> None:
        """Saved-for-later and request-a-quote lists are not listed."""
        add_list(name="Later", type_id="2")
        add_list(name="Quote", type_id="4")
        add_list(name="Mine", type_id="1")

        product_lists = service.search(CUSTOMER_ID)

        assert [pl.name for pl in product_lists] == ["Mine"]

    def test_only_owned_active_lists(self, service, add_list) -> None:
        """Other users' and deactivated lists are not listed."""
        add_list(name="Mine")
        add_list(name="Theirs", owner=OTHER_CUSTOMER_ID)
        add_list(name="Gone", inactive=True)

        assert [pl.name for pl in service.search(CUSTOMER_ID)] == ["Mine"]

    def test_single_list_mode_returns_predefined_only(
        self, make_service, add_list, templates
    ) -> None:
        """In single-list mode only predefined lists are returned."""
        configuration = ProductListConfiguration(
            addition_enabled=False,
            list_templates=[*templates, ListTemplate(templateId="10", name="My List")],
        )
        service = make_service(configuration_override=configuration)
        add_list(name="Custom", type_id="1")
        add_list(name="Later", type_id="2")

        product_lists = service.search(CUSTOMER_ID)

        assert service.is_single_list()
        assert [pl.name for pl in product_lists] == ["My List"]

    def test_search_does_not_include_store_items(self, make_service, add_list) -> None:
        """Listing fetches lines without store item details."""
        service = make_service(configuration_override=no_templates())
        service.item_search = MagicMock(spec=ProductListItemSearch)
        service.item_search.search.return_value = []
        list_id = add_list()

        service.search(CUSTOMER_ID)

        service.item_search.search.assert_called_once_with(
            CUSTOMER_ID, list_id, False, ItemSortOptions(sort="sku", order="1", page=-1)
        )

    def test_templates_not_mutated(self, service, configuration) -> None:
        """Synthesizing lists leaves the configuration untouched."""
        before = [t.model_dump() for t in configuration.list_templates]

        service.search(CUSTOMER_ID)
        service.get_saved_for_later_product_list(CUSTOMER_ID)

        assert [t.model_dump() for t in configuration.list_templates] == before


class TestIsSingleList:
    """Tests for single-list detection."""

    def test_addition_enabled(self, make_service) -> None:
        """Stores that allow adding lists are never single-list."""
        configuration = ProductListConfiguration(
            addition_enabled=True,
            list_templates=[ListTemplate(templateId="10", name="My List")],
        )
        assert not make_service(configuration_override=configuration).is_single_list()

    def test_no_templates(self, make_service) -> None:
        """Without templates there is no single list."""
        configuration = no_templates(addition_enabled=False)
        assert not make_service(configuration_override=configuration).is_single_list()

    def test_two_regular_templates(self, make_service) -> None:
        """Two regular templates are not a single list."""
        configuration = ProductListConfiguration(
            addition_enabled=False,
            list_templates=[
                ListTemplate(templateId="10", name="One"),
                ListTemplate(templateId="11", name="Two", typeId="3"),
            ],
        )
        assert not make_service(configuration_override=configuration).is_single_list()

    def test_special_templates_not_counted(self, make_service, templates) -> None:
        """Special templates do not count as regular lists."""
        configuration = ProductListConfiguration(
            addition_enabled=False,
            list_templates=[*templates, ListTemplate(templateId="10", name="One")],
        )
        assert make_service(configuration_override=configuration).is_single_list()


class TestSearchExport:
    """Tests for the export side effect of search."""

    def test_export_receives_results(self, make_service, add_list) -> None:
        """The exporter is handed the listing that is returned."""
        exporter = MagicMock(spec=ProductListExporter)
        exporter.export.return_value = ExportResult(
            file_id="f1", recipient="sales@example.com", attachment_id="f1", list_count=1
        )
        service = make_service(configuration_override=no_templates(), exporter=exporter)
        add_list(name="Mine")

        product_lists = service.search(CUSTOMER_ID, export=True)

        exporter.export.assert_called_once_with(product_lists)

    def test_single_list_mode_never_exports(self, make_service) -> None:
        """Single-list deployments return the list without exporting."""
        exporter = MagicMock(spec=ProductListExporter)
        configuration = ProductListConfiguration(
            addition_enabled=False,
            list_templates=[ListTemplate(templateId="9", name="My List")],
        )
        service = make_service(configuration_override=configuration, exporter=exporter)

        product_lists = service.search(CUSTOMER_ID, export=True)

        assert [pl.name for pl in product_lists] == ["My List"]
        exporter.export.assert_not_called()

    def test_no_export_by_default(self, make_service) -> None:
        """Exports only run when requested."""
        exporter = MagicMock(spec=ProductListExporter)
        service = make_service(exporter=exporter)

        service.search(CUSTOMER_ID)

        exporter.export.assert_not_called()

    def test_export_without_exporter_logs_warning(self, make_service, add_list) -> None:
        """Requested exports without an exporter only log a warning."""
        service = make_service(configuration_override=no_templates())
        add_list(name="Mine")

        with patch(SERVICE_LOGGER) as mock_logger:
            product_lists = service.search(CUSTOMER_ID, export=True)

        assert [pl.name for pl in product_lists] == ["Mine"]
        mock_logger.warning.assert_called_once()

    def test_export_errors_propagate(self, make_service) -> None:
        """Export failures are not caught."""
        exporter = MagicMock(spec=ProductListExporter)
        exporter.export.side_effect = OSError("smtp down")
        service = make_service(exporter=exporter)

        with pytest.raises(OSError, match="smtp down"):
            service.search(CUSTOMER_ID, export=True)


# ============================================================================
# Create
# ============================================================================


class TestCreate:
    """Tests for creating product lists."""

    def test_create_sanitizes_name_and_skips_description(
        self, service, record_store
    ) -> None:
        """Name is sanitized; a missing description is left unset."""
        list_id = service.create(CUSTOMER_ID, ProductListInput(name="<x>"))

        record = record_store.load(PRODUCT_LIST_RECORD, list_id)
        assert record.get_field_value("name") == "&lt;x&gt;"
        assert "description" not in record.fields

    def test_create_sets_provided_fields(self, service, record_store) -> None:
        """Provided fields are persisted."""
        list_id = service.create(
            CUSTOMER_ID,
            ProductListInput(
                template_id="10",
                scope_id="1",
                type_id="3",
                name="Gift Ideas",
                description="For <br>mom",
            ),
        )

        record = record_store.load(PRODUCT_LIST_RECORD, list_id)
        assert record.get_field_value("templateid") == "10"
        assert record.get_field_value("scope") == "1"
        assert record.get_field_value("type") == "3"
        assert record.get_field_value("description") == "For \nmom"

    def test_create_skips_empty_fields(self, service, record_store) -> None:
        """Empty strings count as not provided."""
        list_id = service.create(CUSTOMER_ID, ProductListInput(name="x", template_id=""))

        record = record_store.load(PRODUCT_LIST_RECORD, list_id)
        assert "templateid" not in record.fields
        assert "scope" not in record.fields
        assert "type" not in record.fields

    def test_owner_forced_to_user(self, service, record_store) -> None:
        """The acting user always owns the new list."""
        list_id = service.create(CUSTOMER_ID, ProductListInput(name="Mine"))

        record = record_store.load(PRODUCT_LIST_RECORD, list_id)
        assert record.get_field_value("owner") == CUSTOMER_ID

    def test_created_list_is_readable(self, service) -> None:
        """New lists can be fetched by their owner."""
        list_id = service.create(CUSTOMER_ID, ProductListInput(name="Mine", type_id="1"))

        assert service.get(CUSTOMER_ID, list_id).name == "Mine"


# ============================================================================
# Update
# ============================================================================


class TestUpdate:
    """Tests for updating product lists."""

    def test_update_other_users_list_unauthorized(
        self, service, add_list, record_store
    ) -> None:
        """Lists owned by another user cannot be updated."""
        list_id = add_list(owner=OTHER_CUSTOMER_ID, name="Theirs")

        with pytest.raises(UnauthorizedError):
            service.update(CUSTOMER_ID, list_id, ProductListInput(name="Mine now"))

        record = record_store.load(PRODUCT_LIST_RECORD, list_id)
        assert record.get_field_value("name") == "Theirs"

    def test_owner_compared_as_integer(self, service, record_store) -> None:
        """String owner ids match integer users."""
        record = record_store.create(PRODUCT_LIST_RECORD)
        record.set_field_value("owner", "42")
        record.set_field_value("name", "Old")
        list_id = record_store.submit(record)

        service.update(CUSTOMER_ID, list_id, ProductListInput(name="New"))

        assert record_store.load(PRODUCT_LIST_RECORD, list_id).get_field_value("name") == "New"

    def test_partial_update_keeps_fields_but_clears_description(
        self, service, add_list, record_store
    ) -> None:
        """Omitted fields are kept, except the description which is cleared."""
        list_id = add_list(name="Old", type_id="1", scope_id="2", description="notes")

        result = service.update(CUSTOMER_ID, list_id, ProductListInput(scope_id="1"))

        assert result is None
        record = record_store.load(PRODUCT_LIST_RECORD, list_id)
        assert record.get_field_value("name") == "Old"
        assert record.get_field_value("type") == "1"
        assert record.get_field_value("scope") == "1"
        assert record.get_field_value("description") == ""

    def test_update_sanitizes(self, service, add_list, record_store) -> None:
        """Name and description are sanitized."""
        list_id = add_list()

        service.update(
            CUSTOMER_ID,
            list_id,
            ProductListInput(name="<b>Gifts</b>", description="a<br>b"),
        )

        record = record_store.load(PRODUCT_LIST_RECORD, list_id)
        assert record.get_field_value("name") == "&lt;b&gt;Gifts&lt;/b&gt;"
        assert record.get_field_value("description") == "a\nb"

    def test_update_missing_list_propagates_store_error(self, service) -> None:
        """Loading an unknown id fails in the record store."""
        with pytest.raises(RecordNotFoundError):
            service.update(CUSTOMER_ID, "999", ProductListInput(name="x"))


# ============================================================================
# Delete
# ============================================================================


class TestDelete:
    """Tests for deactivating product lists."""

    def test_delete_deactivates(self, service, add_list, record_store) -> None:
        """Deleting marks the list inactive without removing it."""
        list_id = add_list()

        assert service.delete(CUSTOMER_ID, list_id) == list_id

        record = record_store.load(PRODUCT_LIST_RECORD, list_id)
        assert record.get_field_value("isinactive") is True
        with pytest.raises(NotFoundError):
            service.get(CUSTOMER_ID, list_id)

    def test_delete_other_users_list_unauthorized(
        self, service, add_list, record_store
    ) -> None:
        """Lists owned by another user cannot be deleted."""
        list_id = add_list(owner=OTHER_CUSTOMER_ID)

        with pytest.raises(UnauthorizedError) as exc_info:
            service.delete(CUSTOMER_ID, list_id)

        assert exc_info.value.details["product_list_id"] == list_id
        record = record_store.load(PRODUCT_LIST_RECORD, list_id)
        assert record.get_field_value("isinactive") is False

    def test_guest_cannot_delete(self, make_service, add_list) -> None:
        """Without a user id ownership never matches."""
        service = make_service(
            customer_id=None,
            configuration_override=no_templates(login_required=False),
        )
        list_id = add_list()

        with pytest.raises(UnauthorizedError):
            service.delete(None, list_id)


# ============================================================================
# Description Round Trip
# ============================================================================


class TestDescriptionRoundTrip:
    """Tests for writing then reading descriptions."""

    def test_line_breaks_restored_entities_kept(self, service) -> None:
        """Line breaks come back as <br>; escaped brackets stay escaped."""
        list_id = service.create(
            CUSTOMER_ID,
            ProductListInput(name="Notes", description="Hello<br><b>World</b>"),
        )

        product_list = service.get(CUSTOMER_ID, list_id)

        assert product_list.description == "Hello<br>&lt;b&gt;World&lt;/b&gt;"
