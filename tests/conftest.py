"""Shared fixtures for product list tests."""

import os
from collections.abc import Callable
from typing import Any

# Keep the application engine off the working directory.
os.environ.setdefault("PRODUCTLISTS_DATABASE_URL", "sqlite://")

import pytest  # noqa: E402

from productlists.application.product_list_service import ProductListService
from productlists.domain.entities import ProductListLine
from productlists.domain.value_objects import SCOPE_NAMES, TYPE_NAMES, ItemRef
from productlists.infrastructure.config import ListTemplate, ProductListConfiguration
from productlists.infrastructure.item_search import InMemoryProductListItemSearch
from productlists.infrastructure.records import (
    PRODUCT_LIST_RECORD,
    InMemoryRecordStore,
)
from productlists.infrastructure.session import CustomerSession

CUSTOMER_ID = 42
OTHER_CUSTOMER_ID = 7


# ============================================================================
# Collaborator Fixtures
# ============================================================================


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    """Create an empty in-memory record store with display names."""
    return InMemoryRecordStore(
        texts={
            "owner": {str(CUSTOMER_ID): "Jane Doe", str(OTHER_CUSTOMER_ID): "John Roe"},
            "scope": dict(SCOPE_NAMES),
            "type": dict(TYPE_NAMES),
        }
    )


@pytest.fixture
def item_search() -> InMemoryProductListItemSearch:
    """Create an empty in-memory item search."""
    return InMemoryProductListItemSearch()


@pytest.fixture
def templates() -> list[ListTemplate]:
    """Saved-for-later and request-a-quote templates."""
    return [
        ListTemplate(
            templateId="1",
            name="Saved For Later",
            scopeId=2,
            scopeName="private",
            typeId="2",
            typeName="later",
        ),
        ListTemplate(
            templateId="2",
            name="Request a Quote",
            scopeId=2,
            scopeName="private",
            typeId="4",
            typeName="quote",
        ),
    ]


@pytest.fixture
def configuration(templates: list[ListTemplate]) -> ProductListConfiguration:
    """Login required, additions enabled, default templates."""
    return ProductListConfiguration(
        login_required=True,
        addition_enabled=True,
        list_templates=templates,
    )


@pytest.fixture
def make_service(
    record_store: InMemoryRecordStore,
    item_search: InMemoryProductListItemSearch,
    configuration: ProductListConfiguration,
) -> Callable[..., ProductListService]:
    """Factory building a service over the shared in-memory collaborators."""

    def _make(
        customer_id: int | None = CUSTOMER_ID,
        configuration_override: ProductListConfiguration | None = None,
        **kwargs: Any,
    ) -> ProductListService:
        return ProductListService(
            configuration=configuration_override or configuration,
            record_store=record_store,
            item_search=item_search,
            session=CustomerSession(customer_id),
            **kwargs,
        )

    return _make


@pytest.fixture
def service(make_service: Callable[..., ProductListService]) -> ProductListService:
    """Service for the logged-in test customer."""
    return make_service()


# ============================================================================
# Data Helpers
# ============================================================================


@pytest.fixture
def add_list(record_store: InMemoryRecordStore) -> Callable[..., str]:
    """Store a product list record directly and return its id."""

    def _add(
        owner: int = CUSTOMER_ID,
        name: str = "Wishlist",
        type_id: str = "1",
        scope_id: str = "2",
        template_id: str | None = None,
        description: str | None = None,
        inactive: bool = False,
    ) -> str:
        record = record_store.create(PRODUCT_LIST_RECORD)
        record.set_field_value("owner", owner)
        record.set_field_value("name", name)
        record.set_field_value("type", type_id)
        record.set_field_value("scope", scope_id)
        if template_id is not None:
            record.set_field_value("templateid", template_id)
        if description is not None:
            record.set_field_value("description", description)
        record.set_field_value("isinactive", inactive)
        return record_store.submit(record)

    return _add


@pytest.fixture
def make_line() -> Callable[..., ProductListLine]:
    """Factory creating product list lines."""

    def _make(
        internalid: str,
        sku: str,
        displayname: str | None = None,
        quantity: int = 1,
    ) -> ProductListLine:
        return ProductListLine(
            internalid=internalid,
            item=ItemRef(
                internalid=f"item-{internalid}",
                displayname=displayname or f"Item {sku}",
                sku=sku,
            ),
            quantity=quantity,
        )

    return _make
