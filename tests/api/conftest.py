"""Shared fixtures for API tests."""

from collections.abc import Iterator

import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from productlists.api.product_lists import get_service
from productlists.application.product_list_service import ProductListService
from productlists.infrastructure.session import CustomerSession
from productlists.main import app


@pytest.fixture
def client(record_store, item_search, configuration) -> Iterator[TestClient]:
    """Test client whose service runs on the in-memory collaborators."""

    def _service(request: Request) -> ProductListService:
        return ProductListService(
            configuration=configuration,
            record_store=record_store,
            item_search=item_search,
            session=CustomerSession(request.state.customer_id),
            request_id=request.state.request_id,
        )

    app.dependency_overrides[get_service] = _service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def customer_headers() -> dict[str, str]:
    """Headers identifying the test customer."""
    return {"X-Customer-Id": "42"}
