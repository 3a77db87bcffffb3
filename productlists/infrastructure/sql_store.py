"""SQLAlchemy-backed record store and item search."""

from collections.abc import Callable
from datetime import datetime
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from productlists.domain.entities import ProductListLine
from productlists.domain.value_objects import ItemRef, Reference
from productlists.infrastructure.item_search import ProductListItemSearch, StoreItemCatalog
from productlists.infrastructure.models import ProductListItemModel, ProductListModel
from productlists.infrastructure.records import (
    PRODUCT_LIST_RECORD,
    Record,
    RecordNotFoundError,
    RecordStore,
    RecordStoreError,
    SearchColumn,
    SearchFilter,
    SearchRow,
)

logger = structlog.get_logger()


def _to_int(value: Any) -> int | None:
    return None if value is None or value == "" else int(value)


def _to_str(value: Any) -> str | None:
    return None if value is None or value == "" else str(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.upper() in ("T", "TRUE", "1")
    return bool(value)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


# Record field -> (ORM attribute, value coercion)
FIELD_MAP: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "internalid": ("id", _to_int),
    "templateid": ("template_id", _to_str),
    "name": ("name", _to_str),
    "description": ("description", _to_str),
    "owner": ("owner_id", _to_int),
    "scope": ("scope_id", _to_str),
    "type": ("type_id", _to_str),
    "isinactive": ("is_inactive", _to_bool),
    "created": ("created_at", lambda v: v),
    "lastmodified": ("updated_at", lambda v: v),
}

# Fields a submit may write
WRITABLE_FIELDS = ("templateid", "name", "description", "owner", "scope", "type", "isinactive")


class SqlRecordStore(RecordStore):
    """Record store persisting product lists with SQLAlchemy.

    Example usage:
        store = SqlRecordStore(session_factory)
        record = store.create("product_list")
        record.set_field_value("name", "Birthday")
        record.set_field_value("owner", 42)
        list_id = store.submit(record)
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        """Initialize store with a session factory.

        Args:
            session_factory: SQLAlchemy session factory.
        """
        self.session_factory = session_factory

    def search(
        self,
        record_type: str,
        filters: list[SearchFilter],
        columns: list[SearchColumn],
    ) -> list[SearchRow]:
        """Search product lists."""
        self._check_type(record_type)

        query = select(ProductListModel)
        for search_filter in filters:
            query = query.where(self._condition(search_filter))

        for column in columns:
            if column.sort:
                attribute = self._attribute(column.name)
                query = query.order_by(
                    attribute.desc() if column.sort == "desc" else attribute.asc()
                )
        query = query.order_by(ProductListModel.id.asc())

        with self.session_factory() as session:
            models = session.execute(query).unique().scalars().all()
            rows = [self._to_row(model, columns) for model in models]

        logger.debug(
            "Record search",
            record_type=record_type,
            filter_count=len(filters),
            result_count=len(rows),
        )
        return rows

    def load(self, record_type: str, record_id: str) -> Record:
        """Load a product list record."""
        self._check_type(record_type)
        with self.session_factory() as session:
            model = session.get(ProductListModel, _to_int(record_id))
            if model is None:
                raise RecordNotFoundError(record_type, str(record_id))
            return Record(
                record_type=record_type,
                id=str(model.id),
                fields={
                    "templateid": model.template_id,
                    "name": model.name,
                    "description": model.description,
                    "owner": _to_str(model.owner_id),
                    "scope": model.scope_id,
                    "type": model.type_id,
                    "isinactive": model.is_inactive,
                    "created": _iso(model.created_at),
                    "lastmodified": _iso(model.updated_at),
                },
            )

    def create(self, record_type: str) -> Record:
        """Create an unsaved product list record."""
        self._check_type(record_type)
        return Record(record_type=record_type)

    def submit(self, record: Record) -> str:
        """Insert or update a product list record."""
        self._check_type(record.record_type)
        with self.session_factory.begin() as session:
            if record.id is None:
                model = ProductListModel()
                session.add(model)
            else:
                model = session.get(ProductListModel, _to_int(record.id))
                if model is None:
                    raise RecordNotFoundError(record.record_type, record.id)

            for name in WRITABLE_FIELDS:
                if name in record.fields:
                    attribute, coerce = FIELD_MAP[name]
                    setattr(model, attribute, coerce(record.fields[name]))

            session.flush()
            record.id = str(model.id)

        return record.id

    def _check_type(self, record_type: str) -> None:
        if record_type != PRODUCT_LIST_RECORD:
            raise RecordStoreError(f"Unsupported record type: {record_type}", record_type)

    def _attribute(self, name: str) -> Any:
        if name not in FIELD_MAP:
            raise RecordStoreError(f"Unknown field: {name}", PRODUCT_LIST_RECORD)
        return getattr(ProductListModel, FIELD_MAP[name][0])

    def _condition(self, search_filter: SearchFilter) -> Any:
        attribute = self._attribute(search_filter.field)
        coerce = FIELD_MAP[search_filter.field][1]

        if search_filter.operator == "is":
            value = coerce(search_filter.value)
            return attribute.is_(None) if value is None else attribute == value
        if search_filter.operator == "anyof":
            return attribute.in_([coerce(v) for v in search_filter.value])
        raise RecordStoreError(
            f"Unsupported search operator: {search_filter.operator}",
            PRODUCT_LIST_RECORD,
        )

    def _to_row(self, model: ProductListModel, columns: list[SearchColumn]) -> SearchRow:
        values: dict[str, Any] = {
            "internalid": str(model.id),
            "templateid": model.template_id,
            "name": model.name,
            "description": model.description,
            "owner": _to_str(model.owner_id),
            "scope": model.scope_id,
            "type": model.type_id,
            "isinactive": model.is_inactive,
            "created": _iso(model.created_at),
            "lastmodified": _iso(model.updated_at),
        }
        texts = {
            "owner": model.owner.name if model.owner else None,
            "scope": model.scope.name if model.scope else None,
            "type": model.type.name if model.type else None,
        }
        row = SearchRow(id=str(model.id))
        for column in columns:
            row.values[column.name] = values.get(column.name)
            if column.name in texts:
                row.texts[column.name] = texts[column.name]
        return row


class SqlProductListItemSearch(ProductListItemSearch):
    """Item search reading product list lines from the database."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        store_items: StoreItemCatalog | None = None,
        page_size: int = 20,
    ) -> None:
        super().__init__(store_items=store_items, page_size=page_size)
        self.session_factory = session_factory

    def _fetch(self, owner: str | int | None, product_list_id: str) -> list[ProductListLine]:
        query = (
            select(ProductListItemModel)
            .join(ProductListModel)
            .where(ProductListItemModel.product_list_id == int(product_list_id))
            .where(ProductListItemModel.is_inactive.is_(False))
        )
        owner_id = _to_int(owner)
        query = query.where(
            ProductListModel.owner_id.is_(None)
            if owner_id is None
            else ProductListModel.owner_id == owner_id
        )

        with self.session_factory() as session:
            models = session.execute(query).scalars().all()
            return [
                ProductListLine(
                    internalid=str(model.id),
                    item=ItemRef(
                        internalid=model.item_id,
                        displayname=model.display_name,
                        sku=model.sku,
                    ),
                    quantity=model.quantity,
                    description=model.description or "",
                    priority=(
                        Reference(id=model.priority_id, name=model.priority_name)
                        if model.priority_id
                        else None
                    ),
                    created=_iso(model.created_at),
                    lastmodified=_iso(model.updated_at),
                )
                for model in models
            ]
