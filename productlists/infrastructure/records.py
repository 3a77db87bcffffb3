"""Record store abstraction.

The product list model talks to persistence through a small,
search-oriented interface: run a filtered search returning the
requested columns, or load / create / submit a single record.
``InMemoryRecordStore`` backs development and tests; the SQL-backed
implementation lives in ``productlists.infrastructure.sql_store``.
"""

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import structlog

logger = structlog.get_logger()

PRODUCT_LIST_RECORD = "product_list"


# ============================================================================
# Errors
# ============================================================================


class RecordStoreError(Exception):
    """Base class for record store failures."""

    def __init__(self, message: str, record_type: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.record_type = record_type


class RecordNotFoundError(RecordStoreError):
    """Raised when loading a record id that does not exist."""

    def __init__(self, record_type: str, record_id: str) -> None:
        super().__init__(f"{record_type} {record_id} does not exist", record_type)
        self.record_id = record_id


# ============================================================================
# Search primitives
# ============================================================================


@dataclass(frozen=True)
class SearchFilter:
    """Single search predicate.

    Attributes:
        field: Record field to test.
        operator: Comparison operator; "is" and "anyof" are supported.
        value: Expected value, or list of values for "anyof".
    """

    field: str
    operator: str
    value: Any

    def matches(self, actual: Any) -> bool:
        """Evaluate the predicate against a field value.

        Values are compared by their string form so that ids stored as
        numbers match ids passed as strings and vice versa.
        """
        if self.operator == "is":
            return _normalize(actual) == _normalize(self.value)
        if self.operator == "anyof":
            return _normalize(actual) in {_normalize(v) for v in self.value}
        raise RecordStoreError(f"Unsupported search operator: {self.operator}")


@dataclass
class SearchColumn:
    """Field to retrieve from a search, optionally used for sorting.

    Attributes:
        name: Record field name.
        sort: None, "asc" or "desc".
    """

    name: str
    sort: str | None = None

    def set_sort(self, descending: bool = False) -> "SearchColumn":
        """Sort search results by this column.

        Args:
            descending: Sort from highest to lowest.

        Returns:
            The column, for chaining.
        """
        self.sort = "desc" if descending else "asc"
        return self


@dataclass
class SearchRow:
    """One search result: raw values plus display text of references."""

    id: str
    values: dict[str, Any] = field(default_factory=dict)
    texts: dict[str, str | None] = field(default_factory=dict)

    def get_value(self, name: str) -> Any:
        """Get the raw value of a column."""
        return self.values.get(name)

    def get_text(self, name: str) -> str | None:
        """Get the display text of a reference column."""
        return self.texts.get(name)


@dataclass
class Record:
    """Loaded or newly created record, editable field by field."""

    record_type: str
    id: str | None = None
    fields: dict[str, Any] = field(default_factory=dict)

    def get_field_value(self, name: str) -> Any:
        """Get a field value."""
        return self.fields.get(name)

    def set_field_value(self, name: str, value: Any) -> None:
        """Set a field value."""
        self.fields[name] = value


def _normalize(value: Any) -> str:
    if isinstance(value, bool):
        return "T" if value else "F"
    return "" if value is None else str(value)


# ============================================================================
# Record store interface
# ============================================================================


class RecordStore(ABC):
    """Persistence interface used by the product list model."""

    @abstractmethod
    def search(
        self,
        record_type: str,
        filters: list[SearchFilter],
        columns: list[SearchColumn],
    ) -> list[SearchRow]:
        """Return every record matching all filters, with the requested columns."""

    @abstractmethod
    def load(self, record_type: str, record_id: str) -> Record:
        """Load a record by id.

        Raises:
            RecordNotFoundError: If the record does not exist.
        """

    @abstractmethod
    def create(self, record_type: str) -> Record:
        """Create a new, unsaved record."""

    @abstractmethod
    def submit(self, record: Record) -> str:
        """Persist a record and return its id."""


# ============================================================================
# In-memory implementation
# ============================================================================


class InMemoryRecordStore(RecordStore):
    """Dictionary-backed record store.

    Reference fields (owner, scope, type) are rendered with the display
    names registered in ``texts``, keyed by field then by id.
    """

    def __init__(self, texts: dict[str, dict[str, str]] | None = None) -> None:
        self._records: dict[str, dict[str, dict[str, Any]]] = {}
        self._next_id = 1
        self.texts: dict[str, dict[str, str]] = texts or {}

    def search(
        self,
        record_type: str,
        filters: list[SearchFilter],
        columns: list[SearchColumn],
    ) -> list[SearchRow]:
        """Search stored records of a type."""
        matches = [
            (record_id, values)
            for record_id, values in self._records.get(record_type, {}).items()
            if all(f.matches(self._field(record_id, values, f.field)) for f in filters)
        ]

        for column in reversed([c for c in columns if c.sort]):
            matches.sort(
                key=lambda match, name=column.name: _sort_key(
                    self._field(match[0], match[1], name)
                ),
                reverse=column.sort == "desc",
            )

        rows = []
        for record_id, values in matches:
            row = SearchRow(id=record_id)
            for column in columns:
                value = self._field(record_id, values, column.name)
                row.values[column.name] = value
                names = self.texts.get(column.name)
                if names is not None:
                    row.texts[column.name] = names.get(_normalize(value))
            rows.append(row)

        logger.debug(
            "Record search",
            record_type=record_type,
            filter_count=len(filters),
            result_count=len(rows),
        )
        return rows

    def load(self, record_type: str, record_id: str) -> Record:
        """Load a copy of a stored record."""
        values = self._records.get(record_type, {}).get(str(record_id))
        if values is None:
            raise RecordNotFoundError(record_type, str(record_id))
        return Record(
            record_type=record_type,
            id=str(record_id),
            fields=copy.deepcopy(values),
        )

    def create(self, record_type: str) -> Record:
        """Create an unsaved record."""
        return Record(record_type=record_type)

    def submit(self, record: Record) -> str:
        """Store a copy of the record, assigning an id on first submit."""
        now = datetime.now(timezone.utc).isoformat()
        records = self._records.setdefault(record.record_type, {})

        if record.id is None:
            record.id = str(self._next_id)
            self._next_id += 1
            record.fields.setdefault("created", now)
            record.fields.setdefault("isinactive", False)
        elif record.id not in records:
            raise RecordNotFoundError(record.record_type, record.id)

        record.fields["lastmodified"] = now
        records[record.id] = copy.deepcopy(record.fields)
        return record.id

    def _field(self, record_id: str, values: dict[str, Any], name: str) -> Any:
        if name == "internalid":
            return record_id
        return values.get(name)


def _sort_key(value: Any) -> tuple[int, Any]:
    if value is None:
        return (0, "")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (1, value)
    return (2, str(value).lower())
