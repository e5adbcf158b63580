"""Pure Python in-memory database for unit testing."""

import copy
from datetime import UTC, datetime
from typing import Any

from src.core.db_client import DatabaseError, RecordNotFoundError


class InMemoryDBClient:
    """Pure Python in-memory database for unit testing.

    Mirrors the ``src.core.db_client`` record API without touching SQLite.
    Supports basic CRUD, ``=``/``!=``/``~`` filters joined with ``&&`` and
    single-field sorting.
    """

    def __init__(self):
        """Initialize empty in-memory database."""
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._id_counter = 1000

    def _collection(self, collection: str, record_id: str) -> dict[str, dict[str, Any]]:
        records = self._collections.get(collection, {})
        if record_id not in records:
            raise RecordNotFoundError(f"Record not found in {collection}: {record_id}")
        return records

    async def create_record(self, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        """Create a new record with a generated id and created timestamp."""
        if not isinstance(data, dict):
            raise DatabaseError(f"Data must be a dictionary, got {type(data)}")

        record_id = str(self._id_counter)
        self._id_counter += 1
        record = {
            "id": record_id,
            "created": datetime.now(UTC).isoformat(),
            **copy.deepcopy(data),
        }
        self._collections.setdefault(collection, {})[record_id] = record
        return copy.deepcopy(record)

    async def get_record(self, collection: str, record_id: str) -> dict[str, Any]:
        """Get a record by ID, raising RecordNotFoundError if missing."""
        return copy.deepcopy(self._collection(collection, record_id)[record_id])

    async def update_record(self, collection: str, record_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Merge data into an existing record."""
        if not data:
            raise ValueError("Empty update payload")

        record = self._collection(collection, record_id)[record_id]
        record.update(copy.deepcopy(data))
        return copy.deepcopy(record)

    async def delete_record(self, collection: str, record_id: str) -> None:
        """Delete a record, raising RecordNotFoundError if missing."""
        del self._collection(collection, record_id)[record_id]

    async def list_records(
        self,
        collection: str,
        page: int = 1,
        per_page: int = 50,
        filter_query: str = "",
        sort: str = "",
    ) -> list[dict[str, Any]]:
        """List records with optional filtering, sorting and pagination."""
        records = list(self._collections.get(collection, {}).values())

        if filter_query:
            records = [r for r in records if self._parse_filter(filter_query, r)]

        records = self._apply_sort(records, sort or "id")

        start_idx = (page - 1) * per_page
        return [copy.deepcopy(r) for r in records[start_idx : start_idx + per_page]]

    def count(self, collection: str) -> int:
        """Number of records stored in a collection."""
        return len(self._collections.get(collection, {}))

    def _parse_filter(self, filter_str: str, record: dict[str, Any]) -> bool:
        """Evaluate a filter expression against a record.

        Supports ``field = "value"``, ``field != "value"``,
        ``field ~ "substring"`` (case-insensitive) and ``&&``.
        """
        if "&&" in filter_str:
            return all(self._parse_filter(cond.strip(), record) for cond in filter_str.split("&&"))

        for operator in ("!=", "~", "="):
            if operator in filter_str:
                field, raw_value = filter_str.split(operator, 1)
                field = field.strip()
                value = raw_value.strip().strip("'\"")
                actual = record.get(field)
                break
        else:
            raise DatabaseError(f"Invalid filter syntax (no operator found): {filter_str}")

        if operator == "~":
            return value.lower() in str(actual or "").lower()
        if value.lower() in ("true", "false"):
            matches = actual == (value.lower() == "true")
        else:
            matches = str(actual if actual is not None else "") == value
        return matches if operator == "=" else not matches

    def _apply_sort(self, records: list[dict], sort: str) -> list[dict]:
        """Sort by one field (prefix with - for descending); ids sort numerically."""
        reverse = sort.startswith("-")
        field = sort.lstrip("+-")

        def key(record: dict) -> Any:
            value = record.get(field)
            if field == "id":
                return int(value)
            return "" if value is None else value

        return sorted(records, key=key, reverse=reverse)
