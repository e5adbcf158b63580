"""Typed repositories over the record store.

Services never talk to the storage backend directly: they receive a
``Repositories`` bundle (built once per process, or per test around an
in-memory backend) and work with domain models.
"""

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Protocol, TypeVar

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from src.core import db_client
from src.core.config import constants
from src.core.db_client import sanitize_param
from src.core.errors import RecordNotFoundError
from src.domain.budget import Budget
from src.domain.catalog import CatalogEntry
from src.domain.condo import Condo
from src.domain.incident import Incident
from src.domain.log import ActivityLog
from src.domain.message import Message
from src.domain.task import Task
from src.domain.user import User
from src.domain.vendor import CondoDocument, Vendor


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class RecordStore(Protocol):
    """Storage backend interface implemented by ``src.core.db_client``."""

    async def create_record(self, *, collection: str, data: dict[str, Any]) -> dict[str, Any]: ...

    async def get_record(self, *, collection: str, record_id: str) -> dict[str, Any]: ...

    async def update_record(self, *, collection: str, record_id: str, data: dict[str, Any]) -> dict[str, Any]: ...

    async def delete_record(self, *, collection: str, record_id: str) -> Any: ...

    async def list_records(
        self,
        *,
        collection: str,
        page: int = 1,
        per_page: int = 50,
        filter_query: str = "",
        sort: str = "",
    ) -> list[dict[str, Any]]: ...


class Repository(Generic[ModelT]):
    """CRUD access to one collection, returning validated domain models."""

    collection: ClassVar[str]
    model: ClassVar[type[BaseModel]]

    def __init__(self, store: RecordStore | None = None) -> None:
        self._store: RecordStore = store if store is not None else db_client  # type: ignore[assignment]

    def _to_model(self, record: dict[str, Any]) -> ModelT:
        return self.model.model_validate(record)  # type: ignore[return-value]

    @staticmethod
    def _serialize(data: dict[str, Any]) -> dict[str, Any]:
        return {key: to_jsonable_python(value) for key, value in data.items() if key != "id"}

    async def create(self, data: dict[str, Any]) -> ModelT:
        """Insert a record built from field values and return the stored model."""
        record = await self._store.create_record(collection=self.collection, data=self._serialize(data))
        return self._to_model(record)

    async def get(self, record_id: str) -> ModelT:
        """Fetch one record; raises KeyError if it does not exist."""
        record = await self._store.get_record(collection=self.collection, record_id=record_id)
        return self._to_model(record)

    async def get_in_condo(self, record_id: str, condo_id: str) -> ModelT:
        """Fetch a record owned by a condominium; another condominium's record reads as missing."""
        item = await self.get(record_id)
        if getattr(item, "condo_id", None) != condo_id:
            raise RecordNotFoundError(f"Record not found in {self.collection}: {record_id}")
        return item

    async def update(self, record_id: str, data: dict[str, Any]) -> ModelT:
        """Apply a partial update and return the stored model."""
        record = await self._store.update_record(
            collection=self.collection,
            record_id=record_id,
            data=self._serialize(data),
        )
        return self._to_model(record)

    async def save(self, item: ModelT) -> ModelT:
        """Persist every field of an existing model."""
        return await self.update(item.id, item.model_dump())  # type: ignore[attr-defined]

    async def delete(self, record_id: str) -> None:
        """Delete a record; raises KeyError if it does not exist."""
        await self._store.delete_record(collection=self.collection, record_id=record_id)

    async def list_all(self, *, filter_query: str = "", sort: str = "") -> list[ModelT]:
        """Return every record matching the filter, following pagination to the end."""
        per_page = constants.DEFAULT_PER_PAGE_LIMIT
        page = 1
        items: list[ModelT] = []
        while True:
            records = await self._store.list_records(
                collection=self.collection,
                page=page,
                per_page=per_page,
                filter_query=filter_query,
                sort=sort,
            )
            items.extend(self._to_model(record) for record in records)
            if len(records) < per_page:
                return items
            page += 1

    async def list_by_condo(self, condo_id: str) -> list[ModelT]:
        """Return all records owned by a condominium."""
        return await self.list_all(filter_query=f'condo_id = "{sanitize_param(condo_id)}"')


class TaskRepository(Repository[Task]):
    collection = "tasks"
    model = Task


class UserRepository(Repository[User]):
    collection = "users"
    model = User

    async def find_by_name(self, name: str) -> User | None:
        """Case-insensitive exact lookup by login name."""
        # SQLite LIKE only folds ASCII, so accented names are compared here
        wanted = name.strip().casefold()
        return next((user for user in await self.list_all() if user.name.casefold() == wanted), None)


class CondoRepository(Repository[Condo]):
    collection = "condos"
    model = Condo


class VendorRepository(Repository[Vendor]):
    collection = "vendors"
    model = Vendor


class BudgetRepository(Repository[Budget]):
    collection = "budgets"
    model = Budget


class DocumentRepository(Repository[CondoDocument]):
    collection = "documents"
    model = CondoDocument


class IncidentRepository(Repository[Incident]):
    collection = "incidents"
    model = Incident


class MessageRepository(Repository[Message]):
    collection = "messages"
    model = Message


class ActivityLogRepository(Repository[ActivityLog]):
    collection = "logs"
    model = ActivityLog

    async def prune(self, *, keep: int) -> int:
        """Delete every entry older than the newest ``keep``; returns how many went."""
        removed = 0
        while True:
            stale = await self._store.list_records(collection=self.collection, page=2, per_page=keep, sort="-id")
            if not stale:
                return removed
            for record in stale:
                await self._store.delete_record(collection=self.collection, record_id=record["id"])
            removed += len(stale)


class CatalogRepository(Repository[CatalogEntry]):
    model = CatalogEntry

    def __init__(self, collection: str, store: RecordStore | None = None) -> None:
        super().__init__(store)
        self.collection = collection  # type: ignore[misc]

    async def find_by_name(self, name: str) -> CatalogEntry | None:
        """Exact lookup by label."""
        entries = await self.list_all(filter_query=f'name = "{sanitize_param(name)}"')
        return entries[0] if entries else None


@dataclass
class Repositories:
    """Every repository the services need, sharing one backend."""

    tasks: TaskRepository
    users: UserRepository
    condos: CondoRepository
    vendors: VendorRepository
    budgets: BudgetRepository
    documents: DocumentRepository
    incidents: IncidentRepository
    messages: MessageRepository
    logs: ActivityLogRepository
    categories: CatalogRepository
    job_functions: CatalogRepository


def build_repositories(store: RecordStore | None = None) -> Repositories:
    """Build the repository bundle over a storage backend (SQLite by default)."""
    return Repositories(
        tasks=TaskRepository(store),
        users=UserRepository(store),
        condos=CondoRepository(store),
        vendors=VendorRepository(store),
        budgets=BudgetRepository(store),
        documents=DocumentRepository(store),
        incidents=IncidentRepository(store),
        messages=MessageRepository(store),
        logs=ActivityLogRepository(store),
        categories=CatalogRepository("categories", store),
        job_functions=CatalogRepository("job_functions", store),
    )
