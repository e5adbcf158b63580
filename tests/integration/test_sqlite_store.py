"""Integration tests for the SQLite record store and repositories."""

from datetime import UTC, datetime

import pytest

from src.core import db_client
from src.core.config import constants
from src.core.db_client import DatabaseError, RecordNotFoundError
from src.domain.create_models import BudgetItemCreate
from src.domain.task import TaskFrequency, TaskStatus
from src.domain.user import UserRole
from src.modules.tasks import service as task_service
from src.services import bootstrap_service, budget_service, user_service


NOW = datetime(2025, 6, 11, 15, 0, tzinfo=UTC)


@pytest.mark.integration
class TestRecordStore:
    """Raw CRUD against the SQLite file."""

    async def test_create_get_update_delete(self, sqlite_db):
        created = await db_client.create_record(
            collection="incidents",
            data={
                "condo_id": "1",
                "user_id": "2",
                "user_name": "João Silva",
                "title": "Leak",
                "timestamp": NOW.isoformat(),
                "status": "OPEN",
                "photos": ["data:image/png;base64,a"],
            },
        )

        assert created["id"] == "1"
        assert created["photos"] == ["data:image/png;base64,a"]

        updated = await db_client.update_record(collection="incidents", record_id="1", data={"status": "RESOLVED"})
        assert updated["status"] == "RESOLVED"

        await db_client.delete_record(collection="incidents", record_id="1")
        with pytest.raises(RecordNotFoundError):
            await db_client.get_record(collection="incidents", record_id="1")

    async def test_missing_and_malformed_ids(self, sqlite_db):
        with pytest.raises(RecordNotFoundError):
            await db_client.get_record(collection="tasks", record_id="42")
        with pytest.raises(RecordNotFoundError):
            await db_client.delete_record(collection="tasks", record_id="abc")

    async def test_filters_and_sorting(self, sqlite_db):
        for name in ("Piscina", "Limpeza", "Jardinagem"):
            await db_client.create_record(collection="categories", data={"name": name})

        matched = await db_client.list_records(collection="categories", filter_query='name ~ "in"', sort="-name")

        assert [record["name"] for record in matched] == ["Piscina", "Jardinagem"]

    async def test_like_wildcards_are_literal(self, sqlite_db):
        for name in ("100%", "Other"):
            await db_client.create_record(collection="categories", data={"name": name})

        matched = await db_client.list_records(collection="categories", filter_query='name ~ "%"')

        assert [record["name"] for record in matched] == ["100%"]

    async def test_check_constraints(self, sqlite_db):
        with pytest.raises(DatabaseError):
            await db_client.create_record(
                collection="budgets",
                data={"title": "x", "status": "MAYBE", "condo_id": "1", "created_at": NOW.isoformat()},
            )

    async def test_invalid_collection_name(self, sqlite_db):
        with pytest.raises(ValueError, match="Invalid collection name"):
            await db_client.list_records(collection="tasks; DROP TABLE users")


@pytest.mark.integration
class TestRepositoriesOnSqlite:
    """Services running over the real store."""

    async def test_seed_and_login(self, sqlite_repos):
        await bootstrap_service.seed_categories(repos=sqlite_repos)
        await bootstrap_service.seed_demo_staff(repos=sqlite_repos, password="pw")

        user = await user_service.authenticate(repos=sqlite_repos, name="JOÃO SILVA", password="pw")

        assert user.role == UserRole.ZELADOR
        assert user.active is True

    async def test_task_lifecycle_round_trips(self, sqlite_repos):
        await bootstrap_service.seed_demo_staff(repos=sqlite_repos, password="pw")
        manager = await sqlite_repos.users.find_by_name("Mariana Costa")
        caretaker = await sqlite_repos.users.find_by_name("João Silva")

        [task] = await task_service.create_tasks(
            repos=sqlite_repos,
            actor=manager,
            condo_id=manager.condo_id,
            title="Clean the pool",
            scheduled_dates=[NOW],
            frequency=TaskFrequency.WEEKLY,
            assigned_to=caretaker.id,
            photos=["data:ref"],
        )
        await task_service.start_task(repos=sqlite_repos, actor=caretaker, condo_id=task.condo_id, task_id=task.id)
        await task_service.complete_task(
            repos=sqlite_repos,
            actor=caretaker,
            condo_id=task.condo_id,
            task_id=task.id,
            photos=["data:after"],
            now=NOW,
        )

        stored = await sqlite_repos.tasks.get(task.id)
        assert stored.status == TaskStatus.COMPLETED
        assert stored.photos == ["data:ref", "data:after"]
        assert stored.completed_at == NOW
        assert stored.scheduled_for == NOW

        history = await task_service.list_history(repos=sqlite_repos, condo_id=manager.condo_id)
        assert [item.id for item in history] == [task.id]

    async def test_budget_items_round_trip(self, sqlite_repos):
        await bootstrap_service.seed_demo_staff(repos=sqlite_repos, password="pw")
        manager = await sqlite_repos.users.find_by_name("Mariana Costa")

        budget = await budget_service.create_budget(
            repos=sqlite_repos,
            actor=manager,
            condo_id=manager.condo_id,
            title="Pump",
            items=[BudgetItemCreate(description="Pump", quantity=2, unit_price=300)],
        )

        stored = await sqlite_repos.budgets.get(budget.id)
        assert stored.value == 600
        assert stored.items[0].description == "Pump"

    async def test_log_pruning(self, sqlite_repos, monkeypatch):
        monkeypatch.setattr(constants, "ACTIVITY_LOG_MAX_ENTRIES", 2)
        await bootstrap_service.seed_demo_staff(repos=sqlite_repos, password="pw")
        manager = await sqlite_repos.users.find_by_name("Mariana Costa")

        for title in ("A", "B", "C"):
            await budget_service.create_budget(
                repos=sqlite_repos, actor=manager, condo_id=manager.condo_id, title=title
            )

        logs = await sqlite_repos.logs.list_all()
        assert [entry.target_name for entry in logs] == ["B", "C"]
