"""Unit tests for user_service module."""

import pytest

from src.domain.update_models import UserUpdate
from src.domain.user import UserRole
from src.services import user_service


PASSWORD = "secret123"


@pytest.mark.unit
class TestPasswords:
    """Tests for hash_password and verify_password."""

    def test_round_trip(self):
        stored = user_service.hash_password("s3cret")

        assert stored.startswith("pbkdf2_sha256$")
        assert user_service.verify_password("s3cret", stored)
        assert not user_service.verify_password("wrong", stored)

    def test_salts_differ(self):
        assert user_service.hash_password("same") != user_service.hash_password("same")

    @pytest.mark.parametrize("stored", ["", "plain", "md5$1$salt$abc", "pbkdf2_sha256$many$salt$abc"])
    def test_malformed_hash_never_matches(self, stored):
        assert not user_service.verify_password("anything", stored)


@pytest.mark.unit
class TestAuthenticate:
    """Tests for authenticate."""

    async def test_login_is_case_insensitive(self, repos, caretaker):
        user = await user_service.authenticate(repos=repos, name="  joão silva ", password=PASSWORD)

        assert user.id == caretaker.id

    async def test_wrong_password(self, repos, caretaker):
        with pytest.raises(PermissionError, match="Invalid username or password"):
            await user_service.authenticate(repos=repos, name="João Silva", password="nope")

    async def test_unknown_user(self, repos, caretaker):
        with pytest.raises(PermissionError):
            await user_service.authenticate(repos=repos, name="Nobody Here", password=PASSWORD)

    async def test_inactive_user_cannot_log_in(self, repos, caretaker):
        await repos.users.update(caretaker.id, {"active": False})

        with pytest.raises(PermissionError):
            await user_service.authenticate(repos=repos, name="João Silva", password=PASSWORD)

    async def test_short_name(self, repos):
        with pytest.raises(ValueError, match="at least 3"):
            await user_service.authenticate(repos=repos, name="ab", password=PASSWORD)


@pytest.mark.unit
class TestRegisterOwner:
    """Tests for register_owner."""

    async def test_creates_building_manager(self, repos):
        user = await user_service.register_owner(repos=repos, name="Helena Prado", password="pw")

        assert user.role == UserRole.SINDICO
        assert user.condo_id is None
        assert user.active

    async def test_duplicate_name(self, repos, manager):
        with pytest.raises(ValueError, match="already exists"):
            await user_service.register_owner(repos=repos, name="MARIANA COSTA", password="pw")

    async def test_empty_password(self, repos):
        with pytest.raises(ValueError, match="Password"):
            await user_service.register_owner(repos=repos, name="Helena Prado", password="")


@pytest.mark.unit
class TestTeamManagement:
    """Tests for create, update, toggle and delete."""

    async def test_create_user(self, repos, manager, condo):
        user = await user_service.create_user(
            repos=repos,
            actor=manager,
            name="Paulo Lima",
            password="pw",
            role=UserRole.PORTEIRO,
            condo_id=condo.id,
            job_title="Night doorman",
        )

        assert user.job_title == "Night doorman"
        assert user_service.verify_password("pw", user.password_hash)

    async def test_caretaker_cannot_create(self, repos, caretaker, condo):
        with pytest.raises(PermissionError):
            await user_service.create_user(
                repos=repos,
                actor=caretaker,
                name="Paulo Lima",
                password="pw",
                role=UserRole.PORTEIRO,
                condo_id=condo.id,
            )

    async def test_update_rehashes_password(self, repos, manager, caretaker):
        updated = await user_service.update_user(
            repos=repos,
            actor=manager,
            user_id=caretaker.id,
            changes=UserUpdate(password="new-pass", job_title="Head caretaker"),
        )

        assert updated.job_title == "Head caretaker"
        assert user_service.verify_password("new-pass", updated.password_hash)

    async def test_toggle_active(self, repos, manager, caretaker):
        toggled = await user_service.toggle_active(repos=repos, actor=manager, user_id=caretaker.id)

        assert not toggled.active

    async def test_cannot_deactivate_self(self, repos, manager):
        with pytest.raises(ValueError, match="your own account"):
            await user_service.toggle_active(repos=repos, actor=manager, user_id=manager.id)

    async def test_delete(self, repos, manager, caretaker):
        await user_service.delete_user(repos=repos, actor=manager, user_id=caretaker.id)

        with pytest.raises(KeyError):
            await user_service.get_user(repos=repos, user_id=caretaker.id)

    async def test_assignable_workers(self, repos, manager, caretaker, cleaner, condo):
        await user_service.create_user(
            repos=repos, actor=manager, name="Paulo Lima", password="pw", role=UserRole.PORTEIRO, condo_id=condo.id
        )
        await repos.users.update(cleaner.id, {"active": False})

        workers = await user_service.list_assignable_workers(repos=repos, condo_id=condo.id)

        assert [user.name for user in workers] == ["João Silva", "Mariana Costa"]
