"""Unit tests for message_service."""

import pytest

from src.services import message_service


@pytest.mark.unit
class TestPostMessage:
    """Tests for post_message."""

    async def test_broadcast(self, repos, cleaner, condo):
        message = await message_service.post_message(repos=repos, sender=cleaner, condo_id=condo.id, text=" Hello ")

        assert message.text == "Hello"
        assert message.broadcast
        assert message.recipient_id is None

    async def test_manager_can_direct_message(self, repos, manager, caretaker, condo):
        message = await message_service.post_message(
            repos=repos,
            sender=manager,
            condo_id=condo.id,
            text="Please check the pump",
            recipient_id=caretaker.id,
        )

        assert not message.broadcast
        assert message.recipient_name == "João Silva"

    async def test_staff_recipient_is_ignored(self, repos, manager, cleaner, condo):
        message = await message_service.post_message(
            repos=repos,
            sender=cleaner,
            condo_id=condo.id,
            text="Out of detergent",
            recipient_id=manager.id,
        )

        assert message.broadcast
        assert message.recipient_id is None

    async def test_blank_text_rejected(self, repos, cleaner, condo):
        with pytest.raises(ValueError, match="must not be empty"):
            await message_service.post_message(repos=repos, sender=cleaner, condo_id=condo.id, text="   ")

    async def test_unknown_recipient(self, repos, manager, condo):
        with pytest.raises(KeyError):
            await message_service.post_message(
                repos=repos, sender=manager, condo_id=condo.id, text="Hi", recipient_id="9999"
            )


@pytest.mark.unit
class TestReadAndDelete:
    """Tests for list_messages and delete_message."""

    @pytest.fixture
    async def board(self, repos, manager, caretaker, cleaner, condo):
        broadcast = await message_service.post_message(repos=repos, sender=manager, condo_id=condo.id, text="All")
        direct = await message_service.post_message(
            repos=repos, sender=manager, condo_id=condo.id, text="Only you", recipient_id=caretaker.id
        )
        return broadcast, direct

    async def test_direct_message_visibility(self, repos, manager, caretaker, cleaner, condo, board):
        broadcast, direct = board

        for_caretaker = await message_service.list_messages(repos=repos, viewer=caretaker, condo_id=condo.id)
        for_cleaner = await message_service.list_messages(repos=repos, viewer=cleaner, condo_id=condo.id)
        for_manager = await message_service.list_messages(repos=repos, viewer=manager, condo_id=condo.id)

        assert {item.id for item in for_caretaker} == {broadcast.id, direct.id}
        assert [item.id for item in for_cleaner] == [broadcast.id]
        assert {item.id for item in for_manager} == {broadcast.id, direct.id}

    async def test_only_managers_delete(self, repos, manager, cleaner, condo, board):
        broadcast, _ = board

        with pytest.raises(PermissionError):
            await message_service.delete_message(repos=repos, actor=cleaner, condo_id=condo.id, message_id=broadcast.id)

        await message_service.delete_message(repos=repos, actor=manager, condo_id=condo.id, message_id=broadcast.id)
        remaining = await message_service.list_messages(repos=repos, viewer=manager, condo_id=condo.id)
        assert broadcast.id not in {item.id for item in remaining}

    async def test_message_of_another_condominium_is_kept(self, repos, manager, board):
        broadcast, _ = board

        with pytest.raises(KeyError):
            await message_service.delete_message(
                repos=repos, actor=manager, condo_id="elsewhere", message_id=broadcast.id
            )

        assert (await repos.messages.get(broadcast.id)).id == broadcast.id
