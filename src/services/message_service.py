"""Message board: condominium-wide broadcasts and manager direct messages."""

import logging

from src.core.clock import utc_now
from src.core.logging import span
from src.core.permissions import Capability, has_capability, require_capability
from src.core.repository import Repositories
from src.domain.message import Message
from src.domain.user import User


logger = logging.getLogger(__name__)


async def post_message(
    *,
    repos: Repositories,
    sender: User,
    condo_id: str,
    text: str,
    recipient_id: str | None = None,
) -> Message:
    """Post to the board.

    Only roles allowed to direct-message may address a single recipient;
    everyone else always broadcasts, whatever recipient they name.

    Raises:
        ValueError: If the text is blank
        KeyError: If the recipient does not exist
    """
    with span("message_service.post_message"):
        text = text.strip()
        if not text:
            msg = "Message must not be empty"
            raise ValueError(msg)

        recipient: User | None = None
        if recipient_id and has_capability(sender.role, Capability.DIRECT_MESSAGE):
            recipient = await repos.users.get(recipient_id)
        elif recipient_id:
            logger.info("Sender %s cannot direct-message; posting as broadcast", sender.id)

        message = await repos.messages.create(
            {
                "sender_id": sender.id,
                "sender_name": sender.name,
                "recipient_id": recipient.id if recipient else None,
                "recipient_name": recipient.name if recipient else None,
                "text": text,
                "timestamp": utc_now(),
                "condo_id": condo_id,
                "broadcast": recipient is None,
            }
        )
        logger.info("Message %s posted by %s", message.id, sender.id)
        return message


def can_read(message: Message, viewer: User) -> bool:
    """Broadcasts are public; direct messages only to their two ends and to managers."""
    if message.broadcast or has_capability(viewer.role, Capability.DIRECT_MESSAGE):
        return True
    return viewer.id in (message.sender_id, message.recipient_id)


async def list_messages(*, repos: Repositories, viewer: User, condo_id: str) -> list[Message]:
    """Messages the viewer may read, oldest first (chat order)."""
    with span("message_service.list_messages"):
        messages = await repos.messages.list_by_condo(condo_id)
        readable = [message for message in messages if can_read(message, viewer)]
        return sorted(readable, key=lambda message: message.timestamp)


async def delete_message(*, repos: Repositories, actor: User, condo_id: str, message_id: str) -> None:
    with span("message_service.delete_message"):
        require_capability(actor, Capability.DELETE_MESSAGES)
        await repos.messages.get_in_condo(message_id, condo_id)
        await repos.messages.delete(message_id)
        logger.info("Message %s deleted by %s", message_id, actor.id)
