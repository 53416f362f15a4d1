"""CRUD for chat messages.

Messages are append-only. Reads return the newest N messages of a chat,
oldest first, each joined to its sender.
"""
from typing import List, Optional, Tuple
import logging
from sqlalchemy.orm import Session

from chat_app.crud import chat as chat_crud
from chat_app.crud import user as user_crud
from chat_app.exceptions import EmptyContent, ValidationError
from chat_app.models.message import Message
from chat_app.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE_LIMIT = 50
MAX_MESSAGE_LENGTH = 2000


def get_message(db: Session, message_id: int) -> Optional[Message]:
    return db.query(Message).filter(Message.id == message_id).first()


def create_message(db: Session, chat_id: int, sender_id: int, content: str) -> Message:
    """Append a message to a chat. Does not check that the sender is a member."""
    if not content or not content.strip():
        raise EmptyContent()
    if not chat_crud.get_chat(db, chat_id):
        raise ValidationError(f"Chat {chat_id} not found")
    if not user_crud.get_user(db, sender_id):
        raise ValidationError(f"User {sender_id} not found")

    msg = Message(
        chat_id=chat_id,
        sender_id=sender_id,
        content=content.strip()[:MAX_MESSAGE_LENGTH],
    )
    db.add(msg)
    db.commit()
    db.refresh(msg)
    logger.debug(f"Message {msg.id} appended to chat {chat_id} by user {sender_id}")
    return msg


def get_recent_messages(
    db: Session,
    chat_id: int,
    limit: int = DEFAULT_MESSAGE_LIMIT,
) -> List[Tuple[Message, User]]:
    """Newest `limit` messages of the chat with their senders, oldest first.

    Messages sent in the same clock tick keep insertion order. The window is
    cut first; messages in it whose sender no longer exists are then left out,
    so the result can be shorter than `limit`.
    """
    if limit < 1:
        raise ValidationError("limit must be a positive integer")

    messages = (
        db.query(Message)
        .filter(Message.chat_id == chat_id)
        .order_by(Message.sent_at.desc(), Message.id.desc())
        .limit(limit)
        .all()
    )
    messages.reverse()

    sender_ids = {msg.sender_id for msg in messages}
    senders = {}
    if sender_ids:
        senders = {
            user.id: user
            for user in db.query(User).filter(User.id.in_(sender_ids)).all()
        }

    rows = [(msg, senders[msg.sender_id]) for msg in messages if msg.sender_id in senders]
    if len(rows) != len(messages):
        logger.debug(
            f"Dropped {len(messages) - len(rows)} messages with missing senders in chat {chat_id}"
        )
    return rows
