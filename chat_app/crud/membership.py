"""Chat membership: the many-to-many edge between chats and users."""
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List, Optional, Tuple
import logging

from chat_app.exceptions import ValidationError
from chat_app.models.chat import Chat, ChatType
from chat_app.models.chat_member import ChatMember
from chat_app.models.user import User

logger = logging.getLogger(__name__)


def get_membership(db: Session, chat_id: int, user_id: int) -> Optional[ChatMember]:
    return (
        db.query(ChatMember)
        .filter(ChatMember.chat_id == chat_id, ChatMember.user_id == user_id)
        .first()
    )


def is_member(db: Session, chat_id: int, user_id: int) -> bool:
    return get_membership(db, chat_id, user_id) is not None


def add_member(db: Session, chat_id: int, user_id: int) -> ChatMember:
    """Add a user to a chat. Adding an existing member returns the existing row."""
    chat = db.query(Chat).filter(Chat.id == chat_id).first()
    if not chat:
        raise ValidationError(f"Chat {chat_id} not found")
    if not db.query(User).filter(User.id == user_id).first():
        raise ValidationError(f"User {user_id} not found")

    existing = get_membership(db, chat_id, user_id)
    if existing:
        return existing

    if chat.type == ChatType.DIRECT:
        raise ValidationError("Direct chats cannot have more than two members")

    member = ChatMember(chat_id=chat_id, user_id=user_id)
    db.add(member)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = get_membership(db, chat_id, user_id)
        if existing is None:
            raise
        logger.warning(f"User {user_id} joined chat {chat_id} concurrently")
        return existing
    db.refresh(member)
    logger.info(f"User {user_id} added to chat {chat_id}")
    return member


def get_members(db: Session, chat_id: int) -> List[Tuple[ChatMember, User]]:
    """
    Members of a chat with their users, in join order.

    Rows whose user no longer exists are left out by the inner join.
    """
    return (
        db.query(ChatMember, User)
        .join(User, User.id == ChatMember.user_id)
        .filter(ChatMember.chat_id == chat_id)
        .order_by(ChatMember.id.asc())
        .all()
    )


def get_chat_ids_for_user(db: Session, user_id: int) -> List[int]:
    rows = (
        db.query(ChatMember.chat_id)
        .filter(ChatMember.user_id == user_id)
        .order_by(ChatMember.id.asc())
        .all()
    )
    return [row.chat_id for row in rows]
