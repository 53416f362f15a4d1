"""Find-or-create for one-to-one chats.

At most one direct chat exists per unordered pair of users. The scan over the
user's chats is only a fast path: the unique ``chats.direct_key`` column is
what guarantees it when two requests race.
"""
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional
import logging

from chat_app.crud import chat as chat_crud
from chat_app.crud import user as user_crud
from chat_app.exceptions import ValidationError
from chat_app.models.chat import ChatType
from chat_app.schemas.chat import ChatWithMembers
from chat_app.services.conversation import assemble, assemble_for_user

logger = logging.getLogger(__name__)


def _find_existing(db: Session, user_id_a: int, user_id_b: int) -> Optional[ChatWithMembers]:
    for chat in assemble_for_user(db, user_id_a):
        if chat.type != ChatType.DIRECT or len(chat.members) != 2:
            continue
        if any(member.user_id == user_id_b for member in chat.members):
            return chat

    direct_key = chat_crud.direct_key_for(user_id_a, user_id_b)
    chat = chat_crud.get_chat_by_direct_key(db, direct_key)
    if chat:
        return assemble(db, chat.id, user_id_a)
    return None


def find_or_create_direct(db: Session, user_id_a: int, user_id_b: int) -> ChatWithMembers:
    """Return the direct chat between two users, creating it on first use."""
    if user_id_a == user_id_b:
        raise ValidationError("Cannot start a direct chat with yourself")
    for user_id in (user_id_a, user_id_b):
        if not user_crud.get_user(db, user_id):
            raise ValidationError(f"User {user_id} not found")

    existing = _find_existing(db, user_id_a, user_id_b)
    if existing:
        return existing

    direct_key = chat_crud.direct_key_for(user_id_a, user_id_b)
    try:
        chat = chat_crud.create_chat(
            db,
            ChatType.DIRECT,
            None,
            created_by=user_id_a,
            member_ids=[user_id_b],
        )
    except IntegrityError:
        chat = chat_crud.get_chat_by_direct_key(db, direct_key)
        if chat is None:
            raise
        logger.warning(f"Direct chat {direct_key} was created concurrently, reusing {chat.id}")

    return assemble(db, chat.id, user_id_a)
