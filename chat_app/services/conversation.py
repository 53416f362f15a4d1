"""Assembles the ChatWithMembers read model returned by the chat endpoints."""
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from chat_app.crud import chat as chat_crud
from chat_app.crud import membership as membership_crud
from chat_app.crud import message as message_crud
from chat_app.models.message import Message
from chat_app.models.user import User
from chat_app.schemas.chat import ChatMemberWithUser, ChatResponse, ChatWithMembers
from chat_app.schemas.message import MessageWithSender
from chat_app.schemas.user import UserResponse

logger = logging.getLogger(__name__)


def get_unread_count(db: Session, chat_id: int, user_id: Optional[int] = None) -> int:
    # No read state is stored; a per-user last_read_at table would be needed.
    return 0


def to_message_with_sender(message: Message, sender: User) -> MessageWithSender:
    return MessageWithSender(
        id=message.id,
        chat_id=message.chat_id,
        sender_id=message.sender_id,
        content=message.content,
        sent_at=message.sent_at,
        sender=UserResponse.model_validate(sender),
    )


def assemble(
    db: Session, chat_id: int, user_id: Optional[int] = None
) -> Optional[ChatWithMembers]:
    """
    Build the chat projection: chat fields, resolved members, latest message.

    Args:
        db: Database session
        chat_id: Chat to assemble
        user_id: Viewer, used for the unread count

    Returns:
        The projection, or None if the chat does not exist
    """
    chat = chat_crud.get_chat(db, chat_id)
    if not chat:
        return None

    members = [
        ChatMemberWithUser(
            id=member.id,
            chat_id=member.chat_id,
            user_id=member.user_id,
            joined_at=member.joined_at,
            user=UserResponse.model_validate(user),
        )
        for member, user in membership_crud.get_members(db, chat_id)
    ]

    recent = message_crud.get_recent_messages(db, chat_id, limit=1)
    last_message = to_message_with_sender(*recent[0]) if recent else None

    chat_data = ChatResponse.model_validate(chat).model_dump()
    return ChatWithMembers(
        **chat_data,
        members=members,
        last_message=last_message,
        unread_count=get_unread_count(db, chat_id, user_id),
    )


def assemble_for_user(db: Session, user_id: int) -> List[ChatWithMembers]:
    """Every chat the user belongs to, in join order. Chats that cannot be assembled are skipped."""
    chats = []
    for chat_id in membership_crud.get_chat_ids_for_user(db, user_id):
        chat = assemble(db, chat_id, user_id)
        if chat is None:
            logger.debug(f"Chat {chat_id} of user {user_id} no longer exists, skipped")
            continue
        chats.append(chat)
    return chats
