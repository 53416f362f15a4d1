from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Iterable, Optional
import logging

from chat_app.crud import user as user_crud
from chat_app.exceptions import ValidationError
from chat_app.models.chat import Chat, ChatType
from chat_app.models.chat_member import ChatMember
from chat_app.schemas.chat import PlaybackUpdate

logger = logging.getLogger(__name__)


def direct_key_for(user_id_a: int, user_id_b: int) -> str:
    low, high = sorted((user_id_a, user_id_b))
    return f"{low}:{high}"


def get_chat(db: Session, chat_id: int) -> Optional[Chat]:
    return db.query(Chat).filter(Chat.id == chat_id).first()


def get_chat_by_direct_key(db: Session, direct_key: str) -> Optional[Chat]:
    return db.query(Chat).filter(Chat.direct_key == direct_key).first()


def create_chat(
    db: Session,
    chat_type: ChatType,
    name: Optional[str],
    created_by: int,
    member_ids: Iterable[int] = (),
) -> Chat:
    """
    Create a chat with its creator as first member.

    Extra member ids are added in the same transaction. Callers validate that
    they exist. A direct chat takes exactly one member besides the creator and
    gets the pair's direct_key; raises IntegrityError when the pair already
    has one.
    """
    if not user_crud.get_user(db, created_by):
        raise ValidationError(f"User {created_by} not found")

    others = [m for m in dict.fromkeys(member_ids) if m != created_by]
    direct_key = None
    if chat_type == ChatType.GROUP:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Group chats need a name")
    else:
        if len(others) != 1:
            raise ValidationError("A direct chat needs exactly one other member")
        name = None
        direct_key = direct_key_for(created_by, others[0])

    db_chat = Chat(
        name=name,
        type=chat_type,
        created_by=created_by,
        direct_key=direct_key,
    )
    db.add(db_chat)
    try:
        db.flush()
        db.add(ChatMember(chat_id=db_chat.id, user_id=created_by))
        for member_id in others:
            db.add(ChatMember(chat_id=db_chat.id, user_id=member_id))
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    db.refresh(db_chat)
    logger.info(
        f"Chat created: {db_chat.id} | type={chat_type.value} | created_by={created_by}"
    )
    return db_chat


def update_playback(
    db: Session, chat_id: int, playback: PlaybackUpdate
) -> Optional[Chat]:
    """Set the shared playback fields of a group chat. Only fields sent are changed."""
    db_chat = get_chat(db, chat_id)
    if not db_chat:
        return None
    if db_chat.type != ChatType.GROUP:
        raise ValidationError("Playback is only available in group chats")

    update_data = playback.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if field == "is_playing" and value is None:
            continue
        setattr(db_chat, field, value)

    db.commit()
    db.refresh(db_chat)
    return db_chat
