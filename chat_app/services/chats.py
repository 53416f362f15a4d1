from sqlalchemy.orm import Session
from typing import Iterable, Optional

from chat_app.crud import chat as chat_crud
from chat_app.crud import user as user_crud
from chat_app.exceptions import ValidationError
from chat_app.models.chat import ChatType
from chat_app.schemas.chat import ChatWithMembers
from chat_app.services.conversation import assemble
from chat_app.services.direct_chat import find_or_create_direct


def create_chat_with_members(
    db: Session,
    chat_type: ChatType,
    name: Optional[str],
    created_by: int,
    member_ids: Optional[Iterable[int]] = None,
) -> ChatWithMembers:
    """
    Create a chat and its initial members.

    Direct chats go through find_or_create_direct so that a pair never ends
    up with two of them; they need exactly one member besides the creator.
    """
    others = [m for m in dict.fromkeys(member_ids or []) if m != created_by]

    if chat_type == ChatType.DIRECT:
        if len(others) != 1:
            raise ValidationError("A direct chat needs exactly one other member")
        return find_or_create_direct(db, created_by, others[0])

    for member_id in others:
        if not user_crud.get_user(db, member_id):
            raise ValidationError(f"User {member_id} not found")

    chat = chat_crud.create_chat(db, chat_type, name, created_by, member_ids=others)
    return assemble(db, chat.id, created_by)
