from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from chat_app.database import get_db
from chat_app.crud import chat as chat_crud
from chat_app.crud import membership as membership_crud
from chat_app.crud import message as message_crud
from chat_app.exceptions import ChatError
from chat_app.schemas.chat import (
    ChatCreate,
    ChatMemberAdd,
    ChatWithMembers,
    DirectChatCreate,
    PlaybackUpdate,
)
from chat_app.schemas.message import MessageWithSender
from chat_app.services.chats import create_chat_with_members
from chat_app.services.conversation import assemble, to_message_with_sender
from chat_app.services.direct_chat import find_or_create_direct

router = APIRouter()


@router.post("", response_model=ChatWithMembers)
def create_chat(chat: ChatCreate, db: Session = Depends(get_db)):
    try:
        return create_chat_with_members(
            db,
            chat_type=chat.type,
            name=chat.name,
            created_by=chat.created_by,
            member_ids=chat.member_ids,
        )
    except ChatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/direct", response_model=ChatWithMembers)
def start_direct_chat(payload: DirectChatCreate, db: Session = Depends(get_db)):
    """
    Find or create the direct chat between two users. Safe to call repeatedly.
    """
    try:
        return find_or_create_direct(db, payload.user_id1, payload.user_id2)
    except ChatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{chat_id}", response_model=ChatWithMembers)
def read_chat(chat_id: int, db: Session = Depends(get_db)):
    chat = assemble(db, chat_id)
    if chat is None:
        raise HTTPException(status_code=404, detail="Chat not found")
    return chat


@router.post("/{chat_id}/members", response_model=ChatWithMembers)
def add_chat_member(
    chat_id: int, payload: ChatMemberAdd, db: Session = Depends(get_db)
):
    if chat_crud.get_chat(db, chat_id) is None:
        raise HTTPException(status_code=404, detail="Chat not found")
    try:
        membership_crud.add_member(db, chat_id, payload.user_id)
    except ChatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return assemble(db, chat_id)


@router.put("/{chat_id}/playback", response_model=ChatWithMembers)
def update_playback(
    chat_id: int, playback: PlaybackUpdate, db: Session = Depends(get_db)
):
    try:
        db_chat = chat_crud.update_playback(db, chat_id, playback)
    except ChatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if db_chat is None:
        raise HTTPException(status_code=404, detail="Chat not found")
    return assemble(db, chat_id)


@router.get("/{chat_id}/messages", response_model=List[MessageWithSender])
def read_chat_messages(
    chat_id: int,
    limit: int = message_crud.DEFAULT_MESSAGE_LIMIT,
    db: Session = Depends(get_db),
):
    try:
        rows = message_crud.get_recent_messages(db, chat_id, limit=limit)
    except ChatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return [to_message_with_sender(message, sender) for message, sender in rows]
