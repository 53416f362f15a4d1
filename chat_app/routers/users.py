from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import logging

from chat_app.database import get_db
from chat_app.crud import user as user_crud
from chat_app.exceptions import ChatError
from chat_app.schemas.chat import ChatWithMembers
from chat_app.schemas.user import UserCreate, UserResponse, UserStatusUpdate
from chat_app.services.conversation import assemble_for_user

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("", response_model=UserResponse)
def create_user(user: UserCreate, db: Session = Depends(get_db)):
    try:
        return user_crud.create_user(db, user.username)
    except ChatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/online", response_model=List[UserResponse])
def read_online_users(db: Session = Depends(get_db)):
    return user_crud.get_online_users(db)


@router.get("/{user_id}", response_model=UserResponse)
def read_user(user_id: int, db: Session = Depends(get_db)):
    db_user = user_crud.get_user(db, user_id)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user


@router.put("/{user_id}/status")
def update_user_status(
    user_id: int, payload: UserStatusUpdate, db: Session = Depends(get_db)
):
    """
    Presence heartbeat. Unknown users are acknowledged as well.
    """
    updated = user_crud.update_online_status(db, user_id, payload.is_online)
    if not updated:
        logger.info(f"Heartbeat for unknown user {user_id}")
    return {"success": True}


@router.get("/{user_id}/chats", response_model=List[ChatWithMembers])
def read_user_chats(user_id: int, db: Session = Depends(get_db)):
    return assemble_for_user(db, user_id)
