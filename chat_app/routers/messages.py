from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from chat_app.database import get_db
from chat_app.crud import message as message_crud
from chat_app.exceptions import ChatError
from chat_app.schemas.message import MessageCreate, MessageResponse

router = APIRouter()


@router.post("", response_model=MessageResponse)
def create_message(message: MessageCreate, db: Session = Depends(get_db)):
    try:
        return message_crud.create_message(
            db,
            chat_id=message.chat_id,
            sender_id=message.sender_id,
            content=message.content,
        )
    except ChatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{message_id}", response_model=MessageResponse)
def read_message(message_id: int, db: Session = Depends(get_db)):
    db_message = message_crud.get_message(db, message_id)
    if db_message is None:
        raise HTTPException(status_code=404, detail="Message not found")
    return db_message
