from datetime import datetime

from chat_app.schemas.base import CamelModel
from chat_app.schemas.user import UserResponse


class MessageCreate(CamelModel):
    chat_id: int
    sender_id: int
    content: str


class MessageResponse(CamelModel):
    id: int
    chat_id: int
    sender_id: int
    content: str
    sent_at: datetime


class MessageWithSender(MessageResponse):
    sender: UserResponse
