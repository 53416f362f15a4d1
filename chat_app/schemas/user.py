from datetime import datetime

from chat_app.schemas.base import CamelModel


class UserCreate(CamelModel):
    username: str


class UserStatusUpdate(CamelModel):
    is_online: bool


class UserResponse(CamelModel):
    id: int
    username: str
    is_online: bool
    last_seen: datetime
