from datetime import datetime
from typing import List, Optional

from chat_app.models.chat import ChatType
from chat_app.schemas.base import CamelModel
from chat_app.schemas.message import MessageWithSender
from chat_app.schemas.user import UserResponse


class ChatCreate(CamelModel):
    name: Optional[str] = None
    type: ChatType
    created_by: int
    member_ids: Optional[List[int]] = None


class DirectChatCreate(CamelModel):
    user_id1: int
    user_id2: int


class ChatMemberAdd(CamelModel):
    user_id: int


class PlaybackUpdate(CamelModel):
    current_song: Optional[str] = None
    song_url: Optional[str] = None
    is_playing: Optional[bool] = None


class ChatResponse(CamelModel):
    id: int
    name: Optional[str] = None
    type: ChatType
    created_by: int
    created_at: datetime
    current_song: Optional[str] = None
    song_url: Optional[str] = None
    is_playing: bool = False


class ChatMemberWithUser(CamelModel):
    id: int
    chat_id: int
    user_id: int
    joined_at: datetime
    user: UserResponse


class ChatWithMembers(ChatResponse):
    """A chat with its resolved members and latest message.

    Recomputed on every read, never stored.
    """

    members: List[ChatMemberWithUser] = []
    last_message: Optional[MessageWithSender] = None
    # Read receipts are not tracked, see conversation.get_unread_count
    unread_count: int = 0
