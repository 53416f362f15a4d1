from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Enum
from datetime import datetime
import enum

from chat_app.database import Base


class ChatType(str, enum.Enum):
    DIRECT = "direct"
    GROUP = "group"


class Chat(Base):
    __tablename__ = "chats"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=True)  # None for direct chats
    type = Column(Enum(ChatType), nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # "<low_user_id>:<high_user_id>" for direct chats, NULL for groups.
    # The unique index is what guarantees one direct chat per pair.
    direct_key = Column(String, unique=True, nullable=True)

    # Shared playback display fields for music rooms
    current_song = Column(String, nullable=True)
    song_url = Column(String, nullable=True)
    is_playing = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<Chat {self.id} {self.type.value if self.type else None}>"
