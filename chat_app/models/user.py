from sqlalchemy import Column, Integer, String, Boolean, DateTime
from datetime import datetime

from chat_app.database import Base

USERNAME_MAX_LENGTH = 50


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    # Unique and case-sensitive: "Alice" and "alice" are different users
    username = Column(String(USERNAME_MAX_LENGTH), unique=True, index=True, nullable=False)
    is_online = Column(Boolean, default=True, nullable=False)
    last_seen = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<User {self.id} {self.username}>"
