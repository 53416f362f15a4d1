from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from datetime import datetime
from typing import List, Optional
import logging

from chat_app.exceptions import DuplicateUsername, ValidationError
from chat_app.models.user import User, USERNAME_MAX_LENGTH

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, username: str) -> User:
    """Register a new user. New users start online.

    The username is stored exactly as sent; it only has to contain something
    besides whitespace.
    """
    if not username or not username.strip():
        raise ValidationError("Username is required")
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(
            f"Username must be at most {USERNAME_MAX_LENGTH} characters"
        )

    if get_user_by_username(db, username):
        raise DuplicateUsername(username)

    db_user = User(username=username, is_online=True, last_seen=datetime.utcnow())
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        # Another request registered the same name between the check and the insert
        db.rollback()
        raise DuplicateUsername(username)
    db.refresh(db_user)
    logger.info(f"User created: {db_user.id} ({db_user.username})")
    return db_user


def update_online_status(db: Session, user_id: int, is_online: bool) -> bool:
    """Flip the presence flag and refresh last_seen.

    Unknown users are ignored and reported with False.
    """
    db_user = get_user(db, user_id)
    if not db_user:
        logger.debug(f"Status update for unknown user {user_id} ignored")
        return False

    db_user.is_online = is_online
    db_user.last_seen = datetime.utcnow()
    db.commit()
    return True


def get_online_users(db: Session) -> List[User]:
    return db.query(User).filter(User.is_online == True).all()
