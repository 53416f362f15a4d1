"""
Shared pytest configuration
"""
import os

# Keep the application engine off the filesystem; tests use their own engine below
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from chat_app.database import Base, get_db

# Import every model so that create_all knows about all tables
from chat_app.models.user import User
from chat_app.models.chat import Chat
from chat_app.models.chat_member import ChatMember
from chat_app.models.message import Message
from chat_app.crud import user as user_crud


# In-memory database for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    """Create the test database and drop it afterwards"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def override_get_db(db):
    """get_db override for tests"""
    def _get_db():
        try:
            yield db
        finally:
            pass
    return _get_db


@pytest.fixture
def client(override_get_db):
    """API client bound to the test database"""
    from chat_app.main import app

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def alice(db):
    return user_crud.create_user(db, "alice")


@pytest.fixture
def bob(db):
    return user_crud.create_user(db, "bob")


@pytest.fixture
def carol(db):
    return user_crud.create_user(db, "carol")
