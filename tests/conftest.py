"""
Pytest configuration and fixtures.

Every test gets a fresh in-memory SQLite database shared by the test code
and the FastAPI app (through a get_db override).
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import datetime
from decimal import Decimal
import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.modules.friendships.schemas.friendship import FriendRequestStatus
from app.modules.friendships.services.friendship import respond_to_friend_request, send_friend_request
from app.modules.orders.models.order import Order
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.models.post import Post
from app.modules.user_management.schemas.user import UserCreate
from app.modules.user_management.services.user import create_user

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(username: str, is_admin: bool = False):
        return create_user(db, UserCreate(
            email=f"{username}@example.com",
            username=username,
            full_name=username.capitalize(),
            is_admin=is_admin,
        ))
    return _make_user


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def befriend(db):
    def _befriend(user, other):
        request = send_friend_request(db, user.id, other.id)
        respond_to_friend_request(db, request.id, other.id, FriendRequestStatus.ACCEPTED)
    return _befriend


@pytest.fixture
def make_post(db):
    def _make_post(author, content: str = "Hello friends"):
        post = Post(id=str(uuid.uuid4()), author_id=author.id, content=content)
        db.add(post)
        db.commit()
        db.refresh(post)
        return post
    return _make_post


@pytest.fixture
def make_comment(db):
    def _make_comment(author, post, content: str = "Nice one"):
        comment = Comment(id=str(uuid.uuid4()), author_id=author.id, post_id=post.id, content=content)
        db.add(comment)
        db.commit()
        db.refresh(comment)
        return comment
    return _make_comment


@pytest.fixture
def make_order(db):
    counter = {"n": 0}

    def _make_order(
        user,
        amount: str = "10.00",
        status: str = "PENDING",
        payment_status: str = "PENDING",
        created_at: datetime = None,
        order_number: str = None,
    ):
        counter["n"] += 1
        order = Order(
            id=str(uuid.uuid4()),
            order_number=order_number or f"ORD-20260101-{counter['n']:06d}",
            user_id=user.id,
            status=status,
            payment_status=payment_status,
            total_amount=Decimal(amount),
            items_count=1,
            created_at=created_at or datetime.utcnow(),
        )
        db.add(order)
        db.commit()
        db.refresh(order)
        return order
    return _make_order


@pytest.fixture
def auth():
    return auth_headers
