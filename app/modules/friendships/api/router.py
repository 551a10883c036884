from typing import Any, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from app.db.session import get_db
from app.deps import get_current_user
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import User as UserSchema
from app.modules.friendships.schemas.friendship import (
    FriendRequest as FriendRequestSchema,
    FriendRequestCreate,
    FriendRequestStatus,
    FriendRequestUpdate,
)
from app.modules.friendships.services.friendship import (
    get_friends,
    get_pending_requests,
    remove_friend,
    respond_to_friend_request,
    send_friend_request,
)
from app.modules.notifications.services.notification_events import (
    create_friend_request_notification,
    create_friend_request_accepted_notification
)

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("", response_model=List[UserSchema])
def read_friends(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """List the current user's confirmed friends"""
    return get_friends(db, current_user.id)

@router.get("/requests", response_model=List[FriendRequestSchema])
def read_pending_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """List pending friend requests received by the current user"""
    return get_pending_requests(db, current_user.id)

@router.post("/requests", response_model=FriendRequestSchema)
def create_request(
    *,
    db: Session = Depends(get_db),
    request_in: FriendRequestCreate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Send a friend request, or accept the one the other user already sent"""
    friend_request = send_friend_request(db, current_user.id, request_in.receiver_id)

    if friend_request.status == FriendRequestStatus.ACCEPTED.value:
        create_friend_request_accepted_notification(db, current_user.id, friend_request.sender_id)
    elif friend_request.sender_id == current_user.id:
        create_friend_request_notification(db, current_user.id, friend_request.receiver_id, friend_request.id)

    return friend_request

@router.put("/requests/{request_id}", response_model=FriendRequestSchema)
def answer_request(
    *,
    db: Session = Depends(get_db),
    request_id: str,
    request_in: FriendRequestUpdate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Accept or reject a friend request"""
    friend_request = respond_to_friend_request(db, request_id, current_user.id, request_in.status)

    if friend_request.status == FriendRequestStatus.ACCEPTED.value:
        create_friend_request_accepted_notification(db, current_user.id, friend_request.sender_id)

    return friend_request

@router.delete("/{friend_id}", status_code=status.HTTP_204_NO_CONTENT)
def unfriend(
    *,
    db: Session = Depends(get_db),
    friend_id: str,
    current_user: User = Depends(get_current_user),
) -> None:
    """Remove a friend"""
    remove_friend(db, current_user.id, friend_id)
    logger.info(f"User {current_user.id} removed friend {friend_id}")
