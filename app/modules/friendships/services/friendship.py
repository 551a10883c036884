from typing import List, Optional
import uuid
import logging
from sqlalchemy.orm import Session
from sqlalchemy import and_, or_

from app.core.exceptions import BadRequestError, NotFoundError, PermissionDeniedError
from app.modules.friendships.models.friendship import FriendRequest
from app.modules.friendships.schemas.friendship import FriendRequestStatus
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import get_user, get_users_by_ids

logger = logging.getLogger(__name__)

def _between(user_id: str, other_id: str):
    """Filter matching a request between two users in either direction"""
    return or_(
        and_(FriendRequest.sender_id == user_id, FriendRequest.receiver_id == other_id),
        and_(FriendRequest.sender_id == other_id, FriendRequest.receiver_id == user_id),
    )

def get_friend_request(db: Session, sender_id: str, receiver_id: str) -> Optional[FriendRequest]:
    """Get friend request by sender and receiver IDs"""
    return db.query(FriendRequest).filter(
        FriendRequest.sender_id == sender_id,
        FriendRequest.receiver_id == receiver_id,
    ).first()

def get_friend_request_by_id(db: Session, request_id: str) -> Optional[FriendRequest]:
    """Get friend request by ID"""
    return db.query(FriendRequest).filter(FriendRequest.id == request_id).first()

def get_pending_requests(db: Session, user_id: str) -> List[FriendRequest]:
    """Get pending requests received by a user, newest first"""
    return (
        db.query(FriendRequest)
        .filter(
            FriendRequest.receiver_id == user_id,
            FriendRequest.status == FriendRequestStatus.PENDING.value,
        )
        .order_by(FriendRequest.created_at.desc())
        .all()
    )

def are_friends(db: Session, user_id: str, other_id: str) -> bool:
    """Check if two users share an accepted friend request"""
    if user_id == other_id:
        return False
    return db.query(FriendRequest.id).filter(
        _between(user_id, other_id),
        FriendRequest.status == FriendRequestStatus.ACCEPTED.value,
    ).first() is not None

def send_friend_request(db: Session, sender_id: str, receiver_id: str) -> FriendRequest:
    """
    Send a friend request.

    A pending request in the opposite direction is accepted instead of
    creating a second one. Re-sending returns the existing request, and a
    previously rejected request goes back to PENDING.
    """
    if sender_id == receiver_id:
        raise BadRequestError("You cannot send a friend request to yourself")
    if not get_user(db, receiver_id):
        raise NotFoundError("User not found")
    if are_friends(db, sender_id, receiver_id):
        raise BadRequestError("You are already friends")

    reverse_request = get_friend_request(db, receiver_id, sender_id)
    if reverse_request and reverse_request.status == FriendRequestStatus.PENDING.value:
        reverse_request.status = FriendRequestStatus.ACCEPTED.value
        db.commit()
        db.refresh(reverse_request)
        logger.info(f"Accepted reverse friend request {reverse_request.id}: {sender_id} <-> {receiver_id}")
        return reverse_request

    existing_request = get_friend_request(db, sender_id, receiver_id)
    if existing_request:
        if existing_request.status == FriendRequestStatus.REJECTED.value:
            existing_request.status = FriendRequestStatus.PENDING.value
            db.commit()
            db.refresh(existing_request)
        return existing_request

    friend_request = FriendRequest(
        id=str(uuid.uuid4()),
        sender_id=sender_id,
        receiver_id=receiver_id,
        status=FriendRequestStatus.PENDING.value,
    )
    db.add(friend_request)
    db.commit()
    db.refresh(friend_request)
    return friend_request

def respond_to_friend_request(
    db: Session, request_id: str, user_id: str, new_status: FriendRequestStatus
) -> FriendRequest:
    """Accept or reject a pending request addressed to user_id"""
    friend_request = get_friend_request_by_id(db, request_id)
    if not friend_request:
        raise NotFoundError("Friend request not found")
    if friend_request.receiver_id != user_id:
        raise PermissionDeniedError("Only the receiver can respond to a friend request")
    if friend_request.status != FriendRequestStatus.PENDING.value:
        raise BadRequestError("Friend request has already been answered")

    friend_request.status = new_status.value
    db.commit()
    db.refresh(friend_request)
    logger.info(f"Friend request {request_id} marked {new_status.value}")
    return friend_request

def get_friends(db: Session, user_id: str) -> List[User]:
    """Get a user's confirmed friends"""
    requests = db.query(FriendRequest).filter(
        or_(FriendRequest.sender_id == user_id, FriendRequest.receiver_id == user_id),
        FriendRequest.status == FriendRequestStatus.ACCEPTED.value,
    ).all()

    friend_ids = {
        r.receiver_id if r.sender_id == user_id else r.sender_id
        for r in requests
    }
    return get_users_by_ids(db, list(friend_ids))

def remove_friend(db: Session, user_id: str, friend_id: str) -> None:
    """Remove a friendship along with every request between the two users"""
    if not are_friends(db, user_id, friend_id):
        raise NotFoundError("Friendship not found")

    db.query(FriendRequest).filter(_between(user_id, friend_id)).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Removed friendship: {user_id} <-> {friend_id}")
