"""
Notification events service.
This module handles the creation of notifications for various events in the application.

Every helper returns True when a notification was stored and False otherwise.
Failures are logged and never propagate: a missing notification must not
undo the reaction, comment or order update that triggered it.
"""
from typing import Optional
from sqlalchemy.orm import Session
import logging

from app.modules.notifications.services.notification import create_notification
from app.modules.notifications.schemas.notification import NotificationCreate
from app.modules.user_management.services.user import get_user

# Set up logger
logger = logging.getLogger(__name__)

def _notify(
    db: Session,
    recipient_id: str,
    actor_id: Optional[str],
    notification_type: str,
    content: str,
    related_id: Optional[str],
) -> bool:
    """Store one notification, rolling back the session if that fails"""
    try:
        create_notification(db, NotificationCreate(
            user_id=recipient_id,
            actor_id=actor_id,
            type=notification_type,
            content=content,
            related_id=related_id,
        ))
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating {notification_type} notification for user {recipient_id}: {e}")
        return False

    logger.info(f"Created {notification_type} notification for user {recipient_id} from user {actor_id}")
    return True

def _display_name(db: Session, user_id: str) -> Optional[str]:
    user = get_user(db, user_id)
    if not user:
        return None
    return user.username or user.full_name or user.email

def create_post_like_notification(db: Session, post_author_id: str, liker_id: str, post_id: str) -> bool:
    """
    Create a notification when someone reacts to a post.

    Args:
        db: Database session
        post_author_id: ID of the user who wrote the post
        liker_id: ID of the user who reacted
        post_id: ID of the post

    Returns:
        True if notification was created, False otherwise
    """
    # Don't notify if the liker is the post author
    if post_author_id == liker_id:
        logger.debug(f"User {liker_id} reacted to their own post, no notification created")
        return False

    name = _display_name(db, liker_id)
    if not name:
        logger.warning(f"User {liker_id} not found when creating like notification")
        return False

    return _notify(db, post_author_id, liker_id, "post_like", f"{name} reacted to your post", post_id)

def create_comment_like_notification(db: Session, comment_author_id: str, liker_id: str, post_id: str) -> bool:
    """
    Create a notification when someone likes a comment.

    The related entity is the post holding the comment so the client can
    open the whole thread.
    """
    if comment_author_id == liker_id:
        logger.debug(f"User {liker_id} liked their own comment, no notification created")
        return False

    name = _display_name(db, liker_id)
    if not name:
        logger.warning(f"User {liker_id} not found when creating comment like notification")
        return False

    return _notify(db, comment_author_id, liker_id, "comment_like", f"{name} liked your comment", post_id)

def create_post_comment_notification(db: Session, post_author_id: str, commenter_id: str, post_id: str) -> bool:
    """Create a notification when a post is commented on"""
    if post_author_id == commenter_id:
        logger.debug(f"User {commenter_id} commented on their own post, no notification created")
        return False

    name = _display_name(db, commenter_id)
    if not name:
        logger.warning(f"User {commenter_id} not found when creating comment notification")
        return False

    return _notify(db, post_author_id, commenter_id, "post_comment", f"{name} commented on your post", post_id)

def create_friend_request_notification(db: Session, sender_id: str, receiver_id: str, request_id: str) -> bool:
    """Create a notification when a friend request is sent"""
    name = _display_name(db, sender_id)
    if not name:
        logger.warning(f"User {sender_id} not found when creating friend request notification")
        return False

    return _notify(db, receiver_id, sender_id, "friend_request", f"{name} sent you a friend request", request_id)

def create_friend_request_accepted_notification(db: Session, accepter_id: str, requester_id: str) -> bool:
    """Create a notification when a friend request is accepted"""
    name = _display_name(db, accepter_id)
    if not name:
        logger.warning(f"User {accepter_id} not found when creating friend accepted notification")
        return False

    return _notify(db, requester_id, accepter_id, "friend_accepted", f"{name} accepted your friend request", None)

def create_order_status_notification(db: Session, customer_id: str, order_id: str, order_number: str, status: str) -> bool:
    """Tell a customer that an administrator moved their order to a new status"""
    content = f"Your order {order_number} is now {status.lower()}"
    return _notify(db, customer_id, None, "order_status", content, order_id)
