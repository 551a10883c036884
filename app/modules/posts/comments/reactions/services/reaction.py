from typing import Optional
import uuid
import logging
from sqlalchemy.orm import Session
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictError, NotFoundError, PermissionDeniedError
from app.modules.friendships.services.friendship import are_friends
from app.modules.notifications.services.notification_events import create_comment_like_notification
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.comments.reactions.models.reaction import CommentReaction
from app.modules.posts.comments.reactions.schemas.reaction import (
    CommentReactionCounts, CommentReactionResponse, CommentReactionType
)
from app.modules.posts.comments.services.comment import get_comment
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import get_user

logger = logging.getLogger(__name__)

def get_comment_reaction(db: Session, user_id: str, comment_id: str) -> Optional[CommentReaction]:
    """Get reaction by user ID and comment ID"""
    return (
        db.query(CommentReaction)
        .filter(CommentReaction.user_id == user_id, CommentReaction.comment_id == comment_id)
        .first()
    )

def _build_response(
    reaction: Optional[CommentReaction], comment_id: str, user: User
) -> CommentReactionResponse:
    return CommentReactionResponse(
        id=reaction.id if reaction else None,
        comment_id=comment_id,
        user_id=user.id,
        reaction_type=reaction.reaction_type if reaction else None,
        user_email=user.email,
        user_full_name=user.full_name,
        created_at=reaction.created_at if reaction else None,
        updated_at=reaction.updated_at if reaction else None,
    )

def _notify_if_like(db: Session, comment: Comment, user_id: str, reaction_type: CommentReactionType) -> None:
    if reaction_type == CommentReactionType.LIKE:
        create_comment_like_notification(db, comment.author_id, user_id, comment.post_id)

def react_to_comment(
    db: Session, comment_id: str, user_id: str, reaction_type: CommentReactionType
) -> CommentReactionResponse:
    """
    Add, change or remove the user's reaction to a comment.

    Same toggle rules as post reactions. The comment author is notified
    whenever the stored reaction becomes a LIKE, whether it was just
    created or switched over from DISLIKE.
    """
    comment = get_comment(db, comment_id)
    if not comment:
        raise NotFoundError("Comment not found")

    user = get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    if comment.author_id != user_id and not are_friends(db, user_id, comment.author_id):
        raise PermissionDeniedError("You can only react to comments from your friends")

    existing_reaction = get_comment_reaction(db, user_id, comment_id)

    if existing_reaction:
        if existing_reaction.reaction_type == reaction_type.value:
            db.delete(existing_reaction)
            db.commit()
            logger.info(f"User {user_id} removed {reaction_type.value} from comment {comment_id}")
            return _build_response(None, comment_id, user)

        existing_reaction.reaction_type = reaction_type.value
        db.commit()
        db.refresh(existing_reaction)
        logger.info(f"User {user_id} changed reaction on comment {comment_id} to {reaction_type.value}")
        _notify_if_like(db, comment, user_id, reaction_type)
        return _build_response(existing_reaction, comment_id, user)

    reaction = CommentReaction(
        id=str(uuid.uuid4()),
        comment_id=comment_id,
        user_id=user_id,
        reaction_type=reaction_type.value,
    )
    db.add(reaction)
    try:
        db.commit()
    except IntegrityError:
        # Another request created this user's reaction first
        db.rollback()
        logger.warning(f"Concurrent reaction by user {user_id} on comment {comment_id}")
        raise ConflictError("Reaction was changed by another request, please retry")
    db.refresh(reaction)
    logger.info(f"User {user_id} reacted {reaction_type.value} to comment {comment_id}")

    _notify_if_like(db, comment, user_id, reaction_type)

    return _build_response(reaction, comment_id, user)

def remove_comment_reaction(db: Session, comment_id: str, user_id: str) -> None:
    """Remove the user's reaction from a comment"""
    reaction = get_comment_reaction(db, user_id, comment_id)
    if not reaction:
        raise NotFoundError("Reaction not found")

    db.delete(reaction)
    db.commit()

def get_comment_reaction_counts(db: Session, comment_id: str) -> CommentReactionCounts:
    """Get like and dislike counts for a comment"""
    if not get_comment(db, comment_id):
        raise NotFoundError("Comment not found")

    rows = dict(
        db.query(CommentReaction.reaction_type, func.count(CommentReaction.id))
        .filter(CommentReaction.comment_id == comment_id)
        .group_by(CommentReaction.reaction_type)
        .all()
    )

    return CommentReactionCounts(
        comment_id=comment_id,
        like_count=rows.get(CommentReactionType.LIKE.value, 0),
        dislike_count=rows.get(CommentReactionType.DISLIKE.value, 0),
    )

def get_user_comment_reaction(db: Session, comment_id: str, user_id: str) -> Optional[str]:
    """Get the type of the user's reaction to a comment, None if there is none"""
    reaction = get_comment_reaction(db, user_id, comment_id)
    return reaction.reaction_type if reaction else None
