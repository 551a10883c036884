from typing import List, Optional
import uuid
import logging
from sqlalchemy.orm import Session
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictError, NotFoundError, PermissionDeniedError
from app.modules.friendships.services.friendship import are_friends
from app.modules.notifications.services.notification_events import create_post_like_notification
from app.modules.posts.reactions.models.reaction import PostReaction
from app.modules.posts.reactions.schemas.reaction import (
    PostReactionType, ReactionCounts, ReactionResponse
)
from app.modules.posts.services.post import get_post
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import get_user

logger = logging.getLogger(__name__)

def get_reaction(db: Session, user_id: str, post_id: str) -> Optional[PostReaction]:
    """Get reaction by user ID and post ID"""
    return (
        db.query(PostReaction)
        .filter(PostReaction.user_id == user_id, PostReaction.post_id == post_id)
        .first()
    )

def get_reactions_by_post(db: Session, post_id: str, skip: int = 0, limit: int = 100) -> List[PostReaction]:
    """Get reactions by post ID, oldest first"""
    return (
        db.query(PostReaction)
        .filter(PostReaction.post_id == post_id)
        .order_by(PostReaction.created_at.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )

def _build_response(
    reaction: Optional[PostReaction], post_id: str, user: User
) -> ReactionResponse:
    return ReactionResponse(
        id=reaction.id if reaction else None,
        post_id=post_id,
        user_id=user.id,
        reaction_type=reaction.reaction_type if reaction else None,
        user_email=user.email,
        user_full_name=user.full_name,
        created_at=reaction.created_at if reaction else None,
        updated_at=reaction.updated_at if reaction else None,
    )

def react_to_post(
    db: Session, post_id: str, user_id: str, reaction_type: PostReactionType
) -> ReactionResponse:
    """
    Add, change or remove the user's reaction to a post.

    - no reaction yet: create it and notify the post author
    - same type again: remove it (toggle off)
    - different type: switch the stored type in place

    Only the author and the author's friends may react.
    """
    post = get_post(db, post_id)
    if not post:
        raise NotFoundError("Post not found")

    user = get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    # Authors may react to their own posts; the notification helper skips those
    if post.author_id != user_id and not are_friends(db, user_id, post.author_id):
        raise PermissionDeniedError("You can only react to posts from your friends")

    existing_reaction = get_reaction(db, user_id, post_id)

    if existing_reaction:
        if existing_reaction.reaction_type == reaction_type.value:
            db.delete(existing_reaction)
            db.commit()
            logger.info(f"User {user_id} removed {reaction_type.value} from post {post_id}")
            return _build_response(None, post_id, user)

        existing_reaction.reaction_type = reaction_type.value
        db.commit()
        db.refresh(existing_reaction)
        logger.info(f"User {user_id} changed reaction on post {post_id} to {reaction_type.value}")
        return _build_response(existing_reaction, post_id, user)

    reaction = PostReaction(
        id=str(uuid.uuid4()),
        post_id=post_id,
        user_id=user_id,
        reaction_type=reaction_type.value,
    )
    db.add(reaction)
    try:
        db.commit()
    except IntegrityError:
        # Another request created this user's reaction first
        db.rollback()
        logger.warning(f"Concurrent reaction by user {user_id} on post {post_id}")
        raise ConflictError("Reaction was changed by another request, please retry")
    db.refresh(reaction)
    logger.info(f"User {user_id} reacted {reaction_type.value} to post {post_id}")

    create_post_like_notification(db, post.author_id, user_id, post_id)

    return _build_response(reaction, post_id, user)

def remove_reaction(db: Session, post_id: str, user_id: str) -> None:
    """Remove the user's reaction from a post"""
    reaction = get_reaction(db, user_id, post_id)
    if not reaction:
        raise NotFoundError("Reaction not found")

    db.delete(reaction)
    db.commit()

def get_reaction_counts(db: Session, post_id: str) -> ReactionCounts:
    """Get reaction counts by type for a post, zero for types nobody used"""
    if not get_post(db, post_id):
        raise NotFoundError("Post not found")

    rows = (
        db.query(PostReaction.reaction_type, func.count(PostReaction.id))
        .filter(PostReaction.post_id == post_id)
        .group_by(PostReaction.reaction_type)
        .all()
    )

    counts = {reaction_type.value: 0 for reaction_type in PostReactionType}
    for reaction_type, count in rows:
        counts[reaction_type] = count

    return ReactionCounts(post_id=post_id, counts=counts, total=sum(counts.values()))

def get_user_reaction(db: Session, post_id: str, user_id: str) -> Optional[str]:
    """Get the type of the user's reaction to a post, None if there is none"""
    reaction = get_reaction(db, user_id, post_id)
    return reaction.reaction_type if reaction else None
