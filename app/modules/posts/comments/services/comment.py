from typing import Dict, List, Optional
import uuid
import logging
from sqlalchemy.orm import Session
from sqlalchemy import func

from app.core.exceptions import NotFoundError, PermissionDeniedError
from app.modules.friendships.services.friendship import are_friends
from app.modules.notifications.services.notification_events import create_post_comment_notification
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.comments.reactions.models.reaction import CommentReaction
from app.modules.posts.comments.schemas.comment import CommentCreate, Comment as CommentSchema
from app.modules.posts.services.post import get_post

logger = logging.getLogger(__name__)

def get_comment(db: Session, comment_id: str) -> Optional[Comment]:
    """Get comment by ID"""
    return db.query(Comment).filter(Comment.id == comment_id).first()

def _reaction_summary(db: Session, comment_ids: List[str], viewer_id: str):
    """Per-comment reaction counts plus the viewer's own reaction, in two queries"""
    counts: Dict[str, Dict[str, int]] = {comment_id: {} for comment_id in comment_ids}
    mine: Dict[str, str] = {}
    if not comment_ids:
        return counts, mine

    rows = (
        db.query(CommentReaction.comment_id, CommentReaction.reaction_type, func.count(CommentReaction.id))
        .filter(CommentReaction.comment_id.in_(comment_ids))
        .group_by(CommentReaction.comment_id, CommentReaction.reaction_type)
        .all()
    )
    for comment_id, reaction_type, count in rows:
        counts[comment_id][reaction_type] = count

    own = (
        db.query(CommentReaction.comment_id, CommentReaction.reaction_type)
        .filter(CommentReaction.comment_id.in_(comment_ids), CommentReaction.user_id == viewer_id)
        .all()
    )
    mine = dict(own)
    return counts, mine

def get_comments_by_post(
    db: Session, post_id: str, viewer_id: str, skip: int = 0, limit: int = 100
) -> List[CommentSchema]:
    """Get comments on a post, oldest first, with their reaction counts"""
    comments = (
        db.query(Comment)
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    counts, mine = _reaction_summary(db, [c.id for c in comments], viewer_id)

    result = []
    for comment in comments:
        schema = CommentSchema.model_validate(comment)
        schema.like_count = counts[comment.id].get("LIKE", 0)
        schema.dislike_count = counts[comment.id].get("DISLIKE", 0)
        schema.my_reaction = mine.get(comment.id)
        result.append(schema)
    return result

def create_comment(db: Session, post_id: str, author_id: str, comment_in: CommentCreate) -> Comment:
    """Create a comment on a post the author is allowed to see"""
    post = get_post(db, post_id)
    if not post:
        raise NotFoundError("Post not found")

    if post.author_id != author_id and not are_friends(db, author_id, post.author_id):
        raise PermissionDeniedError("You can only comment on posts from your friends")

    comment = Comment(
        id=str(uuid.uuid4()),
        post_id=post_id,
        author_id=author_id,
        **comment_in.model_dump(),
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)

    create_post_comment_notification(db, post.author_id, author_id, post_id)

    return comment

def delete_comment(db: Session, comment: Comment, user_id: str) -> None:
    """Delete comment and its reactions; only the comment author may do this"""
    if comment.author_id != user_id:
        raise PermissionDeniedError("Not enough permissions")

    db.query(CommentReaction).filter(CommentReaction.comment_id == comment.id).delete(synchronize_session=False)
    db.delete(comment)
    db.commit()
    logger.info(f"Deleted comment {comment.id}")
