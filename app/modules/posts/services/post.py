from typing import List, Optional
import uuid
import logging
from sqlalchemy.orm import Session

from app.modules.posts.models.post import Post
from app.modules.posts.schemas.post import PostCreate
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.comments.reactions.models.reaction import CommentReaction
from app.modules.posts.reactions.models.reaction import PostReaction

logger = logging.getLogger(__name__)

def get_post(db: Session, post_id: str) -> Optional[Post]:
    """Get post by ID"""
    return db.query(Post).filter(Post.id == post_id).first()

def get_posts(db: Session, skip: int = 0, limit: int = 20) -> List[Post]:
    """Get list of posts, newest first"""
    return db.query(Post).order_by(Post.created_at.desc()).offset(skip).limit(limit).all()

def create_post(db: Session, post_in: PostCreate, author_id: str) -> Post:
    """Create new post"""
    logger.info(f"Creating post for author ID: {author_id}")
    post = Post(
        id=str(uuid.uuid4()),
        author_id=author_id,
        **post_in.model_dump(),
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post

def delete_post(db: Session, post: Post) -> None:
    """
    Delete post and all associated comments and reactions
    """
    logger.info(f"Deleting post with ID: {post.id}")
    comment_ids = db.query(Comment.id).filter(Comment.post_id == post.id)

    # Children first to maintain referential integrity
    db.query(CommentReaction).filter(CommentReaction.comment_id.in_(comment_ids)).delete(synchronize_session=False)
    db.query(Comment).filter(Comment.post_id == post.id).delete(synchronize_session=False)
    db.query(PostReaction).filter(PostReaction.post_id == post.id).delete(synchronize_session=False)

    db.delete(post)
    db.commit()
