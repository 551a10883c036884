from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, status, Path, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_user
from app.modules.user_management.models.user import User
from app.modules.posts.services.post import get_post
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.comments.schemas.comment import Comment as CommentSchema, CommentCreate
from app.modules.posts.comments.services.comment import (
    get_comment, get_comments_by_post, create_comment, delete_comment
)

router = APIRouter()

def _validate_post(db: Session, post_id: str) -> None:
    """Validate post exists or raise HTTPException"""
    if not get_post(db, post_id=post_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found"
        )

def _validate_comment(db: Session, post_id: str, comment_id: str) -> Comment:
    """Validate comment exists on the given post and return it"""
    comment = get_comment(db, comment_id=comment_id)
    if not comment or comment.post_id != post_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found"
        )
    return comment

@router.get("", response_model=List[CommentSchema])
def read_comments(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=200),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get comments on a post with like/dislike counts"""
    _validate_post(db, post_id)

    return get_comments_by_post(db, post_id, current_user.id, skip=skip, limit=limit)

@router.post("", response_model=CommentSchema, status_code=status.HTTP_201_CREATED)
def create_new_comment(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to comment on"),
    comment_in: CommentCreate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Comment on a post"""
    return create_comment(db, post_id, current_user.id, comment_in)

@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment_by_id(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post"),
    comment_id: str = Path(..., description="The ID of the comment to delete"),
    current_user: User = Depends(get_current_user),
) -> None:
    """Delete one of the current user's comments"""
    comment = _validate_comment(db, post_id, comment_id)
    delete_comment(db, comment, current_user.id)
