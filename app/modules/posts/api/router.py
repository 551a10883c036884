from typing import Any, List
import logging

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_user
from app.modules.user_management.models.user import User
from app.modules.posts.models.post import Post
from app.modules.posts.schemas.post import Post as PostSchema, PostCreate
from app.modules.posts.services.post import get_post, get_posts, create_post, delete_post

logger = logging.getLogger(__name__)

router = APIRouter()

def _validate_post(db: Session, post_id: str) -> Post:
    """Validate post exists and return it or raise HTTPException"""
    post = get_post(db, post_id=post_id)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return post

@router.get("", response_model=List[PostSchema])
def read_posts(
    db: Session = Depends(get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=200),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Retrieve posts, newest first"""
    return get_posts(db, skip=skip, limit=limit)

@router.post("", response_model=PostSchema, status_code=status.HTTP_201_CREATED)
def create_new_post(
    *,
    db: Session = Depends(get_db),
    post_in: PostCreate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Create new post"""
    return create_post(db, post_in, current_user.id)

@router.get("/{post_id}", response_model=PostSchema)
def read_post_by_id(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get post by ID"""
    return _validate_post(db, post_id)

@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post_by_id(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    current_user: User = Depends(get_current_user),
) -> None:
    """Delete a post together with its comments and reactions"""
    post = _validate_post(db, post_id)
    if post.author_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions",
        )
    delete_post(db, post)
