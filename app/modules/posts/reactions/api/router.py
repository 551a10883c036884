from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, status, Path, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_user
from app.modules.user_management.models.user import User
from app.modules.posts.services.post import get_post
from app.modules.posts.reactions.schemas.reaction import (
    PostReaction as PostReactionSchema, ReactionCreate, ReactionCounts, ReactionResponse, UserReaction
)
from app.modules.posts.reactions.services.reaction import (
    get_reactions_by_post, get_reaction_counts, get_user_reaction,
    react_to_post, remove_reaction
)

router = APIRouter()

def _validate_post(db: Session, post_id: str) -> None:
    """Validate post exists or raise HTTPException"""
    if not get_post(db, post_id=post_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found"
        )

@router.post("", response_model=ReactionResponse)
def toggle_post_reaction(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to react to"),
    reaction_in: ReactionCreate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Add, change or toggle off the current user's reaction to a post"""
    return react_to_post(db, post_id, current_user.id, reaction_in.reaction_type)

@router.get("", response_model=List[PostReactionSchema])
def read_reactions_by_post_id(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to get reactions for"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=200),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get reactions by post ID"""
    _validate_post(db, post_id)

    return get_reactions_by_post(db, post_id=post_id, skip=skip, limit=limit)

@router.get("/counts", response_model=ReactionCounts)
def read_reaction_counts_by_post_id(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to get reaction counts for"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get reaction counts by type for a post"""
    return get_reaction_counts(db, post_id)

@router.get("/me", response_model=UserReaction)
def read_my_reaction(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get the current user's reaction to a post"""
    _validate_post(db, post_id)

    return UserReaction(post_id=post_id, reaction_type=get_user_reaction(db, post_id, current_user.id))

@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_post_reaction(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to remove reaction from"),
    current_user: User = Depends(get_current_user),
) -> None:
    """Delete the current user's reaction from a post"""
    _validate_post(db, post_id)
    remove_reaction(db, post_id, current_user.id)
