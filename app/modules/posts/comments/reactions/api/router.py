from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status, Path
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_user
from app.modules.user_management.models.user import User
from app.modules.posts.comments.services.comment import get_comment
from app.modules.posts.comments.reactions.schemas.reaction import (
    CommentReactionCounts, CommentReactionCreate, CommentReactionResponse, UserCommentReaction
)
from app.modules.posts.comments.reactions.services.reaction import (
    get_comment_reaction_counts, get_user_comment_reaction,
    react_to_comment, remove_comment_reaction
)

router = APIRouter()

def _validate_comment(db: Session, comment_id: str) -> None:
    """Validate comment exists or raise HTTPException"""
    if not get_comment(db, comment_id=comment_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found"
        )

@router.post("", response_model=CommentReactionResponse)
def toggle_comment_reaction(
    *,
    db: Session = Depends(get_db),
    comment_id: str = Path(..., description="The ID of the comment to react to"),
    reaction_in: CommentReactionCreate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Like or dislike a comment; repeating the same reaction removes it"""
    return react_to_comment(db, comment_id, current_user.id, reaction_in.reaction_type)

@router.get("/counts", response_model=CommentReactionCounts)
def read_comment_reaction_counts(
    *,
    db: Session = Depends(get_db),
    comment_id: str = Path(..., description="The ID of the comment"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get like and dislike counts for a comment"""
    return get_comment_reaction_counts(db, comment_id)

@router.get("/me", response_model=UserCommentReaction)
def read_my_comment_reaction(
    *,
    db: Session = Depends(get_db),
    comment_id: str = Path(..., description="The ID of the comment"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get the current user's reaction to a comment"""
    _validate_comment(db, comment_id)

    return UserCommentReaction(
        comment_id=comment_id,
        reaction_type=get_user_comment_reaction(db, comment_id, current_user.id),
    )

@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment_reaction(
    *,
    db: Session = Depends(get_db),
    comment_id: str = Path(..., description="The ID of the comment"),
    current_user: User = Depends(get_current_user),
) -> None:
    """Delete the current user's reaction from a comment"""
    _validate_comment(db, comment_id)
    remove_comment_reaction(db, comment_id, current_user.id)
