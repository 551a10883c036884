from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, field_validator

class CommentReactionType(str, Enum):
    LIKE = "LIKE"
    DISLIKE = "DISLIKE"

class CommentReactionCreate(BaseModel):
    reaction_type: CommentReactionType

    @field_validator("reaction_type", mode="before")
    @classmethod
    def normalize_reaction_type(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

class CommentReactionResponse(BaseModel):
    """Outcome of a comment reaction toggle; id and reaction_type are None after a toggle-off"""
    id: Optional[str] = None
    comment_id: str
    user_id: str
    reaction_type: Optional[CommentReactionType] = None
    user_email: Optional[str] = None
    user_full_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class CommentReactionCounts(BaseModel):
    comment_id: str
    like_count: int = 0
    dislike_count: int = 0

class UserCommentReaction(BaseModel):
    comment_id: str
    reaction_type: Optional[CommentReactionType] = None
