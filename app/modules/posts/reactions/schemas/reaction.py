from enum import Enum
from typing import Dict, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator

class PostReactionType(str, Enum):
    LIKE = "LIKE"
    LOVE = "LOVE"
    HAHA = "HAHA"
    WOW = "WOW"
    SAD = "SAD"
    ANGRY = "ANGRY"

class ReactionCreate(BaseModel):
    reaction_type: PostReactionType

    @field_validator("reaction_type", mode="before")
    @classmethod
    def normalize_reaction_type(cls, v):
        # Older clients send lowercase names ("like", "love", ...)
        if isinstance(v, str):
            return v.strip().upper()
        return v

class PostReaction(BaseModel):
    """Stored reaction returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    post_id: str
    user_id: str
    reaction_type: PostReactionType
    created_at: datetime
    updated_at: datetime

class ReactionResponse(BaseModel):
    """
    Outcome of a reaction toggle.

    After a toggle-off id, reaction_type and the timestamps are None.
    """
    id: Optional[str] = None
    post_id: str
    user_id: str
    reaction_type: Optional[PostReactionType] = None
    user_email: Optional[str] = None
    user_full_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class ReactionCounts(BaseModel):
    """Count of reactions per type; every type is always present"""
    post_id: str
    counts: Dict[str, int]
    total: int

class UserReaction(BaseModel):
    post_id: str
    reaction_type: Optional[PostReactionType] = None
