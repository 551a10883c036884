from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)

class Comment(BaseModel):
    """Comment model returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    content: str
    author_id: str
    post_id: str
    created_at: datetime
    updated_at: datetime
    like_count: int = 0
    dislike_count: int = 0
    my_reaction: Optional[str] = None
