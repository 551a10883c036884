from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

class PostBase(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)

class PostCreate(PostBase):
    pass

class Post(PostBase):
    """Post model returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    author_id: str
    created_at: datetime
    updated_at: datetime
