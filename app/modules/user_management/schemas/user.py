from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr

class UserBase(BaseModel):
    email: Optional[EmailStr] = None
    username: Optional[str] = None
    full_name: Optional[str] = None

class UserCreate(UserBase):
    email: EmailStr
    username: str
    is_admin: bool = False

class UserInDBBase(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    is_active: bool
    is_admin: bool
    created_at: datetime
    updated_at: datetime

class User(UserInDBBase):
    """User model returned to client"""
    pass
