from typing import Any

from fastapi import APIRouter, Depends

from app.deps import get_current_user
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import User as UserSchema

router = APIRouter()

@router.get("/me", response_model=UserSchema)
def read_user_me(
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get current user"""
    return current_user
