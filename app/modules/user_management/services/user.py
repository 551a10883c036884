from typing import List, Optional
import uuid
from sqlalchemy.orm import Session

from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserCreate

def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by email"""
    return db.query(User).filter(User.email == email).first()

def get_users_by_ids(db: Session, user_ids: List[str]) -> List[User]:
    """Get all users whose ID is in user_ids"""
    if not user_ids:
        return []
    return db.query(User).filter(User.id.in_(user_ids)).all()

def create_user(db: Session, user_in: UserCreate) -> User:
    """Create a user record for an account provisioned by the auth service"""
    user = User(
        id=str(uuid.uuid4()),
        **user_in.model_dump(),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
