from enum import Enum
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator

class FriendRequestStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"

class FriendRequestCreate(BaseModel):
    receiver_id: str

class FriendRequestUpdate(BaseModel):
    status: FriendRequestStatus

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if v == FriendRequestStatus.PENDING:
            raise ValueError("Status must be one of: ACCEPTED, REJECTED")
        return v

class FriendRequest(BaseModel):
    """Friend request returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    sender_id: str
    receiver_id: str
    status: FriendRequestStatus
    created_at: datetime
    updated_at: datetime
