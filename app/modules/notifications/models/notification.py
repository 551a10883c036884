from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, Text
from sqlalchemy.sql import func

from app.db.session import Base

class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), index=True)
    actor_id = Column(String, ForeignKey("users.id"), nullable=True)  # The user who triggered the notification
    type = Column(String)  # post_like, comment_like, post_comment, friend_request, friend_accepted, order_status
    content = Column(Text)
    related_id = Column(String, nullable=True)  # ID of the related entity (post, request, order)
    is_read = Column(Boolean, default=False)
    created_at = Column(DateTime, default=func.now())
