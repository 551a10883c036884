from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from app.db.session import Base

class PostReaction(Base):
    __tablename__ = "post_reactions"

    id = Column(String, primary_key=True, index=True)
    reaction_type = Column(String, nullable=False)  # LIKE, LOVE, HAHA, WOW, SAD, ANGRY
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    post_id = Column(String, ForeignKey("posts.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # One reaction per user and post
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_post_reaction"),)
