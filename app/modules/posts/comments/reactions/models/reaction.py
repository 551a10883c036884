from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from app.db.session import Base

class CommentReaction(Base):
    __tablename__ = "comment_reactions"

    id = Column(String, primary_key=True, index=True)
    reaction_type = Column(String, nullable=False)  # LIKE, DISLIKE
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    comment_id = Column(String, ForeignKey("comments.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    __table_args__ = (UniqueConstraint("comment_id", "user_id", name="uq_comment_reaction"),)
