from sqlalchemy import Column, String, DateTime, Integer, Numeric, Text, ForeignKey
from sqlalchemy.sql import func

from app.db.session import Base

class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True, index=True)
    order_number = Column(String, unique=True, index=True, nullable=False)  # ORD-YYYYMMDD-XXXXXX
    user_id = Column(String, ForeignKey("users.id"), index=True)
    status = Column(String, default="PENDING", index=True)  # PENDING, PROCESSING, SHIPPED, DELIVERED, CANCELLED
    payment_status = Column(String, default="PENDING", index=True)  # PENDING, PAID, FAILED, REFUNDED
    total_amount = Column(Numeric(10, 2), nullable=False)
    items_count = Column(Integer, default=1)
    shipping_address = Column(Text, nullable=True)
    created_at = Column(DateTime, default=func.now(), index=True)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
