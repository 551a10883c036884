from typing import List, Optional
from datetime import datetime
import secrets
import string
import uuid
import logging
from sqlalchemy.orm import Session

from app.modules.orders.models.order import Order
from app.modules.orders.schemas.order import OrderCreate, OrderStatus, PaymentStatus

logger = logging.getLogger(__name__)

_ORDER_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits

def generate_order_number() -> str:
    """Human-readable order reference such as ORD-20261018-7KX2QD"""
    suffix = "".join(secrets.choice(_ORDER_SUFFIX_ALPHABET) for _ in range(6))
    return f"ORD-{datetime.utcnow():%Y%m%d}-{suffix}"

def get_order(db: Session, order_id: str) -> Optional[Order]:
    """Get order by ID"""
    return db.query(Order).filter(Order.id == order_id).first()

def get_order_by_number(db: Session, order_number: str) -> Optional[Order]:
    """Get order by its public order number"""
    return db.query(Order).filter(Order.order_number == order_number).first()

def get_user_orders(db: Session, user_id: str, skip: int = 0, limit: int = 20) -> List[Order]:
    """Get a customer's orders, newest first"""
    return (
        db.query(Order)
        .filter(Order.user_id == user_id)
        .order_by(Order.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )

def create_order(db: Session, order_in: OrderCreate, user_id: str) -> Order:
    """Place a new order; it starts PENDING on both status axes"""
    order_number = generate_order_number()
    while get_order_by_number(db, order_number):
        order_number = generate_order_number()

    order = Order(
        id=str(uuid.uuid4()),
        order_number=order_number,
        user_id=user_id,
        status=OrderStatus.PENDING.value,
        payment_status=PaymentStatus.PENDING.value,
        **order_in.model_dump(),
    )
    db.add(order)
    db.commit()
    db.refresh(order)
    logger.info(f"User {user_id} placed order {order.order_number}")
    return order
