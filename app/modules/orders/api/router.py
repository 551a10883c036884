from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_user
from app.modules.user_management.models.user import User
from app.modules.orders.schemas.order import Order as OrderSchema, OrderCreate
from app.modules.orders.services.order import create_order, get_order_by_number, get_user_orders

router = APIRouter()

@router.post("", response_model=OrderSchema, status_code=status.HTTP_201_CREATED)
def place_order(
    *,
    db: Session = Depends(get_db),
    order_in: OrderCreate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Place a new order"""
    return create_order(db, order_in, current_user.id)

@router.get("", response_model=List[OrderSchema])
def read_my_orders(
    db: Session = Depends(get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
) -> Any:
    """List the current user's orders"""
    return get_user_orders(db, current_user.id, skip=skip, limit=limit)

@router.get("/{order_number}", response_model=OrderSchema)
def read_order(
    *,
    db: Session = Depends(get_db),
    order_number: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get one order by its order number; admins may open any order"""
    order = get_order_by_number(db, order_number)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found"
        )
    if order.user_id != current_user.id and not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )
    return order
