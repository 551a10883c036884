from typing import Any, Optional
from datetime import date
import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.deps import get_current_admin_user
from app.modules.user_management.models.user import User
from app.modules.orders.schemas.order import (
    AdminOrder, AdminOrderFilters, BulkOrderStatusUpdate, BulkPaymentStatusUpdate,
    BulkUpdateResult, ExportOptions, OrderAnalytics, OrderPage, OrderStatus,
    OrderStatusUpdate, PaymentStatus, PaymentStatusUpdate, SortDirection, SortField
)
from app.modules.orders.services import admin_order

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("", response_model=OrderPage)
def read_orders(
    db: Session = Depends(get_db),
    status: Optional[OrderStatus] = None,
    payment_status: Optional[PaymentStatus] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    search: Optional[str] = Query(None, max_length=100),
    page: int = Query(0, ge=0),
    size: int = Query(settings.ORDERS_PAGE_SIZE, ge=1, le=settings.ORDERS_MAX_PAGE_SIZE),
    sort_by: SortField = "created_at",
    sort_dir: SortDirection = "desc",
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """Filtered, sorted and paginated order table"""
    filters = AdminOrderFilters(
        status=status,
        payment_status=payment_status,
        start_date=start_date,
        end_date=end_date,
        search=search,
        page=page,
        size=size,
        sort_by=sort_by,
        sort_dir=sort_dir,
    )
    return admin_order.list_orders(db, filters)

@router.get("/analytics", response_model=OrderAnalytics)
def read_order_analytics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """Order totals for the admin dashboard"""
    return admin_order.get_order_analytics(db)

@router.get("/export")
def export_orders(
    db: Session = Depends(get_db),
    status: Optional[OrderStatus] = None,
    payment_status: Optional[PaymentStatus] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    current_user: User = Depends(get_current_admin_user),
) -> StreamingResponse:
    """Download the orders matching the filters as CSV"""
    options = ExportOptions(status=status, payment_status=payment_status, start_date=start_date, end_date=end_date)
    content = admin_order.export_orders_csv(db, options)
    filename = admin_order.export_filename()
    logger.info(f"Admin {current_user.id} exported orders to {filename}")

    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

# Bulk routes are declared before "/{order_id}/..." so "bulk" is never taken for an order ID
@router.put("/bulk/status", response_model=BulkUpdateResult)
def bulk_update_status(
    *,
    db: Session = Depends(get_db),
    update_in: BulkOrderStatusUpdate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """Set the same status on several orders"""
    return admin_order.bulk_update_order_status(db, update_in.order_ids, update_in.status)

@router.put("/bulk/payment-status", response_model=BulkUpdateResult)
def bulk_update_payment_status(
    *,
    db: Session = Depends(get_db),
    update_in: BulkPaymentStatusUpdate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """Set the same payment status on several orders"""
    return admin_order.bulk_update_payment_status(db, update_in.order_ids, update_in.payment_status)

@router.put("/{order_id}/status", response_model=AdminOrder)
def update_status(
    *,
    db: Session = Depends(get_db),
    order_id: str,
    update_in: OrderStatusUpdate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """Change the fulfilment status of one order"""
    return admin_order.update_order_status(db, order_id, update_in.status)

@router.put("/{order_id}/payment-status", response_model=AdminOrder)
def update_payment_status(
    *,
    db: Session = Depends(get_db),
    order_id: str,
    update_in: PaymentStatusUpdate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """Change the payment status of one order"""
    return admin_order.update_payment_status(db, order_id, update_in.payment_status)
