"""
Order administration: the filtered/sorted/paginated order table, single
and bulk status changes, CSV export and dashboard analytics.
"""
from typing import Iterable, List, Optional, Tuple
from datetime import date, datetime, time, timedelta
from decimal import Decimal
import csv
import io
import logging
import math
from sqlalchemy.orm import Query, Session
from sqlalchemy import func, or_

from app.core.exceptions import BadRequestError, NotFoundError
from app.modules.notifications.services.notification_events import create_order_status_notification
from app.modules.orders.models.order import Order
from app.modules.orders.schemas.order import (
    AdminOrder, AdminOrderFilters, BulkUpdateResult, ExportOptions, OrderAnalytics,
    OrderPage, OrderStatus, PaymentStatus
)
from app.modules.orders.services.order import get_order
from app.modules.user_management.models.user import User

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    "created_at": Order.created_at,
    "updated_at": Order.updated_at,
    "order_number": Order.order_number,
    "total_amount": Order.total_amount,
    "status": Order.status,
    "payment_status": Order.payment_status,
}

CSV_HEADER = [
    "Order Number", "Customer Email", "Customer Name", "Status", "Payment Status",
    "Items", "Total Amount", "Created At", "Updated At",
]

_CENTS = Decimal("0.01")

def _base_query(db: Session) -> Query:
    return db.query(Order, User.email, User.full_name).outerjoin(User, User.id == Order.user_id)

def _apply_filters(query: Query, options: ExportOptions, search: Optional[str] = None) -> Query:
    if options.start_date and options.end_date and options.start_date > options.end_date:
        raise BadRequestError("start_date must not be after end_date")

    if options.status:
        query = query.filter(Order.status == options.status.value)
    if options.payment_status:
        query = query.filter(Order.payment_status == options.payment_status.value)
    if options.start_date:
        query = query.filter(Order.created_at >= datetime.combine(options.start_date, time.min))
    if options.end_date:
        # end_date is inclusive
        query = query.filter(Order.created_at < datetime.combine(options.end_date + timedelta(days=1), time.min))
    if search and search.strip():
        term = search.strip().lower()
        # "_" and "%" match literally
        query = query.filter(or_(
            func.lower(Order.order_number).contains(term, autoescape=True),
            func.lower(User.email).contains(term, autoescape=True),
        ))
    return query

def _to_admin_order(row: Tuple[Order, Optional[str], Optional[str]]) -> AdminOrder:
    order, email, full_name = row
    admin_order = AdminOrder.model_validate(order)
    admin_order.customer_email = email
    admin_order.customer_name = full_name
    return admin_order

def list_orders(db: Session, filters: AdminOrderFilters) -> OrderPage:
    """One page of the admin order table"""
    query = _apply_filters(_base_query(db), filters, filters.search)
    total = query.count()

    column = _SORT_COLUMNS[filters.sort_by]
    ordering = column.asc() if filters.sort_dir == "asc" else column.desc()
    rows = (
        query.order_by(ordering, Order.id.asc())
        .offset(filters.page * filters.size)
        .limit(filters.size)
        .all()
    )

    return OrderPage(
        content=[_to_admin_order(row) for row in rows],
        total_elements=total,
        total_pages=math.ceil(total / filters.size) if total else 0,
        number=filters.page,
        size=filters.size,
    )

def _require_order(db: Session, order_id: str) -> Order:
    order = get_order(db, order_id)
    if not order:
        raise NotFoundError("Order not found")
    return order

def _load_admin_order(db: Session, order_id: str) -> AdminOrder:
    return _to_admin_order(_base_query(db).filter(Order.id == order_id).one())

def _notify_status_change(db: Session, orders: Iterable[Order]) -> None:
    for order in orders:
        create_order_status_notification(db, order.user_id, order.id, order.order_number, order.status)

def update_order_status(db: Session, order_id: str, status: OrderStatus) -> AdminOrder:
    """Move one order to a new fulfilment status and tell the customer"""
    order = _require_order(db, order_id)
    changed = order.status != status.value

    order.status = status.value
    db.commit()
    db.refresh(order)
    logger.info(f"Order {order.order_number} status set to {status.value}")

    if changed:
        _notify_status_change(db, [order])
    return _load_admin_order(db, order.id)

def update_payment_status(db: Session, order_id: str, payment_status: PaymentStatus) -> AdminOrder:
    """Set the payment status of one order"""
    order = _require_order(db, order_id)

    order.payment_status = payment_status.value
    db.commit()
    db.refresh(order)
    logger.info(f"Order {order.order_number} payment status set to {payment_status.value}")
    return _load_admin_order(db, order.id)

def _load_all(db: Session, order_ids: List[str]) -> List[Order]:
    """Load every requested order or fail without touching any of them"""
    orders = db.query(Order).filter(Order.id.in_(order_ids)).all()
    found = {order.id for order in orders}
    missing = [order_id for order_id in order_ids if order_id not in found]
    if missing:
        raise NotFoundError(f"Orders not found: {', '.join(missing)}")
    return orders

def bulk_update_order_status(db: Session, order_ids: List[str], status: OrderStatus) -> BulkUpdateResult:
    """Set the same status on every selected order in one transaction"""
    orders = _load_all(db, order_ids)
    changed = [order for order in orders if order.status != status.value]

    for order in orders:
        order.status = status.value
    db.commit()
    logger.info(f"Bulk status update to {status.value} on {len(orders)} orders")

    _notify_status_change(db, changed)
    return BulkUpdateResult(updated_count=len(orders), order_ids=order_ids)

def bulk_update_payment_status(db: Session, order_ids: List[str], payment_status: PaymentStatus) -> BulkUpdateResult:
    """Set the same payment status on every selected order in one transaction"""
    orders = _load_all(db, order_ids)

    for order in orders:
        order.payment_status = payment_status.value
    db.commit()
    logger.info(f"Bulk payment status update to {payment_status.value} on {len(orders)} orders")

    return BulkUpdateResult(updated_count=len(orders), order_ids=order_ids)

def export_orders_csv(db: Session, options: ExportOptions) -> str:
    """Render the orders matching the export filters as CSV, newest first"""
    rows = _apply_filters(_base_query(db), options).order_by(Order.created_at.desc(), Order.id.asc()).all()

    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADER)
    for order, email, full_name in rows:
        writer.writerow([
            order.order_number,
            email or "",
            full_name or "",
            order.status,
            order.payment_status,
            order.items_count,
            f"{Decimal(order.total_amount).quantize(_CENTS)}",
            order.created_at.isoformat() if order.created_at else "",
            order.updated_at.isoformat() if order.updated_at else "",
        ])

    logger.info(f"Exported {len(rows)} orders to CSV")
    return buffer.getvalue()

def export_filename(today: Optional[date] = None) -> str:
    return f"orders_{(today or datetime.utcnow().date()).isoformat()}.csv"

def get_order_analytics(db: Session) -> OrderAnalytics:
    """Dashboard figures; revenue only counts PAID orders"""
    total_orders = db.query(func.count(Order.id)).scalar() or 0

    paid_count, paid_sum = (
        db.query(func.count(Order.id), func.sum(Order.total_amount))
        .filter(Order.payment_status == PaymentStatus.PAID.value)
        .one()
    )
    total_revenue = Decimal(str(paid_sum or 0)).quantize(_CENTS)
    average = (total_revenue / paid_count).quantize(_CENTS) if paid_count else Decimal("0.00")

    by_status = {status.value: 0 for status in OrderStatus}
    by_status.update(dict(db.query(Order.status, func.count(Order.id)).group_by(Order.status).all()))

    by_payment = {status.value: 0 for status in PaymentStatus}
    by_payment.update(dict(db.query(Order.payment_status, func.count(Order.id)).group_by(Order.payment_status).all()))

    today_start = datetime.combine(datetime.utcnow().date(), time.min)
    orders_today = db.query(func.count(Order.id)).filter(Order.created_at >= today_start).scalar() or 0

    return OrderAnalytics(
        total_orders=total_orders,
        total_revenue=total_revenue,
        average_order_value=average,
        orders_by_status=by_status,
        orders_by_payment_status=by_payment,
        orders_today=orders_today,
    )
