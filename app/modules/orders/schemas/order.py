from enum import Enum
from typing import Dict, List, Literal, Optional
from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, field_validator

class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"

SortField = Literal["created_at", "updated_at", "order_number", "total_amount", "status", "payment_status"]
SortDirection = Literal["asc", "desc"]

class OrderCreate(BaseModel):
    total_amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    items_count: int = Field(1, ge=1)
    shipping_address: Optional[str] = None

class Order(BaseModel):
    """Order model returned to the customer"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_number: str
    user_id: str
    status: OrderStatus
    payment_status: PaymentStatus
    total_amount: Decimal
    items_count: int
    shipping_address: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class AdminOrder(Order):
    """Order row in the admin table, with the customer's contact details"""
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None

class ExportOptions(BaseModel):
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

class AdminOrderFilters(ExportOptions):
    """Filters, sorting and paging for the admin order table"""
    search: Optional[str] = None
    page: int = Field(0, ge=0)
    size: int = Field(10, ge=1)
    sort_by: SortField = "created_at"
    sort_dir: SortDirection = "desc"

    def export_options(self) -> ExportOptions:
        return ExportOptions(
            status=self.status,
            payment_status=self.payment_status,
            start_date=self.start_date,
            end_date=self.end_date,
        )

class OrderPage(BaseModel):
    content: List[AdminOrder]
    total_elements: int
    total_pages: int
    number: int
    size: int

class OrderStatusUpdate(BaseModel):
    status: OrderStatus

class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus

class _BulkUpdate(BaseModel):
    order_ids: List[str] = Field(..., min_length=1)

    @field_validator("order_ids")
    @classmethod
    def unique_ids(cls, v: List[str]) -> List[str]:
        # Keep first occurrence order
        return list(dict.fromkeys(v))

class BulkOrderStatusUpdate(_BulkUpdate):
    status: OrderStatus

class BulkPaymentStatusUpdate(_BulkUpdate):
    payment_status: PaymentStatus

class BulkUpdateResult(BaseModel):
    updated_count: int
    order_ids: List[str]

class OrderAnalytics(BaseModel):
    total_orders: int
    total_revenue: Decimal
    average_order_value: Decimal
    orders_by_status: Dict[str, int]
    orders_by_payment_status: Dict[str, int]
    orders_today: int
