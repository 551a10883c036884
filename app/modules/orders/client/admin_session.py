"""
State behind the order management admin page.

AdminOrdersSession keeps what the page shows (rows, pagination, filters,
selection, bulk action, analytics, last error) and turns user actions into
AdminOrderAPI calls. Rendering is left to whatever front end drives it.
"""
from typing import List, Optional, Tuple
from datetime import datetime
from pathlib import Path
import logging

from app.core.config import settings
from app.modules.orders.client.admin_api import AdminAPIError, AdminOrderAPI
from app.modules.orders.schemas.order import (
    AdminOrder, AdminOrderFilters, OrderAnalytics, OrderStatus, PaymentStatus
)

logger = logging.getLogger(__name__)

STATUS_ACTION_PREFIX = "status:"
PAYMENT_ACTION_PREFIX = "payment:"

# (value, label) pairs offered in the bulk action picker
BULK_ACTIONS: List[Tuple[str, str]] = [
    (f"{STATUS_ACTION_PREFIX}{OrderStatus.PENDING.value}", "Mark as Pending"),
    (f"{STATUS_ACTION_PREFIX}{OrderStatus.PROCESSING.value}", "Mark as Processing"),
    (f"{STATUS_ACTION_PREFIX}{OrderStatus.SHIPPED.value}", "Mark as Shipped"),
    (f"{STATUS_ACTION_PREFIX}{OrderStatus.DELIVERED.value}", "Mark as Delivered"),
    (f"{STATUS_ACTION_PREFIX}{OrderStatus.CANCELLED.value}", "Mark as Cancelled"),
    (f"{PAYMENT_ACTION_PREFIX}{PaymentStatus.PAID.value}", "Mark as Paid"),
    (f"{PAYMENT_ACTION_PREFIX}{PaymentStatus.FAILED.value}", "Mark as Failed"),
    (f"{PAYMENT_ACTION_PREFIX}{PaymentStatus.REFUNDED.value}", "Mark as Refunded"),
]


def default_filters() -> AdminOrderFilters:
    return AdminOrderFilters(page=0, size=settings.ORDERS_PAGE_SIZE, sort_by="created_at", sort_dir="desc")


class Pagination:
    def __init__(self, total_elements: int = 0, total_pages: int = 0, current_page: int = 0, size: int = 10):
        self.total_elements = total_elements
        self.total_pages = total_pages
        self.current_page = current_page
        self.size = size


class AdminOrdersSession:
    """Admin order page state driven through an AdminOrderAPI."""

    def __init__(self, api: AdminOrderAPI):
        self.api = api
        self.orders: List[AdminOrder] = []
        self.analytics: Optional[OrderAnalytics] = None
        self.selected_orders: List[str] = []
        self.filters = default_filters()
        self.pagination = Pagination(size=self.filters.size)
        self.is_loading = False
        self.is_analytics_loading = False
        self.error: Optional[str] = None
        self.show_analytics = False
        self.bulk_action = ""
        self.show_bulk_actions = False

    def _fail(self, fallback: str, err: AdminAPIError) -> None:
        logger.error(f"{fallback}: {err}")
        self.error = err.message or fallback

    # Loading

    def load_orders(self) -> None:
        self.is_loading = True
        self.error = None
        try:
            page = self.api.get_all_orders(self.filters)
            self.orders = page.content
            self.pagination = Pagination(
                total_elements=page.total_elements,
                total_pages=page.total_pages,
                current_page=page.number,
                size=page.size,
            )
        except AdminAPIError as err:
            self._fail("Failed to load orders", err)
        finally:
            self.is_loading = False

    def load_analytics(self) -> None:
        """Analytics are a side panel: failures are logged, not shown"""
        self.is_analytics_loading = True
        try:
            self.analytics = self.api.get_order_analytics()
        except AdminAPIError as err:
            logger.error(f"Error loading analytics: {err}")
        finally:
            self.is_analytics_loading = False

    def toggle_analytics(self) -> None:
        self.show_analytics = not self.show_analytics
        if self.show_analytics:
            self.load_analytics()

    # Filters, paging and sorting

    def change_filters(self, filters: AdminOrderFilters) -> None:
        self.filters = filters
        self.selected_orders = []
        self.load_orders()

    def reset_filters(self) -> None:
        self.change_filters(default_filters())

    def change_page(self, page: int) -> None:
        self.filters = self.filters.model_copy(update={"page": page})
        self.load_orders()

    def sort(self, column: str) -> None:
        """A new column sorts ascending; clicking it again flips the direction"""
        if self.filters.sort_by == column and self.filters.sort_dir == "asc":
            direction = "desc"
        else:
            direction = "asc"
        self.filters = AdminOrderFilters.model_validate(
            {**self.filters.model_dump(), "sort_by": column, "sort_dir": direction}
        )
        self.load_orders()

    # Selection

    def select_order(self, order_id: str) -> None:
        if order_id in self.selected_orders:
            self.selected_orders = [oid for oid in self.selected_orders if oid != order_id]
        else:
            self.selected_orders = self.selected_orders + [order_id]

    def select_all(self, should_select_all: bool) -> None:
        if should_select_all:
            self.selected_orders = [order.id for order in self.orders]
        else:
            self.selected_orders = []

    def clear_selection(self) -> None:
        self.selected_orders = []

    @property
    def selection_label(self) -> str:
        count = len(self.selected_orders)
        return f"{count} order{'s' if count > 1 else ''} selected"

    # Single order updates

    def update_status(self, order_id: str, status: str) -> None:
        try:
            self.api.update_order_status(order_id, status)
        except AdminAPIError as err:
            self._fail("Failed to update order status", err)
            return
        self.load_orders()

    def update_payment_status(self, order_id: str, payment_status: str) -> None:
        try:
            self.api.update_payment_status(order_id, payment_status)
        except AdminAPIError as err:
            self._fail("Failed to update payment status", err)
            return
        self.load_orders()

    # Bulk actions

    def _finish_bulk_action(self) -> None:
        self.selected_orders = []
        self.bulk_action = ""
        self.show_bulk_actions = False
        self.load_orders()

    def bulk_update_status(self, status: str) -> None:
        if not self.selected_orders:
            return
        try:
            self.api.bulk_update_order_status(self.selected_orders, status)
        except AdminAPIError as err:
            self._fail("Failed to perform bulk status update", err)
            return
        self._finish_bulk_action()

    def bulk_update_payment_status(self, payment_status: str) -> None:
        if not self.selected_orders:
            return
        try:
            self.api.bulk_update_payment_status(self.selected_orders, payment_status)
        except AdminAPIError as err:
            self._fail("Failed to perform bulk payment status update", err)
            return
        self._finish_bulk_action()

    def apply_bulk_action(self) -> None:
        """Run the chosen "status:<STATUS>" or "payment:<STATUS>" action on the selection"""
        if not self.selected_orders or not self.bulk_action:
            return

        if self.bulk_action.startswith(STATUS_ACTION_PREFIX):
            self.bulk_update_status(self.bulk_action[len(STATUS_ACTION_PREFIX):])
        elif self.bulk_action.startswith(PAYMENT_ACTION_PREFIX):
            self.bulk_update_payment_status(self.bulk_action[len(PAYMENT_ACTION_PREFIX):])
        else:
            logger.warning(f"Ignoring unknown bulk action {self.bulk_action!r}")

    # Export

    def export(self, directory: Optional[Path] = None) -> Optional[Path]:
        """Download the orders matching the current filters; returns the saved file"""
        filename = f"orders_{datetime.utcnow().date().isoformat()}.csv"
        try:
            content = self.api.export_orders(self.filters.export_options())
        except AdminAPIError as err:
            self._fail("Failed to export orders", err)
            return None
        return self.api.download_csv(content, filename, directory)

    # Pagination display

    @property
    def has_previous_page(self) -> bool:
        return self.pagination.current_page > 0

    @property
    def has_next_page(self) -> bool:
        return self.pagination.current_page < self.pagination.total_pages - 1

    def page_summary(self) -> Tuple[int, int, int]:
        """(first, last, total) for "Showing first to last of total results" """
        p = self.pagination
        first = p.current_page * p.size + 1
        last = min((p.current_page + 1) * p.size, p.total_elements)
        return first, last, p.total_elements
