"""
Command line front end for the order admin API.

    python manage_orders.py list --status PENDING --sort-by total_amount --sort-dir asc
    python manage_orders.py status <order_id> SHIPPED
    python manage_orders.py bulk status:DELIVERED <order_id> <order_id> ...
    python manage_orders.py export --payment-status PAID --output exports/
    python manage_orders.py analytics
"""
from typing import List, Optional, get_args
from datetime import date
import argparse
import logging
import sys

from app.core.config import settings
from app.modules.orders.client.admin_api import AdminOrderAPI
from app.modules.orders.client.admin_session import AdminOrdersSession, BULK_ACTIONS
from app.modules.orders.schemas.order import (
    AdminOrderFilters, OrderStatus, PaymentStatus, SortDirection, SortField
)

logger = logging.getLogger(__name__)

def _non_negative(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must be 0 or greater")
    return number

def _page_size(value: str) -> int:
    number = int(value)
    if not 1 <= number <= settings.ORDERS_MAX_PAGE_SIZE:
        raise argparse.ArgumentTypeError(f"must be between 1 and {settings.ORDERS_MAX_PAGE_SIZE}")
    return number

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage customer orders through the admin API")
    parser.add_argument("--url", help="API server root (default: ADMIN_API_URL)")
    parser.add_argument("--token", help="Admin bearer token (default: ADMIN_API_TOKEN)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_filter_args(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--status", choices=[s.value for s in OrderStatus])
        sub.add_argument("--payment-status", choices=[s.value for s in PaymentStatus])
        sub.add_argument("--start-date", type=date.fromisoformat, help="YYYY-MM-DD, inclusive")
        sub.add_argument("--end-date", type=date.fromisoformat, help="YYYY-MM-DD, inclusive")

    list_parser = subparsers.add_parser("list", help="List orders")
    add_filter_args(list_parser)
    list_parser.add_argument("--search", help="Order number or customer email")
    list_parser.add_argument("--page", type=_non_negative, default=0)
    list_parser.add_argument("--size", type=_page_size, default=settings.ORDERS_PAGE_SIZE)
    list_parser.add_argument("--sort-by", choices=list(get_args(SortField)), default="created_at")
    list_parser.add_argument("--sort-dir", choices=list(get_args(SortDirection)), default="desc")

    status_parser = subparsers.add_parser("status", help="Set one order's status")
    status_parser.add_argument("order_id")
    status_parser.add_argument("value", choices=[s.value for s in OrderStatus])

    payment_parser = subparsers.add_parser("payment", help="Set one order's payment status")
    payment_parser.add_argument("order_id")
    payment_parser.add_argument("value", choices=[s.value for s in PaymentStatus])

    bulk_parser = subparsers.add_parser("bulk", help="Apply a bulk action to several orders")
    bulk_parser.add_argument("action", choices=[value for value, _ in BULK_ACTIONS])
    bulk_parser.add_argument("order_ids", nargs="+")

    export_parser = subparsers.add_parser("export", help="Export orders to CSV")
    add_filter_args(export_parser)
    export_parser.add_argument("--output", default=".", help="Directory for the CSV file")

    subparsers.add_parser("analytics", help="Show order analytics")
    return parser

def _filters_from_args(args: argparse.Namespace) -> AdminOrderFilters:
    values = {
        "status": args.status,
        "payment_status": args.payment_status,
        "start_date": args.start_date,
        "end_date": args.end_date,
        "search": getattr(args, "search", None),
        "page": getattr(args, "page", 0),
        "size": getattr(args, "size", 10),
        "sort_by": getattr(args, "sort_by", "created_at"),
        "sort_dir": getattr(args, "sort_dir", "desc"),
    }
    return AdminOrderFilters.model_validate({k: v for k, v in values.items() if v is not None})

def run(args: argparse.Namespace, api: AdminOrderAPI) -> int:
    session = AdminOrdersSession(api)

    if args.command == "list":
        session.change_filters(_filters_from_args(args))
        if session.error:
            print(f"Error: {session.error}", file=sys.stderr)
            return 1
        for order in session.orders:
            print(f"{order.id}  {order.order_number}  {order.status.value:<10}  "
                  f"{order.payment_status.value:<8}  {order.total_amount:>10}  {order.customer_email or ''}")
        first, last, total = session.page_summary()
        if total:
            print(f"Showing {first} to {last} of {total} results")
        else:
            print("No orders found")
        return 0

    if args.command in ("status", "payment"):
        if args.command == "status":
            session.update_status(args.order_id, args.value)
        else:
            session.update_payment_status(args.order_id, args.value)
    elif args.command == "bulk":
        session.selected_orders = list(dict.fromkeys(args.order_ids))
        session.bulk_action = args.action
        session.apply_bulk_action()
    elif args.command == "export":
        session.filters = _filters_from_args(args)
        path = session.export(args.output)
        if path:
            print(f"Exported orders to {path}")
    elif args.command == "analytics":
        session.toggle_analytics()
        if session.analytics is None:
            print("Error: analytics unavailable", file=sys.stderr)
            return 1
        print(session.analytics.model_dump_json(indent=2))

    if session.error:
        print(f"Error: {session.error}", file=sys.stderr)
        return 1
    return 0

def main(argv: Optional[List[str]] = None, api: Optional[AdminOrderAPI] = None) -> int:
    args = build_parser().parse_args(argv)
    if api is not None:
        return run(args, api)
    with AdminOrderAPI(base_url=args.url, token=args.token) as owned_api:
        return run(args, owned_api)
