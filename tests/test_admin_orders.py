from datetime import datetime, timedelta
from decimal import Decimal
import csv
import io

import pytest

from app.core.exceptions import BadRequestError, NotFoundError
from app.modules.notifications.models.notification import Notification
from app.modules.orders.models.order import Order
from app.modules.orders.schemas.order import AdminOrderFilters, OrderStatus, PaymentStatus
from app.modules.orders.services import admin_order

BASE = "/api/v1/admin/orders"


@pytest.fixture
def admin(make_user):
    return make_user("root", is_admin=True)


@pytest.fixture
def customer(make_user):
    return make_user("alice")


def _status_notifications(db, user_id):
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.type == "order_status")
        .all()
    )


class TestListOrders:
    def test_pages_are_zero_based(self, db, customer, make_order):
        start = datetime(2026, 3, 1, 12, 0)
        for i in range(25):
            make_order(customer, created_at=start + timedelta(minutes=i))

        page = admin_order.list_orders(db, AdminOrderFilters(page=2, size=10))

        assert page.total_elements == 25
        assert page.total_pages == 3
        assert page.number == 2
        assert len(page.content) == 5
        # Newest first by default, so the last page holds the oldest orders
        assert page.content[-1].created_at == start

    def test_empty_table(self, db):
        page = admin_order.list_orders(db, AdminOrderFilters())

        assert page.total_elements == 0
        assert page.total_pages == 0
        assert page.content == []

    def test_sort_by_amount_ascending(self, db, customer, make_order):
        for amount in ("30.00", "5.50", "12.00"):
            make_order(customer, amount=amount)

        page = admin_order.list_orders(db, AdminOrderFilters(sort_by="total_amount", sort_dir="asc"))

        assert [o.total_amount for o in page.content] == [Decimal("5.50"), Decimal("12.00"), Decimal("30.00")]

    def test_filters_combine(self, db, customer, make_order):
        make_order(customer, status="SHIPPED", payment_status="PAID", created_at=datetime(2026, 5, 2, 23, 59))
        make_order(customer, status="SHIPPED", payment_status="PENDING", created_at=datetime(2026, 5, 2, 8, 0))
        make_order(customer, status="PENDING", payment_status="PAID", created_at=datetime(2026, 5, 2, 8, 0))
        make_order(customer, status="SHIPPED", payment_status="PAID", created_at=datetime(2026, 5, 3, 0, 0))

        page = admin_order.list_orders(db, AdminOrderFilters(
            status=OrderStatus.SHIPPED,
            payment_status=PaymentStatus.PAID,
            start_date="2026-05-01",
            end_date="2026-05-02",
        ))

        assert page.total_elements == 1
        assert page.content[0].created_at == datetime(2026, 5, 2, 23, 59)

    def test_search_matches_order_number_or_customer_email(self, db, make_user, customer, make_order):
        bob = make_user("bob")
        make_order(customer, order_number="ORD-20260101-AAAAAA")
        make_order(bob, order_number="ORD-20260101-BBBBBB")

        by_number = admin_order.list_orders(db, AdminOrderFilters(search="aaaaaa"))
        by_email = admin_order.list_orders(db, AdminOrderFilters(search="BOB@"))

        assert [o.order_number for o in by_number.content] == ["ORD-20260101-AAAAAA"]
        assert [o.customer_email for o in by_email.content] == ["bob@example.com"]
        assert by_email.content[0].customer_name == "Bob"

    def test_search_treats_underscore_literally(self, db, make_user, make_order):
        make_order(make_user("john_doe"))
        make_order(make_user("johnxdoe"))

        page = admin_order.list_orders(db, AdminOrderFilters(search="john_doe"))

        assert [o.customer_email for o in page.content] == ["john_doe@example.com"]

    def test_search_treats_percent_literally(self, db, customer, make_order):
        make_order(customer, order_number="ORD-20260101-ABC123")

        page = admin_order.list_orders(db, AdminOrderFilters(search="ORD-%-ABC"))

        assert page.total_elements == 0

    def test_start_after_end_is_rejected(self, db):
        with pytest.raises(BadRequestError):
            admin_order.list_orders(db, AdminOrderFilters(start_date="2026-05-03", end_date="2026-05-01"))


class TestStatusUpdates:
    def test_status_change_notifies_customer(self, db, customer, make_order):
        order = make_order(customer)

        updated = admin_order.update_order_status(db, order.id, OrderStatus.SHIPPED)

        assert updated.status == "SHIPPED"
        assert updated.customer_email == "alice@example.com"
        assert updated.customer_name == "Alice"
        [notification] = _status_notifications(db, customer.id)
        assert notification.related_id == order.id
        assert notification.content == f"Your order {order.order_number} is now shipped"

    def test_same_status_does_not_notify(self, db, customer, make_order):
        order = make_order(customer, status="PROCESSING")

        admin_order.update_order_status(db, order.id, OrderStatus.PROCESSING)

        assert _status_notifications(db, customer.id) == []

    def test_payment_change_is_silent(self, db, customer, make_order):
        order = make_order(customer)

        updated = admin_order.update_payment_status(db, order.id, PaymentStatus.REFUNDED)

        assert updated.payment_status == "REFUNDED"
        assert _status_notifications(db, customer.id) == []

    def test_unknown_order(self, db):
        with pytest.raises(NotFoundError):
            admin_order.update_order_status(db, "missing", OrderStatus.SHIPPED)

    def test_bulk_update_is_all_or_nothing(self, db, customer, make_order):
        first, second = make_order(customer), make_order(customer)

        with pytest.raises(NotFoundError, match="missing"):
            admin_order.bulk_update_order_status(db, [first.id, "missing", second.id], OrderStatus.CANCELLED)

        db.expire_all()
        assert {o.status for o in db.query(Order).all()} == {"PENDING"}

    def test_bulk_update_notifies_only_changed_orders(self, db, customer, make_order):
        pending = make_order(customer)
        delivered = make_order(customer, status="DELIVERED")

        result = admin_order.bulk_update_order_status(db, [pending.id, delivered.id], OrderStatus.DELIVERED)

        assert result.updated_count == 2
        [notification] = _status_notifications(db, customer.id)
        assert notification.related_id == pending.id

    def test_bulk_payment_update(self, db, customer, make_order):
        orders = [make_order(customer) for _ in range(3)]

        result = admin_order.bulk_update_payment_status(db, [o.id for o in orders], PaymentStatus.PAID)

        assert result.updated_count == 3
        db.expire_all()
        assert {o.payment_status for o in db.query(Order).all()} == {"PAID"}


class TestAnalytics:
    def test_revenue_counts_paid_orders_only(self, db, customer, make_order):
        make_order(customer, amount="100.00", payment_status="PAID", status="DELIVERED")
        make_order(customer, amount="50.00", payment_status="PAID")
        make_order(customer, amount="999.99", payment_status="REFUNDED")
        make_order(customer, amount="20.00", created_at=datetime.utcnow() - timedelta(days=3))

        analytics = admin_order.get_order_analytics(db)

        assert analytics.total_orders == 4
        assert analytics.total_revenue == Decimal("150.00")
        assert analytics.average_order_value == Decimal("75.00")
        assert analytics.orders_by_status["PENDING"] == 3
        assert analytics.orders_by_status["DELIVERED"] == 1
        assert analytics.orders_by_status["CANCELLED"] == 0
        assert analytics.orders_by_payment_status["PAID"] == 2
        assert analytics.orders_today == 3

    def test_empty_store(self, db):
        analytics = admin_order.get_order_analytics(db)

        assert analytics.total_orders == 0
        assert analytics.total_revenue == Decimal("0.00")
        assert analytics.average_order_value == Decimal("0.00")


def test_export_csv_respects_filters(db, customer, make_order):
    make_order(customer, amount="12.5", status="SHIPPED", order_number="ORD-20260101-SHIP01")
    make_order(customer, status="PENDING", order_number="ORD-20260101-PEND01")

    content = admin_order.export_orders_csv(db, AdminOrderFilters(status=OrderStatus.SHIPPED).export_options())

    rows = list(csv.reader(io.StringIO(content)))
    assert rows[0] == admin_order.CSV_HEADER
    assert len(rows) == 2
    assert rows[1][:7] == ["ORD-20260101-SHIP01", "alice@example.com", "Alice", "SHIPPED", "PENDING", "1", "12.50"]


def test_export_filename():
    assert admin_order.export_filename(datetime(2026, 10, 18).date()) == "orders_2026-10-18.csv"


class TestAdminOrderEndpoints:
    def test_non_admin_is_forbidden(self, client, auth, customer):
        response = client.get(BASE, headers=auth(customer))

        assert response.status_code == 403
        assert response.json()["detail"] == "Admin privileges required"

    def test_list_with_query_params(self, client, auth, admin, customer, make_order):
        for amount in ("1.00", "2.00", "3.00"):
            make_order(customer, amount=amount)

        response = client.get(
            BASE,
            params={"page": 1, "size": 2, "sort_by": "total_amount", "sort_dir": "asc"},
            headers=auth(admin),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["total_elements"] == 3
        assert body["total_pages"] == 2
        assert body["number"] == 1
        assert [Decimal(o["total_amount"]) for o in body["content"]] == [Decimal("3.00")]
        assert body["content"][0]["customer_email"] == "alice@example.com"

    def test_unknown_sort_field_is_rejected(self, client, auth, admin):
        response = client.get(BASE, params={"sort_by": "password"}, headers=auth(admin))

        assert response.status_code == 422

    def test_page_size_is_capped(self, client, auth, admin):
        response = client.get(BASE, params={"size": 1000}, headers=auth(admin))

        assert response.status_code == 422

    def test_inverted_date_range_is_400(self, client, auth, admin):
        response = client.get(
            BASE, params={"start_date": "2026-02-01", "end_date": "2026-01-01"}, headers=auth(admin)
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "start_date must not be after end_date"

    def test_update_status(self, client, auth, admin, customer, make_order):
        order = make_order(customer)

        response = client.put(f"{BASE}/{order.id}/status", json={"status": "PROCESSING"}, headers=auth(admin))

        assert response.status_code == 200
        assert response.json()["status"] == "PROCESSING"
        assert response.json()["customer_email"] == "alice@example.com"
        assert response.json()["customer_name"] == "Alice"

    def test_update_payment_status_returns_customer_details(self, client, auth, admin, customer, make_order):
        order = make_order(customer)

        response = client.put(f"{BASE}/{order.id}/payment-status", json={"payment_status": "PAID"}, headers=auth(admin))

        assert response.status_code == 200
        body = response.json()
        assert body["payment_status"] == "PAID"
        assert (body["customer_email"], body["customer_name"]) == ("alice@example.com", "Alice")

    def test_update_payment_status_of_missing_order(self, client, auth, admin):
        response = client.put(f"{BASE}/missing/payment-status", json={"payment_status": "PAID"}, headers=auth(admin))

        assert response.status_code == 404

    def test_bulk_status(self, client, auth, admin, customer, make_order):
        orders = [make_order(customer) for _ in range(2)]
        ids = [o.id for o in orders]

        response = client.put(
            f"{BASE}/bulk/status",
            json={"order_ids": ids + [ids[0]], "status": "SHIPPED"},
            headers=auth(admin),
        )

        assert response.status_code == 200
        assert response.json() == {"updated_count": 2, "order_ids": ids}

    def test_bulk_with_empty_selection_is_invalid(self, client, auth, admin):
        response = client.put(
            f"{BASE}/bulk/payment-status",
            json={"order_ids": [], "payment_status": "PAID"},
            headers=auth(admin),
        )

        assert response.status_code == 422

    def test_bulk_with_unknown_id_is_404(self, client, auth, admin, customer, make_order):
        order = make_order(customer)

        response = client.put(
            f"{BASE}/bulk/payment-status",
            json={"order_ids": [order.id, "nope"], "payment_status": "PAID"},
            headers=auth(admin),
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Orders not found: nope"

    def test_export(self, client, auth, admin, customer, make_order):
        make_order(customer, payment_status="PAID")

        response = client.get(f"{BASE}/export", params={"payment_status": "PAID"}, headers=auth(admin))

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="orders_' in response.headers["content-disposition"]
        assert response.text.splitlines()[0].startswith("Order Number,Customer Email")

    def test_analytics(self, client, auth, admin, customer, make_order):
        make_order(customer, amount="40.00", payment_status="PAID")

        response = client.get(f"{BASE}/analytics", headers=auth(admin))

        assert response.status_code == 200
        body = response.json()
        assert body["total_orders"] == 1
        assert Decimal(body["total_revenue"]) == Decimal("40.00")
