import pytest

from app.core.security import create_access_token
from app.modules.orders.client.admin_api import AdminOrderAPI
from app.modules.orders.client.cli import build_parser, main
from app.modules.orders.models.order import Order


@pytest.fixture
def api(client, make_user):
    admin = make_user("root", is_admin=True)
    return AdminOrderAPI(client=client, token=create_access_token(admin.id))


@pytest.fixture
def customer(make_user):
    return make_user("alice")


def test_list_prints_rows_and_summary(api, customer, make_order, capsys):
    order = make_order(customer, status="SHIPPED")

    assert main(["list", "--status", "SHIPPED"], api=api) == 0

    out = capsys.readouterr().out
    assert order.order_number in out
    assert "alice@example.com" in out
    assert "Showing 1 to 1 of 1 results" in out


def test_list_with_no_results(api, capsys):
    assert main(["list"], api=api) == 0

    assert "No orders found" in capsys.readouterr().out


def test_status_command(api, db, customer, make_order):
    order = make_order(customer)

    assert main(["status", order.id, "DELIVERED"], api=api) == 0

    db.expire_all()
    assert db.get(Order, order.id).status == "DELIVERED"


def test_bulk_command(api, db, customer, make_order):
    orders = [make_order(customer) for _ in range(2)]

    assert main(["bulk", "payment:REFUNDED"] + [o.id for o in orders], api=api) == 0

    db.expire_all()
    assert {o.payment_status for o in db.query(Order).all()} == {"REFUNDED"}


def test_error_exit_code(api, capsys):
    assert main(["payment", "missing", "PAID"], api=api) == 1

    assert "Order not found" in capsys.readouterr().err


def test_export_command(api, customer, make_order, tmp_path, capsys):
    make_order(customer)

    assert main(["export", "--output", str(tmp_path)], api=api) == 0

    [exported] = list(tmp_path.glob("orders_*.csv"))
    assert str(exported) in capsys.readouterr().out


def test_analytics_command(api, customer, make_order, capsys):
    make_order(customer, amount="25.00", payment_status="PAID")

    assert main(["analytics"], api=api) == 0

    assert '"total_orders": 1' in capsys.readouterr().out


def test_invalid_status_is_rejected_by_parser():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["status", "abc", "LOST"])


@pytest.mark.parametrize("argv", [
    ["list", "--sort-by", "bogus"],
    ["list", "--sort-dir", "sideways"],
    ["list", "--start-date", "yesterday"],
    ["export", "--end-date", "2026-13-01"],
    ["list", "--size", "0"],
    ["list", "--page", "-1"],
])
def test_bad_list_arguments_exit_with_usage_error(api, argv, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(argv, api=api)

    assert exc_info.value.code == 2
    assert "usage:" in capsys.readouterr().err


def test_list_accepts_dates_and_sort(api, customer, make_order, capsys):
    make_order(customer, amount="5.00")
    make_order(customer, amount="7.00")

    argv = ["list", "--start-date", "2000-01-01", "--end-date", "2100-01-01", "--sort-by", "total_amount"]
    assert main(argv + ["--sort-dir", "asc"], api=api) == 0

    out = capsys.readouterr().out
    assert out.index("5.00") < out.index("7.00")
