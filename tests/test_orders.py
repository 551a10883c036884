import re

from app.modules.orders.services.order import generate_order_number


def test_generate_order_number_format():
    assert re.fullmatch(r"ORD-\d{8}-[A-Z0-9]{6}", generate_order_number())


def test_place_and_read_own_order(client, auth, make_user):
    alice = make_user("alice")

    created = client.post("/api/v1/orders", json={"total_amount": "19.99", "items_count": 2}, headers=auth(alice))

    assert created.status_code == 201
    body = created.json()
    assert body["status"] == "PENDING"
    assert body["payment_status"] == "PENDING"

    listed = client.get("/api/v1/orders", headers=auth(alice))
    assert [o["order_number"] for o in listed.json()] == [body["order_number"]]

    fetched = client.get(f"/api/v1/orders/{body['order_number']}", headers=auth(alice))
    assert fetched.status_code == 200


def test_other_customers_order_is_hidden(client, auth, make_user, make_order):
    alice, bob = make_user("alice"), make_user("bob")
    admin = make_user("root", is_admin=True)
    order = make_order(alice)

    assert client.get(f"/api/v1/orders/{order.order_number}", headers=auth(bob)).status_code == 403
    assert client.get(f"/api/v1/orders/{order.order_number}", headers=auth(admin)).status_code == 200
    assert client.get("/api/v1/orders/ORD-00000000-NOPE00", headers=auth(alice)).status_code == 404


def test_non_positive_amount_is_rejected(client, auth, make_user):
    alice = make_user("alice")

    response = client.post("/api/v1/orders", json={"total_amount": "0"}, headers=auth(alice))

    assert response.status_code == 422
