from app.modules.notifications.services.notification_events import (
    create_order_status_notification, create_post_like_notification
)


def test_notifications_listing_and_read_state(client, db, auth, make_user):
    alice, bob = make_user("alice"), make_user("bob")
    create_post_like_notification(db, alice.id, bob.id, "post-1")
    create_order_status_notification(db, alice.id, "order-1", "ORD-20260101-000001", "SHIPPED")

    listed = client.get("/api/v1/notifications", headers=auth(alice))
    assert listed.status_code == 200
    assert {n["type"] for n in listed.json()} == {"post_like", "order_status"}

    one = listed.json()[0]
    marked = client.put(f"/api/v1/notifications/{one['id']}", json={"is_read": True}, headers=auth(alice))
    assert marked.json()["is_read"] is True

    unread = client.get("/api/v1/notifications", params={"unread_only": True}, headers=auth(alice))
    assert len(unread.json()) == 1

    response = client.put("/api/v1/notifications/mark-all-read", headers=auth(alice))
    assert response.json()["count"] == 1


def test_cannot_touch_someone_elses_notification(client, db, auth, make_user):
    alice, bob = make_user("alice"), make_user("bob")
    create_post_like_notification(db, alice.id, bob.id, "post-1")
    notification_id = client.get("/api/v1/notifications", headers=auth(alice)).json()[0]["id"]

    response = client.put(f"/api/v1/notifications/{notification_id}", json={"is_read": True}, headers=auth(bob))

    assert response.status_code == 403


def test_like_notification_skips_self_and_unknown_users(db, make_user):
    alice = make_user("alice")

    assert create_post_like_notification(db, alice.id, alice.id, "post-1") is False
    assert create_post_like_notification(db, alice.id, "ghost", "post-1") is False
