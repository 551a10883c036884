import pytest

from app.core.exceptions import BadRequestError, NotFoundError, PermissionDeniedError
from app.modules.friendships.schemas.friendship import FriendRequestStatus
from app.modules.friendships.services.friendship import (
    are_friends, get_friends, remove_friend, respond_to_friend_request, send_friend_request
)
from app.modules.notifications.models.notification import Notification


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


class TestAreFriends:
    def test_accepted_request_counts_both_ways(self, db, alice, bob, befriend):
        befriend(alice, bob)

        assert are_friends(db, alice.id, bob.id)
        assert are_friends(db, bob.id, alice.id)

    def test_pending_and_rejected_do_not_count(self, db, alice, bob, make_user):
        carol = make_user("carol")
        send_friend_request(db, alice.id, bob.id)
        request = send_friend_request(db, carol.id, alice.id)
        respond_to_friend_request(db, request.id, alice.id, FriendRequestStatus.REJECTED)

        assert not are_friends(db, alice.id, bob.id)
        assert not are_friends(db, alice.id, carol.id)

    def test_user_is_not_own_friend(self, db, alice):
        assert not are_friends(db, alice.id, alice.id)


class TestSendFriendRequest:
    def test_self_request_rejected(self, db, alice):
        with pytest.raises(BadRequestError):
            send_friend_request(db, alice.id, alice.id)

    def test_unknown_receiver(self, db, alice):
        with pytest.raises(NotFoundError):
            send_friend_request(db, alice.id, "ghost")

    def test_reverse_pending_request_is_accepted(self, db, alice, bob):
        send_friend_request(db, alice.id, bob.id)

        request = send_friend_request(db, bob.id, alice.id)

        assert request.status == FriendRequestStatus.ACCEPTED.value
        assert request.sender_id == alice.id
        assert are_friends(db, alice.id, bob.id)

    def test_resend_after_rejection_goes_back_to_pending(self, db, alice, bob):
        request = send_friend_request(db, alice.id, bob.id)
        respond_to_friend_request(db, request.id, bob.id, FriendRequestStatus.REJECTED)

        again = send_friend_request(db, alice.id, bob.id)

        assert again.id == request.id
        assert again.status == FriendRequestStatus.PENDING.value

    def test_already_friends(self, db, alice, bob, befriend):
        befriend(alice, bob)

        with pytest.raises(BadRequestError, match="already friends"):
            send_friend_request(db, bob.id, alice.id)


class TestRespond:
    def test_only_receiver_may_answer(self, db, alice, bob):
        request = send_friend_request(db, alice.id, bob.id)

        with pytest.raises(PermissionDeniedError):
            respond_to_friend_request(db, request.id, alice.id, FriendRequestStatus.ACCEPTED)

    def test_cannot_answer_twice(self, db, alice, bob):
        request = send_friend_request(db, alice.id, bob.id)
        respond_to_friend_request(db, request.id, bob.id, FriendRequestStatus.ACCEPTED)

        with pytest.raises(BadRequestError):
            respond_to_friend_request(db, request.id, bob.id, FriendRequestStatus.REJECTED)


def test_get_and_remove_friends(db, alice, bob, make_user, befriend):
    carol = make_user("carol")
    befriend(alice, bob)
    befriend(carol, alice)

    assert {u.username for u in get_friends(db, alice.id)} == {"bob", "carol"}

    remove_friend(db, bob.id, alice.id)

    assert not are_friends(db, alice.id, bob.id)
    assert [u.username for u in get_friends(db, alice.id)] == ["carol"]
    with pytest.raises(NotFoundError):
        remove_friend(db, alice.id, bob.id)


class TestFriendshipEndpoints:
    def test_request_accept_and_list(self, client, db, auth, alice, bob):
        sent = client.post("/api/v1/friends/requests", json={"receiver_id": bob.id}, headers=auth(alice))
        assert sent.status_code == 200
        assert sent.json()["status"] == "PENDING"

        pending = client.get("/api/v1/friends/requests", headers=auth(bob))
        assert [r["id"] for r in pending.json()] == [sent.json()["id"]]

        answered = client.put(
            f"/api/v1/friends/requests/{sent.json()['id']}",
            json={"status": "ACCEPTED"},
            headers=auth(bob),
        )
        assert answered.status_code == 200
        assert answered.json()["status"] == "ACCEPTED"

        friends = client.get("/api/v1/friends", headers=auth(alice))
        assert [u["username"] for u in friends.json()] == ["bob"]

        types = {n.type for n in db.query(Notification).all()}
        assert types == {"friend_request", "friend_accepted"}

    def test_answer_with_pending_is_invalid(self, client, auth, alice, bob):
        sent = client.post("/api/v1/friends/requests", json={"receiver_id": bob.id}, headers=auth(alice))

        response = client.put(
            f"/api/v1/friends/requests/{sent.json()['id']}",
            json={"status": "PENDING"},
            headers=auth(bob),
        )

        assert response.status_code == 422

    def test_unfriend(self, client, auth, alice, bob, befriend):
        befriend(alice, bob)

        response = client.delete(f"/api/v1/friends/{bob.id}", headers=auth(alice))
        assert response.status_code == 204

        response = client.delete(f"/api/v1/friends/{bob.id}", headers=auth(alice))
        assert response.status_code == 404
