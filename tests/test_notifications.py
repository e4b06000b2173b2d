import pytest

from shopapp.core.exceptions import NotFoundError
from shopapp.entities import Notification
from shopapp.notifications.service import NotificationService


@pytest.fixture
def inbox(db_session, test_user, other_user, test_admin):
    notes = [
        Notification(user_id=test_user.id, title="One", message="first"),
        Notification(user_id=test_user.id, title="Two", message="second"),
        Notification(user_id=other_user.id, title="Theirs", message="not yours"),
        Notification(admin_id=test_admin.id, title="Admin", message="for admin"),
    ]
    db_session.add_all(notes)
    db_session.commit()
    return notes


def test_list_and_count(client, auth_headers, inbox):
    listed = client.get("/api/notifications/", headers=auth_headers).json()
    assert [n["title"] for n in listed] == ["Two", "One"]
    assert client.get("/api/notifications/count", headers=auth_headers).json() == {"count": 2}


def test_mark_read(client, auth_headers, inbox):
    first = inbox[0]
    assert client.put(f"/api/notifications/{first.id}/read", headers=auth_headers).status_code == 200
    unread = client.get("/api/notifications/unread", headers=auth_headers).json()
    assert [n["title"] for n in unread] == ["Two"]

    assert client.put("/api/notifications/read-all", headers=auth_headers).status_code == 200
    assert client.get("/api/notifications/count", headers=auth_headers).json()["count"] == 0


def test_foreign_notifications_are_forbidden(client, auth_headers, inbox):
    theirs = inbox[2]
    assert client.put(f"/api/notifications/{theirs.id}/read", headers=auth_headers).status_code == 403
    assert client.delete(f"/api/notifications/{theirs.id}", headers=auth_headers).status_code == 403
    assert client.delete("/api/notifications/999", headers=auth_headers).status_code == 404


def test_delete(client, db_session, auth_headers, inbox):
    assert client.delete(f"/api/notifications/{inbox[0].id}", headers=auth_headers).status_code == 200
    assert db_session.query(Notification).count() == 3


def test_admin_inbox(client, admin_headers, inbox):
    listed = client.get("/api/notifications/", headers=admin_headers).json()
    assert [n["title"] for n in listed] == ["Admin"]
    # user ids and admin ids share a numeric space, so ownership must check the right column
    assert client.put(f"/api/notifications/{inbox[0].id}/read", headers=admin_headers).status_code == 403


def test_create_for_email(db_session, test_user):
    NotificationService.create_for_email(db_session, test_user.email, "Hello", "World")
    db_session.commit()
    assert db_session.query(Notification).filter(Notification.user_id == test_user.id).count() == 1

    with pytest.raises(NotFoundError):
        NotificationService.create_for_email(db_session, "ghost@example.com", "Hello", "World")


def test_status_message_default_and_custom(db_session, test_user):
    default = NotificationService.notify_user_about_order_status(db_session, test_user, 7, "SHIPPED")
    custom = NotificationService.notify_user_about_order_status(db_session, test_user, 7, "SHIPPED", "On its way")
    assert default.message == "Your order #7 status has been updated to: SHIPPED"
    assert custom.message == "On its way"
