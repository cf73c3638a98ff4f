"""Notification fan-out and per-recipient read tracking."""

from grocery_service.app.crud.system import notifications_crud
from grocery_service.app.enum.notification_enum import NotificationType
from grocery_service.app.models.system.notification_reads import NotificationRead
from grocery_service.app.schemas.family.family_schemas import FamilyJoinRequest
from grocery_service.app.crud.family import family_crud


def _join(db, family, user):
    family_crud.join_family(db, user.id, FamilyJoinRequest(invite_code=family.invite_code))


def _notify(db, family, title="Hello", **kwargs):
    return notifications_crud.notify(db, family.id, NotificationType.custom, title, "message", **kwargs)


def test_default_recipients_are_active_members(db, family, owner, make_user):
    member = make_user("Member")
    _join(db, family, member)

    notification = _notify(db, family)

    assert sorted(notification.recipients) == sorted([str(owner.id), str(member.id)])


def test_explicit_recipients_are_kept(db, family, owner):
    notification = _notify(db, family, recipients=[owner.id, owner.id])

    assert notification.recipients == [str(owner.id)]


def test_mark_read_twice_is_idempotent(client, db, family, owner, owner_headers):
    notification = _notify(db, family)

    first = client.post(f"/api/notifications/{notification.id}/read", headers=owner_headers)
    second = client.post(f"/api/notifications/{notification.id}/read", headers=owner_headers)

    assert first.status_code == 200
    assert second.status_code == 200
    rows = db.query(NotificationRead).filter(NotificationRead.notification_id == notification.id).all()
    assert len(rows) == 1


def test_unread_count_is_per_user(db, family, owner, make_user):
    member = make_user("Member")
    _join(db, family, member)  # emits member_joined
    first = _notify(db, family, "one")
    second = _notify(db, family, "two")

    assert notifications_crud.unread_count(db, family.id, owner.id) == 3
    assert notifications_crud.unread_count(db, family.id, member.id) == 3

    notifications_crud.mark_read(db, family.id, first.id, member.id)
    assert notifications_crud.unread_count(db, family.id, member.id) == 2
    assert notifications_crud.unread_count(db, family.id, owner.id) == 3

    notifications_crud.mark_read(db, family.id, first.id, member.id)
    assert notifications_crud.unread_count(db, family.id, member.id) == 2

    notifications_crud.mark_read(db, family.id, second.id, member.id)
    assert notifications_crud.unread_count(db, family.id, member.id) == 1


def test_list_annotates_read_state(client, db, family, owner, owner_headers):
    read = _notify(db, family, "read me")
    _notify(db, family, "leave me")
    notifications_crud.mark_read(db, family.id, read.id, owner.id)

    data = client.get("/api/notifications", headers=owner_headers).json()["data"]
    assert data["unread_count"] == 1
    assert [(n["title"], n["is_read"]) for n in data["notifications"]] == [
        ("leave me", False), ("read me", True)]

    unread = client.get("/api/notifications", params={"read": "false"}, headers=owner_headers).json()["data"]
    assert [n["title"] for n in unread["notifications"]] == ["leave me"]


def test_read_all(client, db, family, owner, owner_headers):
    for title in ("a", "b", "c"):
        _notify(db, family, title)

    response = client.post("/api/notifications/read-all", headers=owner_headers).json()["data"]
    assert response == {"marked": 3, "unread_count": 0}

    again = client.post("/api/notifications/read-all", headers=owner_headers).json()["data"]
    assert again["marked"] == 0


def test_other_family_notification_is_not_found(client, db, make_user, headers_for, owner_headers):
    stranger = make_user("Stranger")
    client.post("/api/families", json={"name": "Elsewhere"}, headers=headers_for(stranger))
    theirs = client.post("/api/notifications/send",
                         json={"type": "custom", "title": "Secret", "message": "shh"},
                         headers=headers_for(stranger)).json()["data"]

    response = client.post(f"/api/notifications/{theirs['id']}/read", headers=owner_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Notification not found"
    mine = client.get("/api/notifications", headers=owner_headers).json()["data"]
    assert mine["notifications"] == []


def test_send_notification(client, owner, owner_headers):
    response = client.post("/api/notifications/send",
                           json={"type": "custom", "title": "Dinner", "message": "at 7",
                                 "data": {"room": "kitchen"}},
                           headers=owner_headers)

    assert response.status_code == 201
    notification = response.json()["data"]
    assert notification["recipients"] == [str(owner.id)]
    assert notification["data"] == {"room": "kitchen"}
    assert notification["is_read"] is False


def test_send_requires_membership(client, make_user, headers_for):
    response = client.post("/api/notifications/send",
                           json={"type": "custom", "title": "x", "message": "y"},
                           headers=headers_for(make_user()))

    assert response.status_code == 404


def test_send_keeps_payload_exactly_as_given(client, owner_headers):
    payload = {"code": "  A  B  ", "blank": "", "list": ["", "x"], "nested": {"note": " hi "}}

    response = client.post("/api/notifications/send",
                           json={"type": "custom", "title": "  Dinner  ", "message": "at 7", "data": payload},
                           headers=owner_headers)

    notification = response.json()["data"]
    assert notification["title"] == "Dinner"
    assert notification["data"] == payload


def test_mark_read_recovers_when_a_concurrent_read_wins(db, family, owner, monkeypatch):
    notification = _notify(db, family)
    db.add(NotificationRead(notification_id=notification.id, user_id=owner.id))
    db.commit()

    # the first lookup misses, so the insert collides with the existing receipt
    real = notifications_crud._find_receipt
    calls = {"n": 0}

    def _lookup(*args):
        calls["n"] += 1
        return None if calls["n"] == 1 else real(*args)

    monkeypatch.setattr(notifications_crud, "_find_receipt", _lookup)

    result = notifications_crud.mark_read(db, family.id, notification.id, owner.id)

    assert result.unread_count == 0
    rows = db.query(NotificationRead).filter(NotificationRead.notification_id == notification.id).all()
    assert len(rows) == 1
