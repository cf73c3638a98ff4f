"""Family Directory: create / join / members / settings over the HTTP API."""

from grocery_service.app.crud.family import family_crud
from grocery_service.app.enum.family_enum import Capability, FamilyRole, MemberStatus, has_capability
from grocery_service.app.enum.notification_enum import NotificationType
from grocery_service.app.models.system.notifications import Notification


def test_create_family_makes_caller_owner(client, make_user, headers_for):
    user = make_user("Bob")

    response = client.post("/api/families", json={"name": "Bob's House"}, headers=headers_for(user))

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "Success"
    family = body["data"]
    assert family["name"] == "Bob's House"
    assert family["role"] == "owner"
    assert len(family["invite_code"]) == 6
    assert family["invite_code"].isalnum()
    assert family["invite_code"] == family["invite_code"].upper()
    assert [m["user_id"] for m in family["members"]] == [str(user.id)]
    assert family["settings"]["low_stock_threshold"] == 1
    assert family["settings"]["expiry_warning_days"] == 2


def test_second_create_for_member_is_conflict(client, owner_headers):
    response = client.post("/api/families", json={"name": "Another"}, headers=owner_headers)

    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "Failure"
    assert body["status_code"] == "304"


def test_join_with_invite_code(client, db, family, make_user, headers_for):
    joiner = make_user("Carol")

    response = client.post("/api/families/join",
                           json={"invite_code": family.invite_code.lower()},
                           headers=headers_for(joiner))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == str(family.id)
    assert data["role"] == "member"
    assert len(data["members"]) == 2

    joined = db.query(Notification).filter(Notification.type == NotificationType.member_joined).all()
    assert len(joined) == 1


def test_join_with_unknown_code_is_not_found(client, make_user, headers_for):
    response = client.post("/api/families/join", json={"invite_code": "ZZZZZZ"},
                           headers=headers_for(make_user()))

    assert response.status_code == 404
    assert response.json()["status_code"] == "306"


def test_member_of_one_family_cannot_join_another(client, owner_headers, make_user, headers_for):
    other_owner = make_user("Dan")
    other = client.post("/api/families", json={"name": "Dan's"}, headers=headers_for(other_owner))
    invite_code = other.json()["data"]["invite_code"]

    response = client.post("/api/families/join", json={"invite_code": invite_code},
                           headers=owner_headers)

    assert response.status_code == 400
    assert response.json()["status_code"] == "304"


def test_not_part_of_family(client, make_user, headers_for):
    response = client.get("/api/families/my-family", headers=headers_for(make_user()))

    assert response.status_code == 404
    assert response.json()["message"] == "User not part of any family"


def test_owner_adds_member_by_phone(client, family, owner_headers):
    response = client.post(f"/api/families/{family.id}/members",
                           json={"name": "Eve", "phone": "+15559990000", "role": "admin"},
                           headers=owner_headers)

    assert response.status_code == 201
    member = response.json()["data"]
    assert member["role"] == "admin"
    assert member["user"]["phone"] == "+15559990000"

    again = client.post(f"/api/families/{family.id}/members",
                        json={"name": "Eve", "phone": "+15559990000"},
                        headers=owner_headers)
    assert again.status_code == 400
    assert again.json()["message"] == "User is already a family member"


def test_plain_member_cannot_add_members(client, family, make_user, headers_for):
    member = make_user("Frank")
    client.post("/api/families/join", json={"invite_code": family.invite_code},
                headers=headers_for(member))

    response = client.post(f"/api/families/{family.id}/members",
                           json={"name": "Gina", "phone": "+15558887777"},
                           headers=headers_for(member))

    assert response.status_code == 403
    assert response.json()["status_code"] == "302"


def test_foreign_family_id_is_forbidden(client, owner_headers, make_user, headers_for):
    stranger = make_user("Hank")
    other = client.post("/api/families", json={"name": "Hank's"}, headers=headers_for(stranger))
    other_id = other.json()["data"]["id"]

    response = client.patch(f"/api/families/{other_id}/settings",
                            json={"low_stock_threshold": 5}, headers=owner_headers)
    assert response.status_code == 403

    listing = client.get(f"/api/families/{other_id}/members", headers=owner_headers)
    assert listing.status_code == 403


def test_remove_member_and_owner_protection(client, db, family, make_user, headers_for, owner_headers):
    member = make_user("Ivy")
    client.post("/api/families/join", json={"invite_code": family.invite_code},
                headers=headers_for(member))

    removed = client.delete(f"/api/families/{family.id}/members/{member.id}", headers=owner_headers)
    assert removed.status_code == 200
    assert removed.json()["data"]["status"] == "removed"

    members = client.get(f"/api/families/{family.id}/members", headers=owner_headers).json()["data"]
    assert members["total"] == 1

    own = client.delete(f"/api/families/{family.id}/members/{family.owner_id}", headers=owner_headers)
    assert own.status_code == 403


def test_removed_member_can_join_again(client, family, make_user, headers_for, owner_headers):
    member = make_user("Jack")
    client.post("/api/families/join", json={"invite_code": family.invite_code},
                headers=headers_for(member))
    client.post("/api/families/leave", headers=headers_for(member))

    rejoin = client.post("/api/families/join", json={"invite_code": family.invite_code},
                         headers=headers_for(member))
    assert rejoin.status_code == 200


def test_owner_cannot_leave(client, owner_headers):
    response = client.post("/api/families/leave", headers=owner_headers)
    assert response.status_code == 403


def test_update_settings(client, family, owner_headers):
    response = client.patch(f"/api/families/{family.id}/settings",
                            json={"notifications": {"new_items": False}, "low_stock_threshold": 3},
                            headers=owner_headers)

    assert response.status_code == 200
    settings = response.json()["data"]
    assert settings["low_stock_threshold"] == 3
    assert settings["expiry_warning_days"] == 2
    assert settings["notifications"]["new_items"] is False
    assert settings["notifications"]["low_stock"] is True


def test_negative_threshold_is_validation_error(client, family, owner_headers):
    response = client.patch(f"/api/families/{family.id}/settings",
                            json={"low_stock_threshold": -1}, headers=owner_headers)

    assert response.status_code == 400
    body = response.json()
    assert body["status_code"] == "300"
    assert body["errors"][0]["field"] == "low_stock_threshold"


def test_membership_endpoint(client, family, owner_headers):
    response = client.get("/api/families/membership", headers=owner_headers)

    assert response.json()["data"] == {"family_id": str(family.id), "role": "owner"}


def test_role_capabilities():
    assert has_capability(FamilyRole.owner, Capability.update_settings)
    assert has_capability(FamilyRole.admin, Capability.remove_member)
    assert not has_capability(FamilyRole.member, Capability.add_member)
    assert MemberStatus.active.value == "active"


def test_create_retries_when_invite_code_is_taken_concurrently(client, db, family, make_user, headers_for,
                                                              monkeypatch):
    real = family_crud._unused_invite_code
    codes = iter([family.invite_code])
    # the first code passes the pre-check but collides on insert
    monkeypatch.setattr(family_crud, "_unused_invite_code", lambda db: next(codes, None) or real(db))

    response = client.post("/api/families", json={"name": "Racers"}, headers=headers_for(make_user("Kim")))

    assert response.status_code == 201
    assert response.json()["data"]["invite_code"] != family.invite_code


def test_create_gives_up_after_repeated_invite_code_collisions(client, db, family, make_user, headers_for,
                                                              monkeypatch):
    taken = family.invite_code
    monkeypatch.setattr(family_crud, "_unused_invite_code", lambda db: taken)

    response = client.post("/api/families", json={"name": "Unlucky"}, headers=headers_for(make_user("Lee")))

    assert response.status_code == 409
    assert response.json()["message"] == "Could not allocate an invite code, please retry"
