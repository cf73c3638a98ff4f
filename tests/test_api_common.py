"""Auth, envelope and health checks shared by every router."""

from jose import jwt

from shared.core.config import settings


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "Success"
    assert body["data"] == {"status": "healthy"}


def test_invalid_token_is_unauthorized(client, db):
    response = client.get("/api/inventory", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401
    assert response.json()["status_code"] == "201"


def test_token_for_unknown_user(client, db):
    token = jwt.encode({"user_id": "3f1b6c1e-8a57-4bb8-9d3c-1e4f0a9c2b11"}, settings.JWT_SECRET,
                       algorithm=settings.JWT_ALGORITHM)

    response = client.get("/api/inventory", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["status_code"] == "203"


def test_inactive_user_is_rejected(client, db, make_user, headers_for):
    user = make_user("Dormant")
    user.status = "inactive"
    db.commit()

    response = client.get("/api/families/my-family", headers=headers_for(user))

    assert response.status_code == 403


def test_error_envelope_shape(client, make_user, headers_for):
    body = client.get("/api/orders", headers=headers_for(make_user())).json()

    assert set(body) >= {"data", "status", "status_code", "message"}
    assert body["data"] is None
    assert body["status"] == "Failure"
