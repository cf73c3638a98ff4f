from grocery_service.app.models.procurement.merchants import Merchant


MERCHANT = {
    "name": "Green Grocer",
    "type": "specialty",
    "phone": "+15551234567",
    "email": "hello@greengrocer.com",
    "address": {"street": "1 Market St", "city": "Springfield", "zip_code": "12345"},
    "categories": ["fruits", "vegetables"],
    "rating": 4.5,
}


def test_create_and_get_merchant(client, owner_headers):
    created = client.post("/api/merchants", json=MERCHANT, headers=owner_headers)

    assert created.status_code == 201
    merchant = created.json()["data"]
    assert merchant["type"] == "specialty"
    assert merchant["address"]["city"] == "Springfield"
    assert merchant["categories"] == ["fruits", "vegetables"]
    assert merchant["status"] == "active"

    fetched = client.get(f"/api/merchants/{merchant['id']}", headers=owner_headers).json()["data"]
    assert fetched["email"] == "hello@greengrocer.com"


def test_invalid_email_and_rating(client, owner_headers):
    response = client.post("/api/merchants", json={**MERCHANT, "email": "nope", "rating": 7},
                           headers=owner_headers)

    assert response.status_code == 400
    assert {e["field"] for e in response.json()["errors"]} == {"email", "rating"}


def test_update_returns_changed_fields(client, owner_headers):
    merchant = client.post("/api/merchants", json=MERCHANT, headers=owner_headers).json()["data"]

    response = client.patch(f"/api/merchants/{merchant['id']}",
                            json={"rating": 3, "notes": "closed on sundays"}, headers=owner_headers)

    assert response.status_code == 200
    result = response.json()["data"]
    assert sorted(result["updated"]) == ["notes", "rating"]
    assert result["merchant"]["rating"] == 3
    assert result["merchant"]["name"] == "Green Grocer"


def test_list_filters_search_and_excludes_deleted(client, db, owner_headers):
    keep = client.post("/api/merchants", json={"name": "Bulk Barn", "type": "wholesale"},
                       headers=owner_headers).json()["data"]
    client.post("/api/merchants", json={"name": "Aldi", "type": "supermarket"}, headers=owner_headers)
    gone = client.post("/api/merchants", json={"name": "Corner", "type": "grocery"},
                       headers=owner_headers).json()["data"]
    client.delete(f"/api/merchants/{gone['id']}", headers=owner_headers)

    everything = client.get("/api/merchants", headers=owner_headers).json()["data"]
    assert [m["name"] for m in everything["merchants"]] == ["Aldi", "Bulk Barn"]

    wholesale = client.get("/api/merchants", params={"type": "wholesale"}, headers=owner_headers).json()["data"]
    assert [m["id"] for m in wholesale["merchants"]] == [keep["id"]]

    search = client.get("/api/merchants", params={"search": "bulk"}, headers=owner_headers).json()["data"]
    assert search["total"] == 1

    assert client.get(f"/api/merchants/{gone['id']}", headers=owner_headers).status_code == 404
    assert db.query(Merchant).count() == 3


def test_merchants_are_family_scoped(client, owner_headers, make_user, headers_for):
    merchant = client.post("/api/merchants", json=MERCHANT, headers=owner_headers).json()["data"]
    stranger = make_user("Stranger")
    client.post("/api/families", json={"name": "Elsewhere"}, headers=headers_for(stranger))

    listing = client.get("/api/merchants", headers=headers_for(stranger)).json()["data"]
    assert listing["merchants"] == []

    response = client.patch(f"/api/merchants/{merchant['id']}", json={"name": "Mine now"},
                            headers=headers_for(stranger))
    assert response.status_code == 404


def test_merchant_type_lookup(client, owner_headers):
    types = client.get("/api/merchants/merchant-type-lookup", headers=owner_headers).json()["data"]
    assert [t["id"] for t in types] == ["grocery", "supermarket", "wholesale", "specialty"]


def test_search_wildcard_characters_are_literal(client, owner_headers):
    for name in ("Farm_Box", "Fresh Mart", "50% Off Store"):
        client.post("/api/merchants", json={"name": name, "type": "grocery"}, headers=owner_headers)

    underscore = client.get("/api/merchants", params={"search": "_"}, headers=owner_headers).json()["data"]
    percent = client.get("/api/merchants", params={"search": "%"}, headers=owner_headers).json()["data"]

    assert [m["name"] for m in underscore["merchants"]] == ["Farm_Box"]
    assert [m["name"] for m in percent["merchants"]] == ["50% Off Store"]
