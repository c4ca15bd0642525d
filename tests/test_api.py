"""Tests for the HTTP surface."""


def _add_item(client, item_id="F1", item_type="found", contact="c1", **overrides):
    payload = {
        "id": item_id,
        "item_type": item_type,
        "title": "Black wallet",
        "description": "Leather wallet",
        "category": "documents",
        "location": "Main street",
        "contact": contact,
    }
    payload.update(overrides)
    return client.post("/items", json=payload)


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_add_and_list_items(client):
    response = _add_item(client)

    assert response.status_code == 201
    assert response.json() == {"ok": True, "id": "F1"}

    items = client.get("/items").json()["items"]
    assert len(items) == 1
    assert items[0]["status"] == "active"
    assert items[0]["reporter_name"] == "c1"


def test_add_item_strips_fields(client):
    _add_item(client, title="  Black wallet  ", contact=" c1 ")

    item = client.get("/items/F1").json()["item"]
    assert item["title"] == "Black wallet"
    assert item["contact"] == "c1"


def test_add_item_rejects_blank_and_unknown_values(client):
    assert _add_item(client, title="   ").status_code == 422
    assert _add_item(client, category="vehicles").status_code == 422
    assert _add_item(client, item_type="stolen").status_code == 422
    assert client.get("/items").json()["items"] == []


def test_duplicate_id(client):
    _add_item(client)
    response = _add_item(client, title="Other")

    assert response.status_code == 409
    assert response.json()["code"] == "DUPLICATE_ID"
    assert client.get("/items/F1").json()["item"]["title"] == "Black wallet"


def test_unknown_item(client):
    response = client.get("/items/nope")

    assert response.status_code == 404
    assert response.json()["code"] == "UNKNOWN_ITEM"


def test_claim_review_flow(client, claim_payload):
    _add_item(client)

    response = client.post("/items/F1/claims", json=claim_payload)
    assert response.status_code == 201
    k1 = response.json()["claim_id"]

    assert client.get("/items/F1").json()["item"]["status"] == "claim_pending"
    assert client.get("/items/active").json()["items"] == []

    assert client.post(f"/claims/{k1}/reject").status_code == 200
    assert client.get("/items/F1").json()["item"]["status"] == "active"

    k2 = client.post("/items/F1/claims", json={**claim_payload, "name": "Sam"}).json()["claim_id"]
    assert client.get("/items/F1").json()["latest_claim_id"] == k2

    assert client.post(f"/claims/{k2}/approve").status_code == 200
    assert client.get("/items/F1").json()["item"]["status"] == "resolved"

    claims = client.get("/items/F1/claims").json()["claims"]
    assert [c["id"] for c in claims] == [k1, k2]
    assert len(client.get("/claims").json()["claims"]) == 2
    assert client.get(f"/claims/{k1}").json()["claim"]["name"] == "Robin"

    finders = client.get("/finders").json()["finders"]
    assert finders == [
        {
            "contact": "c1",
            "name": "c1",
            "total_returned": 1,
            "credit_score": 10,
            "tier": "Bronze",
        }
    ]

    annotated = client.get("/items/with-finder").json()["items"]
    assert annotated[0]["credit_score"] == 10
    assert annotated[0]["tier"] == "Bronze"


def test_claim_on_lost_item_is_invalid(client, claim_payload):
    _add_item(client, item_id="L1", item_type="lost")

    response = client.post("/items/L1/claims", json=claim_payload)
    assert response.status_code == 409
    assert response.json()["code"] == "INVALID_TRANSITION"

    assert client.post("/items/L1/resolve").status_code == 200
    assert client.get("/items/L1").json()["item"]["status"] == "resolved"


def test_resolve_found_item_is_invalid(client):
    _add_item(client)

    response = client.post("/items/F1/resolve")
    assert response.status_code == 409
    assert response.json()["code"] == "INVALID_TRANSITION"


def test_claim_requires_all_clues(client, claim_payload):
    _add_item(client)

    response = client.post("/items/F1/claims", json={**claim_payload, "clue3": " "})
    assert response.status_code == 422
    assert client.get("/items/F1").json()["item"]["status"] == "active"


def test_unknown_claim(client):
    for action in ("approve", "reject"):
        response = client.post(f"/claims/missing/{action}")
        assert response.status_code == 404
        assert response.json()["code"] == "UNKNOWN_CLAIM"


def test_finder_lookup(client):
    assert client.get("/finders/c1").status_code == 404

    tiers = client.get("/finders/tiers").json()["tiers"]
    assert tiers[0] == {"tier": "Bronze", "min_score": 0, "max_score": 19}
    assert tiers[-1] == {"tier": "Platinum", "min_score": 100, "max_score": None}


def test_item_id_must_be_a_single_path_segment(client):
    for bad_id in ("a/b", "a b", "active", "with-finder", ".."):
        response = _add_item(client, item_id=bad_id)
        assert response.status_code == 422, bad_id

    assert client.get("/items").json()["items"] == []

    assert _add_item(client, item_id="wallet-2024_01.A~1").status_code == 201
    assert client.post("/items/wallet-2024_01.A~1/claims", json={
        "name": "Robin",
        "contact": "robin@example.com",
        "clue1": "a",
        "clue2": "b",
        "clue3": "c",
    }).status_code == 201


def test_unknown_finder_has_error_code(client):
    response = client.get("/finders/nobody")

    assert response.status_code == 404
    assert response.json() == {"code": "UNKNOWN_FINDER", "detail": "Finder 'nobody' not found"}
