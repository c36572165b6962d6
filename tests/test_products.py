import json
from types import SimpleNamespace

from yallatiers.services import recommender

SEARCH = {
    "vehicleType": "truck",
    "year": "2015",
    "make": "Ford",
    "model": "F-150",
    "mileage": "120000",
    "partSearch": "alternator",
}


def test_search_without_key_serves_fallback(client):
    r = client.post("/api/products/search", json=SEARCH)
    assert r.status_code == 200
    body = r.get_json()
    assert body == recommender.fallback_results(SEARCH)
    again = client.post("/api/products/search", json=SEARCH).get_json()
    assert json.dumps(again) == json.dumps(body)


def test_search_results_shape(client):
    body = client.post("/api/products/search", json=SEARCH).get_json()
    assert len(body) == 3
    for item in body:
        assert 0 <= item["conditionRating"] <= 100
        for k in ("name", "description", "estimatedPrice", "imageUrl"):
            assert item[k]


def test_search_uses_ai_reply(client, monkeypatch, fake_openai):
    reply = json.dumps([
        {"id": str(i), "name": f"Alt {i}", "description": "rebuilt", "conditionRating": "80",
         "estimatedPrice": "$150.00", "imageUrl": "https://img/x.jpg"}
        for i in range(3)
    ])
    monkeypatch.setattr(recommender, "_client", lambda: fake_openai(content=reply))
    body = client.post("/api/products/search", json=SEARCH).get_json()
    assert [r["name"] for r in body] == ["Alt 0", "Alt 1", "Alt 2"]
    assert all(r["conditionRating"] == 80 for r in body)


def test_search_requires_fields(client):
    r = client.post("/api/products/search", json={"vehicleType": "car"})
    assert r.status_code == 400
    assert r.get_json()["error"] == "missing fields: year, make, model, partSearch"


def test_search_remembers_last_vehicle(client):
    client.post("/api/products/search", json=SEARCH)
    r = client.get("/api/vehicle/last")
    assert r.status_code == 200
    assert r.get_json() == {
        "type": "truck", "year": "2015", "make": "Ford", "model": "F-150", "mileage": "120000 miles",
    }


def test_search_with_null_message_serves_fallback(client, monkeypatch):
    class NullMessageClient:
        def __init__(self):
            reply = SimpleNamespace(choices=[SimpleNamespace(message=None)])
            self.chat = SimpleNamespace(completions=SimpleNamespace(create=lambda **_kw: reply))

    monkeypatch.setattr(recommender, "_client", NullMessageClient)
    r = client.post("/api/products/search", json=SEARCH)
    assert r.status_code == 200
    assert r.get_json() == recommender.fallback_results(SEARCH)
