import requests

from yallatiers.services import vpic


class FakeResponse:
    def __init__(self, payload=None, status=200):
        self.payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


def _patch_get(monkeypatch, response=None, error=None):
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append({"url": url, "params": params, "timeout": timeout})
        if error:
            raise error
        return response

    monkeypatch.setattr(vpic.requests, "get", fake_get)
    return calls


def test_makes_from_upstream(client, monkeypatch):
    calls = _patch_get(monkeypatch, FakeResponse({"Results": [{"MakeName": "TESLA"}, {"MakeName": "FORD"}]}))
    r = client.get("/api/vehicle/makes?vehicleType=car&year=2020")
    assert r.status_code == 200
    assert r.get_json() == ["TESLA", "FORD"]
    assert calls[0]["url"].endswith("/GetMakesForVehicleType/car")
    assert calls[0]["params"] == {"format": "json", "modelYear": "2020"}
    assert calls[0]["timeout"] == 10


def test_makes_fallback_on_network_error(client, monkeypatch):
    _patch_get(monkeypatch, error=requests.ConnectionError("down"))
    r = client.get("/api/vehicle/makes?vehicleType=car&year=2020")
    assert r.status_code == 200
    assert r.get_json() == vpic.FALLBACK_MAKES


def test_makes_fallback_on_http_error(client, monkeypatch):
    _patch_get(monkeypatch, FakeResponse(status=503))
    r = client.get("/api/vehicle/makes?vehicleType=car&year=2020")
    assert r.get_json() == vpic.FALLBACK_MAKES


def test_makes_without_results_is_empty(client, monkeypatch):
    _patch_get(monkeypatch, FakeResponse({"Count": 0}))
    r = client.get("/api/vehicle/makes?vehicleType=car&year=2020")
    assert r.get_json() == []


def test_models_path_and_result(client, monkeypatch):
    calls = _patch_get(monkeypatch, FakeResponse({"Results": [{"Model_Name": "Model 3"}]}))
    r = client.get("/api/vehicle/models?vehicleType=car&year=2021&make=Land%20Rover")
    assert r.get_json() == ["Model 3"]
    assert calls[0]["url"].endswith(
        "/GetModelsForMakeYear/make/Land%20Rover/modelyear/2021/vehicleType/car")


def test_models_fallback_by_make(client, monkeypatch):
    _patch_get(monkeypatch, FakeResponse(ValueError("not json")))
    r = client.get("/api/vehicle/models?vehicleType=car&year=2021&make=Honda")
    assert r.get_json() == ["Civic", "Accord", "CR-V", "Pilot", "Odyssey"]
    r = client.get("/api/vehicle/models?vehicleType=car&year=2021&make=Kia")
    assert r.get_json() == vpic.GENERIC_MODELS


def test_lookup_requires_params(client):
    r = client.get("/api/vehicle/makes?vehicleType=car")
    assert r.status_code == 400
    assert "error" in r.get_json()
    r = client.get("/api/vehicle/models?vehicleType=car&year=2021")
    assert r.status_code == 400


def test_last_vehicle_empty(client):
    r = client.get("/api/vehicle/last")
    assert r.status_code == 204
