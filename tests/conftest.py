from types import SimpleNamespace

import pytest

from yallatiers import create_app
from yallatiers.config import TestConfig


@pytest.fixture
def app():
    return create_app(TestConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield app


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        msg = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=msg)])


class FakeOpenAI:
    def __init__(self, content=None, error=None):
        self.chat = SimpleNamespace(completions=FakeCompletions(content, error))


@pytest.fixture
def fake_openai():
    return FakeOpenAI


def make_user(client, name="Sam", email="sam@example.com", password="pw-123"):
    r = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert r.status_code == 201, r.get_json()
    return r.get_json()


def make_part(client, **overrides):
    body = {
        "name": "Brake Pad Set",
        "description": "Ceramic front pads",
        "conditionRating": 90,
        "estimatedPrice": "$49.99",
        "imageUrl": "https://example.com/pads.jpg",
        "vehicleType": "car",
        "year": "2019",
        "make": "Toyota",
        "model": "Camry",
    }
    body.update(overrides)
    r = client.post("/api/parts", json=body)
    assert r.status_code == 201, r.get_json()
    return r.get_json()
