import pytest
from fastapi.testclient import TestClient

from main import app


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_PATH", str(path))
    return path


@pytest.fixture
def client(db_path):
    # Context manager runs the lifespan (connect + schema).
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers(client):
    res = client.post(
        "/api/auth/register",
        json={"username": "chef", "email": "chef@example.com", "password": "s3cret-pass"},
    )
    assert res.status_code == 201
    token = res.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


def make_recipe(client, headers, **overrides):
    data = {
        "title": "Pancakes",
        "prepTime": 15,
        "difficulty": 1,
        "budget": 10,
        "description": "Fluffy",
    }
    data.update(overrides)
    res = client.post("/api/recipes", json={"data": data}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["data"]


def make_ingredient(client, headers, name):
    res = client.post("/api/ingredients", json={"data": {"name": name}}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["data"]
