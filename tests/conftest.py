"""
Pytest fixtures: an app wired to an in-memory mongomock client.
"""
import mongomock
import pytest
from fastapi.testclient import TestClient

from gradebook.core.config import Settings
from gradebook.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(CLIENT_BUILD_DIR=str(tmp_path / "build"))


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def app(settings, mongo_client):
    return create_app(settings, mongo_client=mongo_client)


@pytest.fixture
def client(app):
    # Entering the context runs the lifespan, which attaches the collection
    with TestClient(app) as c:
        yield c


@pytest.fixture
def amy(client):
    resp = client.post("/", json={"name": "Amy", "rollNo": "R1"})
    assert resp.status_code == 201
    return resp.json()["student"]
