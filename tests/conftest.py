import os

# keep test runs from writing memorial.log into the working directory
os.environ["LOG_FILE"] = ""

import pytest
from fastapi.testclient import TestClient

from memorial.config import Settings
from memorial.database import Database
from memorial.main import create_app


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Settings pointing at a temporary SQLite file, upload and build directory."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("CLIENT_BUILD_DIR", str(tmp_path / "build"))
    monkeypatch.setenv("APP_ENV", "test")
    return Settings()


@pytest.fixture
def database(settings):
    db = Database(settings.DATABASE_URL)
    yield db
    db.dispose()


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def create_memory(client):
    def _create(**fields):
        form = {"title": "Trip", "story": "A story", "author": "Dana", "date": ""}
        form.update(fields)
        response = client.post("/api/memories", data=form)
        assert response.status_code == 200, response.text
        return response.json()
    return _create
