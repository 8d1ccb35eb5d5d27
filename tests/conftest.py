import re

import pytest
from fastapi.testclient import TestClient

from app import db
from app.main import app


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Fresh SQLite file per test."""
    path = tmp_path / "fortunes.db"
    monkeypatch.setattr(db, "DB_PATH", path)
    db.init_db()
    return path


@pytest.fixture
def client(db_path):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def page_token(client):
    """CSRF token issued into the client's session by the HTML page."""
    res = client.get("/")
    match = re.search(r'<meta name="csrf-token" content="([^"]+)">', res.text)
    assert match, "page did not render a csrf token"
    return match.group(1)
