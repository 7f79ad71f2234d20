# tests/conftest.py
import os
import pytest

os.environ.setdefault("APP_ENV", "test")

from notes_app import create_app
from notes_app.extensions import db


@pytest.fixture()
def app():
    # SQLite en mémoire (TestConfig): base neuve pour chaque test
    app = create_app()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_note(client):
    def _make(title="Test Note", content="Some content"):
        r = client.post("/api/notes/", json={"title": title, "content": content})
        assert r.status_code == 201, r.get_json()
        return r.get_json()
    return _make
