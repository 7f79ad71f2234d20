# tests/test_app.py
from notes_app.notes.store import InMemoryNoteStore


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.get_json() == {"status": "ok", "env": "test", "db": "up"}


def test_readyz(client):
    r = client.get("/readyz")
    assert r.status_code == 200
    assert r.get_json()["status"] == "ok"


def test_request_id_is_echoed(client):
    r = client.get("/api/notes/", headers={"X-Request-Id": "abc-123"})
    assert r.headers["X-Request-Id"] == "abc-123"

    r = client.get("/api/notes/")
    assert r.headers.get("X-Request-Id")


def test_api_security_headers(client):
    r = client.get("/api/notes/")
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert r.headers["X-Frame-Options"] == "DENY"
    assert r.headers["Content-Security-Policy"].startswith("default-src 'none'")
    assert "Strict-Transport-Security" not in r.headers


def test_cors_on_api(client):
    r = client.get("/api/notes/", headers={"Origin": "http://localhost:3000"})
    assert r.headers.get("Access-Control-Allow-Origin") in ("*", "http://localhost:3000")


def test_ui_page(app, client):
    r = client.get("/")
    assert r.status_code == 200
    html = r.get_data(as_text=True)
    assert 'id="note-form"' in html
    assert "/static/ui/app.js" in html
    assert r.headers["X-Frame-Options"] == "SAMEORIGIN"
    assert "connect-src 'self';" in r.headers["Content-Security-Policy"]

    r = client.get("/static/ui/app.js")
    assert r.status_code == 200
    r.close()


def test_ui_page_with_remote_api(app, client):
    app.config["NOTES_API_BASE_URL"] = "http://localhost:8080/"
    r = client.get("/")
    assert 'data-api-base="http://localhost:8080"' in r.get_data(as_text=True)
    assert "connect-src 'self' http://localhost:8080;" in r.headers["Content-Security-Policy"]


def test_memory_store_backs_the_api(app, client):
    app.extensions["note_store"] = InMemoryNoteStore()
    r = client.post("/api/notes/", json={"title": "In memory", "content": "No database"})
    assert r.status_code == 201
    assert r.get_json()["id"] == 1
    assert [n["title"] for n in client.get("/api/notes/").get_json()] == ["In memory"]


def test_unexpected_error_is_masked(app, client, monkeypatch):
    store = app.extensions["note_store"]

    def boom():
        raise RuntimeError("db exploded")

    monkeypatch.setattr(store, "list_all", boom)
    r = client.get("/api/notes/")
    assert r.status_code == 500
    assert r.get_json()["error"] == {
        "code": "internal_error", "message": "Internal server error.", "details": {},
    }


def test_body_too_large(app, client):
    app.config["MAX_CONTENT_LENGTH"] = 100
    r = client.post("/api/notes/", json={"title": "Big", "content": "x" * 500})
    assert r.status_code == 413
    assert r.get_json()["error"]["code"] == "http_error"


def test_init_db_command(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["init-db", "--drop"])
    assert result.exit_code == 0
    assert "Created tables." in result.output


def test_healthz_with_memory_store(app, client):
    app.config["NOTE_STORE"] = "memory"
    app.extensions["note_store"] = InMemoryNoteStore()
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.get_json()["db"] == "n/a"

    r = client.get("/readyz")
    assert r.status_code == 200
    assert r.get_json() == {"status": "ok", "db": "n/a"}
