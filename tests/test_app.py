"""
Tests for application assembly: settings, database bootstrap and CORS
"""
from fastapi.testclient import TestClient

from prompt_library_api.app import main
from prompt_library_api.app.core import config
from prompt_library_api.app.core.db import MIGRATIONS, get_connection, init_db


def test_split_csv():
    assert config._split_csv(" http://a.test, ,http://b.test ") == ["http://a.test", "http://b.test"]
    assert config._split_csv("") == []


def test_init_db_is_idempotent():
    init_db()

    conn = get_connection()
    try:
        versions = [row["version"] for row in conn.execute("SELECT version FROM migrations")]
    finally:
        conn.close()
    assert versions == [version for version, _ in MIGRATIONS]


def test_relative_database_path_resolves_inside_project(monkeypatch):
    monkeypatch.setattr(config.settings, "database_url", "relative.db")

    from prompt_library_api.app.core.db import get_database_path

    path = get_database_path()
    assert path.endswith("relative.db")
    assert "prompt_library_api" in path


def test_cors_enabled_when_origins_configured(monkeypatch):
    monkeypatch.setattr(config.settings, "cors_origins", ["http://localhost:5173"])

    with TestClient(main.create_app()) as client:
        res = client.options(
            "/api/prompts",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "PATCH",
            },
        )

    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_cors_disabled_by_default(client):
    res = client.get("/api/prompts", headers={"Origin": "http://evil.test"})

    assert res.status_code == 200
    assert "access-control-allow-origin" not in res.headers
