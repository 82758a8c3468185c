from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from utils import db


def test_health_ok(client, monkeypatch):
    monkeypatch.setattr(db, "ping", lambda: None)
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_health_reports_unavailable_store(client, monkeypatch):
    def down():
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")
    monkeypatch.setattr(db, "ping", down)

    response = client.get("/api/health")
    assert response.status_code == 503
    assert response.get_json()["status"] == "unavailable"


def test_storage_failure_is_generic_500(client, monkeypatch):
    from models.users import User

    def broken():
        raise PyMongoError("connection reset")
    monkeypatch.setattr(User, "list_without_face_data", staticmethod(broken))

    response = client.get("/api/users")
    assert response.status_code == 500
    assert response.get_json() == {"message": "connection reset"}


def test_unknown_api_path_is_json_404(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert "message" in response.get_json()


def test_frontend_routes_serve_shell(client):
    for path in ("/", "/dashboard", "/kiosk/face"):
        response = client.get(path)
        assert response.status_code == 200
        assert b"SmartAttend" in response.data
        response.close()


def test_documents_serialize_with_hex_id_and_iso_dates(app, client, make_user):
    from utils.serializers import MongoJSONProvider

    make_user("EMP010", "Ada Lovelace")
    response = client.get("/api/users/EMP010")

    assert isinstance(app.json, MongoJSONProvider)
    body = response.get_json()
    assert isinstance(body["_id"], str) and len(body["_id"]) == 24
    assert isinstance(body["createdAt"], str) and body["createdAt"].endswith("Z")


def test_cors_header_on_api(client):
    response = client.get("/api/users", headers={"Origin": "http://kiosk.example"})
    assert response.headers.get("Access-Control-Allow-Origin") in ("*", "http://kiosk.example")


def test_module_exposes_app():
    import app as app_module
    from flask import Flask

    assert isinstance(app_module.app, Flask)


def test_indexes_created_once_on_first_request(monkeypatch):
    import app as app_module
    from config import TestingConfig

    class IndexedConfig(TestingConfig):
        MONGO_ENSURE_INDEXES = True

    calls = []
    monkeypatch.setattr(app_module, "ensure_indexes", lambda: calls.append(1))
    monkeypatch.setattr(db, "ping", lambda: None)
    indexed = app_module.create_app(IndexedConfig)

    client = indexed.test_client()
    client.get("/api/health")
    client.get("/api/health")
    assert calls == [1]


def test_init_db_command(app, monkeypatch):
    import app as app_module

    calls = []
    monkeypatch.setattr(app_module, "ensure_indexes", lambda: calls.append(1))

    result = app.test_cli_runner().invoke(args=["init-db"])
    assert result.exit_code == 0
    assert "Indexes created." in result.output
    assert calls == [1]
