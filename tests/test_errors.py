from fastapi import APIRouter
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.main import create_app

from .conftest import API


def test_error_envelope_shape(client):
    response = client.get(f"{API}/activities/1")

    body = response.json()
    assert set(body) == {"error", "request_id", "timestamp"}
    assert body["error"]["code"] == "NOT_FOUND"
    assert body["request_id"] == response.headers["X-Request-ID"]


def test_client_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "abc-123"


def test_unknown_route_uses_envelope(client):
    response = client.get(f"{API}/nope")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_non_integer_path_param_is_validation_error(client):
    response = client.get(f"{API}/schedules/abc")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def _app_with_failing_routes(engine):
    app = create_app(engine=engine, seed=False)
    router = APIRouter()

    @router.get("/boom")
    def boom():
        raise RuntimeError("secret connection string")

    @router.get("/db-boom")
    def db_boom():
        raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    app.include_router(router)
    return app


def test_unhandled_error_hides_details(engine):
    app = _app_with_failing_routes(engine)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == {"code": "INTERNAL_SERVER_ERROR", "message": "Internal server error"}
    assert "secret" not in response.text


def test_database_error_is_500(engine):
    app = _app_with_failing_routes(engine)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/db-boom")

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "DATABASE_ERROR"
    assert "disk" not in response.text


def test_health_and_root(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").status_code == 200
