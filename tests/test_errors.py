import inspect

from fastapi import FastAPI
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from music_api.api.errors import register_exception_handlers
from music_api.config import Settings
from music_api.core.errors import StoreUnavailableError
from tests.conftest import API


def test_malformed_path_id(client, alice):
    response = client.get(f"{API}/playlists/abc", headers=alice["headers"])

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid playlist_id: abc"}


def test_malformed_query_id(client):
    response = client.get(f"{API}/songs", params={"artist": "abc"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid artist: abc"}


def test_unknown_endpoint(client):
    response = client.get("/api/v1/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Endpoint not found"}


def test_unauthorized_responses_advertise_bearer(client):
    response = client.get(f"{API}/auth/me")

    assert response.headers["www-authenticate"] == "Bearer"


def _bare_app(settings: Settings) -> FastAPI:
    app = FastAPI()
    app.state.settings = settings
    register_exception_handlers(app)

    @app.get("/down")
    async def down():
        raise StoreUnavailableError()

    return app


def test_store_unavailable_maps_to_503():
    settings = Settings(_env_file=None, ENVIRONMENT="production", CACHE_ENABLED=False)
    with TestClient(_bare_app(settings)) as client:
        response = client.get("/down")

    assert response.status_code == 503
    assert response.json() == {"success": False, "message": "Database service temporarily unavailable"}


def test_stack_only_in_development():
    settings = Settings(_env_file=None, ENVIRONMENT="development", CACHE_ENABLED=False)
    with TestClient(_bare_app(settings)) as client:
        body = client.get("/down").json()

    assert "StoreUnavailableError" in body["stack"]


def test_default_settings_hide_stack(monkeypatch):
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    settings = Settings(_env_file=None, CACHE_ENABLED=False)
    assert settings.ENVIRONMENT == "production"

    with TestClient(_bare_app(settings)) as client:
        body = client.get("/down").json()

    assert "stack" not in body


def test_api_handlers_are_sync(app):
    routes = [route for route in app.routes if isinstance(route, APIRoute) and route.path.startswith(API)]

    assert routes
    for route in routes:
        assert not inspect.iscoroutinefunction(route.endpoint), route.path


def test_health_reports_database(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"]["status"] == "connected"
