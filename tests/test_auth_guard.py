from datetime import datetime, timedelta, timezone

from music_api.core.security import TokenService
from tests.conftest import API


def test_missing_header_is_rejected(client):
    response = client.get(f"{API}/auth/me")

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Access token required"}


def test_non_bearer_scheme_counts_as_missing(client):
    response = client.get(f"{API}/auth/me", headers={"Authorization": "Basic abc"})

    assert response.status_code == 401
    assert response.json()["message"] == "Access token required"


def test_invalid_token_is_rejected(client):
    response = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 403
    assert response.json()["message"] == "Invalid or expired token"


def test_expired_token_is_rejected(client, app, alice):
    service: TokenService = app.state.token_service
    stale = service.issue(alice["user"]["id"], now=datetime.now(timezone.utc) - timedelta(days=8))

    response = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {stale}"})

    assert response.status_code == 403
    assert response.json()["message"] == "Invalid or expired token"


def test_token_for_deleted_user_is_rejected(client, alice):
    assert client.delete(f"{API}/auth/me", headers=alice["headers"]).status_code == 200

    response = client.get(f"{API}/auth/me", headers=alice["headers"])

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token - user not found"


def test_optional_mode_ignores_bad_credentials(client, make_song):
    song = make_song(is_public=True)

    for headers in ({}, {"Authorization": "Bearer garbage"}):
        response = client.get(f"{API}/songs/{song['id']}", headers=headers)
        assert response.status_code == 200


def test_optional_mode_deleted_user_proceeds_anonymously(client, register, make_song):
    carol = register("carol")
    private = make_song(title="Demo", is_public=False, headers=carol["headers"])
    assert client.get(f"{API}/songs/{private['id']}", headers=carol["headers"]).status_code == 200

    assert client.delete(f"{API}/auth/me", headers=carol["headers"]).status_code == 200

    # Same token, but the request now runs without an identity
    response = client.get(f"{API}/songs/{private['id']}", headers=carol["headers"])
    assert response.status_code == 404
