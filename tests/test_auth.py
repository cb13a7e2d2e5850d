from music_api.db.models import Playlist
from tests.conftest import API


def test_register_returns_user_and_token(client):
    response = client.post(
        f"{API}/auth/register",
        json={"username": "alice", "email": "Alice@Example.com", "password": "secret123"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"
    assert body["data"]["user"]["email"] == "alice@example.com"
    assert "hashed_password" not in body["data"]["user"]
    assert body["data"]["token"]


def test_register_duplicate_email(client, alice):
    response = client.post(
        f"{API}/auth/register",
        json={"username": "other", "email": "ALICE@example.com", "password": "secret123"},
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Email already registered"}


def test_register_duplicate_username(client, alice):
    response = client.post(
        f"{API}/auth/register",
        json={"username": "alice", "email": "new@example.com", "password": "secret123"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Username already taken"


def test_register_validation_errors_are_joined(client):
    response = client.post(
        f"{API}/auth/register",
        json={"username": "al", "email": "not-an-email", "password": "123"},
    )

    assert response.status_code == 400
    message = response.json()["message"]
    assert message.startswith("Validation Error: ")
    for field in ("username", "email", "password"):
        assert field in message


def test_login_with_username_or_email(client, alice):
    by_username = client.post(f"{API}/auth/login", json={"login": "alice", "password": "secret123"})
    by_email = client.post(f"{API}/auth/login", json={"login": "ALICE@example.com", "password": "secret123"})

    for response in (by_username, by_email):
        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"
        assert response.json()["data"]["user"]["id"] == alice["user"]["id"]


def test_login_wrong_password(client, alice):
    response = client.post(f"{API}/auth/login", json={"login": "alice", "password": "wrong-password"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_login_unknown_user(client):
    response = client.post(f"{API}/auth/login", json={"login": "nobody", "password": "secret123"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_login_requires_both_fields(client):
    response = client.post(f"{API}/auth/login", json={"login": "alice"})

    assert response.status_code == 400
    assert response.json()["message"] == "Email/username and password are required"


def test_me_lists_owned_playlists(client, alice, make_playlist):
    make_playlist("Road Trip")

    response = client.get(f"{API}/auth/me", headers=alice["headers"])

    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["username"] == "alice"
    assert [p["name"] for p in user["playlists"]] == ["Road Trip"]


def test_refresh_issues_working_token(client, alice):
    response = client.post(f"{API}/auth/refresh", headers=alice["headers"])

    assert response.status_code == 200
    token = response.json()["data"]["token"]
    me = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200


def test_delete_account_removes_owned_playlists(client, app, alice, bob, make_playlist):
    make_playlist("Mine")
    make_playlist("Bob's", headers=bob["headers"])

    response = client.delete(f"{API}/auth/me", headers=alice["headers"])
    assert response.status_code == 200

    session = app.state.database.SessionLocal()
    try:
        assert [p.name for p in session.query(Playlist).all()] == ["Bob's"]
    finally:
        session.close()
