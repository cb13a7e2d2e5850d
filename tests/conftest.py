import os
from pathlib import Path
from typing import Callable, Dict, Iterator

import pytest

# The module-level app in music_api.main must not try to reach Redis
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "test")

from fastapi.testclient import TestClient

from music_api.config import Settings
from music_api.main import create_app

API = "/api/v1"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        CACHE_ENABLED=False,
        JWT_SECRET="test-secret",
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture()
def client(app) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def register(client: TestClient) -> Callable[..., Dict]:
    """Register a user and return ``{"user", "token", "headers"}``"""

    def _register(username: str = "alice", email: str = None, password: str = "secret123") -> Dict:
        response = client.post(
            f"{API}/auth/register",
            json={"username": username, "email": email or f"{username}@example.com", "password": password},
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return {
            "user": data["user"],
            "token": data["token"],
            "headers": {"Authorization": f"Bearer {data['token']}"},
        }

    return _register


@pytest.fixture()
def alice(register) -> Dict:
    return register("alice")


@pytest.fixture()
def bob(register) -> Dict:
    return register("bob")


@pytest.fixture()
def make_artist(client: TestClient, alice: Dict) -> Callable[..., Dict]:
    def _make_artist(name: str = "The Band", **fields) -> Dict:
        response = client.post(f"{API}/artists", json={"name": name, **fields}, headers=alice["headers"])
        assert response.status_code == 201, response.text
        return response.json()["data"]["artist"]

    return _make_artist


@pytest.fixture()
def make_song(client: TestClient, alice: Dict, make_artist) -> Callable[..., Dict]:
    default_artist = {}

    def _make_song(title: str = "Song", duration: int = 200, genre: str = "Rock", artist_id: int = None,
                   headers: Dict = None, **fields) -> Dict:
        if artist_id is None:
            if not default_artist:
                default_artist.update(make_artist())
            artist_id = default_artist["id"]
        payload = {
            "title": title,
            "artist_id": artist_id,
            "duration": duration,
            "genre": genre,
            "file_url": f"https://cdn.example.com/{title}.mp3",
            **fields,
        }
        response = client.post(f"{API}/songs", json=payload, headers=headers or alice["headers"])
        assert response.status_code == 201, response.text
        return response.json()["data"]["song"]

    return _make_song


@pytest.fixture()
def make_playlist(client: TestClient, alice: Dict) -> Callable[..., Dict]:
    def _make_playlist(name: str = "Road Trip", headers: Dict = None, **fields) -> Dict:
        response = client.post(f"{API}/playlists", json={"name": name, **fields}, headers=headers or alice["headers"])
        assert response.status_code == 201, response.text
        return response.json()["data"]["playlist"]

    return _make_playlist
