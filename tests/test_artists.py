from tests.conftest import API


def test_list_artists_sorted_by_name(client, make_artist):
    for name in ("Zed", "Abba", "Mika"):
        make_artist(name)

    data = client.get(f"{API}/artists").json()["data"]

    assert data["total"] == 3
    assert [a["name"] for a in data["artists"]] == ["Abba", "Mika", "Zed"]


def test_search_artists(client, make_artist):
    make_artist("Daft Punk")
    make_artist("Punk Rockers")
    make_artist("Mozart")

    data = client.get(f"{API}/artists", params={"search": "punk"}).json()["data"]

    assert [a["name"] for a in data["artists"]] == ["Daft Punk", "Punk Rockers"]


def test_search_artists_matches_wildcards_literally(client, make_artist):
    make_artist("Daft Punk")
    make_artist("Sigur_Ros")

    def names(search):
        return [a["name"] for a in client.get(f"{API}/artists", params={"search": search}).json()["data"]["artists"]]

    assert names("%") == []
    assert names("_") == ["Sigur_Ros"]
    assert names("Daft_Punk") == []


def test_duplicate_artist_name(client, alice, make_artist):
    make_artist("Muse")

    response = client.post(f"{API}/artists", json={"name": "Muse"}, headers=alice["headers"])

    assert response.status_code == 400
    assert response.json()["message"] == "Duplicate value for field: name"


def test_get_artist_with_public_songs(client, make_artist, make_song):
    artist = make_artist("Solo")
    make_song("old", artist_id=artist["id"])
    make_song("new", artist_id=artist["id"])
    make_song("draft", artist_id=artist["id"], is_public=False)

    data = client.get(f"{API}/artists/{artist['id']}").json()["data"]

    assert data["artist"]["name"] == "Solo"
    assert [s["title"] for s in data["songs"]] == ["new", "old"]


def test_update_artist(client, alice, make_artist):
    artist = make_artist("Prince", bio="short")

    response = client.put(
        f"{API}/artists/{artist['id']}",
        json={"image_url": "https://img.example.com/p.png"},
        headers=alice["headers"],
    )

    assert response.status_code == 200
    body = response.json()["data"]["artist"]
    assert body["bio"] == "short"
    assert body["image_url"] == "https://img.example.com/p.png"


def test_rename_to_taken_name(client, alice, make_artist):
    make_artist("Taken")
    artist = make_artist("Free")

    response = client.put(f"{API}/artists/{artist['id']}", json={"name": "Taken"}, headers=alice["headers"])

    assert response.status_code == 400


def test_delete_artist_without_songs(client, alice, make_artist):
    artist = make_artist("Gone")

    response = client.delete(f"{API}/artists/{artist['id']}", headers=alice["headers"])

    assert response.status_code == 200
    assert client.get(f"{API}/artists/{artist['id']}").status_code == 404


def test_delete_referenced_artist_is_refused(client, alice, make_artist, make_song):
    artist = make_artist("Busy")
    make_song(artist_id=artist["id"])

    response = client.delete(f"{API}/artists/{artist['id']}", headers=alice["headers"])

    assert response.status_code == 400
    assert "cannot be deleted" in response.json()["message"]
    assert client.get(f"{API}/artists/{artist['id']}").status_code == 200


def test_artist_mutations_require_auth(client, make_artist):
    artist = make_artist()

    assert client.post(f"{API}/artists", json={"name": "Anon"}).status_code == 401
    assert client.delete(f"{API}/artists/{artist['id']}").status_code == 401
