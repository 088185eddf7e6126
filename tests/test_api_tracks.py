from pathlib import Path
from typing import Iterator

from fastapi.testclient import TestClient
import pytest

from trackstore.api import create_app
from trackstore.config import StorageConfig


@pytest.fixture
def client(storage: StorageConfig) -> Iterator[TestClient]:
    app = create_app(storage, max_file_size=1024)
    with TestClient(app) as test_client:
        yield test_client


def create(client: TestClient, title: str, **extra) -> dict:
    body = {"title": title, "artist": extra.pop("artist", "Daft Punk")}
    body.update(extra)
    response = client.post("/api/tracks", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_genres_are_bootstrapped_on_startup(client: TestClient) -> None:
    response = client.get("/api/genres")

    assert response.status_code == 200
    assert len(response.json()) == 13
    assert "Electronic" in response.json()


def test_create_track(client: TestClient) -> None:
    response = client.post(
        "/api/tracks",
        json={
            "title": "One More Time",
            "artist": "Daft Punk",
            "album": "Discovery",
            "genres": ["Electronic"],
            "coverImage": "https://example.com/discovery.jpg",
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["slug"] == "one-more-time"
    assert data["album"] == "Discovery"
    assert data["genres"] == ["Electronic"]
    assert data["createdAt"] == data["updatedAt"]
    assert "audioFile" not in data


def test_create_requires_title_and_artist(client: TestClient) -> None:
    missing = client.post("/api/tracks", json={"title": "No Artist"})
    blank = client.post("/api/tracks", json={"title": "  ", "artist": "Someone"})

    assert missing.status_code == 400
    assert "error" in missing.json()
    assert blank.status_code == 400
    assert blank.json() == {"error": "Title and artist are required"}


def test_create_duplicate_title_conflicts(client: TestClient) -> None:
    create(client, "Around the World")

    response = client.post(
        "/api/tracks", json={"title": "Around The World!", "artist": "Other"}
    )

    assert response.status_code == 409
    assert response.json() == {"error": "A track with this title already exists"}


def test_get_track_by_slug(client: TestClient) -> None:
    created = create(client, "Digital Love")

    response = client.get("/api/tracks/digital-love")

    assert response.status_code == 200
    assert response.json() == created


def test_get_unknown_slug_is_404(client: TestClient) -> None:
    response = client.get("/api/tracks/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"error": "Track not found"}


def test_list_electronic_scenario(client: TestClient) -> None:
    for i in range(5):
        create(client, f"Electronic {i}", genres=["Electronic"])
    create(client, "Guitar Song", genres=["Rock"])

    everything = client.get("/api/tracks", params={"genre": "Electronic"}).json()
    limited = client.get("/api/tracks", params={"genre": "Electronic", "limit": 2}).json()

    assert len(everything["data"]) == 5
    assert everything["meta"]["total"] == 5
    assert len(limited["data"]) == 2
    assert limited["meta"] == {"total": 5, "page": 1, "limit": 2, "totalPages": 3}


def test_list_sort_and_search(client: TestClient) -> None:
    for title in ("b", "a", "c"):
        create(client, title, artist="Moby")
    create(client, "zzz", artist="Aphex Twin")

    asc = client.get(
        "/api/tracks", params={"sort": "title", "order": "asc", "artist": "moby"}
    ).json()
    desc = client.get(
        "/api/tracks", params={"sort": "title", "order": "desc", "search": "MOBY"}
    ).json()

    assert [t["title"] for t in asc["data"]] == ["a", "b", "c"]
    assert [t["title"] for t in desc["data"]] == ["c", "b", "a"]


def test_list_rejects_invalid_query(client: TestClient) -> None:
    assert client.get("/api/tracks", params={"page": 0}).status_code == 400
    assert client.get("/api/tracks", params={"limit": 0}).status_code == 400
    assert client.get("/api/tracks", params={"sort": "genres"}).status_code == 400
    assert client.get("/api/tracks", params={"order": "up"}).status_code == 400


def test_list_page_past_the_end(client: TestClient) -> None:
    create(client, "Only One")

    data = client.get("/api/tracks", params={"page": 3}).json()

    assert data["data"] == []
    assert data["meta"]["total"] == 1
    assert data["meta"]["totalPages"] == 1


def test_update_track_changes_slug_with_title(client: TestClient) -> None:
    created = create(client, "Harder Better")

    response = client.put(
        f"/api/tracks/{created['id']}",
        json={"title": "Harder Better Faster", "album": "Discovery"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["slug"] == "harder-better-faster"
    assert data["album"] == "Discovery"
    assert data["artist"] == "Daft Punk"
    assert client.get("/api/tracks/harder-better").status_code == 404


def test_update_cannot_repoint_audio_file(client: TestClient, storage: StorageConfig) -> None:
    alpha = create(client, "Alpha")
    beta = create(client, "Beta")
    beta_audio = client.post(
        f"/api/tracks/{beta['id']}/upload",
        files={"file": ("b.mp3", b"ID3beta", "audio/mpeg")},
    ).json()["audioFile"]

    response = client.put(f"/api/tracks/{alpha['id']}", json={"audioFile": beta_audio})

    assert response.status_code == 200
    assert "audioFile" not in response.json()

    assert client.delete(f"/api/tracks/{alpha['id']}").status_code == 204
    assert client.get("/api/tracks/beta").json()["audioFile"] == beta_audio
    assert (Path(storage.uploads_dir) / beta_audio).read_bytes() == b"ID3beta"


def test_update_title_conflict(client: TestClient) -> None:
    create(client, "Aerodynamic")
    other = create(client, "Veridis Quo")

    response = client.put(f"/api/tracks/{other['id']}", json={"title": "Aerodynamic"})

    assert response.status_code == 409


def test_update_unknown_track_is_404(client: TestClient) -> None:
    response = client.put("/api/tracks/missing", json={"album": "x"})

    assert response.status_code == 404


def test_delete_track(client: TestClient) -> None:
    created = create(client, "Voyager")

    first = client.delete(f"/api/tracks/{created['id']}")
    second = client.delete(f"/api/tracks/{created['id']}")

    assert first.status_code == 204
    assert second.status_code == 404
    assert client.get("/api/tracks/voyager").status_code == 404


def test_batch_delete(client: TestClient) -> None:
    a = create(client, "Track A")
    b = create(client, "Track B")

    response = client.post(
        "/api/tracks/delete", json={"ids": [a["id"], b["id"], a["id"], "missing"]}
    )

    assert response.status_code == 200
    assert response.json() == {"success": [a["id"], b["id"]], "failed": [a["id"], "missing"]}


def test_batch_delete_requires_ids(client: TestClient) -> None:
    assert client.post("/api/tracks/delete", json={"ids": []}).status_code == 400
    assert client.post("/api/tracks/delete", json={}).status_code == 400


def test_upload_download_and_remove_audio(client: TestClient, storage: StorageConfig) -> None:
    created = create(client, "Robot Rock")

    upload = client.post(
        f"/api/tracks/{created['id']}/upload",
        files={"file": ("robot.mp3", b"ID3audio", "audio/mpeg")},
    )

    assert upload.status_code == 200
    audio_file = upload.json()["audioFile"]
    assert audio_file == f"{created['id']}.mp3"
    assert (Path(storage.uploads_dir) / audio_file).read_bytes() == b"ID3audio"

    download = client.get(f"/api/files/{audio_file}")
    assert download.status_code == 200
    assert download.content == b"ID3audio"

    removed = client.delete(f"/api/tracks/{created['id']}/file")
    assert removed.status_code == 200
    assert "audioFile" not in removed.json()
    assert client.get(f"/api/files/{audio_file}").status_code == 404


def test_upload_validation(client: TestClient) -> None:
    created = create(client, "Television Rules")
    url = f"/api/tracks/{created['id']}/upload"

    wrong_type = client.post(url, files={"file": ("cover.png", b"\x89PNG", "image/png")})
    too_large = client.post(url, files={"file": ("big.wav", b"0" * 2048, "audio/wav")})
    no_file = client.post(url)
    no_track = client.post(
        "/api/tracks/missing/upload", files={"file": ("a.mp3", b"ID3", "audio/mpeg")}
    )

    assert wrong_type.status_code == 400
    assert too_large.status_code == 400
    assert no_file.status_code == 400
    assert no_file.json() == {"error": "No file uploaded"}
    assert no_track.status_code == 404


def test_delete_audio_without_file_is_404(client: TestClient) -> None:
    created = create(client, "Emotion")

    response = client.delete(f"/api/tracks/{created['id']}/file")

    assert response.status_code == 404
    assert response.json() == {"error": "Track has no audio file"}


def test_delete_track_cascades_to_audio(client: TestClient, storage: StorageConfig) -> None:
    created = create(client, "Crescendolls")
    client.post(
        f"/api/tracks/{created['id']}/upload",
        files={"file": ("c.wav", b"RIFF", "audio/x-wav")},
    )

    assert client.delete(f"/api/tracks/{created['id']}").status_code == 204
    assert list(Path(storage.uploads_dir).iterdir()) == []


def test_create_storage_failure_is_500(client: TestClient, monkeypatch) -> None:
    def failing_write(path, data):
        raise OSError("disk full")

    monkeypatch.setattr("trackstore.data.tracks.write_json", failing_write)

    response = client.post("/api/tracks", json={"title": "Lost", "artist": "Nobody"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
