"""Tests for the /lyrics routes with a mocked track service."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from lyrics_library.config import Settings
from lyrics_library.dependencies import get_track_service
from lyrics_library.errors import ErrorKind, TrackServiceError
from lyrics_library.main import create_app
from lyrics_library.models import Track
from lyrics_library.services.track import TrackService

TRACK_ID = "5f0c6b1e-8f4d-4c55-9f1b-0c7d3b2a9e11"


@pytest.fixture
def track_service():
    return AsyncMock(spec=TrackService)


@pytest.fixture
def client(track_service):
    app = create_app(Settings(storage_health_gate=False))
    app.dependency_overrides[get_track_service] = lambda: track_service
    return TestClient(app)


def _track(title="Lucid Dreams"):
    return Track(
        artist="Juice WRLD",
        title=title,
        lyrics=["line one", "line two"],
        translation=["строка один", "строка два"],
        id=TRACK_ID,
    )


class TestSaveTrack:
    def test_created(self, client, track_service):
        track_service.save.return_value = _track()

        resp = client.post("/lyrics", json={"artist": "Juice WRLD", "title": "Lucid Dreams"})

        assert resp.status_code == 201
        assert resp.json() == {
            "id": TRACK_ID,
            "artist": "Juice WRLD",
            "title": "Lucid Dreams",
            "lyrics": ["line one", "line two"],
            "translation": ["строка один", "строка два"],
        }
        track_service.save.assert_awaited_once_with("Juice WRLD", "Lucid Dreams")

    def test_missing_title(self, client, track_service):
        resp = client.post("/lyrics", json={"artist": "Juice WRLD"})

        assert resp.status_code == 422
        track_service.save.assert_not_awaited()

    def test_blank_artist(self, client, track_service):
        resp = client.post("/lyrics", json={"artist": "   ", "title": "Lucid Dreams"})

        assert resp.status_code == 422
        track_service.save.assert_not_awaited()

    def test_lyrics_not_found(self, client, track_service):
        track_service.save.side_effect = TrackServiceError(
            ErrorKind.LYRICS_NOT_FOUND, "service.track.save", LookupError("secret detail")
        )

        resp = client.post("/lyrics", json={"artist": "Nobody", "title": "Nothing"})

        assert resp.status_code == 404
        body = resp.json()
        assert body["error_code"] == "LYRICS_NOT_FOUND"
        assert body["op"] == "service.track.save"
        assert "secret detail" not in resp.text


class TestGetTracks:
    def test_single_track(self, client, track_service):
        track_service.get.return_value = _track()

        resp = client.get("/lyrics", params={"artist": "Juice WRLD", "title": "Lucid Dreams"})

        assert resp.status_code == 200
        assert resp.json()["id"] == TRACK_ID
        track_service.get.assert_awaited_once_with("Juice WRLD", "Lucid Dreams")
        track_service.get_by_artist.assert_not_awaited()

    def test_artist_tracks(self, client, track_service):
        track_service.get_by_artist.return_value = [_track("Lucid Dreams"), _track("Robbery")]

        resp = client.get("/lyrics", params={"artist": "Juice WRLD"})

        assert resp.status_code == 200
        assert [t["title"] for t in resp.json()] == ["Lucid Dreams", "Robbery"]
        track_service.get_by_artist.assert_awaited_once_with("Juice WRLD")

    def test_empty_title_lists_artist_tracks(self, client, track_service):
        track_service.get_by_artist.return_value = [_track()]

        resp = client.get("/lyrics", params={"artist": "Juice WRLD", "title": ""})

        assert resp.status_code == 200
        assert isinstance(resp.json(), list)

    def test_query_values_are_stripped(self, client, track_service):
        track_service.get.return_value = _track()

        resp = client.get(
            "/lyrics", params={"artist": " Juice WRLD ", "title": " Lucid Dreams "}
        )

        assert resp.status_code == 200
        track_service.get.assert_awaited_once_with("Juice WRLD", "Lucid Dreams")

    def test_blank_title_lists_artist_tracks(self, client, track_service):
        track_service.get_by_artist.return_value = [_track()]

        resp = client.get("/lyrics", params={"artist": "Juice WRLD ", "title": "  "})

        assert resp.status_code == 200
        track_service.get_by_artist.assert_awaited_once_with("Juice WRLD")
        track_service.get.assert_not_awaited()

    def test_blank_artist(self, client, track_service):
        resp = client.get("/lyrics", params={"artist": "   "})

        assert resp.status_code == 422
        track_service.get_by_artist.assert_not_awaited()

    def test_missing_artist(self, client):
        resp = client.get("/lyrics", params={"title": "Lucid Dreams"})
        assert resp.status_code == 422


class TestDeleteTrack:
    def test_no_content(self, client, track_service):
        resp = client.delete(f"/lyrics/{TRACK_ID}")

        assert resp.status_code == 204
        assert resp.content == b""
        track_service.delete.assert_awaited_once_with(TRACK_ID)

    def test_invalid_identifier(self, client, track_service):
        track_service.delete.side_effect = TrackServiceError(
            ErrorKind.INVALID_IDENTIFIER, "service.track.delete"
        )

        resp = client.delete("/lyrics/not-a-uuid")

        assert resp.status_code == 400
        assert resp.json()["error_code"] == "INVALID_IDENTIFIER"


@pytest.mark.parametrize(
    ("kind", "status"),
    [
        (ErrorKind.TRACK_NOT_FOUND, 404),
        (ErrorKind.ARTIST_TRACKS_NOT_FOUND, 404),
        (ErrorKind.TRANSLATION_FAILED, 502),
        (ErrorKind.UPSTREAM, 502),
    ],
)
def test_error_kind_status(client, track_service, kind, status):
    track_service.get.side_effect = TrackServiceError(kind, "service.track.get")

    resp = client.get("/lyrics", params={"artist": "Juice WRLD", "title": "Lucid Dreams"})

    assert resp.status_code == status
    assert resp.json()["error_code"] == kind.value


def test_responses_carry_request_id(client, track_service):
    track_service.get.return_value = _track()

    resp = client.get(
        "/lyrics",
        params={"artist": "Juice WRLD", "title": "Lucid Dreams"},
        headers={"X-Request-ID": "req-42"},
    )

    assert resp.headers["x-request-id"] == "req-42"
