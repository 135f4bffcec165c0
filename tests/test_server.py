"""Tests for the Steam news HTTP service."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from steamnews.server import app


@pytest.fixture
def client():
    app.state.news_cache.clear()
    yield TestClient(app)
    app.state.news_cache.clear()


@pytest.fixture
def fake_fetch(raw_item_factory):
    calls = []

    def fetch(app_id, language):
        calls.append((app_id, language))
        return [raw_item_factory("<p>Hello<script>x()</script></p>", app_id=app_id)]

    fetch.calls = calls
    return fetch


class TestSteamNewsEndpoint:
    def test_returns_sanitized_entries(self, client, library_games, fake_fetch):
        with patch("steamnews.server.load_library", return_value=library_games[:2]), \
                patch("steamnews.server.fetch_steam_news", fake_fetch):
            response = client.get("/steam-news", params={"language": "english"})

        assert response.status_code == 200
        data = response.json()
        assert [entry["app_id"] for entry in data] == ["440", "570"]
        assert data[0]["news_items"][0]["content_html"] == "<p>Hello</p>"
        assert data[0]["news_items"][0]["preview_image_url"] == "https://cdn.test/440/library.jpg"

    def test_cached_between_requests(self, client, library_games, fake_fetch):
        with patch("steamnews.server.load_library", return_value=library_games[:1]), \
                patch("steamnews.server.fetch_steam_news", fake_fetch):
            client.get("/steam-news")
            client.get("/steam-news")
            assert len(fake_fetch.calls) == 1

            client.get("/steam-news", params={"language": "german"})
            assert fake_fetch.calls[-1] == ("440", "german")
            assert len(fake_fetch.calls) == 2

    def test_clear_cache(self, client, library_games, fake_fetch):
        with patch("steamnews.server.load_library", return_value=library_games[:1]), \
                patch("steamnews.server.fetch_steam_news", fake_fetch):
            client.get("/steam-news")
            response = client.post("/steam-news/cache/clear")
            assert response.json() == {"status": "ok"}
            client.get("/steam-news")

        assert len(fake_fetch.calls) == 2

    def test_empty_library(self, client):
        with patch("steamnews.server.load_library", return_value=[]):
            response = client.get("/steam-news")
        assert response.status_code == 200
        assert response.json() == []

    def test_corrupt_library_returns_empty(self, client, tmp_path, monkeypatch):
        from steamnews.config import config

        library = tmp_path / "library.json"
        library.write_text("[{not json", encoding="utf-8")
        monkeypatch.setattr(config, "library_path", str(library))

        response = client.get("/steam-news")
        assert response.status_code == 200
        assert response.json() == []
