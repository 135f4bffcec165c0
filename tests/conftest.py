"""
Pytest fixtures shared across the Steam News Tide tests.
"""
from datetime import datetime, timedelta, timezone

import pytest

from steamnews.models import LibraryGame, RawFeedItem

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def raw_item_factory():
    """Factory for raw feed items."""
    counter = {"value": 0}

    def create_item(raw_content="", **kwargs):
        counter["value"] += 1
        defaults = {
            "id": f"gid_{counter['value']}",
            "title": f"Update {counter['value']}",
            "url": f"https://store.steampowered.com/news/{counter['value']}",
            "excerpt": "Patch notes",
            "published_at": 1760000000,
            "app_id": "440",
        }
        defaults.update(kwargs)
        return RawFeedItem(raw_content=raw_content, **defaults)

    return create_item


@pytest.fixture
def library_games():
    return [
        LibraryGame(
            object_id="440",
            title="Team Fortress 2",
            favorite=True,
            executable_path="C:/Games/tf2/hl2.exe",
            last_time_played=NOW - timedelta(days=2),
            library_image_url="https://cdn.test/440/library.jpg",
        ),
        LibraryGame(
            object_id="570",
            title="Dota 2",
            cover_image_url="https://cdn.test/570/cover.jpg",
        ),
        LibraryGame(
            object_id="730",
            title="Counter-Strike 2",
            last_time_played=NOW - timedelta(days=45),
        ),
        LibraryGame(object_id="999", title="Removed", is_deleted=True),
        LibraryGame(object_id="epic-1", title="Other Store", shop="epic"),
        LibraryGame(object_id="", title="No Id"),
    ]
