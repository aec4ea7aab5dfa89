import os
import sys
from collections.abc import Callable

import httpx
import pytest

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from holodex.core.settings import get_settings  # noqa: E402
from holodex.services.holodex_api import HolodexApi  # noqa: E402
from tests._holodex_helpers import TEST_API_KEY, TEST_BASE_URL  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep the developer's environment out of the settings used by tests."""
    for key in list(os.environ):
        if key.startswith("HOLODEX_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOLODEX_BASE_URL", TEST_BASE_URL)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_api() -> Callable[..., HolodexApi]:
    """Factory for a HolodexApi whose requests go to ``handler`` instead of the network."""
    created: list[HolodexApi] = []
    clients: list[httpx.Client] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> HolodexApi:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        api = HolodexApi(api_key=TEST_API_KEY, base_url=TEST_BASE_URL, client=client, **kwargs)
        created.append(api)
        return api

    yield _make

    for api in created:
        api.close()
    for client in clients:
        client.close()


@pytest.fixture
def channel_json() -> dict:
    return {
        "id": "UCHsx4Hqa-1ORjQTh9TYDhww",
        "name": "Takanashi Kiara Ch. hololive-EN",
        "english_name": "Takanashi Kiara",
        "type": "vtuber",
        "org": "Hololive",
        "group": "Myth",
        "photo": "https://yt3.ggpht.com/kiara.jpg",
        "twitter": "takanashikiara",
        "twitch": None,
        "video_count": "1234",
        "subscriber_count": "1500000",
        "clip_count": 5000,
        "inactive": False,
        "top_topics": ["singing", "minecraft"],
    }


@pytest.fixture
def video_full_json() -> dict:
    return {
        "id": "vid123",
        "title": "Karaoke stream",
        "type": "stream",
        "topic_id": "singing",
        "published_at": "2024-01-01T00:00:00.000Z",
        "available_at": "2024-01-02T12:00:00.000Z",
        "duration": 3600,
        "status": "past",
        "lang": "en",
        "channel": {
            "id": "UCHsx4Hqa-1ORjQTh9TYDhww",
            "name": "Takanashi Kiara Ch. hololive-EN",
            "english_name": "Takanashi Kiara",
            "type": "vtuber",
            "org": "Hololive",
            "suborg": "abMyth",
            "photo": "https://yt3.ggpht.com/kiara.jpg",
        },
    }


@pytest.fixture
def searched_video_json() -> dict:
    return {
        "id": "vid123",
        "title": "Karaoke stream",
        "type": "stream",
        "topic_id": "singing",
        "published_at": "2024-01-01T00:00:00.000Z",
        "available_at": "2024-01-02T12:00:00.000Z",
        "duration": 3600,
        "status": "past",
        "songcount": 12,
        "channel": {
            "id": "UCHsx4Hqa-1ORjQTh9TYDhww",
            "name": "Takanashi Kiara Ch. hololive-EN",
            "type": "vtuber",
            "photo": "https://yt3.ggpht.com/kiara.jpg",
        },
        "comments": [
            {"comment_key": "c1", "message": "0:10 start"},
            {"comment_key": "c2", "message": "1:02:03 song"},
        ],
    }
