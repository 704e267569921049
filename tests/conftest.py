import copy

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from vidproxy.main import app
from vidproxy.services.extractor import YouTubeExtractor, get_extractor

VIDEO_ID = "dQw4w9WgXcQ"

SAMPLE_INFO = {
    "id": VIDEO_ID,
    "title": "Hello, World! 2024",
    "duration": 212,
    "view_count": 1500000000,
    "uploader": "Rick Astley",
    "channel_id": "UCuAXFkgsw1L7xaCfnd5JJOw",
    "description": "The official video",
    "tags": ["rick", "astley"],
    "availability": "public",
    "is_live": False,
    "was_live": False,
    "thumbnails": [
        {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/default.jpg", "width": 120, "height": 90},
        {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg", "width": 1280, "height": 720},
    ],
    "subtitles": {},
    "automatic_captions": {
        "en": [{"ext": "vtt", "url": "https://www.youtube.com/api/timedtext?lang=en", "name": "English"}],
    },
    "formats": [
        {"format_id": "sb0", "ext": "mhtml", "vcodec": "none", "acodec": "none", "protocol": "mhtml",
         "url": "https://i.ytimg.com/sb/dQw4w9WgXcQ/storyboard3_L0/default.jpg"},
        {"format_id": "139", "ext": "m4a", "vcodec": "none", "acodec": "mp4a.40.5", "abr": 48.8,
         "tbr": 48.8, "filesize": 1290000, "protocol": "https", "url": "https://media.example/139"},
        {"format_id": "251", "ext": "webm", "vcodec": "none", "acodec": "opus", "abr": 135.2,
         "tbr": 135.2, "filesize": 3430000, "protocol": "https", "url": "https://media.example/251"},
        {"format_id": "140", "ext": "m4a", "vcodec": "none", "acodec": "mp4a.40.2", "abr": 129.478,
         "tbr": 129.478, "filesize": 3440000, "protocol": "https", "url": "https://media.example/140"},
        {"format_id": "599", "ext": "m4a", "vcodec": "none", "acodec": "mp4a.40.5", "abr": None,
         "protocol": "https", "url": "https://media.example/599"},
        {"format_id": "250", "ext": "webm", "vcodec": "none", "acodec": "opus", "abr": 70.0,
         "tbr": 70.0, "protocol": "https", "url": "https://media.example/250"},
        {"format_id": "18", "ext": "mp4", "vcodec": "avc1.42001E", "acodec": "mp4a.40.2", "abr": 96.0,
         "tbr": 500.5, "width": 640, "height": 360, "fps": 25, "protocol": "https",
         "url": "https://media.example/18"},
        {"format_id": "137", "ext": "mp4", "vcodec": "avc1.640028", "acodec": "none", "tbr": 4400.0,
         "width": 1920, "height": 1080, "fps": 25, "protocol": "https", "url": "https://media.example/137"},
        {"format_id": "248", "ext": "webm", "vcodec": "vp9", "acodec": "none", "tbr": 2600.0,
         "width": 1920, "height": 1080, "fps": 60, "protocol": "https", "url": "https://media.example/248"},
    ],
}


class FakeExtractor(YouTubeExtractor):
    """Extractor serving a canned yt-dlp info dict"""

    def __init__(self, info):
        self.info = info
        self.error = None
        self.calls = []

    async def fetch_info(self, video_id):
        self.calls.append(video_id)
        if self.error is not None:
            raise self.error
        return self.build_info(self.info)


@pytest.fixture
def sample_info():
    return copy.deepcopy(SAMPLE_INFO)


@pytest.fixture
def fake_extractor(sample_info):
    fake = FakeExtractor(sample_info)
    app.dependency_overrides[get_extractor] = lambda: fake
    yield fake
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(fake_extractor):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
