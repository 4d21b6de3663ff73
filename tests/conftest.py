"""
Shared fixtures: isolated settings and an in-memory fake of the catch-up API.
"""
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from catchup_sync.config import CustomSettings
from catchup_sync.services.catalog_client import CatalogClient
from catchup_sync.services.schedule_store import ScheduleStore

REFERER = "https://www.globalplayer.com/catchup/wsqk/uk/"


class FakeCatalog:
    """
    Serves the show list, show detail pages and episode streams.

    Shows are registered with ``add_show``; stream bodies with ``add_stream``.
    Every request is recorded in ``requests``.
    """

    def __init__(self):
        self.shows: dict[str, dict] = {}
        self.streams: dict[str, Callable[[], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []
        self.list_status = 200
        self.list_body: bytes | None = None
        self.broken_details: set[str] = set()

    def add_show(self, show_id, title, description="", episodes=None):
        self.shows[show_id] = {
            "title": title,
            "description": description,
            "episodes": episodes or [],
        }

    def add_stream(self, url, body=b"", status=200):
        self.streams[url] = lambda: httpx.Response(status, content=body)

    def add_broken_stream(self, url, first_chunk=b"partial"):
        async def body():
            yield first_chunk
            raise httpx.ReadError("connection reset")

        self.streams[url] = lambda: httpx.Response(200, content=body())

    @property
    def stream_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if not r.url.path.endswith(".json")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.endswith("/wsqk/uk.json"):
            if self.list_body is not None:
                return httpx.Response(self.list_status, content=self.list_body)
            listing = [
                {"id": show_id, "title": show["title"], "description": show["description"], "imageUrl": None}
                for show_id, show in self.shows.items()
            ]
            return httpx.Response(self.list_status, json={"pageProps": {"catchupInfo": listing}})

        if path.endswith(".json") and "/wsqk/uk/" in path:
            show_id = path.rsplit("/", 1)[-1][: -len(".json")]
            show = self.shows.get(show_id)
            if show is None or show_id in self.broken_details:
                return httpx.Response(404, json={"error": "not found"})
            return httpx.Response(200, json={"pageProps": {"catchupInfo": show}})

        factory = self.streams.get(str(request.url))
        if factory is None:
            return httpx.Response(404)
        return factory()

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def downloads_dir(tmp_path) -> Path:
    return tmp_path / "downloads"


@pytest.fixture
def settings(downloads_dir) -> CustomSettings:
    return CustomSettings(
        _env_file=None,
        downloads_dir=str(downloads_dir),
        local_timezone="UTC",
        referer_url=REFERER,
    )


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
async def catalog_client(settings, fake_catalog):
    async with CatalogClient(settings, transport=fake_catalog.transport) as client:
        yield client


@pytest.fixture
def store(settings) -> ScheduleStore:
    return ScheduleStore(settings.schedule_path)
