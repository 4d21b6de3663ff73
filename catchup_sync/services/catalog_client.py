"""
Catalog Client

Talks to the station's catch-up JSON API: the show listing, per-show detail
pages and the episode audio streams. Every request carries the referer the
upstream service requires.
"""
import json
import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from catchup_sync.config import CustomSettings
from catchup_sync.schemas import ShowDetailPage, ShowListPage
from catchup_sync.services.fetch_types import EpisodePayload, ShowDetail, ShowSummary


logger = logging.getLogger(__name__)

PageT = TypeVar("PageT", bound=BaseModel)


class CatalogError(RuntimeError):
    """Raised when the catalog or a show detail page cannot be fetched or parsed"""
    pass


class CatalogClient:
    """
    Async client for the catch-up catalog.

    Use as an async context manager so the underlying connection pool is
    closed. A preconfigured ``httpx.AsyncClient`` may be passed in, in which
    case its lifetime belongs to the caller.
    """

    def __init__(
        self,
        settings: CustomSettings,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self._headers = {"Referer": settings.referer_url}
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers=self._headers,
            timeout=httpx.Timeout(settings.request_timeout_sec or None),
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_show_list(self) -> list[ShowSummary]:
        """
        Fetch the station's list of shows.

        Raises:
            CatalogError: On transport error, non-2xx status or malformed body
        """
        url = self.settings.show_list_url
        page = await self._get_page(url, ShowListPage)
        shows = [
            ShowSummary(
                id=item.id,
                title=item.title,
                description=item.description,
                image_url=item.image_url,
            )
            for item in page.page_props.catchup_info
        ]
        logger.info("Found %s catch-up shows", len(shows))
        return shows

    async def fetch_show_detail(self, show_id: str) -> ShowDetail:
        """
        Fetch a show's title, description and episode list.

        Raises:
            CatalogError: On transport error, non-2xx status or malformed body
        """
        url = self.settings.show_detail_url(show_id)
        page = await self._get_page(url, ShowDetailPage)
        info = page.page_props.catchup_info
        return ShowDetail(
            id=show_id,
            title=info.title,
            description=info.description,
            episodes=[
                EpisodePayload(start=episode.start_date, stream_url=episode.stream_url)
                for episode in info.episodes
            ],
        )

    @asynccontextmanager
    async def open_stream(self, url: str) -> AsyncIterator[httpx.Response]:
        """
        Open a streaming GET for an episode's audio.

        The response body is not read; callers iterate it. Status is not
        checked here so callers decide how to treat failures.
        """
        logger.debug("Opening stream: %s", url)
        async with self._client.stream("GET", url, headers=self._headers) as response:
            yield response

    async def _get_page(self, url: str, model: type[PageT]) -> PageT:
        logger.debug("Fetching %s", url)
        try:
            response = await self._client.get(url, headers=self._headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise CatalogError(
                f"HTTP {exc.response.status_code} fetching {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise CatalogError(f"Request failed for {url}: {type(exc).__name__}: {exc}") from exc

        try:
            return model.model_validate(response.json())
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise CatalogError(f"Response from {url} is not valid JSON") from exc
        except ValidationError as exc:
            raise CatalogError(
                f"Response from {url} has unexpected shape: {exc.error_count()} error(s)"
            ) from exc
