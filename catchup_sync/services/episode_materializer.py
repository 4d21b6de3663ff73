"""
Episode Materializer

Turns catalog episodes into local media files and schedule entries.
An episode already on disk is never downloaded again; it is only
re-recorded in the schedule.
"""
from __future__ import annotations

import logging
from datetime import tzinfo
from enum import Enum
from pathlib import Path

import httpx

from catchup_sync.services.catalog_client import CatalogClient
from catchup_sync.services.fetch_types import EpisodePayload, ScheduleEntry, ShowDetail, ShowInfo
from catchup_sync.services.schedule_store import ScheduleStore
from catchup_sync.utils.file_operations import set_file_times, stream_to_file, write_json_if_missing
from catchup_sync.utils.naming import SHOW_INFO_FILENAME, episode_filename, episode_slot, safe_title


logger = logging.getLogger(__name__)


class EpisodeOutcome(str, Enum):
    DOWNLOADED = "downloaded"
    ALREADY_PRESENT = "already_present"
    NO_STREAM_URL = "no_stream_url"
    DOWNLOAD_FAILED = "download_failed"

    @property
    def succeeded(self) -> bool:
        return self in (EpisodeOutcome.DOWNLOADED, EpisodeOutcome.ALREADY_PRESENT)


class EpisodeMaterializer:
    """Downloads episodes of a show into its folder and records them in the schedule."""

    def __init__(
        self,
        client: CatalogClient,
        store: ScheduleStore,
        downloads_dir: Path | str,
        *,
        zone: tzinfo | None = None,
        chunk_size: int = 65536,
    ) -> None:
        self.client = client
        self.store = store
        self.downloads_dir = Path(downloads_dir)
        self.zone = zone
        self.chunk_size = chunk_size

    async def prepare_show(self, show: ShowDetail) -> str:
        """
        Ensure the show folder exists and holds a sidecar file.

        The sidecar is written once and never overwritten, even when the
        catalog title or description changes later.

        Returns:
            Folder name of the show
        """
        folder_name = safe_title(show.title)
        folder = self.downloads_dir / folder_name
        folder.mkdir(parents=True, exist_ok=True)

        info = ShowInfo(show_title=show.title, show_description=show.description or "")
        if await write_json_if_missing(folder / SHOW_INFO_FILENAME, info.to_dict()):
            logger.info("Created show folder info for '%s' in %s", show.title, folder)
        return folder_name

    async def materialize(self, episode: EpisodePayload, folder_name: str) -> EpisodeOutcome:
        """
        Make one episode available locally and record it.

        Failures are reported through the returned outcome; nothing is
        recorded for a failed episode and no file is left behind.
        """
        date, time = episode_slot(episode.start, self.zone)
        filename = episode_filename(date, time)
        local_path = f"{folder_name}/{filename}"
        destination = self.downloads_dir / folder_name / filename
        entry = ScheduleEntry(date=date, time=time, path=local_path)

        if not episode.stream_url:
            logger.warning("  - aired @ %s: FAILED - no stream URL found", episode.start.isoformat())
            return EpisodeOutcome.NO_STREAM_URL

        if destination.exists():
            logger.info("  - aired @ %s: skipped (already exists)", episode.start.isoformat())
            self.store.insert(entry)
            return EpisodeOutcome.ALREADY_PRESENT

        try:
            async with self.client.open_stream(episode.stream_url) as response:
                if not response.is_success:
                    logger.warning(
                        "  - aired @ %s: FAILED - fetch error: %s %s",
                        episode.start.isoformat(),
                        response.status_code,
                        response.reason_phrase,
                    )
                    return EpisodeOutcome.DOWNLOAD_FAILED

                logger.info("  - aired @ %s: downloading to %s", episode.start.isoformat(), local_path)
                written = await stream_to_file(response, destination, self.chunk_size)
        except (httpx.HTTPError, OSError) as exc:
            logger.warning(
                "  - aired @ %s: FAILED - %s: %s",
                episode.start.isoformat(),
                type(exc).__name__,
                exc,
            )
            return EpisodeOutcome.DOWNLOAD_FAILED

        set_file_times(destination, episode.start)
        self.store.insert(entry)
        logger.info("  - aired @ %s: done (%s bytes)", episode.start.isoformat(), written)
        return EpisodeOutcome.DOWNLOADED
