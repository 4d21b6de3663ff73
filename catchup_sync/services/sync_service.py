"""
Catch-up Sync Service

Coordinates a full mirror run: load the schedule, walk the catalog show by
show and episode by episode, then write the schedule back once.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import httpx

from catchup_sync.config import CustomSettings
from catchup_sync.services.catalog_client import CatalogClient
from catchup_sync.services.episode_materializer import EpisodeMaterializer, EpisodeOutcome
from catchup_sync.services.fetch_types import ShowSummary
from catchup_sync.services.schedule_store import ScheduleStore
from catchup_sync.utils.logging_helpers import (
    log_run_summary,
    log_section_end,
    log_section_start,
    log_show_processing,
    log_sync_end,
    log_sync_start,
)
from catchup_sync.utils.timezone import resolve_local_timezone


logger = logging.getLogger(__name__)

# Global lock to prevent concurrent sync runs
_sync_lock = asyncio.Lock()


@dataclass(slots=True)
class ShowRunSummary:
    show_id: str
    title: str
    folder: str
    episodes_listed: int = 0
    downloaded: int = 0
    already_present: int = 0
    failed: int = 0

    def record(self, outcome: EpisodeOutcome) -> None:
        if outcome is EpisodeOutcome.DOWNLOADED:
            self.downloaded += 1
        elif outcome is EpisodeOutcome.ALREADY_PRESENT:
            self.already_present += 1
        else:
            self.failed += 1

    def to_dict(self) -> dict:
        return {
            "show_id": self.show_id,
            "title": self.title,
            "folder": self.folder,
            "episodes_listed": self.episodes_listed,
            "downloaded": self.downloaded,
            "already_present": self.already_present,
            "failed": self.failed,
        }


class CatchupSyncPipeline:
    """Runs one sequential mirror of the catch-up catalog into the downloads folder."""

    def __init__(
        self,
        settings: CustomSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self._transport = transport
        self.store = ScheduleStore(settings.schedule_path)

    async def run(self) -> dict:
        """
        Execute the run.

        Fatal errors (schedule load, show list or show detail fetch)
        propagate; per-episode failures are counted and skipped.

        Returns:
            Dictionary with run statistics
        """
        started_at = datetime.now(timezone.utc)
        await self.store.load()

        summaries: list[ShowRunSummary] = []
        async with CatalogClient(self.settings, transport=self._transport) as client:
            materializer = EpisodeMaterializer(
                client,
                self.store,
                self.settings.downloads_path,
                zone=resolve_local_timezone(self.settings.local_timezone),
                chunk_size=self.settings.download_chunk_size,
            )

            log_section_start(logger, "catalog fetch")
            shows = await client.fetch_show_list()
            log_section_end(logger, "catalog fetch")

            for index, show in enumerate(shows, start=1):
                log_show_processing(logger, index, len(shows), show.title)
                summaries.append(await self._process_show(client, materializer, show))

        schedule_path = await self.store.persist()
        return self._build_result(started_at, summaries, schedule_path)

    async def _process_show(
        self,
        client: CatalogClient,
        materializer: EpisodeMaterializer,
        show: ShowSummary,
    ) -> ShowRunSummary:
        detail = await client.fetch_show_detail(show.id)
        folder = await materializer.prepare_show(detail)
        summary = ShowRunSummary(
            show_id=show.id,
            title=detail.title,
            folder=folder,
            episodes_listed=len(detail.episodes),
        )
        logger.info("'%s': found %s episodes", detail.title, len(detail.episodes))

        for episode in detail.episodes:
            summary.record(await materializer.materialize(episode, folder))

        return summary

    def _build_result(
        self,
        started_at: datetime,
        summaries: list[ShowRunSummary],
        schedule_path: Path,
    ) -> dict:
        downloaded = sum(summary.downloaded for summary in summaries)
        already_present = sum(summary.already_present for summary in summaries)
        failed = sum(summary.failed for summary in summaries)
        slots = sum(len(times) for times in self.store.serialize().values())
        log_run_summary(logger, downloaded, already_present, failed, slots)

        return {
            "status": "success",
            "started_at": started_at.isoformat(),
            "completed_at": datetime.now(timezone.utc).isoformat(),
            "shows_processed": len(summaries),
            "episodes_downloaded": downloaded,
            "episodes_already_present": already_present,
            "episodes_failed": failed,
            "schedule_entries": slots,
            "schedule_path": str(schedule_path),
            "show_details": [summary.to_dict() for summary in summaries],
        }


async def run_sync(
    settings: CustomSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict:
    """
    Main entry point for a sync run with concurrency protection.

    Returns:
        Dictionary with run statistics, or a skip message if a run is
        already in progress.

    Raises:
        CatalogError, ScheduleFormatError, OSError: On fatal run errors
    """
    if _sync_lock.locked():
        logger.warning("Catch-up sync already in progress, skipping this request")
        return {
            "status": "skipped",
            "message": "Catch-up sync already in progress",
        }

    async with _sync_lock:
        log_sync_start(logger)
        result = await CatchupSyncPipeline(settings, transport=transport).run()
        log_sync_end(logger)
        return result
