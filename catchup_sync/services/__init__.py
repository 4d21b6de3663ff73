"""
Services package for the catch-up sync

This package contains all business logic and service layer components.
"""
from catchup_sync.services.catalog_client import CatalogClient, CatalogError
from catchup_sync.services.episode_materializer import EpisodeMaterializer, EpisodeOutcome
from catchup_sync.services.schedule_store import ScheduleFormatError, ScheduleStore
from catchup_sync.services.sync_service import CatchupSyncPipeline, run_sync

__all__ = [
    'CatalogClient',
    'CatalogError',
    'EpisodeMaterializer',
    'EpisodeOutcome',
    'ScheduleFormatError',
    'ScheduleStore',
    'CatchupSyncPipeline',
    'run_sync',
]
