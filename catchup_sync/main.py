import asyncio
import logging

from pydantic import ValidationError

from catchup_sync.config import CustomSettings, get_settings, setup_logging
from catchup_sync.services.catalog_client import CatalogError
from catchup_sync.services.schedule_store import ScheduleFormatError
from catchup_sync.services.sync_service import run_sync


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_RUN_FAILED = 1
EXIT_CONFIG_ERROR = 2


async def run_once(settings: CustomSettings) -> int:
    """Run a single sync and map its outcome to an exit code"""
    try:
        result = await run_sync(settings)
    except (CatalogError, ScheduleFormatError, ValueError, OSError) as e:
        logger.error(f"Catch-up sync failed: {e}", exc_info=True)
        return EXIT_RUN_FAILED

    logger.info(
        "Schedule written to %s (%s shows, %s downloaded, %s failed)",
        result.get("schedule_path"),
        result.get("shows_processed"),
        result.get("episodes_downloaded"),
        result.get("episodes_failed"),
    )
    return EXIT_OK


def main() -> int:
    setup_logging()

    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    logging.getLogger().setLevel(settings.log_level)
    settings.log_summary()

    return asyncio.run(run_once(settings))
