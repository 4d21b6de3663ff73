"""
Structured logging helpers for consistent log formatting.

Provides utilities for structured, clean logging without excessive decorative separators.
"""
import logging
from datetime import datetime, timezone


def log_section_start(logger: logging.Logger, section_name: str) -> None:
    """
    Log the start of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being started
    """
    logger.info(f"Starting: {section_name}")


def log_section_end(logger: logging.Logger, section_name: str) -> None:
    """
    Log the end of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being ended
    """
    logger.info(f"Completed: {section_name}")


def log_show_processing(logger: logging.Logger, idx: int, total: int, title: str) -> None:
    """
    Log show processing header.

    Args:
        logger: Logger instance
        idx: Current show index (1-based)
        total: Total number of shows
        title: Show title from the catalog listing
    """
    logger.info(f"Processing show {idx}/{total}: {title}")


def log_sync_start(logger: logging.Logger) -> None:
    """Log sync run start."""
    logger.info(f"Catch-up sync started at {datetime.now(timezone.utc).isoformat()}")


def log_sync_end(logger: logging.Logger) -> None:
    """Log sync run end."""
    logger.info(f"Catch-up sync completed at {datetime.now(timezone.utc).isoformat()}")


def log_run_summary(
    logger: logging.Logger,
    downloaded: int,
    already_present: int,
    failed: int,
    schedule_entries: int,
) -> None:
    """
    Log the per-run episode and schedule counts.

    Args:
        logger: Logger instance
        downloaded: Episodes downloaded this run
        already_present: Episodes found on disk
        failed: Episodes skipped because of a per-episode failure
        schedule_entries: Entries held by the schedule after the run
    """
    logger.info(
        f"Run summary - Downloaded: {downloaded}, Already present: {already_present}, "
        f"Failed: {failed}, Schedule entries: {schedule_entries}"
    )
