"""
Naming utilities

Derives show folder names and episode file names from catalog data.
"""
import re
from datetime import datetime, timezone, tzinfo

from catchup_sync.utils.timezone import to_local_time


TITLE_DELIMITER = "|"
MEDIA_EXTENSION = ".m4a"
SHOW_INFO_FILENAME = "show_info.json"

_UNSAFE_RUN = re.compile(r"[^a-z0-9]+")


def safe_title(title: str) -> str:
    """
    Build a filesystem-safe folder name from a show display title.

    Takes the segment after the last '|' (the whole title when that segment
    is blank), trims it, lowercases it and replaces each run of characters
    outside ASCII [a-z0-9] with a single underscore. A title with nothing left maps to '_'.

    Args:
        title: Show display title, e.g. 'Smooth | The Late Show'

    Returns:
        Folder name, e.g. 'the_late_show'
    """
    segment = title.split(TITLE_DELIMITER)[-1]
    if not segment.strip():
        segment = title
    name = _UNSAFE_RUN.sub("_", segment.strip().lower())
    return name or "_"


def episode_slot(start: datetime, zone: tzinfo | None = None) -> tuple[str, str]:
    """
    Compute the schedule slot of a broadcast instant.

    The date is the UTC calendar date; the time is the wall clock in
    ``zone`` (process local zone when None) as HH-MM-SS.

    Returns:
        Tuple of (date, time), e.g. ('2025-01-01', '10-00-00')
    """
    date = start.astimezone(timezone.utc).date().isoformat()
    time = to_local_time(start, zone).strftime("%H:%M:%S").replace(":", "-")
    return date, time


def episode_filename(date: str, time: str) -> str:
    return f"{date}_{time}{MEDIA_EXTENSION}"
