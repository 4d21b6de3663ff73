"""
Schedule Store

Keeps the broadcast schedule index: an ordered list of entries mapping a
broadcast date and time to the media file recorded for it. Persisted as a
nested ``date -> time -> path`` JSON mapping.
"""
import bisect
import json
import logging
from pathlib import Path

import aiofiles

from catchup_sync.services.fetch_types import ScheduleEntry


logger = logging.getLogger(__name__)

ScheduleMapping = dict[str, dict[str, str]]


class ScheduleFormatError(ValueError):
    """Raised when a schedule file is valid JSON but not a date -> time -> path mapping"""
    pass


def _sort_key(entry: ScheduleEntry) -> tuple[str, str]:
    return entry.date, entry.time


class ScheduleStore:
    """
    In-memory schedule index backed by a JSON file.

    Entries are kept sorted by (date, time) after every insertion. Duplicate
    slots are allowed in memory; they collapse on serialization, with the
    entry inserted last winning.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._entries: list[ScheduleEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[ScheduleEntry]:
        """Snapshot of the entries in (date, time) order."""
        return list(self._entries)

    async def load(self) -> int:
        """
        Load entries from the schedule file.

        A missing file yields an empty schedule. Any other read or parse
        failure propagates.

        Returns:
            Number of entries loaded
        """
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except FileNotFoundError:
            logger.info("No schedule file at %s, starting with an empty schedule", self.path)
            return 0

        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ScheduleFormatError(f"Schedule root must be an object: {self.path}")

        loaded = 0
        for date, times in data.items():
            if not isinstance(times, dict):
                raise ScheduleFormatError(f"Schedule date '{date}' must map to an object")
            for time, path in times.items():
                if not isinstance(path, str):
                    raise ScheduleFormatError(f"Schedule slot {date} {time} must map to a path string")
                self.insert(ScheduleEntry(date=date, time=time, path=path))
                loaded += 1

        logger.info("Loaded existing schedule with %s entries from %s", loaded, self.path)
        return loaded

    def insert(self, entry: ScheduleEntry) -> None:
        """
        Add an entry, keeping the collection sorted by (date, time).

        No deduplication happens here. Equal keys are placed after existing
        ones, so among duplicates list order is insertion order.
        """
        bisect.insort_right(self._entries, entry, key=_sort_key)
        logger.debug("Schedule entry added: %s %s -> %s", entry.date, entry.time, entry.path)

    def serialize(self) -> ScheduleMapping:
        """
        Project entries into the nested date -> time -> path mapping.

        When several entries share a slot the one inserted last wins.
        """
        schedule: ScheduleMapping = {}
        for entry in self._entries:
            schedule.setdefault(entry.date, {})[entry.time] = entry.path
        return schedule

    async def persist(self) -> Path:
        """
        Write the serialized schedule as indented JSON, replacing the file.

        Returns:
            Path written
        """
        content = json.dumps(self.serialize(), indent=2, ensure_ascii=False)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(content)

        logger.info("Schedule written to %s (%s entries)", self.path, len(self._entries))
        return self.path
