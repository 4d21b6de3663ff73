"""
Shared dataclasses used across the catch-up sync pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True)
class ShowSummary:
    """Show as listed in the station catalog."""
    id: str
    title: str
    description: str | None = None
    image_url: str | None = None


@dataclass(slots=True)
class EpisodePayload:
    """Single catch-up episode of a show."""
    start: datetime
    stream_url: str | None = None


@dataclass(slots=True)
class ShowDetail:
    """Full show record with its episodes in catalog order."""
    id: str
    title: str
    description: str | None = None
    episodes: list[EpisodePayload] = field(default_factory=list)


@dataclass(slots=True)
class ShowInfo:
    """Content of the per-show sidecar file."""
    show_title: str
    show_description: str = ""

    def to_dict(self) -> dict:
        return {
            "show_title": self.show_title,
            "show_description": self.show_description,
        }


@dataclass(slots=True, frozen=True)
class ScheduleEntry:
    """One known broadcast mapped to its media file, relative to the downloads root."""
    date: str
    time: str
    path: str


__all__ = ["ShowSummary", "EpisodePayload", "ShowDetail", "ShowInfo", "ScheduleEntry"]
