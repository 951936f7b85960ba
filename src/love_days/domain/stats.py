"""Domain models for site statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SiteStats:
    """Counts shown on the home page."""

    photo_count: int
    song_count: int
    days: int
    hours: int
