"""Home page statistics."""

from dataclasses import dataclass
from datetime import UTC, datetime, time, timedelta

from love_days.domain.stats import SiteStats
from love_days.services.catalog import MediaCatalog


@dataclass
class StatsService:
    """Counts and time elapsed since the anniversary."""

    catalog: MediaCatalog

    def snapshot(self, now: datetime | None = None) -> SiteStats:
        """Return counts plus whole days/hours since anniversary midnight UTC."""
        current = now or datetime.now(tz=UTC)
        settings = self.catalog.get_settings()
        start = datetime.combine(settings.anniversary_date, time.min, tzinfo=UTC)
        elapsed = current - start
        return SiteStats(
            photo_count=len(self.catalog.list_photos()),
            song_count=len(self.catalog.list_songs()),
            days=elapsed // timedelta(days=1),
            hours=elapsed // timedelta(hours=1),
        )
