"""Dependency container wiring for the application."""

from dataclasses import dataclass

from love_days.adapters.json_record_store import JsonFileRecordStore
from love_days.adapters.local_asset_store import LocalAssetStore
from love_days.config import Settings
from love_days.services.catalog import MediaCatalog
from love_days.services.now_playing import NowPlayingSurface, NowPlayingSync
from love_days.services.playback import AudioOutput, PlaybackController, Visualizer
from love_days.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide state and dependencies."""

    settings: Settings
    record_store: JsonFileRecordStore
    asset_store: LocalAssetStore
    catalog: MediaCatalog
    stats_service: StatsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    Every collection is loaded here, so a corrupt data file stops startup.
    """
    resolved_settings = settings or Settings()
    record_store = JsonFileRecordStore(resolved_settings.data_dir)
    record_store.initialize()
    asset_store = LocalAssetStore(
        root=resolved_settings.uploads_dir,
        max_bytes=resolved_settings.max_upload_bytes,
        url_prefix=resolved_settings.uploads_url_prefix,
    )
    asset_store.initialize()
    catalog = MediaCatalog(
        records=record_store,
        assets=asset_store,
        default_owner=resolved_settings.default_owner,
    )
    return AppContainer(
        settings=resolved_settings,
        record_store=record_store,
        asset_store=asset_store,
        catalog=catalog,
        stats_service=StatsService(catalog),
    )


def build_player(
    container: AppContainer,
    audio: AudioOutput,
    visualizer: Visualizer,
    surface: NowPlayingSurface | None = None,
) -> PlaybackController:
    """Create a playback controller reading songs from the container's catalog."""
    controller = PlaybackController(
        songs=container.catalog, audio=audio, visualizer=visualizer
    )
    if surface is not None:
        NowPlayingSync(
            controller=controller,
            surface=surface,
            album=container.settings.site_name,
        ).attach()
    return controller
