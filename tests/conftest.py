"""Shared test fixtures."""

import io
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from love_days.adapters.json_record_store import JsonFileRecordStore
from love_days.adapters.local_asset_store import LocalAssetStore
from love_days.api.app import create_app
from love_days.config import Settings
from love_days.containers import AppContainer, build_container
from love_days.domain.media import AssetKind, AssetUpload, Owner, Song
from love_days.errors import AssetIOError
from love_days.services.catalog import AssetStore, Collection, Document, RecordStore
from love_days.services.now_playing import (
    MediaAction,
    NowPlayingMetadata,
    NowPlayingSurface,
    PlaybackStatus,
)
from love_days.services.playback import (
    AudioOutput,
    PlaybackController,
    SongSource,
    Visualizer,
)


def make_upload(
    content: bytes = b"image-bytes", filename: str = "pic.JPG"
) -> AssetUpload:
    return AssetUpload(filename=filename, stream=io.BytesIO(content))


def make_song(
    song_id: str,
    owner: Owner = Owner.TUYEN,
    *,
    playable: bool = True,
    cover: str = "",
) -> Song:
    return Song(
        id=song_id,
        title=f"Song {song_id}",
        owner=owner,
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
        artist=f"Artist {song_id}",
        url="" if playable else f"https://example.com/{song_id}",
        file_url=f"/uploads/music/{song_id}.mp3" if playable else "",
        cover_art_url=cover,
    )


@dataclass
class StaticSongSource(SongSource):
    """Song source backed by a mutable list."""

    songs: list[Song] = field(default_factory=list)

    def list_songs(self, owner: Owner | str | None = None) -> list[Song]:
        if owner is None:
            return list(self.songs)
        return [song for song in self.songs if song.owner == owner]


@dataclass
class FakeAudioOutput(AudioOutput):
    """Audio output that records calls."""

    calls: list[tuple[str, object]] = field(default_factory=list)
    position: float = 0.0

    def load(self, url: str) -> None:
        self.calls.append(("load", url))
        self.position = 0.0

    def play(self) -> None:
        self.calls.append(("play", None))

    def pause(self) -> None:
        self.calls.append(("pause", None))

    def seek(self, position: float) -> None:
        self.calls.append(("seek", position))
        self.position = position

    def current_position(self) -> float:
        return self.position


@dataclass
class FakeVisualizer(Visualizer):
    """Visualizer that records start/stop calls."""

    started: list[str | None] = field(default_factory=list)
    stops: int = 0

    def start(self, cover_url: str | None) -> None:
        self.started.append(cover_url)

    def stop(self) -> None:
        self.stops += 1


@dataclass
class FakeNowPlayingSurface(NowPlayingSurface):
    """Now-playing surface that records pushes and stores handlers."""

    metadata: list[NowPlayingMetadata] = field(default_factory=list)
    states: list[PlaybackStatus] = field(default_factory=list)
    handlers: dict[MediaAction, Callable[[], object]] = field(default_factory=dict)

    def set_metadata(self, metadata: NowPlayingMetadata) -> None:
        self.metadata.append(metadata)

    def set_playback_state(self, status: PlaybackStatus) -> None:
        self.states.append(status)

    def set_action_handler(
        self, action: MediaAction, handler: Callable[[], object]
    ) -> None:
        self.handlers[action] = handler


@dataclass
class FailingDeleteAssetStore(AssetStore):
    """Asset store whose deletes always fail."""

    inner: LocalAssetStore
    delete_attempts: list[str] = field(default_factory=list)

    def save(self, kind: AssetKind, upload: AssetUpload) -> str:
        return self.inner.save(kind, upload)

    def delete(self, asset_id: str) -> None:
        self.delete_attempts.append(asset_id)
        raise AssetIOError(f"disk unavailable: {asset_id}")

    def url_for(self, asset_id: str) -> str:
        return self.inner.url_for(asset_id)

    def asset_id_for(self, url: str) -> str | None:
        return self.inner.asset_id_for(url)


@dataclass
class FailingSaveAssetStore(AssetStore):
    """Asset store that accepts ``successes`` uploads, then fails every save."""

    inner: LocalAssetStore
    successes: int = 0

    def save(self, kind: AssetKind, upload: AssetUpload) -> str:
        if self.successes <= 0:
            raise AssetIOError(f"disk full: {upload.filename}")
        self.successes -= 1
        return self.inner.save(kind, upload)

    def delete(self, asset_id: str) -> None:
        self.inner.delete(asset_id)

    def url_for(self, asset_id: str) -> str:
        return self.inner.url_for(asset_id)

    def asset_id_for(self, url: str) -> str | None:
        return self.inner.asset_id_for(url)


@dataclass
class FailingWriteRecordStore(RecordStore):
    """Record store whose writes always fail."""

    inner: JsonFileRecordStore

    def get(self, collection: Collection) -> Document:
        return self.inner.get(collection)

    def put(self, collection: Collection, value: Document) -> None:
        raise OSError(f"read-only filesystem: {collection.value}")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        data_dir=tmp_path / "data",
        uploads_dir=tmp_path / "uploads",
        max_upload_mb=1,
    )


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


@pytest.fixture
def song_source() -> StaticSongSource:
    return StaticSongSource()


@pytest.fixture
def audio() -> FakeAudioOutput:
    return FakeAudioOutput()


@pytest.fixture
def visualizer() -> FakeVisualizer:
    return FakeVisualizer()


@pytest.fixture
def controller(
    song_source: StaticSongSource, audio: FakeAudioOutput, visualizer: FakeVisualizer
) -> PlaybackController:
    return PlaybackController(
        songs=song_source,
        audio=audio,
        visualizer=visualizer,
        open_link=lambda url: None,
        rng=random.Random(7),
    )
