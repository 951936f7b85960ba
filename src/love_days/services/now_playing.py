"""Mirror playback state onto an external now-playing surface."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal, Protocol

from love_days.domain.playback import PlaybackState
from love_days.services.playback import PlaybackController

DEFAULT_ARTWORK = "/default-cover.png"

MediaAction = Literal["play", "pause", "previoustrack", "nexttrack"]
PlaybackStatus = Literal["playing", "paused"]


@dataclass(frozen=True)
class NowPlayingMetadata:
    """Track details shown on the surface."""

    title: str
    artist: str
    album: str
    artwork: str


@dataclass(frozen=True)
class NowPlayingSnapshot:
    metadata: NowPlayingMetadata
    status: PlaybackStatus


class NowPlayingSurface(Protocol):
    """Lock-screen style control surface."""

    def set_metadata(self, metadata: NowPlayingMetadata) -> None:
        """Show track details."""

    def set_playback_state(self, status: PlaybackStatus) -> None:
        """Show whether playback is running."""

    def set_action_handler(
        self, action: MediaAction, handler: Callable[[], object]
    ) -> None:
        """Register a callback for a transport button."""


@dataclass
class NowPlayingSync:
    """Observer/command bridge between the controller and the surface."""

    controller: PlaybackController
    surface: NowPlayingSurface
    album: str
    _last: NowPlayingSnapshot | None = field(default=None, init=False)

    def attach(self) -> None:
        """Register transport handlers and start following the controller."""
        self.surface.set_action_handler("play", self.controller.resume)
        self.surface.set_action_handler("pause", self.controller.pause)
        self.surface.set_action_handler("previoustrack", self.controller.previous)
        self.surface.set_action_handler("nexttrack", self.controller.next)
        self.controller.subscribe(self.refresh)
        self.refresh(self.controller.state)

    def refresh(self, state: PlaybackState) -> None:
        """Push state to the surface unless it matches the last push."""
        song = state.current
        if song is None:
            return
        snapshot = NowPlayingSnapshot(
            metadata=NowPlayingMetadata(
                title=song.title or "Untitled",
                artist=song.artist or "Unknown Artist",
                album=self.album,
                artwork=song.cover_art_url or DEFAULT_ARTWORK,
            ),
            status="playing" if state.playing else "paused",
        )
        if snapshot == self._last:
            return
        if self._last is None or snapshot.metadata != self._last.metadata:
            self.surface.set_metadata(snapshot.metadata)
        self.surface.set_playback_state(snapshot.status)
        self._last = snapshot
