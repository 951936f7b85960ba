"""Domain models for the playback state machine."""

from dataclasses import dataclass, field
from enum import StrEnum

from love_days.domain.media import Song

RESTART_THRESHOLD_SECONDS = 3.0


class RepeatMode(StrEnum):
    """Repeat behaviour when a track ends."""

    OFF = "off"
    ALL = "all"
    ONE = "one"

    def cycle(self) -> "RepeatMode":
        """Return the next mode in the off -> all -> one -> off cycle."""
        order = list(RepeatMode)
        return order[(order.index(self) + 1) % len(order)]


@dataclass(frozen=True)
class PlaybackState:
    """Ephemeral playback session."""

    current: Song | None = None
    playlist: tuple[Song, ...] = field(default_factory=tuple)
    index: int = 0
    shuffle: bool = False
    repeat: RepeatMode = RepeatMode.OFF
    playing: bool = False

    @property
    def is_idle(self) -> bool:
        return self.current is None


# Events


@dataclass(frozen=True)
class PlaySong:
    song: Song


@dataclass(frozen=True)
class TogglePlayback:
    pass


@dataclass(frozen=True)
class Resume:
    pass


@dataclass(frozen=True)
class Pause:
    pass


@dataclass(frozen=True)
class SkipNext:
    pass


@dataclass(frozen=True)
class SkipPrevious:
    """Skip back; ``position`` is the elapsed seconds of the current track."""

    position: float


@dataclass(frozen=True)
class TrackEnded:
    pass


@dataclass(frozen=True)
class SetShuffle:
    enabled: bool


@dataclass(frozen=True)
class CycleRepeat:
    pass


@dataclass(frozen=True)
class CatalogChanged:
    pass


@dataclass(frozen=True)
class ClosePlayer:
    pass


PlaybackEvent = (
    PlaySong
    | TogglePlayback
    | Resume
    | Pause
    | SkipNext
    | SkipPrevious
    | TrackEnded
    | SetShuffle
    | CycleRepeat
    | CatalogChanged
    | ClosePlayer
)


# Effects


@dataclass(frozen=True)
class LoadTrack:
    """Point the audio output at the song's file and start it."""

    song: Song


@dataclass(frozen=True)
class PlayAudio:
    pass


@dataclass(frozen=True)
class PauseAudio:
    pass


@dataclass(frozen=True)
class SeekTo:
    position: float


@dataclass(frozen=True)
class StartVisualizer:
    """Restart the background animation; no cover means the default palette."""

    cover_url: str | None


@dataclass(frozen=True)
class StopVisualizer:
    pass


@dataclass(frozen=True)
class OpenExternalLink:
    url: str


PlaybackEffect = (
    LoadTrack
    | PlayAudio
    | PauseAudio
    | SeekTo
    | StartVisualizer
    | StopVisualizer
    | OpenExternalLink
)
