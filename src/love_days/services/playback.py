"""Playback state machine and the controller that drives an audio output."""

import logging
import random
import webbrowser
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import Protocol

from love_days.domain.media import Owner, Song
from love_days.domain.playback import (
    RESTART_THRESHOLD_SECONDS,
    CatalogChanged,
    ClosePlayer,
    CycleRepeat,
    LoadTrack,
    OpenExternalLink,
    Pause,
    PauseAudio,
    PlayAudio,
    PlaybackEffect,
    PlaybackEvent,
    PlaybackState,
    PlaySong,
    RepeatMode,
    Resume,
    SeekTo,
    SetShuffle,
    SkipNext,
    SkipPrevious,
    StartVisualizer,
    StopVisualizer,
    TogglePlayback,
    TrackEnded,
)

logger = logging.getLogger(__name__)

Transition = tuple[PlaybackState, list[PlaybackEffect]]
PlaybackListener = Callable[[PlaybackState], None]


def build_playlist(songs: Sequence[Song], owner: Owner) -> tuple[Song, ...]:
    """Playable songs of one owner, in catalog order."""
    return tuple(song for song in songs if song.owner is owner and song.is_playable)


def transition(
    state: PlaybackState,
    event: PlaybackEvent,
    songs: Sequence[Song],
    rng: random.Random,
) -> Transition:
    """Apply one event and return the new state plus effects to perform.

    ``songs`` is the current catalog snapshot; every navigation recomputes the
    playlist from it. A current song that has been removed from the catalog
    keeps playing, but navigation moves on from its nearest surviving
    neighbour in the previous playlist.
    """
    if isinstance(event, PlaySong):
        return _play(state, event.song, songs)
    if isinstance(event, SetShuffle):
        return replace(state, shuffle=event.enabled), []
    if isinstance(event, CycleRepeat):
        return replace(state, repeat=state.repeat.cycle()), []
    if isinstance(event, ClosePlayer):
        return state, [StopVisualizer()]
    if isinstance(event, CatalogChanged):
        return _refresh(state, songs), []
    if state.current is None:
        return state, []
    if isinstance(event, TogglePlayback):
        return _set_playing(state, not state.playing)
    if isinstance(event, Resume):
        return _set_playing(state, True)
    if isinstance(event, Pause):
        return _set_playing(state, False)
    if isinstance(event, SkipNext):
        return _skip(state, songs, 1, rng)
    if isinstance(event, SkipPrevious):
        if event.position > RESTART_THRESHOLD_SECONDS:
            return state, [SeekTo(0.0)]
        return _skip(state, songs, -1, rng)
    if isinstance(event, TrackEnded):
        return _track_ended(state, songs, rng)
    raise TypeError(f"Unsupported playback event: {event!r}")


def _play(state: PlaybackState, song: Song, songs: Sequence[Song]) -> Transition:
    if not song.is_playable:
        return state, [OpenExternalLink(song.url)] if song.url else []
    playlist = build_playlist(songs, song.owner)
    index = _position(playlist, song.id)
    if index is None:
        playlist, index = (song,), 0
    return _load(state, playlist, index)


def _load(state: PlaybackState, playlist: tuple[Song, ...], index: int) -> Transition:
    song = playlist[index]
    loaded = replace(state, current=song, playlist=playlist, index=index, playing=True)
    return loaded, [LoadTrack(song), StartVisualizer(song.cover_art_url or None)]


def _set_playing(state: PlaybackState, playing: bool) -> Transition:
    if state.playing == playing:
        return state, []
    effect = PlayAudio() if playing else PauseAudio()
    return replace(state, playing=playing), [effect]


def _skip(
    state: PlaybackState, songs: Sequence[Song], step: int, rng: random.Random
) -> Transition:
    fresh = _fresh_playlist(state, songs)
    if not fresh:
        return state, []
    if step > 0 and state.shuffle:
        return _load(state, fresh, rng.randrange(len(fresh)))
    index = _neighbour(state, fresh, step, wrap=True)
    return _load(state, fresh, 0 if index is None else index)


def _track_ended(
    state: PlaybackState, songs: Sequence[Song], rng: random.Random
) -> Transition:
    if state.repeat is RepeatMode.ONE:
        return replace(state, playing=True), [SeekTo(0.0), PlayAudio()]
    fresh = _fresh_playlist(state, songs)
    if fresh and (
        state.repeat is RepeatMode.ALL
        or _neighbour(state, fresh, 1, wrap=False) is not None
    ):
        return _skip(state, songs, 1, rng)
    return replace(state, playing=False), []


def _refresh(state: PlaybackState, songs: Sequence[Song]) -> PlaybackState:
    if state.current is None:
        return state
    fresh = _fresh_playlist(state, songs)
    index = _position(fresh, state.current.id)
    if index is None:
        # The removed song keeps playing from the old snapshot.
        return state
    return replace(state, playlist=fresh, index=index)


def _fresh_playlist(state: PlaybackState, songs: Sequence[Song]) -> tuple[Song, ...]:
    if state.current is None:
        return ()
    return build_playlist(songs, state.current.owner)


def _position(playlist: Sequence[Song], song_id: str) -> int | None:
    for index, song in enumerate(playlist):
        if song.id == song_id:
            return index
    return None


def _neighbour(
    state: PlaybackState, fresh: tuple[Song, ...], step: int, *, wrap: bool
) -> int | None:
    """Index in ``fresh`` of the song ``step`` places from the current one."""
    positions = {song.id: index for index, song in enumerate(fresh)}
    current_id = state.current.id if state.current else None
    if current_id in positions:
        target = positions[current_id] + step
        if 0 <= target < len(fresh):
            return target
        return target % len(fresh) if wrap else None

    previous = state.playlist
    for offset in range(1, len(previous)):
        raw = state.index + step * offset
        if not wrap and not 0 <= raw < len(previous):
            break
        survivor = positions.get(previous[raw % len(previous)].id)
        if survivor is not None:
            return survivor
    if not wrap:
        return None
    return 0 if step > 0 else len(fresh) - 1


class SongSource(Protocol):
    """Read access to the catalog's songs."""

    def list_songs(self, owner: Owner | str | None = None) -> list[Song]:
        """Return songs in catalog order."""


class AudioOutput(Protocol):
    """The element that actually plays audio."""

    def load(self, url: str) -> None:
        """Switch to a new source and start playing it."""

    def play(self) -> None:
        """Resume playback."""

    def pause(self) -> None:
        """Pause playback."""

    def seek(self, position: float) -> None:
        """Jump to ``position`` seconds."""

    def current_position(self) -> float:
        """Elapsed seconds of the loaded source."""


class Visualizer(Protocol):
    """Background animation that follows the playing song."""

    def start(self, cover_url: str | None) -> None:
        """Start animating, replacing any running animation."""

    def stop(self) -> None:
        """Stop animating."""


@dataclass
class PlaybackController:
    """Owns the playback session and performs transition effects."""

    songs: SongSource
    audio: AudioOutput
    visualizer: Visualizer
    open_link: Callable[[str], object] = webbrowser.open
    rng: random.Random = field(default_factory=random.Random)
    state: PlaybackState = field(default_factory=PlaybackState)
    _listeners: list[PlaybackListener] = field(default_factory=list, init=False)

    def subscribe(self, listener: PlaybackListener) -> Callable[[], None]:
        """Call ``listener`` after every state change; returns an unsubscriber."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, event: PlaybackEvent) -> PlaybackState:
        """Run one transition to completion and notify listeners."""
        previous = self.state
        self.state, effects = transition(
            previous, event, self.songs.list_songs(), self.rng
        )
        for effect in effects:
            self._apply(effect)
        if self.state != previous:
            for listener in list(self._listeners):
                listener(self.state)
        return self.state

    def play(self, song: Song) -> PlaybackState:
        return self.dispatch(PlaySong(song))

    def toggle(self) -> PlaybackState:
        return self.dispatch(TogglePlayback())

    def resume(self) -> PlaybackState:
        return self.dispatch(Resume())

    def pause(self) -> PlaybackState:
        return self.dispatch(Pause())

    def next(self) -> PlaybackState:
        return self.dispatch(SkipNext())

    def previous(self) -> PlaybackState:
        return self.dispatch(SkipPrevious(self.audio.current_position()))

    def on_track_end(self) -> PlaybackState:
        return self.dispatch(TrackEnded())

    def set_shuffle(self, enabled: bool) -> PlaybackState:
        return self.dispatch(SetShuffle(enabled))

    def cycle_repeat(self) -> PlaybackState:
        return self.dispatch(CycleRepeat())

    def catalog_changed(self) -> PlaybackState:
        return self.dispatch(CatalogChanged())

    def close_player(self) -> PlaybackState:
        return self.dispatch(ClosePlayer())

    def _apply(self, effect: PlaybackEffect) -> None:
        if isinstance(effect, LoadTrack):
            logger.info("Loading track", extra={"song_id": effect.song.id})
            self.audio.load(effect.song.file_url)
        elif isinstance(effect, PlayAudio):
            self.audio.play()
        elif isinstance(effect, PauseAudio):
            self.audio.pause()
        elif isinstance(effect, SeekTo):
            self.audio.seek(effect.position)
        elif isinstance(effect, StartVisualizer):
            self.visualizer.start(effect.cover_url)
        elif isinstance(effect, StopVisualizer):
            self.visualizer.stop()
        elif isinstance(effect, OpenExternalLink):
            self.open_link(effect.url)
