"""Cancellable background-gradient animation loop."""

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from love_days.services.playback import Visualizer

logger = logging.getLogger(__name__)

DEFAULT_PALETTE: tuple[str, ...] = ("#1a1a2e", "#2d1b4e", "#0f0f23", "#1a0a2e")
FRAME_INTERVAL_SECONDS = 1 / 60
DEGREES_PER_FRAME = 0.3

FrameRenderer = Callable[[Sequence[str], float], None]
PaletteSource = Callable[[str], Sequence[str]]


@dataclass
class VisualizerLoop(Visualizer):
    """Rotates a gradient built from the cover palette on a worker thread.

    Only one loop runs at a time: ``start`` stops the previous loop before
    launching a new one, and ``stop`` joins the worker.
    """

    render: FrameRenderer
    palette_for: PaletteSource | None = None
    interval: float = FRAME_INTERVAL_SECONDS
    _thread: threading.Thread | None = field(default=None, init=False)
    _stop_event: threading.Event | None = field(default=None, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, cover_url: str | None) -> None:
        """Replace any running animation with one for ``cover_url``."""
        palette = self._palette(cover_url)
        with self._lock:
            self._stop_locked()
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(palette, stop_event),
                name="visualizer-loop",
                daemon=True,
            )
            self._stop_event = stop_event
            self._thread = thread
            thread.start()

    def stop(self) -> None:
        with self._lock:
            self._stop_locked()

    def _stop_locked(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None
        self._stop_event = None

    def _palette(self, cover_url: str | None) -> tuple[str, ...]:
        if not cover_url or self.palette_for is None:
            return DEFAULT_PALETTE
        try:
            palette = tuple(self.palette_for(cover_url))
        except Exception:
            logger.exception("Palette extraction failed", extra={"cover": cover_url})
            return DEFAULT_PALETTE
        return palette or DEFAULT_PALETTE

    def _run(self, palette: tuple[str, ...], stop_event: threading.Event) -> None:
        angle = 0.0
        while not stop_event.is_set():
            self.render(palette, angle)
            angle = (angle + DEGREES_PER_FRAME) % 360
            stop_event.wait(self.interval)
