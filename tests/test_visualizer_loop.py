"""Tests for the visualizer loop."""

import threading
from collections.abc import Sequence

from love_days.adapters.visualizer_loop import DEFAULT_PALETTE, VisualizerLoop


def test_start_without_cover_uses_default_palette() -> None:
    frames: list[tuple[tuple[str, ...], float]] = []
    rendered = threading.Event()

    def render(palette: Sequence[str], angle: float) -> None:
        frames.append((tuple(palette), angle))
        rendered.set()

    loop = VisualizerLoop(render=render, interval=0.001)
    loop.start(None)
    assert rendered.wait(timeout=2)
    loop.stop()

    assert frames[0] == (DEFAULT_PALETTE, 0.0)
    assert not loop.running


def test_start_replaces_running_loop() -> None:
    seen: list[tuple[str, ...]] = []
    second_frame = threading.Event()

    def render(palette: Sequence[str], angle: float) -> None:
        seen.append(tuple(palette))
        if tuple(palette) == ("#111111",):
            second_frame.set()

    loop = VisualizerLoop(
        render=render, palette_for=lambda url: ["#111111"], interval=0.001
    )
    loop.start(None)
    first_thread = loop._thread
    loop.start("/uploads/covers/a.jpg")

    assert second_frame.wait(timeout=2)
    assert first_thread is not None
    assert not first_thread.is_alive()
    loop.stop()
    assert not loop.running


def test_palette_failure_falls_back_to_default() -> None:
    def broken(url: str) -> Sequence[str]:
        raise RuntimeError("decode failed")

    loop = VisualizerLoop(render=lambda palette, angle: None, palette_for=broken)

    assert loop._palette("/uploads/covers/x.jpg") == DEFAULT_PALETTE
