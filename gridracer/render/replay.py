"""Replay cursor over a finished, read-only trace."""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass
class ReplayCursor:
    """Which trace step is on screen; never touches the trace itself."""

    length: int
    index: int = -1
    playing: bool = False
    tick_delay: float = 0.15
    last_tick: float = 0.0

    @property
    def active(self) -> bool:
        return self.index >= 0

    @property
    def at_end(self) -> bool:
        return self.index >= self.length - 1

    def play(self) -> None:
        if self.length == 0:
            return
        if self.at_end:
            self.index = -1
        self.playing = True
        self.last_tick = time.monotonic()

    def pause(self) -> None:
        self.playing = False

    def toggle(self) -> None:
        if self.playing:
            self.pause()
        else:
            self.play()

    def step(self) -> None:
        self.playing = False
        self._advance()

    def back(self) -> None:
        self.playing = False
        if not self.active:
            return
        self.index = max(self.index - 1, 0)

    def seek(self, index: int) -> None:
        if self.length == 0:
            self.index = -1
            return
        self.index = min(max(index, 0), self.length - 1)

    def reset(self) -> None:
        self.playing = False
        self.index = -1
        self.last_tick = time.monotonic()

    def tick(self, now: float | None = None) -> bool:
        """Advance one step when playing and the delay has passed."""
        if not self.playing:
            return False
        now = time.monotonic() if now is None else now
        if now - self.last_tick < self.tick_delay:
            return False
        self.last_tick = now
        self._advance()
        if self.at_end:
            self.playing = False
        return True

    def _advance(self) -> None:
        if self.length == 0:
            return
        self.index = min(self.index + 1, self.length - 1)
