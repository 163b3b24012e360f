"""Playback data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .trace_types import Trace
from . import constants


class PlaybackStatus(Enum):
    IDLE = "idle"
    PAUSED = "paused"
    PLAYING = "playing"


@dataclass(frozen=True)
class PlaybackConfig:
    """Groups playback configuration."""

    speed_ms: int = constants.DEFAULT_SPEED_MS


@dataclass(frozen=True)
class PlaybackState:
    """One revision of the playback engine's state.

    Transitions never mutate a state; they produce the next revision.
    """

    trace: Trace = field(default_factory=Trace.empty)
    cursor: int = 0
    playing: bool = False
    speed_ms: int = constants.DEFAULT_SPEED_MS
    revision: int = 0

    @property
    def status(self) -> PlaybackStatus:
        if self.playing:
            return PlaybackStatus.PLAYING
        if self.cursor == 0:
            return PlaybackStatus.IDLE
        return PlaybackStatus.PAUSED

    @property
    def last_index(self) -> int:
        return len(self.trace) - 1

    @property
    def at_end(self) -> bool:
        return self.cursor >= self.last_index
