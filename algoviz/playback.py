"""Playback Engine: cursor, autoplay and trace replacement.

State machine over ``PlaybackState`` revisions:

    Idle@0 / Paused@i --play--> Playing@i          (only if i < len-1)
    Playing@i --tick--> Playing@i+1                 (if i+1 < len-1)
    Playing@i --tick--> Paused@len-1                (if i+1 == len-1)
    any --step_forward/step_backward/reset/pause--> Paused@...
    any --load(new trace)--> Paused@0

At most one autoplay timer is outstanding. Leaving ``Playing`` cancels
the timer handle and bumps a token, so a callback that still fires
against an old trace is ignored.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Callable

from .playback_types import PlaybackConfig, PlaybackState
from .scheduler import Scheduler
from .trace_types import READY_ENTRY, Trace, TraceEntry

logger = logging.getLogger(__name__)

Listener = Callable[[PlaybackState], None]


class PlaybackEngine:
    """Owns the trace and cursor for one (problem, inputs) pairing at a time."""

    def __init__(self, scheduler: Scheduler, config: PlaybackConfig = PlaybackConfig()):
        if config.speed_ms <= 0:
            raise ValueError(f"speed_ms must be positive, got {config.speed_ms}")
        self._scheduler = scheduler
        self._state = PlaybackState(speed_ms=config.speed_ms)
        self._timer: Any = None
        self._timer_token = 0
        self._listeners: list[Listener] = []

    # ── Read access ─────────────────────────────────────────────

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def trace(self) -> Trace:
        return self._state.trace

    @property
    def cursor(self) -> int:
        return self._state.cursor

    @property
    def is_playing(self) -> bool:
        return self._state.playing

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    @property
    def current_entry(self) -> TraceEntry:
        trace = self._state.trace
        if 0 <= self._state.cursor < len(trace):
            return trace[self._state.cursor]
        return READY_ENTRY

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for every new state; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Transitions ─────────────────────────────────────────────

    def load(self, trace: Trace) -> bool:
        """Replace the trace. Returns False if *trace* is already loaded."""
        if trace is self._state.trace:
            return False
        self._cancel_timer()
        logger.debug(
            "PlaybackEngine: loading trace '%s' (%d entries)", trace.problem_id, len(trace)
        )
        self._commit(trace=trace, cursor=0, playing=False)
        return True

    def step_forward(self):
        self._cancel_timer()
        cursor = self._state.cursor
        if cursor + 1 <= self._state.last_index:
            cursor += 1
        self._commit(cursor=cursor, playing=False)

    def step_backward(self):
        self._cancel_timer()
        cursor = self._state.cursor
        if cursor - 1 >= 0:
            cursor -= 1
        self._commit(cursor=cursor, playing=False)

    def reset(self):
        self._cancel_timer()
        self._commit(cursor=0, playing=False)

    def play(self):
        if self._state.playing:
            return
        if len(self._state.trace) == 0 or self._state.at_end:
            logger.debug("PlaybackEngine: play ignored at cursor %d", self._state.cursor)
            return
        self._commit(playing=True)
        if self._state.playing:
            self._arm_timer()

    def pause(self):
        if not self._state.playing:
            return
        self._cancel_timer()
        self._commit(playing=False)

    def toggle(self):
        if self._state.playing:
            self.pause()
        else:
            self.play()

    def set_speed(self, speed_ms: int):
        """Change the tick interval. A timer already armed keeps its delay."""
        if speed_ms <= 0:
            raise ValueError(f"speed_ms must be positive, got {speed_ms}")
        self._commit(speed_ms=speed_ms)

    # ── Timer plumbing ──────────────────────────────────────────

    def _arm_timer(self):
        self._cancel_timer()
        token = self._timer_token
        self._timer = self._scheduler.call_later(
            self._state.speed_ms, lambda: self._on_tick(token)
        )

    def _cancel_timer(self):
        self._timer_token += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_tick(self, token: int):
        if token != self._timer_token or not self._state.playing:
            logger.debug("PlaybackEngine: ignoring stale tick %d", token)
            return
        self._timer = None
        next_cursor = self._state.cursor + 1
        if next_cursor >= self._state.last_index:
            self._commit(cursor=self._state.last_index, playing=False)
            logger.debug("PlaybackEngine: reached terminal entry %d", self._state.cursor)
            return
        self._commit(cursor=next_cursor)
        if self._state.playing:
            self._arm_timer()

    def _commit(self, **changes: Any):
        self._state = dataclasses.replace(
            self._state, revision=self._state.revision + 1, **changes
        )
        for listener in list(self._listeners):
            listener(self._state)
