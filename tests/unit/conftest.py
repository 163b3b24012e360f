"""Shared fakes and helpers for the unit tests."""

from __future__ import annotations

from typing import Callable

from algoviz.scheduler import Scheduler
from algoviz.trace_types import Trace, TraceEntry


class FakeTimer:
    """Handle returned by FakeScheduler.call_later."""

    def __init__(self, due: int, delay_ms: int, callback: Callable[[], None]):
        self.due = due
        self.delay_ms = delay_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler(Scheduler):
    """Virtual-time scheduler: timers only fire when the test advances time."""

    def __init__(self):
        self.now = 0
        self.timers: list[FakeTimer] = []

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay_ms, delay_ms, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance(self, ms: int) -> int:
        """Move virtual time forward by *ms*, firing due timers in order.

        Returns the number of callbacks fired.
        """
        target = self.now + ms
        fired = 0
        while True:
            due = [t for t in self.pending if t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.now = timer.due
            timer.fired = True
            timer.callback()
            fired += 1
        self.now = target
        return fired

    def fire_next(self) -> bool:
        """Advance exactly to the earliest pending timer and fire it."""
        if not self.pending:
            return False
        timer = min(self.pending, key=lambda t: t.due)
        self.advance(timer.due - self.now)
        return True


def make_trace(length: int, problem_id: str = "fake") -> Trace:
    """A trace of *length* entries whose ``x`` variable equals the entry id."""
    return Trace(
        problem_id=problem_id,
        entries=tuple(
            TraceEntry(id=i, line_number=i + 1, description=f"step {i}", variables={"x": i})
            for i in range(length)
        ),
    )
