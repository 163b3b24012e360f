"""TraceBuilder: the only writer of Trace Entries.

Generators run their reference algorithm on live working state and call
``TraceBuilder.add`` at every meaningful point. The builder snapshots the
state so later mutation of the live state can never leak into an entry
that was already recorded. Lists and dicts that are unchanged since the
previous entry are shared with that entry's snapshot instead of copied
again; entries are read-only, so sharing between them is safe.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable, Mapping

from .trace_types import Highlight, HighlightColor, Trace, TraceEntry
from . import constants

logger = logging.getLogger(__name__)


class TraceContractError(Exception):
    """Raised when an entry omits a variable its problem declares for display."""


class TraceLimitError(Exception):
    """Raised when a generator exceeds the maximum number of entries."""


def _snapshot(value: Any, previous: Any = None) -> Any:
    """Copy *value*, reusing parts of *previous* (an earlier snapshot) that are equal."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, dict):
        if type(previous) is dict and previous == value:
            return previous
        earlier = previous if isinstance(previous, dict) else {}
        return {key: _snapshot(item, earlier.get(key)) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        if type(previous) is type(value) and previous == value:
            return previous
        if isinstance(previous, (list, tuple)) and len(previous) == len(value):
            items = [_snapshot(item, old) for item, old in zip(value, previous)]
        else:
            items = [_snapshot(item) for item in value]
        return items if isinstance(value, list) else tuple(items)
    return copy.deepcopy(value)


def emphasis(*indices: int, label: str | None = None) -> Highlight:
    return Highlight(indices=tuple(indices), color=HighlightColor.EMPHASIS, label=label)


def success(*indices: int, label: str | None = None) -> Highlight:
    return Highlight(indices=tuple(indices), color=HighlightColor.SUCCESS, label=label)


def danger(*indices: int, label: str | None = None) -> Highlight:
    return Highlight(indices=tuple(indices), color=HighlightColor.DANGER, label=label)


def info(*indices: int, label: str | None = None) -> Highlight:
    return Highlight(indices=tuple(indices), color=HighlightColor.INFO, label=label)


class TraceBuilder:
    """Accumulates entries with sequential ids and independent snapshots."""

    def __init__(
        self,
        problem_id: str,
        required_variables: Iterable[str] = (),
        max_entries: int = constants.MAX_TRACE_ENTRIES,
    ):
        self._problem_id = problem_id
        self._required = tuple(required_variables)
        self._max_entries = max_entries
        self._entries: list[TraceEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def add(
        self,
        line: int,
        description: str,
        variables: Mapping[str, Any],
        highlights: Mapping[str, Iterable[Highlight]] | None = None,
    ) -> TraceEntry:
        """Snapshot *variables* and append a new entry."""
        missing = [name for name in self._required if name not in variables]
        if missing:
            raise TraceContractError(
                f"{self._problem_id}: step {len(self._entries)} is missing "
                f"declared variables {missing}"
            )
        if len(self._entries) >= self._max_entries:
            raise TraceLimitError(
                f"{self._problem_id}: trace exceeds {self._max_entries} entries"
            )

        previous = self._entries[-1].variables if self._entries else {}
        entry = TraceEntry(
            id=len(self._entries),
            line_number=line,
            description=description,
            variables={
                name: _snapshot(value, previous.get(name))
                for name, value in variables.items()
            },
            highlights={
                name: tuple(marks) for name, marks in (highlights or {}).items() if marks
            },
        )
        self._entries.append(entry)
        return entry

    def build(self) -> Trace:
        logger.debug(
            "TraceBuilder: %s produced %d entries", self._problem_id, len(self._entries)
        )
        return Trace(problem_id=self._problem_id, entries=tuple(self._entries))
