"""Trace data types for step-by-step algorithm replay."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

from . import constants


class HighlightColor(str, Enum):
    """Semantic highlight roles. Renderers map these onto their own palette."""

    EMPHASIS = "current"
    SUCCESS = "resolved"
    DANGER = "violation"
    INFO = "reference"


class ValueKind(Enum):
    """Closed set of shapes a trace variable can take."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MATRIX = "matrix"
    MAPPING = "mapping"


def _is_scalar(value: Any) -> bool:
    return value is None or isinstance(value, (bool, int, float))


def classify_value(value: Any) -> ValueKind:
    """Return the ValueKind of a variable value.

    Raises ``TypeError`` for values outside the union so renderers can
    dispatch exhaustively instead of probing at draw time.
    """
    if _is_scalar(value):
        return ValueKind.SCALAR
    if isinstance(value, dict):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        if value and all(isinstance(item, (list, tuple)) for item in value):
            if all(_is_scalar(cell) for row in value for cell in row):
                return ValueKind.MATRIX
        elif all(_is_scalar(item) for item in value):
            return ValueKind.SEQUENCE
    raise TypeError(f"Unsupported trace value: {value!r}")


@dataclass(frozen=True)
class Highlight:
    """A semantic annotation on one cell of a 1-D or 2-D variable."""

    indices: tuple[int, ...]
    color: HighlightColor
    label: str | None = None

    def __post_init__(self):
        if len(self.indices) not in (1, 2):
            raise ValueError(
                f"Highlight needs 1 or 2 indices, got {len(self.indices)}: {self.indices}"
            )

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"indices": list(self.indices), "color": self.color.value}
        if self.label is not None:
            d["label"] = self.label
        return d


@dataclass(frozen=True)
class TraceEntry:
    """A single step in an algorithm trace.

    Captures the listing line being executed, a narration of the step,
    a deep-copied snapshot of every visualised variable and the
    highlights attached to this step.
    """

    id: int
    line_number: int
    description: str
    variables: dict[str, Any] = field(default_factory=dict)
    highlights: dict[str, tuple[Highlight, ...]] = field(default_factory=dict)

    def highlights_for(self, name: str) -> tuple[Highlight, ...]:
        return self.highlights.get(name, ())

    def to_dict(self) -> dict:
        return {
            constants.WIRE_ID: self.id,
            constants.WIRE_LINE_NUMBER: self.line_number,
            constants.WIRE_DESCRIPTION: self.description,
            constants.WIRE_VARIABLES: copy.deepcopy(self.variables),
            constants.WIRE_HIGHLIGHTS: {
                name: [h.to_dict() for h in marks]
                for name, marks in self.highlights.items()
            },
        }


READY_ENTRY = TraceEntry(
    id=0,
    line_number=constants.NO_ACTIVE_LINE,
    description=constants.READY_DESCRIPTION,
)


@dataclass(frozen=True)
class Trace:
    """Complete trace of one (problem, inputs) pairing.

    An empty trace means the inputs did not fit the problem or the
    generator failed; consumers show the placeholder entry instead.
    """

    problem_id: str = ""
    entries: tuple[TraceEntry, ...] = ()

    @classmethod
    def empty(cls, problem_id: str = "") -> Trace:
        return cls(problem_id=problem_id)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> TraceEntry:
        return self.entries[index]

    def __iter__(self) -> Iterator[TraceEntry]:
        return iter(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def final_entry(self) -> TraceEntry:
        if not self.entries:
            raise IndexError(f"Trace for '{self.problem_id}' is empty")
        return self.entries[-1]

    def to_dict(self) -> dict:
        return {
            "problem_id": self.problem_id,
            "steps": [entry.to_dict() for entry in self.entries],
        }
