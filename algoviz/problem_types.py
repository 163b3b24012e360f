"""Problem catalog data types (pure data, no business logic)."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping

from pydantic import BaseModel

from .listing import CodeListing
from .trace_types import Trace


class InputKind(str, Enum):
    """Shape of a single named input."""

    NUMBER = "number"
    NUMBER_LIST = "number_list"
    NUMBER_MATRIX = "number_matrix"


class VisualizerKind(str, Enum):
    GRID = "grid"
    ARRAY = "array"
    VALUE = "value"
    MAP = "map"


class Layout(str, Enum):
    GRID = "grid"
    ARRAY = "array"
    SPLIT = "split"


class VisualizerSpec(BaseModel):
    variable_name: str
    kind: VisualizerKind
    label: str | None = None

    @property
    def title(self) -> str:
        return self.label or self.variable_name


class VisualConfig(BaseModel):
    layout: Layout
    visualizers: list[VisualizerSpec] = []

    def variable_names(self) -> list[str]:
        return [viz.variable_name for viz in self.visualizers]


def infer_input_kind(value: Any) -> InputKind:
    """Derive the InputKind of a default input value."""
    if isinstance(value, bool):
        raise TypeError(f"Boolean inputs are not supported: {value!r}")
    if isinstance(value, (int, float)):
        return InputKind.NUMBER
    if isinstance(value, list):
        if value and all(isinstance(row, list) for row in value):
            return InputKind.NUMBER_MATRIX
        return InputKind.NUMBER_LIST
    raise TypeError(f"Cannot infer input kind for {value!r}")


Generator = Callable[[Mapping[str, Any]], Trace]


@dataclass(frozen=True, eq=False)
class AlgorithmDescriptor:
    """Static metadata, default inputs and generator for one algorithm.

    The default inputs double as the required input schema: every key is
    required and its value kind is the kind the generator expects.
    """

    id: str
    title: str
    listing: CodeListing
    inputs: Mapping[str, Any]
    visual_config: VisualConfig
    generator: Generator
    input_schema: Mapping[str, InputKind] = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "inputs", MappingProxyType(copy.deepcopy(dict(self.inputs))))
        object.__setattr__(
            self,
            "input_schema",
            MappingProxyType({k: infer_input_kind(v) for k, v in self.inputs.items()}),
        )

    @property
    def default_code(self) -> str:
        return self.listing.source

    def default_inputs(self) -> dict[str, Any]:
        """A fresh, caller-owned copy of the default input map."""
        return copy.deepcopy(dict(self.inputs))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "defaultCode": self.default_code,
            "inputs": self.default_inputs(),
            "inputSchema": {k: kind.value for k, kind in self.input_schema.items()},
            "visualConfig": self.visual_config.model_dump(mode="json"),
        }


@dataclass(frozen=True)
class AlgorithmCategory:
    id: str
    title: str
    problems: tuple[AlgorithmDescriptor, ...] = ()
