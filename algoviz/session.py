"""Session: selection, inputs and playback wired together.

A session owns one ``SessionState`` revision at a time (selected problem,
input map, trace) plus the playback engine that replays the trace. Every
selection or input edit produces a new revision and hands the resulting
trace to the engine, which resets the cursor and cancels autoplay.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from .playback import PlaybackEngine
from .playback_types import PlaybackConfig, PlaybackState
from .problem_types import AlgorithmDescriptor
from .registry import REGISTRY, ProblemRegistry
from .scheduler import Scheduler
from .trace_controller import TraceController
from .trace_types import Trace, TraceEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    category_id: str
    descriptor: AlgorithmDescriptor
    inputs: dict[str, Any] = field(default_factory=dict)
    trace: Trace = field(default_factory=Trace.empty)
    revision: int = 0


class VisualizerSession:
    def __init__(
        self,
        scheduler: Scheduler,
        registry: ProblemRegistry = REGISTRY,
        config: PlaybackConfig = PlaybackConfig(),
    ):
        self._registry = registry
        self._controller = TraceController()
        self._engine = PlaybackEngine(scheduler, config)
        descriptor = registry.default_problem()
        self._state = SessionState(
            category_id=registry.find_category_of(descriptor.id),
            descriptor=descriptor,
        )
        self.select_problem(descriptor.id)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def registry(self) -> ProblemRegistry:
        return self._registry

    @property
    def playback(self) -> PlaybackEngine:
        return self._engine

    @property
    def playback_state(self) -> PlaybackState:
        return self._engine.state

    @property
    def descriptor(self) -> AlgorithmDescriptor:
        return self._state.descriptor

    @property
    def inputs(self) -> dict[str, Any]:
        """A copy of the current input map; edit through ``set_input``."""
        return copy.deepcopy(self._state.inputs)

    @property
    def trace(self) -> Trace:
        return self._state.trace

    @property
    def current_entry(self) -> TraceEntry:
        return self._engine.current_entry

    def select_problem(self, problem_id: str):
        """Switch problems: inputs reset to the new problem's defaults."""
        descriptor = self._registry.get_problem(problem_id)
        logger.info("Session: selecting '%s'", problem_id)
        self._apply(
            category_id=self._registry.find_category_of(problem_id),
            descriptor=descriptor,
            inputs=descriptor.default_inputs(),
        )

    def set_input(self, key: str, value: Any):
        inputs = copy.deepcopy(self._state.inputs)
        inputs[key] = copy.deepcopy(value)
        self._apply(inputs=inputs)

    def set_inputs(self, values: Mapping[str, Any]):
        inputs = copy.deepcopy(self._state.inputs)
        inputs.update(copy.deepcopy(dict(values)))
        self._apply(inputs=inputs)

    def reset_inputs(self):
        self._apply(inputs=self._state.descriptor.default_inputs())

    def _apply(self, **changes: Any):
        state = dataclasses.replace(self._state, **changes)
        trace = self._controller.compute(state.descriptor, state.inputs)
        self._state = dataclasses.replace(
            state, trace=trace, revision=self._state.revision + 1
        )
        # Input edits always rewind, even when the trace is unchanged.
        if not self._engine.load(trace):
            self._engine.reset()
