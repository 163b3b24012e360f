"""Composable API functions over the registry and trace controller.

Each function corresponds to a CLI workflow (--list, --json, --step) but is
callable programmatically without argparse.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from .registry import REGISTRY, ProblemRegistry
from .trace_controller import compute_trace
from .trace_types import Trace

logger = logging.getLogger(__name__)


def list_problems(registry: ProblemRegistry = REGISTRY) -> list[dict[str, Any]]:
    """Flattened listing of categories and their problems, in catalog order.

    Returns:
        One dict per category with ``id``, ``title`` and a ``problems`` list
        of ``{"id", "title"}`` dicts (empty for categories without problems).
    """
    return [
        {
            "id": category.id,
            "title": category.title,
            "problems": [{"id": p.id, "title": p.title} for p in category.problems],
        }
        for category in registry.categories
    ]


def describe_problem(problem_id: str, registry: ProblemRegistry = REGISTRY) -> dict[str, Any]:
    """Return the JSON-friendly descriptor of *problem_id*."""
    return registry.get_problem(problem_id).to_dict()


def generate_trace(
    problem_id: str,
    inputs: Mapping[str, Any] | None = None,
    registry: ProblemRegistry = REGISTRY,
) -> Trace:
    """Build the trace for a problem.

    Args:
        problem_id: Registry id, e.g. ``"two-sum"``.
        inputs: Input map; defaults to the problem's default inputs. Keys
            present here override the defaults.

    Returns:
        The trace, empty if the inputs do not fit or generation failed.
    """
    descriptor = registry.get_problem(problem_id)
    merged = descriptor.default_inputs()
    if inputs:
        merged.update(inputs)
    logger.info("Generating trace for '%s'", problem_id)
    return compute_trace(descriptor, merged)


def dump_trace(
    problem_id: str,
    inputs: Mapping[str, Any] | None = None,
    registry: ProblemRegistry = REGISTRY,
) -> str:
    """Generate a trace and return it as indented JSON."""
    trace = generate_trace(problem_id, inputs, registry)
    return json.dumps(trace.to_dict(), indent=2, default=str)
