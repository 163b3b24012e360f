"""Trace contract audit.

Checks a produced trace against its problem: sequential ids, declared
variables present in every entry, values inside the ValueKind union and
line numbers that point at a statement of the displayed listing.
"""

from __future__ import annotations

import logging

from .problem_types import AlgorithmDescriptor
from .trace_types import Trace, classify_value
from . import constants

logger = logging.getLogger(__name__)


def audit_trace(trace: Trace, descriptor: AlgorithmDescriptor) -> list[str]:
    """Return a list of human-readable contract violations (empty if clean)."""
    problems: list[str] = []
    if trace.is_empty:
        return [f"{descriptor.id}: trace is empty"]

    declared = descriptor.visual_config.variable_names()
    statements = descriptor.listing.statement_lines()

    for index, entry in enumerate(trace):
        where = f"{descriptor.id} step {index}"
        if entry.id != index:
            problems.append(f"{where}: id {entry.id} out of sequence")
        missing = [name for name in declared if name not in entry.variables]
        if missing:
            problems.append(f"{where}: missing declared variables {missing}")
        for name, value in entry.variables.items():
            try:
                classify_value(value)
            except TypeError as exc:
                problems.append(f"{where}: variable '{name}': {exc}")
        if entry.line_number != constants.NO_ACTIVE_LINE and entry.line_number not in statements:
            problems.append(
                f"{where}: line {entry.line_number} is not a statement of the listing"
            )

    if not trace.final_entry.description:
        problems.append(f"{descriptor.id}: final entry has no description")

    logger.debug("audit_trace: %s → %d problems", descriptor.id, len(problems))
    return problems
