"""Audit every registered problem's default trace against its listing.

For each problem in the registry:
    1. Build the trace from the default inputs through the trace controller.
    2. Run ``audit_trace``: sequential ids, declared variables in every
       entry, supported value kinds, and line numbers that land on a
       statement of the listing (tree-sitter statement index).

Prints a per-problem summary table and lists any findings.
"""

from __future__ import annotations

import dataclasses
import logging
import sys

from algoviz.registry import REGISTRY
from algoviz.trace_controller import compute_trace
from algoviz.validation import audit_trace

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


@dataclasses.dataclass
class AuditResult:
    problem_id: str
    category_id: str
    entries: int
    statements: int
    findings: list[str]


def audit_problem(problem_id: str) -> AuditResult:
    descriptor = REGISTRY.get_problem(problem_id)
    trace = compute_trace(descriptor, descriptor.default_inputs())
    return AuditResult(
        problem_id=problem_id,
        category_id=REGISTRY.find_category_of(problem_id),
        entries=len(trace),
        statements=len(descriptor.listing.statement_lines()),
        findings=audit_trace(trace, descriptor),
    )


def main() -> int:
    results: list[AuditResult] = []
    for descriptor in REGISTRY.iter_problems():
        logger.info("Auditing %s...", descriptor.id)
        results.append(audit_problem(descriptor.id))

    logger.info("")
    logger.info("=" * 60)
    logger.info("  REGISTRY AUDIT")
    logger.info("=" * 60)
    logger.info("")
    logger.info("  %-20s %-15s %6s %5s %5s", "Problem", "Category", "Steps", "Stmt", "Errs")
    logger.info("  %s", "-" * 55)
    for r in results:
        logger.info(
            "  %-20s %-15s %6d %5d %5d",
            r.problem_id,
            r.category_id,
            r.entries,
            r.statements,
            len(r.findings),
        )

    total = sum(len(r.findings) for r in results)
    logger.info("  %s", "-" * 55)
    logger.info("  %-20s %-15s %6s %5s %5d", "TOTAL", "", "", "", total)

    if total:
        logger.info("")
        logger.info("  Findings:")
        for r in results:
            for finding in r.findings:
                logger.info("    %s", finding)
    return 1 if total else 0


if __name__ == "__main__":
    sys.exit(main())
