"""Problem Registry: the static catalog of categories and descriptors.

Built once at import time and never mutated afterwards.
"""

from __future__ import annotations

import logging
from types import ModuleType
from typing import Iterator

from .generators import binary_search, set_matrix_zeroes, two_sum, unique_paths
from .problem_types import AlgorithmCategory, AlgorithmDescriptor
from . import constants

logger = logging.getLogger(__name__)


def _descriptor(module: ModuleType, title: str) -> AlgorithmDescriptor:
    return AlgorithmDescriptor(
        id=module.PROBLEM_ID,
        title=title,
        listing=module.LISTING,
        inputs=module.DEFAULT_INPUTS,
        visual_config=module.VISUAL_CONFIG,
        generator=module.generate,
    )


CATEGORIES: tuple[AlgorithmCategory, ...] = (
    AlgorithmCategory(
        id="arrays",
        title="Arrays & Hashing",
        problems=(_descriptor(two_sum, "1. Two Sum"),),
    ),
    AlgorithmCategory(
        id="dp",
        title="1-D Dynamic Programming",
        problems=(_descriptor(unique_paths, "62. Unique Paths"),),
    ),
    AlgorithmCategory(id="two-pointers", title="Two Pointers"),
    AlgorithmCategory(id="sliding-window", title="Sliding Window"),
    AlgorithmCategory(id="stack", title="Stack"),
    AlgorithmCategory(
        id="binary-search",
        title="Binary Search",
        problems=(_descriptor(binary_search, "704. Binary Search"),),
    ),
    AlgorithmCategory(id="linked-list", title="Linked List"),
    AlgorithmCategory(id="trees", title="Trees"),
    AlgorithmCategory(id="heap", title="Heap / Priority Queue"),
    AlgorithmCategory(id="backtracking", title="Backtracking"),
    AlgorithmCategory(id="tries", title="Tries"),
    AlgorithmCategory(id="graphs", title="Graphs"),
    AlgorithmCategory(id="advanced-graphs", title="Advanced Graphs"),
    AlgorithmCategory(id="2d-dp", title="2-D Dynamic Programming"),
    AlgorithmCategory(id="greedy", title="Greedy"),
    AlgorithmCategory(id="intervals", title="Intervals"),
    AlgorithmCategory(
        id="math",
        title="Math & Geometry",
        problems=(_descriptor(set_matrix_zeroes, "73. Set Matrix Zeroes"),),
    ),
    AlgorithmCategory(id="bit-manipulation", title="Bit Manipulation"),
)


class ProblemRegistry:
    """Read-only lookups over an ordered tuple of categories."""

    def __init__(self, categories: tuple[AlgorithmCategory, ...]):
        self._categories = categories
        self._by_id: dict[str, AlgorithmDescriptor] = {}
        self._category_of: dict[str, str] = {}
        for category in categories:
            for problem in category.problems:
                if problem.id in self._by_id:
                    raise ValueError(f"Duplicate problem id '{problem.id}'")
                self._by_id[problem.id] = problem
                self._category_of[problem.id] = category.id
        logger.debug(
            "ProblemRegistry: %d categories, %d problems",
            len(categories),
            len(self._by_id),
        )

    @property
    def categories(self) -> tuple[AlgorithmCategory, ...]:
        return self._categories

    def get_category(self, category_id: str) -> AlgorithmCategory:
        for category in self._categories:
            if category.id == category_id:
                return category
        raise KeyError(
            f"Unknown category '{category_id}'. "
            f"Available: {[c.id for c in self._categories]}"
        )

    def get_problem(self, problem_id: str) -> AlgorithmDescriptor:
        try:
            return self._by_id[problem_id]
        except KeyError:
            raise KeyError(
                f"Unknown problem '{problem_id}'. Available: {sorted(self._by_id)}"
            ) from None

    def find_category_of(self, problem_id: str) -> str:
        self.get_problem(problem_id)
        return self._category_of[problem_id]

    def iter_problems(self) -> Iterator[AlgorithmDescriptor]:
        for category in self._categories:
            yield from category.problems

    def default_problem(self) -> AlgorithmDescriptor:
        category = self.get_category(constants.DEFAULT_CATEGORY_ID)
        if category.problems:
            return category.problems[0]
        return next(self.iter_problems())


REGISTRY = ProblemRegistry(CATEGORIES)
