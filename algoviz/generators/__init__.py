"""Trace generators: one module per algorithm.

Each module exports ``PROBLEM_ID``, ``CODE``, ``LISTING``, ``DEFAULT_INPUTS``,
``VISUAL_CONFIG`` and ``generate(inputs) -> Trace``.
"""

from __future__ import annotations

from . import binary_search, set_matrix_zeroes, two_sum, unique_paths

GENERATOR_MODULES = (two_sum, binary_search, unique_paths, set_matrix_zeroes)

__all__ = [
    "GENERATOR_MODULES",
    "binary_search",
    "set_matrix_zeroes",
    "two_sum",
    "unique_paths",
]
