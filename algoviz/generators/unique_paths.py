"""Unique Paths: bottom-up DP with a single rolling row.

The grid variable mirrors the rolling row onto the full m x n board so the
renderer can show which cells have been resolved; cells not yet computed
are ``None``.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping

from ..listing import CodeListing
from ..problem_types import Layout, VisualConfig, VisualizerKind, VisualizerSpec
from ..trace_builder import TraceBuilder, emphasis, info, success
from ..trace_types import Highlight, Trace

PROBLEM_ID = "unique-paths"

CODE = """\
class Solution:
    def uniquePaths(self, m: int, n: int) -> int:
        row = [1] * n

        for i in range(m - 1):
            newRow = [1] * n
            for j in range(n - 2, -1, -1):
                newRow[j] = newRow[j + 1] + row[j]
            row = newRow
        return row[0]"""

LISTING = CodeListing(CODE)

DEFAULT_INPUTS = {"m": 3, "n": 7}

VISUAL_CONFIG = VisualConfig(
    layout=Layout.GRID,
    visualizers=[
        VisualizerSpec(variable_name="grid", kind=VisualizerKind.GRID, label="DP Grid State"),
        VisualizerSpec(
            variable_name="row", kind=VisualizerKind.ARRAY, label="Current Row (Optimized Memory)"
        ),
    ],
)

LINE_INIT = LISTING.line_of("row = [1] * n")
LINE_OUTER = LISTING.line_of("for i in range")
LINE_NEW_ROW = LISTING.line_of("newRow = [1] * n")
LINE_INNER = LISTING.line_of("for j in range")
LINE_COMPUTE = LISTING.line_of("newRow[j] = newRow[j + 1] + row[j]")
LINE_SWAP = LISTING.line_of("row = newRow")
LINE_RETURN = LISTING.line_of("return row[0]")


def generate(inputs: Mapping[str, Any]) -> Trace:
    inputs = copy.deepcopy(dict(inputs))
    m, n = inputs["m"], inputs["n"]
    if not isinstance(m, int) or not isinstance(n, int) or m < 1 or n < 1:
        raise ValueError(f"unique-paths needs positive integer m and n, got m={m!r}, n={n!r}")

    row = [1] * n
    grid: list[list[int | None]] = [[None] * n for _ in range(m)]
    grid[m - 1] = [1] * n

    builder = TraceBuilder(PROBLEM_ID, VISUAL_CONFIG.variable_names())

    def add(
        line: int,
        desc: str,
        grid_marks: list[Highlight] | None = None,
        row_marks: list[Highlight] | None = None,
    ):
        builder.add(
            line,
            desc,
            {"grid": grid, "row": row, "m": m, "n": n},
            {"grid": grid_marks or [], "row": row_marks or []},
        )

    add(LINE_INIT, "Initialize row = [1, 1, ..., 1] (Bottom row)")

    for i in range(m - 1):
        visual_row = m - 2 - i
        add(LINE_OUTER, f"Start Outer Loop i={i}. Calculating row {visual_row}.")

        new_row = [1] * n
        grid[visual_row] = [1] * n
        add(
            LINE_NEW_ROW,
            "Initialize newRow with 1s",
            grid_marks=[emphasis(visual_row, n - 1, label="new")],
        )

        for j in range(n - 2, -1, -1):
            add(
                LINE_INNER,
                f"Start Inner Loop j={j}.",
                grid_marks=[emphasis(visual_row, j, label="new")],
                row_marks=[emphasis(j, label="j")],
            )

            right = new_row[j + 1]
            down = row[j]
            new_row[j] = right + down
            grid[visual_row][j] = new_row[j]
            add(
                LINE_COMPUTE,
                f"Calculate: {right} (Right) + {down} (Down) = {new_row[j]}",
                grid_marks=[
                    success(visual_row, j, label="new"),
                    info(visual_row, j + 1, label="R"),
                    info(visual_row + 1, j, label="D"),
                ],
                row_marks=[emphasis(j, label="j"), info(j + 1, label="j+1")],
            )

        row = new_row
        add(LINE_SWAP, "Update row = newRow")

    add(
        LINE_RETURN,
        f"Return row[0] = {row[0]}",
        grid_marks=[success(0, 0, label="ans")],
        row_marks=[success(0, label="ans")],
    )
    return builder.build()
