"""Set Matrix Zeroes: O(1) extra space using the first row/column as markers."""

from __future__ import annotations

import copy
from typing import Any, Mapping

from ..listing import CodeListing
from ..problem_types import Layout, VisualConfig, VisualizerKind, VisualizerSpec
from ..trace_builder import TraceBuilder, danger, emphasis, info, success
from ..trace_types import Highlight, Trace
from .. import constants

PROBLEM_ID = "set-matrix-zeroes"

CODE = """\
class Solution:
    def setZeroes(self, matrix: List[List[int]]) -> None:
        ROWS, COLS = len(matrix), len(matrix[0])
        rowZero = False

        for r in range(ROWS):
            for c in range(COLS):
                if matrix[r][c] == 0:
                    matrix[0][c] = 0
                    if r > 0:
                        matrix[r][0] = 0
                    else:
                        rowZero = True

        for r in range(1, ROWS):
            for c in range(1, COLS):
                if matrix[0][c] == 0 or matrix[r][0] == 0:
                    matrix[r][c] = 0

        if matrix[0][0] == 0:
            for r in range(ROWS):
                matrix[r][0] = 0

        if rowZero:
            for c in range(COLS):
                matrix[0][c] = 0"""

LISTING = CodeListing(CODE)

DEFAULT_INPUTS = {
    "matrix": [
        [1, 1, 1],
        [1, 0, 1],
        [1, 1, 1],
    ]
}

VISUAL_CONFIG = VisualConfig(
    layout=Layout.GRID,
    visualizers=[
        VisualizerSpec(variable_name="matrix", kind=VisualizerKind.GRID, label="Matrix State"),
        VisualizerSpec(variable_name="rowZero", kind=VisualizerKind.VALUE, label="rowZero (Flag)"),
    ],
)

LINE_INIT = LISTING.line_of("ROWS, COLS =")
LINE_FLAG_INIT = LISTING.line_of("rowZero = False")
LINE_SCAN = LISTING.line_of("if matrix[r][c] == 0")
LINE_MARK_COL = LISTING.line_of("matrix[0][c] = 0", occurrence=1)
LINE_MARK_ROW = LISTING.line_of("matrix[r][0] = 0", occurrence=1)
LINE_SET_FLAG = LISTING.line_of("rowZero = True")
LINE_CHECK_MARKERS = LISTING.line_of("if matrix[0][c] == 0 or matrix[r][0] == 0")
LINE_ZERO_CELL = LISTING.line_of("matrix[r][c] = 0")
LINE_CHECK_CORNER = LISTING.line_of("if matrix[0][0] == 0")
LINE_ZERO_FIRST_COL = LISTING.line_of("matrix[r][0] = 0", occurrence=2)
LINE_CHECK_FLAG = LISTING.line_of("if rowZero")
LINE_ZERO_FIRST_ROW = LISTING.line_of("matrix[0][c] = 0", occurrence=2)


def _validate(matrix: Any) -> None:
    if not matrix or not matrix[0]:
        raise ValueError("set-matrix-zeroes needs a non-empty matrix")
    width = len(matrix[0])
    if any(len(row) != width for row in matrix):
        raise ValueError("set-matrix-zeroes needs a rectangular matrix")


def generate(inputs: Mapping[str, Any]) -> Trace:
    inputs = copy.deepcopy(dict(inputs))
    matrix: list[list[int]] = inputs["matrix"]
    _validate(matrix)

    rows, cols = len(matrix), len(matrix[0])
    row_zero = False

    builder = TraceBuilder(PROBLEM_ID, VISUAL_CONFIG.variable_names())

    def add(line: int, desc: str, marks: list[Highlight] | None = None):
        builder.add(
            line,
            desc,
            {"matrix": matrix, "rowZero": row_zero, "ROWS": rows, "COLS": cols},
            {"matrix": marks or []},
        )

    add(LINE_INIT, f"Initialize dimensions: ROWS={rows}, COLS={cols}.")
    add(LINE_FLAG_INIT, "Initialize rowZero = False.")

    # Pass 1: record zeroes in the first row/column
    for r in range(rows):
        for c in range(cols):
            add(LINE_SCAN, f"Pass 1: Checking cell [{r},{c}]...", [emphasis(r, c)])
            if matrix[r][c] != 0:
                continue

            add(LINE_SCAN, f"Found a 0 at [{r},{c}]!", [danger(r, c, label="Found 0")])
            matrix[0][c] = 0
            add(
                LINE_MARK_COL,
                f"Mark top column marker: matrix[0][{c}] = 0",
                [danger(r, c, label="Found 0"), info(0, c, label="Mark Col")],
            )
            if r > 0:
                matrix[r][0] = 0
                add(
                    LINE_MARK_ROW,
                    f"Mark left row marker: matrix[{r}][0] = 0",
                    [danger(r, c), info(r, 0, label="Mark Row")],
                )
            else:
                row_zero = True
                add(LINE_SET_FLAG, "Current row is 0. Set rowZero = True", [danger(r, c)])

    # Pass 2: zero inner cells from the markers
    for r in range(1, rows):
        for c in range(1, cols):
            markers = [info(0, c, label="Col Marker"), info(r, 0, label="Row Marker")]
            add(
                LINE_CHECK_MARKERS,
                f"Pass 2: Checking [{r},{c}] using markers...",
                [emphasis(r, c)] + markers,
            )
            if matrix[0][c] == 0 or matrix[r][0] == 0:
                matrix[r][c] = 0
                add(
                    LINE_ZERO_CELL,
                    f"Marker found! Setting matrix[{r}][{c}] = 0",
                    [success(r, c, label="Set 0")] + markers,
                )

    corner = matrix[0][0]
    add(
        LINE_CHECK_CORNER,
        f"Checking matrix[0][0]... It is {corner}.",
        [emphasis(0, 0)],
    )
    if corner == 0:
        for r in range(rows):
            matrix[r][0] = 0
            add(LINE_ZERO_FIRST_COL, f"Setting first column: matrix[{r}][0] = 0", [success(r, 0)])

    add(LINE_CHECK_FLAG, f"Checking rowZero... It is {row_zero}.")
    if row_zero:
        for c in range(cols):
            matrix[0][c] = 0
            add(LINE_ZERO_FIRST_ROW, f"Setting first row: matrix[0][{c}] = 0", [success(0, c)])

    zeroed = [success(r, c) for r in range(rows) for c in range(cols) if matrix[r][c] == 0]
    add(constants.NO_ACTIVE_LINE, f"Done. Matrix with zeroes set: {matrix}", zeroed)
    return builder.build()
