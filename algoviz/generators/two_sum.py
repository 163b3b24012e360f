"""Two Sum: one-pass hash map."""

from __future__ import annotations

import copy
from typing import Any, Mapping

from ..listing import CodeListing
from ..problem_types import Layout, VisualConfig, VisualizerKind, VisualizerSpec
from ..trace_builder import TraceBuilder, danger, emphasis
from ..trace_types import Trace

PROBLEM_ID = "two-sum"

CODE = """\
class Solution:
    def twoSum(self, nums: List[int], target: int) -> List[int]:
        prevMap = {}  # val -> index

        for i, n in enumerate(nums):
            diff = target - n
            if diff in prevMap:
                return [prevMap[diff], i]
            prevMap[n] = i
        return []"""

LISTING = CodeListing(CODE)

DEFAULT_INPUTS = {"nums": [2, 7, 11, 15], "target": 9}

VISUAL_CONFIG = VisualConfig(
    layout=Layout.ARRAY,
    visualizers=[
        VisualizerSpec(variable_name="nums", kind=VisualizerKind.ARRAY, label="Input Array (nums)"),
        VisualizerSpec(variable_name="target", kind=VisualizerKind.VALUE, label="Target"),
        VisualizerSpec(variable_name="diff", kind=VisualizerKind.VALUE, label="Current Diff"),
        VisualizerSpec(variable_name="prevMap", kind=VisualizerKind.MAP, label="Hash Map (prevMap)"),
    ],
)

LINE_INIT = LISTING.line_of("prevMap = {}")
LINE_LOOP = LISTING.line_of("for i, n in")
LINE_DIFF = LISTING.line_of("diff = target - n")
LINE_CHECK = LISTING.line_of("if diff in prevMap")
LINE_FOUND = LISTING.line_of("return [prevMap[diff], i]")
LINE_STORE = LISTING.line_of("prevMap[n] = i")
LINE_NOT_FOUND = LISTING.line_of("return []")


def generate(inputs: Mapping[str, Any]) -> Trace:
    inputs = copy.deepcopy(dict(inputs))
    nums: list = inputs["nums"]
    target = inputs["target"]
    prev_map: dict = {}
    diff = None

    builder = TraceBuilder(PROBLEM_ID, VISUAL_CONFIG.variable_names())

    def add(line: int, desc: str, active: int | None = None, found: int | None = None):
        marks = []
        if active is not None:
            marks.append(emphasis(active, label="i"))
        if found is not None:
            marks.append(danger(found, label="found"))
        builder.add(
            line,
            desc,
            {"nums": nums, "target": target, "prevMap": prev_map, "diff": diff},
            {"nums": marks},
        )

    add(LINE_INIT, "Initialize empty hash map: prevMap = {}")

    for i, n in enumerate(nums):
        diff = None
        add(LINE_LOOP, f"Loop i={i}, n={n}.", active=i)
        diff = target - n
        add(LINE_DIFF, f"Calculate diff = target - n ({target} - {n} = {diff})", active=i)

        if diff in prev_map:
            j = prev_map[diff]
            add(
                LINE_CHECK,
                f"Check if diff ({diff}) is in prevMap... YES! Found at index {j}.",
                active=i,
                found=j,
            )
            add(LINE_FOUND, f"Return indices [{j}, {i}]", active=i, found=j)
            return builder.build()

        add(LINE_CHECK, f"Check if diff ({diff}) is in prevMap... NO.", active=i)
        prev_map[n] = i
        add(LINE_STORE, f"Add n={n} to prevMap with index {i}.", active=i)

    diff = None
    add(LINE_NOT_FOUND, "No pair sums to target. Return []")
    return builder.build()
