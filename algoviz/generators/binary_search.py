"""Binary Search: closed interval [l, r] over a sorted array."""

from __future__ import annotations

import copy
from typing import Any, Mapping

from ..listing import CodeListing
from ..problem_types import Layout, VisualConfig, VisualizerKind, VisualizerSpec
from ..trace_builder import TraceBuilder, danger, emphasis, info
from ..trace_types import Highlight, Trace

PROBLEM_ID = "binary-search"

CODE = """\
class Solution:
    def search(self, nums: List[int], target: int) -> int:
        l, r = 0, len(nums) - 1

        while l <= r:
            m = l + ((r - l) // 2)
            if nums[m] > target:
                r = m - 1
            elif nums[m] < target:
                l = m + 1
            else:
                return m
        return -1"""

LISTING = CodeListing(CODE)

DEFAULT_INPUTS = {"nums": [-1, 0, 3, 5, 9, 12], "target": 9}

VISUAL_CONFIG = VisualConfig(
    layout=Layout.ARRAY,
    visualizers=[
        VisualizerSpec(variable_name="nums", kind=VisualizerKind.ARRAY, label="Sorted Array (nums)"),
        VisualizerSpec(variable_name="target", kind=VisualizerKind.VALUE, label="Target"),
        VisualizerSpec(variable_name="l", kind=VisualizerKind.VALUE, label="Left (l)"),
        VisualizerSpec(variable_name="r", kind=VisualizerKind.VALUE, label="Right (r)"),
        VisualizerSpec(variable_name="m", kind=VisualizerKind.VALUE, label="Middle (m)"),
    ],
)

LINE_INIT = LISTING.line_of("l, r = 0")
LINE_LOOP = LISTING.line_of("while l <= r")
LINE_MID = LISTING.line_of("m = l +")
LINE_GREATER = LISTING.line_of("if nums[m] > target")
LINE_MOVE_RIGHT = LISTING.line_of("r = m - 1")
LINE_LESS = LISTING.line_of("elif nums[m] < target")
LINE_MOVE_LEFT = LISTING.line_of("l = m + 1")
LINE_FOUND = LISTING.line_of("return m")
LINE_NOT_FOUND = LISTING.line_of("return -1")


def generate(inputs: Mapping[str, Any]) -> Trace:
    inputs = copy.deepcopy(dict(inputs))
    nums: list = inputs["nums"]
    target = inputs["target"]
    if any(a > b for a, b in zip(nums, nums[1:])):
        raise ValueError("binary-search needs nums sorted in ascending order")

    l, r = 0, len(nums) - 1
    m = None

    builder = TraceBuilder(PROBLEM_ID, VISUAL_CONFIG.variable_names())

    def window() -> list[Highlight]:
        marks = []
        if 0 <= l < len(nums):
            marks.append(info(l, label="l"))
        if 0 <= r < len(nums):
            marks.append(info(r, label="r"))
        return marks

    def add(line: int, desc: str, extra: list[Highlight] | None = None):
        builder.add(
            line,
            desc,
            {"nums": nums, "target": target, "l": l, "r": r, "m": m},
            {"nums": window() + (extra or [])},
        )

    add(LINE_INIT, f"Initialize l = 0, r = {r}.")

    while True:
        if l > r:
            add(LINE_LOOP, f"l ({l}) > r ({r}): the search window is empty.")
            break
        add(LINE_LOOP, f"l ({l}) <= r ({r}): keep searching.")

        m = l + ((r - l) // 2)
        add(LINE_MID, f"Middle index m = {l} + ({r} - {l}) // 2 = {m}", [emphasis(m, label="m")])

        if nums[m] > target:
            add(LINE_GREATER, f"nums[{m}] = {nums[m]} > {target}: target is left of m.", [emphasis(m, label="m")])
            r = m - 1
            add(LINE_MOVE_RIGHT, f"Move right bound: r = {r}")
            continue
        add(LINE_GREATER, f"nums[{m}] = {nums[m]} is not > {target}.", [emphasis(m, label="m")])

        if nums[m] < target:
            add(LINE_LESS, f"nums[{m}] = {nums[m]} < {target}: target is right of m.", [emphasis(m, label="m")])
            l = m + 1
            add(LINE_MOVE_LEFT, f"Move left bound: l = {l}")
            continue

        add(LINE_LESS, f"nums[{m}] = {nums[m]} equals target {target}.", [danger(m, label="found")])
        add(LINE_FOUND, f"Return m = {m}", [danger(m, label="found")])
        return builder.build()

    add(LINE_NOT_FOUND, f"{target} is not in nums. Return -1")
    return builder.build()
