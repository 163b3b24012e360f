"""Plain-text rendering adapter used by the CLI.

Reads one TraceEntry and the problem's visual config; never mutates either.
An absent variable draws nothing, a present ``None`` draws as ``null``.
"""

from __future__ import annotations

from typing import Any

from .problem_types import AlgorithmDescriptor, VisualizerKind, VisualizerSpec
from .trace_types import Highlight, HighlightColor, TraceEntry, ValueKind, classify_value

MARKERS: dict[HighlightColor, str] = {
    HighlightColor.EMPHASIS: "*",
    HighlightColor.SUCCESS: "+",
    HighlightColor.DANGER: "!",
    HighlightColor.INFO: "^",
}

EMPTY_CELL = "."


def _format_scalar(value: Any) -> str:
    if value is None:
        return "null"
    return str(value)


def _marker_map(highlights: tuple[Highlight, ...]) -> dict[tuple[int, ...], str]:
    markers: dict[tuple[int, ...], str] = {}
    for mark in highlights:
        markers.setdefault(mark.indices, MARKERS[mark.color])
    return markers


def _legend(highlights: tuple[Highlight, ...]) -> str:
    parts = [
        f"{MARKERS[mark.color]}{mark.label}@{','.join(str(i) for i in mark.indices)}"
        for mark in highlights
        if mark.label
    ]
    return "  " + "  ".join(parts) if parts else ""


def _render_cells(cells: list[Any], markers: dict[tuple[int, ...], str], prefix: tuple[int, ...], width: int) -> str:
    rendered = []
    for i, cell in enumerate(cells):
        text = EMPTY_CELL if cell is None else str(cell)
        rendered.append(text.rjust(width) + markers.get(prefix + (i,), " "))
    return "[ " + " ".join(rendered) + "]"


class TextRenderer:
    def __init__(self, show_code: bool = True):
        self.show_code = show_code

    def render(self, entry: TraceEntry, descriptor: AlgorithmDescriptor, total: int = 0) -> str:
        header = f"═══ {descriptor.title} · step {entry.id}"
        if total:
            header += f"/{total - 1}"
        header += f" · line {entry.line_number} ═══"
        lines = [header, entry.description, ""]
        if self.show_code:
            lines.extend(self.render_code(descriptor.default_code, entry.line_number))
            lines.append("")
        for viz in descriptor.visual_config.visualizers:
            block = self.render_visualizer(entry, viz)
            if block:
                lines.extend(block)
        return "\n".join(lines).rstrip() + "\n"

    def render_code(self, code: str, active_line: int) -> list[str]:
        out = []
        for number, text in enumerate(code.split("\n"), start=1):
            arrow = "→" if number == active_line else " "
            out.append(f" {arrow} {number:>3}  {text}")
        return out

    def render_visualizer(self, entry: TraceEntry, viz: VisualizerSpec) -> list[str]:
        if viz.variable_name not in entry.variables:
            return []
        value = entry.variables[viz.variable_name]
        highlights = entry.highlights_for(viz.variable_name)
        kind = classify_value(value)

        if viz.kind == VisualizerKind.ARRAY and kind == ValueKind.SEQUENCE:
            body = self._render_array(value, highlights)
        elif viz.kind == VisualizerKind.GRID and kind == ValueKind.MATRIX:
            body = self._render_grid(value, highlights)
        elif kind == ValueKind.MAPPING:
            body = [self._render_map(value)]
        else:
            body = [f"  {_format_scalar(value)}"]
        return [f"{viz.title}:"] + body + [""]

    def _render_array(self, values: list[Any], highlights: tuple[Highlight, ...]) -> list[str]:
        width = max((len(str(v)) for v in values), default=1)
        body = ["  " + _render_cells(values, _marker_map(highlights), (), width)]
        legend = _legend(highlights)
        return body + [legend] if legend else body

    def _render_grid(self, rows: list[list[Any]], highlights: tuple[Highlight, ...]) -> list[str]:
        markers = _marker_map(highlights)
        width = max(
            (len(EMPTY_CELL if v is None else str(v)) for row in rows for v in row), default=1
        )
        body = [
            "  " + _render_cells(row, markers, (r,), width) for r, row in enumerate(rows)
        ]
        legend = _legend(highlights)
        return body + [legend] if legend else body

    def _render_map(self, mapping: dict) -> str:
        if not mapping:
            return "  Empty"
        return "  {" + ", ".join(f"{k}: {v}" for k, v in mapping.items()) + "}"
