"""Tests for the problem catalog."""

import pytest

from algoviz.listing import CodeListing
from algoviz.problem_types import (
    AlgorithmCategory,
    AlgorithmDescriptor,
    InputKind,
    Layout,
    VisualConfig,
    VisualizerKind,
    VisualizerSpec,
    infer_input_kind,
)
from algoviz.registry import REGISTRY, ProblemRegistry
from algoviz.trace_types import Trace


def _descriptor(problem_id: str, inputs=None) -> AlgorithmDescriptor:
    return AlgorithmDescriptor(
        id=problem_id,
        title=problem_id.title(),
        listing=CodeListing("pass"),
        inputs=inputs or {"n": 1},
        visual_config=VisualConfig(layout=Layout.ARRAY),
        generator=lambda inputs: Trace.empty(problem_id),
    )


class TestCatalog:
    def test_category_order(self):
        ids = [c.id for c in REGISTRY.categories]
        assert len(ids) == 18
        assert ids[0] == "arrays"
        assert ids[1] == "dp"
        assert ids[-1] == "bit-manipulation"

    def test_categories_without_problems(self):
        assert REGISTRY.get_category("graphs").problems == ()

    def test_problem_lookup(self):
        descriptor = REGISTRY.get_problem("unique-paths")
        assert descriptor.title == "62. Unique Paths"
        assert REGISTRY.find_category_of("unique-paths") == "dp"
        assert REGISTRY.find_category_of("set-matrix-zeroes") == "math"

    def test_unknown_problem_lists_available(self):
        with pytest.raises(KeyError, match="two-sum"):
            REGISTRY.get_problem("three-sum")

    def test_unknown_category(self):
        with pytest.raises(KeyError, match="Unknown category"):
            REGISTRY.get_category("nope")

    def test_iter_problems_in_catalog_order(self):
        assert [p.id for p in REGISTRY.iter_problems()] == [
            "two-sum",
            "unique-paths",
            "binary-search",
            "set-matrix-zeroes",
        ]

    def test_default_problem(self):
        assert REGISTRY.default_problem().id == "two-sum"

    def test_duplicate_ids_rejected(self):
        categories = (
            AlgorithmCategory(id="a", title="A", problems=(_descriptor("x"),)),
            AlgorithmCategory(id="b", title="B", problems=(_descriptor("x"),)),
        )
        with pytest.raises(ValueError, match="Duplicate"):
            ProblemRegistry(categories)

    def test_default_problem_falls_back_to_first_problem(self):
        registry = ProblemRegistry(
            (
                AlgorithmCategory(id="arrays", title="Arrays"),
                AlgorithmCategory(id="other", title="Other", problems=(_descriptor("y"),)),
            )
        )
        assert registry.default_problem().id == "y"


class TestDescriptor:
    def test_input_schema_derived_from_defaults(self):
        assert dict(REGISTRY.get_problem("two-sum").input_schema) == {
            "nums": InputKind.NUMBER_LIST,
            "target": InputKind.NUMBER,
        }
        assert dict(REGISTRY.get_problem("set-matrix-zeroes").input_schema) == {
            "matrix": InputKind.NUMBER_MATRIX,
        }

    def test_default_inputs_are_fresh_copies(self):
        descriptor = REGISTRY.get_problem("two-sum")
        inputs = descriptor.default_inputs()
        inputs["nums"].append(99)
        assert descriptor.default_inputs()["nums"] == [2, 7, 11, 15]

    def test_inputs_are_read_only(self):
        with pytest.raises(TypeError):
            REGISTRY.get_problem("two-sum").inputs["target"] = 1

    def test_to_dict(self):
        d = REGISTRY.get_problem("unique-paths").to_dict()
        assert d["id"] == "unique-paths"
        assert d["inputs"] == {"m": 3, "n": 7}
        assert d["inputSchema"] == {"m": "number", "n": "number"}
        assert d["visualConfig"]["layout"] == "grid"
        assert d["visualConfig"]["visualizers"][0]["variable_name"] == "grid"
        assert "def uniquePaths" in d["defaultCode"]

    def test_visualizer_titles(self):
        config = REGISTRY.get_problem("two-sum").visual_config
        assert config.visualizers[0].title == "Input Array (nums)"
        assert VisualizerSpec(variable_name="row", kind=VisualizerKind.ARRAY).title == "row"
        assert config.variable_names() == ["nums", "target", "diff", "prevMap"]


class TestInferInputKind:
    @pytest.mark.parametrize(
        "value, kind",
        [
            (3, InputKind.NUMBER),
            (1.5, InputKind.NUMBER),
            ([1, 2], InputKind.NUMBER_LIST),
            ([], InputKind.NUMBER_LIST),
            ([[1], [2]], InputKind.NUMBER_MATRIX),
        ],
    )
    def test_kinds(self, value, kind):
        assert infer_input_kind(value) == kind

    @pytest.mark.parametrize("value", [True, "x", {"a": 1}])
    def test_unsupported(self, value):
        with pytest.raises(TypeError):
            infer_input_kind(value)
