"""Tests for the per-algorithm trace generators."""

import copy

import pytest

from algoviz.generators import (
    GENERATOR_MODULES,
    binary_search,
    set_matrix_zeroes,
    two_sum,
    unique_paths,
)
from algoviz.trace_types import HighlightColor


def _default_trace(module):
    return module.generate(module.DEFAULT_INPUTS)


def _overwrite_first_num(inputs):
    inputs["nums"][0] = 99


def _append_num(inputs):
    inputs["nums"].append(100)


def _overwrite_corner(inputs):
    inputs["matrix"][0][0] = 7


def _grow_rows(inputs):
    inputs["m"] = 9


class TestGeneratorContract:
    @pytest.mark.parametrize("module", GENERATOR_MODULES, ids=lambda m: m.PROBLEM_ID)
    def test_ids_are_sequential_from_zero(self, module):
        trace = _default_trace(module)
        assert [e.id for e in trace] == list(range(len(trace)))

    @pytest.mark.parametrize("module", GENERATOR_MODULES, ids=lambda m: m.PROBLEM_ID)
    def test_every_entry_carries_declared_variables(self, module):
        declared = module.VISUAL_CONFIG.variable_names()
        for entry in _default_trace(module):
            assert all(name in entry.variables for name in declared)

    @pytest.mark.parametrize("module", GENERATOR_MODULES, ids=lambda m: m.PROBLEM_ID)
    def test_deterministic(self, module):
        first = _default_trace(module)
        second = _default_trace(module)
        assert [e.to_dict() for e in first] == [e.to_dict() for e in second]

    @pytest.mark.parametrize("module", GENERATOR_MODULES, ids=lambda m: m.PROBLEM_ID)
    def test_inputs_are_not_mutated(self, module):
        inputs = copy.deepcopy(module.DEFAULT_INPUTS)
        module.generate(inputs)
        assert inputs == module.DEFAULT_INPUTS

    @pytest.mark.parametrize(
        "module, mutate",
        [
            (two_sum, _overwrite_first_num),
            (binary_search, _append_num),
            (set_matrix_zeroes, _overwrite_corner),
            (unique_paths, _grow_rows),
        ],
        ids=lambda value: getattr(value, "PROBLEM_ID", None),
    )
    def test_later_input_edits_do_not_change_entries(self, module, mutate):
        inputs = copy.deepcopy(module.DEFAULT_INPUTS)
        trace = module.generate(inputs)
        before = [entry.to_dict() for entry in trace]

        mutate(inputs)

        assert [entry.to_dict() for entry in trace] == before
        assert trace.final_entry.to_dict() == _default_trace(module).final_entry.to_dict()

    @pytest.mark.parametrize("module", GENERATOR_MODULES, ids=lambda m: m.PROBLEM_ID)
    def test_line_numbers_inside_listing(self, module):
        for entry in _default_trace(module):
            assert 0 <= entry.line_number <= module.LISTING.line_count

    @pytest.mark.parametrize("module", GENERATOR_MODULES, ids=lambda m: m.PROBLEM_ID)
    def test_final_entry_has_description(self, module):
        assert _default_trace(module).final_entry.description


class TestTwoSum:
    def test_default_scenario(self):
        trace = _default_trace(two_sum)
        final = trace.final_entry
        assert final.line_number == two_sum.LINE_FOUND
        assert two_sum.LISTING.text_at(final.line_number).strip() == "return [prevMap[diff], i]"
        assert final.description == "Return indices [0, 1]"
        assert final.variables["prevMap"] == {2: 0}
        assert final.variables["diff"] == 2

    def test_found_highlight(self):
        final = _default_trace(two_sum).final_entry
        colors = {m.color for m in final.highlights_for("nums")}
        assert HighlightColor.DANGER in colors
        assert HighlightColor.EMPHASIS in colors

    def test_returns_early_on_match(self):
        trace = two_sum.generate({"nums": [3, 3, 5, 7], "target": 6})
        assert trace.final_entry.description == "Return indices [0, 1]"
        assert all(e.variables["prevMap"] == {3: 0} or e.variables["prevMap"] == {} for e in trace)

    def test_no_pair_ends_on_empty_return(self):
        trace = two_sum.generate({"nums": [1, 2], "target": 100})
        final = trace.final_entry
        assert final.line_number == two_sum.LINE_NOT_FOUND
        assert final.variables["prevMap"] == {1: 0, 2: 1}

    def test_empty_nums(self):
        trace = two_sum.generate({"nums": [], "target": 1})
        assert len(trace) == 2
        assert trace.final_entry.line_number == two_sum.LINE_NOT_FOUND

    def test_map_snapshots_grow(self):
        trace = two_sum.generate({"nums": [1, 2, 3], "target": 100})
        sizes = [len(e.variables["prevMap"]) for e in trace]
        assert sizes == sorted(sizes)
        assert trace[0].variables["prevMap"] == {}


class TestUniquePaths:
    def test_default_scenario(self):
        final = _default_trace(unique_paths).final_entry
        assert final.variables["row"][0] == 28
        assert final.description == "Return row[0] = 28"
        assert final.line_number == unique_paths.LINE_RETURN
        assert final.variables["grid"][0] == [28, 21, 15, 10, 6, 3, 1]
        assert final.variables["grid"][-1] == [1] * 7

    def test_unresolved_cells_are_none(self):
        first = _default_trace(unique_paths)[0]
        assert first.variables["grid"][0] == [None] * 7
        assert first.variables["row"] == [1] * 7

    def test_single_row(self):
        trace = unique_paths.generate({"m": 1, "n": 4})
        assert trace.final_entry.variables["row"][0] == 1
        assert len(trace) == 2

    @pytest.mark.parametrize("m, n", [(0, 3), (3, -1), (2.5, 3)])
    def test_degenerate_dimensions_raise(self, m, n):
        with pytest.raises(ValueError, match="positive integer"):
            unique_paths.generate({"m": m, "n": n})


class TestSetMatrixZeroes:
    def test_default_scenario(self):
        trace = _default_trace(set_matrix_zeroes)
        final = trace.final_entry
        assert final.variables["matrix"] == [[1, 0, 1], [0, 0, 0], [1, 0, 1]]
        assert final.variables["rowZero"] is False
        assert final.line_number == 0
        assert final.description.startswith("Done.")

    def test_first_entry_shows_original_matrix(self):
        first = _default_trace(set_matrix_zeroes)[0]
        assert first.variables["matrix"] == [[1, 1, 1], [1, 0, 1], [1, 1, 1]]
        assert first.variables["ROWS"] == 3
        assert first.variables["COLS"] == 3

    def test_found_zero_uses_danger(self):
        trace = _default_trace(set_matrix_zeroes)
        found = [e for e in trace if e.description.startswith("Found a 0")]
        assert len(found) == 1
        assert found[0].highlights_for("matrix")[0].color == HighlightColor.DANGER
        assert found[0].highlights_for("matrix")[0].indices == (1, 1)

    def test_zero_in_first_row_sets_flag(self):
        trace = set_matrix_zeroes.generate({"matrix": [[0, 1], [1, 1]]})
        final = trace.final_entry
        assert final.variables["rowZero"] is True
        assert final.variables["matrix"] == [[0, 0], [0, 1]]

    @pytest.mark.parametrize("matrix", [[], [[]], [[1, 2], [3]]])
    def test_degenerate_matrix_raises(self, matrix):
        with pytest.raises(ValueError):
            set_matrix_zeroes.generate({"matrix": matrix})


class TestBinarySearch:
    def test_default_scenario(self):
        final = _default_trace(binary_search).final_entry
        assert final.variables["m"] == 4
        assert final.description == "Return m = 4"
        assert final.line_number == binary_search.LINE_FOUND

    def test_target_absent(self):
        final = binary_search.generate({"nums": [-1, 0, 3, 5, 9, 12], "target": 2}).final_entry
        assert final.line_number == binary_search.LINE_NOT_FOUND
        assert "Return -1" in final.description
        assert final.variables["l"] > final.variables["r"]

    def test_middle_is_none_before_first_comparison(self):
        first = _default_trace(binary_search)[0]
        assert first.variables["m"] is None
        assert (first.variables["l"], first.variables["r"]) == (0, 5)

    def test_unsorted_input_raises(self):
        with pytest.raises(ValueError, match="sorted"):
            binary_search.generate({"nums": [3, 1, 2], "target": 1})
