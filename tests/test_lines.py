"""Tests for projecting a ValueTree into line records."""

from vj._fold import CollapseState
from vj.lines import LineKind, project, value_text
from vj.render import line_text
from vj.tree import ValueTree


SAMPLE = {"a": 1, "b": [2, 3]}


def _texts(projection):
    return [line_text(record).strip() for record in projection.lines]


class TestProject:
    """Projection of a tree under a collapse state."""

    def test_fully_expanded(self):
        tree = ValueTree.build(SAMPLE)
        projection = project(tree, CollapseState())
        assert _texts(projection) == ["{", '"a": 1,', '"b": [', "2,", "3", "]", "}"]
        assert projection.virtual_to_real == list(range(7))

    def test_collapsed_member(self):
        tree = ValueTree.build(SAMPLE)
        projection = project(tree, CollapseState(["b"]))
        assert _texts(projection) == ["{", '"a": 1,', '"b": [...]', "}"]
        assert projection.virtual_to_real == [0, 1, 2, 6]

    def test_collapsed_root(self):
        tree = ValueTree.build(SAMPLE)
        projection = project(tree, CollapseState([""]))
        assert _texts(projection) == ["{...}"]

    def test_expanded_count_equals_line_count(self):
        value = {"users": [{"name": "a", "tags": ["x", "y"]}, {"name": "b", "tags": []}]}
        tree = ValueTree.build(value)
        assert len(project(tree, CollapseState())) == tree.line_count

    def test_is_pure(self):
        tree = ValueTree.build(SAMPLE)
        state = CollapseState(["b"])
        first = project(tree, state)
        second = project(tree, state)
        assert first.lines == second.lines
        assert first.virtual_to_real == second.virtual_to_real

    def test_collapse_then_expand_restores(self):
        tree = ValueTree.build(SAMPLE)
        state = CollapseState()
        before = project(tree, state)
        state.collapse("b")
        state.expand("b")
        after = project(tree, state)
        assert after.lines == before.lines

    def test_nested_fold_survives_parent_fold(self):
        value = {"outer": {"inner": [1, 2], "x": 0}}
        tree = ValueTree.build(value)
        state = CollapseState(["outer.inner"])
        state.collapse("outer")
        assert _texts(project(tree, state)) == ["{", '"outer": {...}', "}"]
        state.expand("outer")
        assert _texts(project(tree, state)) == [
            "{",
            '"outer": {',
            '"inner": [...],',
            '"x": 0',
            "}",
            "}",
        ]

    def test_virtual_lines_map_back_to_their_paths(self):
        value = {"a": {"b": [1, {"c": None}]}, "d": "e"}
        tree = ValueTree.build(value)
        projection = project(tree, CollapseState(["a.b[1]"]))
        for virtual_line, record in enumerate(projection.lines):
            real = projection.virtual_to_real[virtual_line]
            assert tree.get_node_at_line(real).path == record.node_path
            assert projection.virtual_line_of(real) == virtual_line

    def test_unknown_fold_path_is_ignored(self):
        tree = ValueTree.build(SAMPLE)
        projection = project(tree, CollapseState(["nope"]))
        assert len(projection) == 7


class TestLineRecord:
    """Fields of individual line records."""

    def test_kinds(self):
        tree = ValueTree.build(SAMPLE)
        kinds = [r.kind for r in project(tree, CollapseState()).lines]
        assert kinds == [
            LineKind.OPEN_BRACKET,
            LineKind.CONTENT,
            LineKind.OPEN_WITH_KEY,
            LineKind.CONTENT,
            LineKind.CONTENT,
            LineKind.CLOSE_BRACKET,
            LineKind.CLOSE_BRACKET,
        ]

    def test_array_elements_have_no_key(self):
        tree = ValueTree.build(SAMPLE)
        element = project(tree, CollapseState()).lines[3]
        assert element.key == ""
        assert element.is_array_element
        assert element.node_path == "b[0]"

    def test_close_record(self):
        tree = ValueTree.build(SAMPLE)
        close = project(tree, CollapseState()).lines[5]
        assert close.bracket == "]"
        assert close.key == ""
        assert close.node_path == "b"
        assert close.is_last_child

    def test_collapsed_summary_fields(self):
        tree = ValueTree.build(SAMPLE)
        summary = project(tree, CollapseState(["b"])).lines[2]
        assert summary.is_collapsed
        assert summary.has_children
        assert summary.child_count == 2
        assert summary.is_last_child

    def test_empty_container_has_no_children(self):
        tree = ValueTree.build({"e": []})
        lines = project(tree, CollapseState()).lines
        assert not lines[1].has_children
        assert _texts(project(tree, CollapseState())) == ["{", '"e": [', "]", "}"]

    def test_indent_is_depth(self):
        tree = ValueTree.build(SAMPLE)
        assert [r.indent for r in project(tree, CollapseState()).lines] == [
            0, 1, 1, 2, 2, 1, 0,
        ]

    def test_primitive_root(self):
        tree = ValueTree.build("hi")
        projection = project(tree, CollapseState())
        assert _texts(projection) == ['"hi"']
        assert projection.lines[0].kind is LineKind.CONTENT


class TestValueText:
    """Text of primitive values."""

    def test_values(self):
        tree = ValueTree.build({"s": 'say "hi"', "n": 2.5, "t": True, "z": None})
        assert value_text(tree.get_node("s")) == 'say \\"hi\\"'
        assert value_text(tree.get_node("n")) == "2.5"
        assert value_text(tree.get_node("t")) == "true"
        assert value_text(tree.get_node("z")) == "null"
        assert value_text(tree.root) == ""
