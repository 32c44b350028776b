"""Tests for SearchIndex."""

from vj._fold import CollapseState
from vj._search import MatchType, SearchIndex
from vj.lines import project
from vj.tree import ValueTree


def _lines(value, folded=()):
    return project(ValueTree.build(value), CollapseState(folded)).lines


class TestBuild:
    """Building the match list."""

    def test_single_value_match(self):
        lines = _lines({"a": 1, "b": [2, 3]})
        index = SearchIndex()
        matches = index.build(lines, "3")
        assert len(matches) == 1
        assert matches[0].match_type is MatchType.VALUE
        assert matches[0].virtual_line == 4
        assert matches[0].path == "b[1]"
        assert matches[0].content == "3"

    def test_case_insensitive(self):
        index = SearchIndex()
        index.build(_lines({"Name": "ALICE"}), "alice")
        assert [m.match_type for m in index.matches] == [MatchType.VALUE]
        index.build(_lines({"Name": "ALICE"}), "NAME")
        assert [m.match_type for m in index.matches] == [MatchType.KEY]

    def test_key_and_value_on_one_line(self):
        index = SearchIndex()
        index.build(_lines({"id": "id-1"}), "id")
        assert [(m.virtual_line, m.match_type) for m in index.matches] == [
            (1, MatchType.KEY),
            (1, MatchType.VALUE),
        ]

    def test_containers_match_by_key_only(self):
        index = SearchIndex()
        index.build(_lines({"outer": {"x": "inner"}}, folded=["outer"]), "inner")
        assert len(index) == 0
        index.build(_lines({"outer": {"x": "inner"}}, folded=["outer"]), "out")
        assert [m.path for m in index.matches] == ["outer"]

    def test_array_index_is_not_a_key(self):
        index = SearchIndex()
        index.build(_lines(["zero", "one"]), "0")
        assert len(index) == 0

    def test_null_and_bool_text(self):
        index = SearchIndex()
        index.build(_lines({"a": None, "b": True}), "null")
        assert [m.path for m in index.matches] == ["a"]
        index.build(_lines({"a": None, "b": True}), "true")
        assert [m.path for m in index.matches] == ["b"]

    def test_string_matches_decoded_text(self):
        lines = _lines({"s": 'say "hi"', "t": "a\tb", "p": "C:\\tmp"})
        index = SearchIndex()
        index.build(lines, '"hi"')
        assert [m.path for m in index.matches] == ["s"]
        assert index.matches[0].content == 'say "hi"'
        index.build(lines, "a\tb")
        assert [m.path for m in index.matches] == ["t"]
        index.build(lines, "c:\\t")
        assert [m.path for m in index.matches] == ["p"]

    def test_empty_term(self):
        index = SearchIndex()
        assert index.build(_lines({"a": 1}), "") == []
        assert index.status_text() == "No previous search"


class TestStepping:
    """Activating and stepping through matches."""

    def _index(self):
        index = SearchIndex()
        index.build(_lines({"x": "hit", "y": 0, "z": "hit"}), "hit")
        return index

    def test_activate_at_or_after_cursor(self):
        index = self._index()
        assert index.activate(0).virtual_line == 1
        assert index.activate(1).virtual_line == 1
        assert index.activate(2).virtual_line == 3

    def test_activate_wraps(self):
        index = self._index()
        assert index.activate(4).virtual_line == 1

    def test_next_is_strictly_after(self):
        index = self._index()
        assert index.next(1).virtual_line == 3
        assert index.next(3).virtual_line == 1

    def test_previous_is_strictly_before(self):
        index = self._index()
        assert index.previous(3).virtual_line == 1
        assert index.previous(1).virtual_line == 3

    def test_status_text(self):
        index = self._index()
        index.next(1)
        assert index.status_text() == "/hit [2/2]"

    def test_no_matches(self):
        index = SearchIndex()
        index.build(_lines({"a": 1}), "zzz")
        assert index.activate(0) is None
        assert index.next(0) is None
        assert index.previous(0) is None
        assert index.status_text() == "Pattern not found: zzz"

    def test_clear(self):
        index = self._index()
        index.clear()
        assert index.term == ""
        assert index.current == -1
        assert len(index) == 0
