"""Tests for the double cut rule."""

import pytest
from peirce import Graph, PathError, RuleError, parse_graph


def count_cuts(g: Graph) -> int:
    return sum(1 + count_cuts(sg) for sg in g.subgraphs)


class TestPossibleDoubleCuts:
    """Tests for possible_double_cuts."""

    def test_single_cut(self):
        """One cut is not a double cut."""
        assert parse_graph("([A])").possible_double_cuts() == []

    def test_double_cut(self):
        """A cut whose only content is a cut is reported."""
        assert parse_graph("([[A]])").possible_double_cuts() == [[0]]

    def test_cut_with_extra_content(self):
        """A cut holding a cut and an atom is not a double cut."""
        assert parse_graph("([[A], B])").possible_double_cuts() == []

    def test_cut_with_two_cuts(self):
        """A cut holding two cuts is not a double cut."""
        assert parse_graph("([[A], [B]])").possible_double_cuts() == []

    def test_triple_nesting(self):
        """Overlapping double cuts are all reported, outer first."""
        assert parse_graph("(B, [[[A]]])").possible_double_cuts() == [[0], [0, 0]]

    def test_empty_double_cut(self):
        """Two empty nested cuts form a double cut."""
        assert parse_graph("([[]])").possible_double_cuts() == [[0]]

    def test_nested_site(self):
        """Double cuts inside other cuts get full paths."""
        # ([[[C]], B], A)
        g = parse_graph("(A, [B, [[C]]])")
        assert g.possible_double_cuts() == [[0, 0]]


class TestDoubleCut:
    """Tests for double_cut."""

    def test_unwrap_atom(self):
        """([[A]]) becomes (A)."""
        result = parse_graph("([[A]])").double_cut([0])
        assert str(result) == "(A)"

    def test_unwrap_mixed_content(self):
        """Atoms and cuts of the inner cut move up together."""
        result = parse_graph("(C, [[A, B, [D]]])").double_cut([0])
        assert str(result) == "([D], A, B, C)"

    def test_unwrap_empty(self):
        """An empty double cut disappears."""
        assert str(parse_graph("([[]])").double_cut([0])) == "()"

    def test_unwrap_nested(self):
        """Double cuts below the sheet are removed in place."""
        g = parse_graph("(A, [B, [[C]]])")
        assert str(g.double_cut([0, 0])) == "([B, C], A)"

    def test_triple_nesting_either_site(self):
        """Either double cut of a triple nesting leaves one cut."""
        g = parse_graph("(B, [[[A]]])")
        assert str(g.double_cut([0])) == "([A], B)"
        assert str(g.double_cut([0, 0])) == "([A], B)"

    def test_result_is_canonical(self):
        """Spliced content is put in canonical order."""
        result = parse_graph("(Z, [[A]])").double_cut([0])
        assert str(result) == "(A, Z)"
        assert result.atoms == ["A", "Z"]

    def test_receiver_unchanged(self):
        """The original graph is not modified."""
        g = parse_graph("([[A]])")
        g.double_cut([0])
        assert str(g) == "([[A]])"

    def test_rewrap_restores_graph(self):
        """Wrapping the moved content in two cuts gives the original back."""
        g = parse_graph("(B, [[A, [C]]])")
        result = g.double_cut([0])
        assert str(result) == "([C], A, B)"

        inner = Graph(["A"], [result.subgraphs[0]])
        rewrapped = Graph(["B"], [Graph(subgraphs=[inner])], is_root=True)
        assert rewrapped == g

    @pytest.mark.parametrize("text", [
        "([[A]])",
        "(B, [[[A]]])",
        "(A, [B, [[C]]], [[D, E]])",
        "([[]], [[[]]])",
    ])
    def test_fewer_cuts(self, text):
        """Every offered site removes exactly two cuts."""
        g = parse_graph(text)
        for path in g.possible_double_cuts():
            assert count_cuts(g.double_cut(path)) == count_cuts(g) - 2

    def test_not_a_double_cut(self):
        """A single cut cannot be removed."""
        with pytest.raises(RuleError):
            parse_graph("([A])").double_cut([0])

    def test_atom_is_not_a_double_cut(self):
        """Atoms are never double cuts."""
        with pytest.raises(RuleError):
            parse_graph("(A, [[B]])").double_cut([1])

    def test_out_of_range(self):
        """Paths outside the graph raise PathError."""
        with pytest.raises(PathError):
            parse_graph("([[A]])").double_cut([3])
