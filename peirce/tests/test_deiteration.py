"""Tests for the deiteration rule."""

import pytest
from peirce import PathError, RuleError, parse_graph


class TestPossibleDeiterations:
    """Tests for possible_deiterations."""

    def test_copy_inside_cut(self):
        """The copy inside the cut is offered, the original on the sheet is not."""
        g = parse_graph("(A, [A])")
        paths = g.possible_deiterations()
        assert [0, 0] in paths
        assert [1] not in paths
        assert paths == [[0, 0]]

    def test_lone_atom(self):
        """An element with no copies cannot be deiterated."""
        assert parse_graph("(A)").possible_deiterations() == []
        assert parse_graph("(A, B)").possible_deiterations() == []

    def test_sibling_copies(self):
        """Of two equal siblings the first is the original."""
        assert parse_graph("([A], [A])").possible_deiterations() == [[1]]

    def test_cut_copy_nested(self):
        """A cut copied into a neighbouring cut is offered."""
        # ([A], [[A], B])
        g = parse_graph("([A], [B, [A]])")
        assert g.possible_deiterations() == [[1, 0]]

    def test_deep_atom_copy(self):
        """Copies two cuts down are offered."""
        # ([[A], B], A)
        g = parse_graph("(A, [B, [A]])")
        assert g.possible_deiterations() == [[0, 0, 0]]

    def test_sibling_contexts(self):
        """Copies in separate cuts do not deiterate each other."""
        assert parse_graph("([X, A], [Y, A])").possible_deiterations() == []

    def test_no_duplicate_paths(self):
        """Each path is reported once."""
        g = parse_graph("(A, A, [A, [A]], [A])")
        paths = g.possible_deiterations()
        assert len(paths) == len({tuple(p) for p in paths})

    @pytest.mark.parametrize("text", [
        "(A, [A])",
        "(A, A, [A, [A]], [A])",
        "([A], [B, [A]])",
        "(P, [P, [Q]])",
        "([B], [[B], C], [C, [[B]]])",
    ])
    def test_every_site_has_a_counterpart(self, text):
        """Every offered element also occurs somewhere else in the graph."""
        g = parse_graph(text)
        paths = g.possible_deiterations()
        assert paths
        for p in paths:
            element = g.element_at(p)
            others = [q for q in g.paths_to(element) if q != p]
            assert any(g.element_at(q) == element for q in others)


class TestDeiterate:
    """Tests for deiterate."""

    def test_remove_copy(self):
        """Deiterating the inner copy leaves an empty cut."""
        result = parse_graph("(A, [A])").deiterate([0, 0])
        assert str(result) == "([], A)"

    def test_remove_cut_copy(self):
        """Cut copies are removed like atoms."""
        result = parse_graph("([A], [B, [A]])").deiterate([1, 0])
        assert str(result) == "([A], [B])"

    def test_modus_ponens_step(self):
        """P and (P implies Q) lose the inner P."""
        result = parse_graph("(P, [P, [Q]])").deiterate([0, 1])
        assert str(result) == "([[Q]], P)"

    def test_original_rejected(self):
        """The original cannot be deiterated."""
        with pytest.raises(RuleError):
            parse_graph("(A, [A])").deiterate([1])

    def test_unchecked(self):
        """check=False removes any element."""
        assert str(parse_graph("(A, B)").deiterate([0], check=False)) == "(B)"

    def test_invalid_path(self):
        """Paths outside the graph raise PathError."""
        with pytest.raises(PathError):
            parse_graph("(A, [A])").deiterate([0, 4])

    def test_receiver_unchanged(self):
        """The original graph is not modified."""
        g = parse_graph("(A, [A])")
        g.deiterate([0, 0])
        assert str(g) == "([A], A)"
