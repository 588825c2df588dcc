"""
Existential graph structure and inference rules.

PEIRCE - Alpha existential graphs as nested cuts

A graph is a tree of cuts. The outermost node is the sheet of assertion,
written with parentheses; every nested cut is written with square brackets.
Atoms are bare symbols.

    (A, [B, C], [[D]])

is a sheet holding atom A, a cut around B and C, and a double cut around D.

Addressing:
    A node's elements are indexed subgraphs first, then atoms. For a node
    with two cuts and one atom, indices 0 and 1 are the cuts and index 2 is
    the atom. A path is a list of such indices starting at the root; every
    step but the last must address a cut.

Rules:
    double cut   - remove two nested cuts with nothing between them
    erasure      - remove any element of a node at even nesting level
    deiteration  - remove a copy of an element that also occurs outside it
"""

import logging
from typing import Iterable, List, NamedTuple, Optional, Union

logger = logging.getLogger(__name__)

# Type aliases
PathType = List[int]
ElementType = Union["Graph", str]

SUBGRAPH = "subgraph"
ATOM = "atom"

_RESERVED = ",[]()"


class GraphSyntaxError(ValueError):
    """Raised when a textual graph is malformed."""


class PathError(IndexError):
    """Raised when a path does not address an element of the graph."""


class RuleError(ValueError):
    """Raised when a rule is applied at a path that is not a valid site for it."""


class Slot(NamedTuple):
    """A single path step resolved to the collection it indexes."""

    kind: str
    offset: int


# ============================================================
# Text Splitting
# ============================================================

def split_first(s: str, delimiter: str = ",") -> List[str]:
    """
    Split off the first top-level element of a comma separated list.

    Delimiters nested inside square brackets are skipped.

    Returns:
        [first, rest], rest is empty when there was no top-level delimiter

    Raises:
        GraphSyntaxError: if a closing bracket has no opening partner
    """
    depth = 0
    for i, c in enumerate(s):
        if c == delimiter and depth == 0:
            return [s[:i].strip(), s[i + 1:].strip()]
        if c == "[":
            depth += 1
        elif c == "]":
            depth -= 1
            if depth < 0:
                raise GraphSyntaxError(f"Unbalanced ']' at offset {i} in {s!r}")
    if depth != 0:
        raise GraphSyntaxError(f"Unclosed '[' in {s!r}")
    return [s.strip(), ""]


def split_level(s: str, delimiter: str = ",") -> List[str]:
    """
    Split a graph body into its top-level elements.

    Examples:
        "A, [B, C], D" -> ["A", "[B, C]", "D"]
        "" -> []
    """
    s = s.strip()
    if not s:
        return []

    parts = []
    rest = s
    while True:
        first, remainder = split_first(rest, delimiter)
        if not first:
            raise GraphSyntaxError(f"Empty element in {s!r}")
        parts.append(first)
        if not remainder:
            # A trailing delimiter leaves nothing to parse
            if rest.rstrip().endswith(delimiter):
                raise GraphSyntaxError(f"Empty element in {s!r}")
            return parts
        rest = remainder


# ============================================================
# Graph
# ============================================================

class Graph:
    """
    A node of an existential graph: the sheet of assertion or a cut.

    Each node owns its atoms and its nested cuts. Graphs built by the
    parser and returned by rule applications are in canonical order.

    Examples:
        g = Graph.parse("(A, [A, B])")
        g.atoms                    # => ["A"]
        g.subgraphs[0].atoms       # => ["A", "B"]
        str(g)                     # => "([A, B], A)"
        g.possible_erasures()      # => [[0], [1]]
        str(g.erase([0]))          # => "(A)"
    """

    def __init__(self, atoms: Optional[Iterable[str]] = None,
                 subgraphs: Optional[Iterable["Graph"]] = None,
                 is_root: bool = False):
        self.is_root = is_root
        self.atoms: List[str] = list(atoms or [])
        self.subgraphs: List[Graph] = list(subgraphs or [])

    @classmethod
    def parse(cls, text: str) -> "Graph":
        """Parse a textual graph. See parse_graph."""
        return parse_graph(text)

    # ------------------------------------------------------------
    # Sizes
    # ------------------------------------------------------------

    def num_atoms(self) -> int:
        return len(self.atoms)

    def num_subgraphs(self) -> int:
        return len(self.subgraphs)

    def size(self) -> int:
        """Number of direct elements, atoms and cuts together."""
        return self.num_atoms() + self.num_subgraphs()

    def __len__(self) -> int:
        return self.size()

    # ------------------------------------------------------------
    # Canonical form and comparison
    # ------------------------------------------------------------

    def sort(self) -> "Graph":
        """
        Put the graph in canonical order, in place.

        Atoms are sorted lexicographically. Cuts are canonicalized first,
        then sorted by their serialization.

        Returns:
            self for chaining
        """
        self.atoms.sort()
        for sg in self.subgraphs:
            sg.sort()
        self.subgraphs.sort(key=format_graph)
        return self

    def canonical(self) -> str:
        """Serialization of the canonical form, without reordering self."""
        left, right = ("(", ")") if self.is_root else ("[", "]")
        parts = sorted(sg.canonical() for sg in self.subgraphs)
        parts.extend(sorted(self.atoms))
        return left + ", ".join(parts) + right

    def __eq__(self, other):
        if isinstance(other, Graph):
            return self.canonical() == other.canonical()
        return False

    def __ne__(self, other):
        return not self == other

    def __lt__(self, other: "Graph") -> bool:
        return self.canonical() < other.canonical()

    def __hash__(self):
        return hash(self.canonical())

    def __str__(self) -> str:
        return format_graph(self)

    def __repr__(self) -> str:
        return f"Graph({format_graph(self)!r})"

    def copy(self) -> "Graph":
        """Return a deep copy."""
        return Graph(self.atoms, [sg.copy() for sg in self.subgraphs], self.is_root)

    def to_dict(self):
        """Convert to a nested dictionary for JSON serialization."""
        return {
            "is_root": self.is_root,
            "atoms": list(self.atoms),
            "subgraphs": [sg.to_dict() for sg in self.subgraphs],
        }

    # ------------------------------------------------------------
    # Addressing
    # ------------------------------------------------------------

    def _slot(self, index: int) -> Slot:
        """Resolve a combined index into a subgraph or atom slot."""
        if not isinstance(index, int) or index < 0:
            raise PathError(f"Invalid index {index!r}")
        if index < self.num_subgraphs():
            return Slot(SUBGRAPH, index)
        if index < self.size():
            return Slot(ATOM, index - self.num_subgraphs())
        raise PathError(f"Index {index} out of range for {self} of size {self.size()}")

    def __getitem__(self, index: int) -> "Graph":
        """
        Access a direct element by combined index.

        Cuts are returned as they are; an atom is returned wrapped in a
        sheet of its own, so "(A, [B])"[1] is "(A)".
        """
        slot = self._slot(index)
        if slot.kind == SUBGRAPH:
            return self.subgraphs[slot.offset]
        return Graph([self.atoms[slot.offset]], is_root=True)

    def _parent_of(self, path: PathType) -> "Graph":
        """Walk every step of path but the last and return the node reached."""
        if not path:
            raise PathError("Empty path")
        node = self
        for depth, index in enumerate(path[:-1]):
            slot = node._slot(index)
            if slot.kind != SUBGRAPH:
                raise PathError(f"Path {list(path)} reaches atom at step {depth}, "
                                f"cannot descend further")
            node = node.subgraphs[slot.offset]
        return node

    def element_at(self, path: PathType) -> ElementType:
        """
        Return the element addressed by path.

        Returns:
            The Graph for a cut, the symbol for an atom.
        """
        parent = self._parent_of(path)
        slot = parent._slot(path[-1])
        if slot.kind == SUBGRAPH:
            return parent.subgraphs[slot.offset]
        return parent.atoms[slot.offset]

    def _rewrite(self, path: PathType, edit) -> "Graph":
        """
        Return a copy of the graph with edit applied at the end of path.

        Nodes along the path are rebuilt on the way back up; edit is called
        with the copied parent node and the resolved slot of the last step.
        """
        if not path:
            raise PathError("Empty path")
        slot = self._slot(path[0])
        if len(path) == 1:
            result = self.copy()
            edit(result, slot)
            return result

        if slot.kind != SUBGRAPH:
            raise PathError(f"Path step {path[0]} addresses an atom, cannot descend further")
        rebuilt = self.subgraphs[slot.offset]._rewrite(path[1:], edit)
        subgraphs = [rebuilt if i == slot.offset else sg.copy()
                     for i, sg in enumerate(self.subgraphs)]
        return Graph(self.atoms, subgraphs, self.is_root)

    # ------------------------------------------------------------
    # Structural queries
    # ------------------------------------------------------------

    def contains(self, other: ElementType) -> bool:
        """
        Check whether an atom (str) or a cut (Graph) occurs at any depth.

        Cuts are compared by canonical form.
        """
        if isinstance(other, str):
            if other in self.atoms:
                return True
        elif other in self.subgraphs:
            return True
        return any(sg.contains(other) for sg in self.subgraphs)

    def __contains__(self, other: ElementType) -> bool:
        return self.contains(other)

    def paths_to(self, other: ElementType) -> List[PathType]:
        """
        Find every path to an atom (str) or a cut (Graph) equal to other.

        The sole element of this node is not reported when the node has
        size 1; occurrences further down are always reported.

        Examples:
            Graph.parse("(A, [A, B])").paths_to("A")  # => [[1], [0, 0]]
            Graph.parse("([A])").paths_to("A")        # => [[0, 0]]
        """
        return self._paths_to(other, top=True)

    def _paths_to(self, other: ElementType, top: bool) -> List[PathType]:
        paths = []
        counts = not top or self.size() > 1

        if isinstance(other, str):
            if counts:
                offset = self.num_subgraphs()
                paths.extend([offset + i] for i, atom in enumerate(self.atoms)
                             if atom == other)
            for i, sg in enumerate(self.subgraphs):
                if sg.contains(other):
                    paths.extend([i] + p for p in sg._paths_to(other, top=False))
            return paths

        for i, sg in enumerate(self.subgraphs):
            if counts and sg == other:
                paths.append([i])
            else:
                paths.extend([i] + p for p in sg._paths_to(other, top=False))
        return paths

    # ------------------------------------------------------------
    # Double cut
    # ------------------------------------------------------------

    def possible_double_cuts(self) -> List[PathType]:
        """
        Find every cut whose only content is another cut.

        The path addresses the outer of the two cuts.
        """
        found = []
        for i, sg in enumerate(self.subgraphs):
            if _is_double_cut(sg):
                found.append([i])
            found.extend([i] + p for p in sg.possible_double_cuts())
        return found

    def double_cut(self, path: PathType) -> "Graph":
        """
        Remove the double cut at path.

        The content of the inner cut moves into the node that held the
        outer cut.

        Raises:
            PathError: if path does not address an element
            RuleError: if the element at path is not a double cut

        Example:
            Graph.parse("(B, [[A, [C]]])").double_cut([0])  # => ([C], A, B)
        """
        target = self.element_at(path)
        if not isinstance(target, Graph) or not _is_double_cut(target):
            raise RuleError(f"No double cut at {list(path)} in {self}")

        def unwrap(parent: Graph, slot: Slot):
            outer = parent.subgraphs.pop(slot.offset)
            inner = outer.subgraphs[0]
            parent.subgraphs.extend(inner.subgraphs)
            parent.atoms.extend(inner.atoms)

        result = self._rewrite(path, unwrap).sort()
        logger.debug("double cut at %s: %s -> %s", path, self, result)
        return result

    # ------------------------------------------------------------
    # Erasure
    # ------------------------------------------------------------

    def possible_erasures(self, level: int = 0) -> List[PathType]:
        """
        Find every element that may be erased.

        Elements of a node at an even level can be erased, except the only
        element of a cut. The sheet of assertion may be emptied.

        Args:
            level: Nesting level of this node (0 for the sheet of assertion)

        Returns:
            Paths of erasable elements, deeper sites first.
        """
        found = []
        for i, sg in enumerate(self.subgraphs):
            found.extend([i] + p for p in sg.possible_erasures(level + 1))

        if level % 2 == 0 and (self.is_root or self.size() != 1):
            found.extend([i] for i in range(self.size()))
        return found

    def erase(self, path: PathType, check: bool = True) -> "Graph":
        """
        Erase the element at path.

        Args:
            path: Path to the atom or cut to remove
            check: If True, path must be one of possible_erasures()

        Raises:
            PathError: if path does not address an element
            RuleError: if check is set and erasure is not allowed at path
        """
        self.element_at(path)
        if check and list(path) not in self.possible_erasures():
            raise RuleError(f"Erasure not allowed at {list(path)} in {self}")
        result = self._rewrite(path, _remove).sort()
        logger.debug("erasure at %s: %s -> %s", path, self, result)
        return result

    # ------------------------------------------------------------
    # Deiteration
    # ------------------------------------------------------------

    def possible_deiterations(self) -> List[PathType]:
        """
        Find every element that is a copy of another element around it.

        For each direct element, every occurrence of it in this graph is a
        candidate except the first direct one, which counts as the
        original. Nested cuts are searched the same way.

        Example:
            Graph.parse("(A, [A, B])").possible_deiterations()  # => [[0, 0]]
        """
        found = []
        for i, sg in enumerate(self.subgraphs):
            found.extend(_copies(self.paths_to(sg)))
            found.extend([i] + p for p in sg.possible_deiterations())

        for atom in self.atoms:
            found.extend(_copies(self.paths_to(atom)))

        unique = []
        for p in found:
            if p not in unique:
                unique.append(p)
        return unique

    def deiterate(self, path: PathType, check: bool = True) -> "Graph":
        """
        Remove the copy at path.

        Args:
            path: Path to the atom or cut to remove
            check: If True, path must be one of possible_deiterations()

        Raises:
            PathError: if path does not address an element
            RuleError: if check is set and path has no original to deiterate against
        """
        self.element_at(path)
        if check and list(path) not in self.possible_deiterations():
            raise RuleError(f"Deiteration not allowed at {list(path)} in {self}")
        result = self._rewrite(path, _remove).sort()
        logger.debug("deiteration at %s: %s -> %s", path, self, result)
        return result


def _is_double_cut(g: Graph) -> bool:
    return g.num_subgraphs() == 1 and g.size() == 1


def _remove(parent: Graph, slot: Slot):
    if slot.kind == SUBGRAPH:
        del parent.subgraphs[slot.offset]
    else:
        del parent.atoms[slot.offset]


def _copies(paths: List[PathType]) -> List[PathType]:
    """Drop the original from a list of occurrences; a lone occurrence has no copies."""
    if len(paths) < 2:
        return []
    for i, p in enumerate(paths):
        if len(p) == 1:
            return paths[:i] + paths[i + 1:]
    return paths


# ============================================================
# Parsing and Formatting
# ============================================================

def parse_graph(text: str) -> Graph:
    """
    Parse a textual graph into a canonical Graph.

    Examples:
        "(A, B)" -> sheet with atoms A and B
        "([B, A], [[C]])" -> sheet with a cut around A and B and a double cut around C
        "()" -> empty sheet

    Raises:
        GraphSyntaxError: if brackets do not match or an element is malformed
    """
    return _parse(text).sort()


def _parse(text: str) -> Graph:
    text = text.strip()
    if len(text) < 2:
        raise GraphSyntaxError(f"Not a graph: {text!r}")

    left, right = text[0], text[-1]
    if (left, right) == ("(", ")"):
        is_root = True
    elif (left, right) == ("[", "]"):
        is_root = False
    else:
        raise GraphSyntaxError(f"Mismatched outer brackets in {text!r}")

    graph = Graph(is_root=is_root)
    for element in split_level(text[1:-1]):
        if element.startswith("["):
            graph.subgraphs.append(_parse(element))
        elif any(c in _RESERVED for c in element):
            raise GraphSyntaxError(f"Invalid atom {element!r} in {text!r}")
        else:
            graph.atoms.append(element)
    return graph


def format_graph(graph: Graph) -> str:
    """
    Serialize a graph: cuts first, then atoms, separated by ", ".

    The graph is written in its current order; parsed graphs and rule
    results are already canonical.

    Examples:
        sheet with atom A and cut [B] -> "([B], A)"
        empty cut -> "[]"
    """
    left, right = ("(", ")") if graph.is_root else ("[", "]")
    parts = [format_graph(sg) for sg in graph.subgraphs]
    parts.extend(graph.atoms)
    return left + ", ".join(parts) + right
