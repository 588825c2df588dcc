"""
PEIRCE - Alpha existential graphs as nested cuts

Parsing, canonical serialization and the structural inference rules of
Peirce's existential graphs.

Quick Start:
    from peirce import Graph

    g = Graph.parse("(A, [A, B], [[C]])")
    g.possible_double_cuts()     # => [[1]]
    g.double_cut([1])            # => ([A, B], A, C)

Notation:
    ( ... )     - sheet of assertion, the outermost node
    [ ... ]     - cut, negation of its contents
    A, foo      - atoms, any text without , [ ] ( )

Paths:
    A path is a list of indices from the sheet down. At every node the
    cuts come first, then the atoms: in ([B], A) index 0 is [B] and
    index 1 is A.

Rules:
    possible_double_cuts()   / double_cut(path)
    possible_erasures()      / erase(path)
    possible_deiterations()  / deiterate(path)
"""

__version__ = "0.1.0"

# Graph structure and rules
from .graph import (
    Graph,
    Slot,
    PathType,
    ElementType,
    parse_graph,
    format_graph,
    split_first,
    split_level,
    # Errors
    GraphSyntaxError,
    PathError,
    RuleError,
)

# Derivations
from .proof import (
    Proof,
    ProofStep,
    RULES,
)

# Public API
__all__ = [
    # Version
    "__version__",
    # Core
    "Graph",
    "Slot",
    "PathType",
    "ElementType",
    "parse_graph",
    "format_graph",
    "split_first",
    "split_level",
    # Errors
    "GraphSyntaxError",
    "PathError",
    "RuleError",
    # Derivations
    "Proof",
    "ProofStep",
    "RULES",
]
