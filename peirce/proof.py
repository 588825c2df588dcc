"""
Step-by-step derivations with the inference rules.

A Proof starts from a premise graph and records every rule application,
so a derivation can be inspected, undone, or exported.

Example:
    from peirce import Proof

    proof = Proof("(A, [[B]])", goal="(B)")
    proof.apply("double-cut", [0])     # => (A, B)
    proof.apply("erasure", [0])        # => (B)
    proof.is_complete()                # => True
    print(proof.format("chain"))
"""

import logging
from typing import Dict, List, Optional, Tuple, Union

from .graph import Graph, PathType, RuleError, parse_graph

logger = logging.getLogger(__name__)

# Rule name -> (query method, apply method) on Graph
RULES: Dict[str, Tuple[str, str]] = {
    "double-cut": ("possible_double_cuts", "double_cut"),
    "erasure": ("possible_erasures", "erase"),
    "deiteration": ("possible_deiterations", "deiterate"),
}


def _as_graph(g: Union[str, Graph]) -> Graph:
    if isinstance(g, str):
        return parse_graph(g)
    return g.copy().sort()


class ProofStep:
    """A single rule application in a derivation."""

    def __init__(self, rule: str, path: PathType, before: Graph, after: Graph):
        self.rule = rule
        self.path = list(path)
        self.before = before
        self.after = after

    def __repr__(self) -> str:
        return f"{self.rule} {self.path}: {self.before} → {self.after}"

    def to_dict(self) -> Dict:
        """Convert step to dictionary for serialization."""
        return {
            "rule": self.rule,
            "path": self.path,
            "before": str(self.before),
            "after": str(self.after),
        }


class Proof:
    """
    A derivation from a premise, one rule application at a time.

    Only paths offered by the rule's query can be used, so every recorded
    step is a legal inference.

    Provides multiple formatting options:
        - Default repr: verbose multi-line format
        - format("compact"): single line showing rule chain
        - format("rules"): just the rule names applied
        - format("chain"): graphs joined by the rules between them
        - to_dict(): JSON-serializable dictionary
    """

    def __init__(self, premise: Union[str, Graph], goal: Optional[Union[str, Graph]] = None):
        """
        Start a derivation.

        Args:
            premise: Starting graph, as text or Graph
            goal: Optional graph the derivation should reach
        """
        self.premise = _as_graph(premise)
        self.goal = _as_graph(goal) if goal is not None else None
        self.steps: List[ProofStep] = []

    @property
    def current(self) -> Graph:
        """The graph reached by the last step."""
        return self.steps[-1].after if self.steps else self.premise

    def candidates(self, rule: str) -> List[PathType]:
        """Paths at which rule can be applied to the current graph."""
        if rule not in RULES:
            raise RuleError(f"Unknown rule: {rule}. "
                            f"Valid options: {', '.join(RULES)}")
        query, _ = RULES[rule]
        return getattr(self.current, query)()

    def available(self) -> Dict[str, List[PathType]]:
        """All rules that apply to the current graph, with their paths."""
        result = {}
        for rule in RULES:
            paths = self.candidates(rule)
            if paths:
                result[rule] = paths
        return result

    def apply(self, rule: str, path: PathType) -> Graph:
        """
        Apply rule at path and record the step.

        Raises:
            RuleError: if the rule is unknown or path is not one of its candidates

        Returns:
            The new current graph
        """
        if list(path) not in self.candidates(rule):
            raise RuleError(f"{rule} cannot be applied at {list(path)} in {self.current}")

        _, method = RULES[rule]
        before = self.current
        after = getattr(before, method)(list(path))
        self.steps.append(ProofStep(rule, path, before, after))
        logger.info("step %d: %s at %s gives %s", len(self.steps), rule, list(path), after)
        return after

    def undo(self) -> Optional[ProofStep]:
        """Drop the last step. Returns it, or None if there was nothing to undo."""
        if not self.steps:
            return None
        step = self.steps.pop()
        logger.info("undo: %s at %s", step.rule, step.path)
        return step

    def is_complete(self) -> bool:
        """True if a goal was given and the current graph equals it."""
        return self.goal is not None and self.current == self.goal

    def format(self, style: str = "verbose") -> str:
        """
        Format the derivation in different styles.

        Args:
            style: One of "verbose", "compact", "rules", "chain"

        Returns:
            Formatted string representation of the derivation.
        """
        if style == "compact":
            rules = [s.rule for s in self.steps]
            return f"{self.premise} --[{', '.join(rules)}]--> {self.current}"

        elif style == "rules":
            rules = [s.rule for s in self.steps]
            return " -> ".join(rules) if rules else "(no rules applied)"

        elif style == "chain":
            parts = [str(self.premise)]
            for step in self.steps:
                parts.append(f"  --({step.rule} {step.path})-->")
                parts.append(str(step.after))
            return "\n".join(parts)

        elif style == "verbose":
            return repr(self)

        raise ValueError(f"Unknown style: {style}. "
                         f"Valid options: verbose, compact, rules, chain")

    def __repr__(self) -> str:
        lines = [f"Premise: {self.premise}"]
        for i, step in enumerate(self.steps, 1):
            lines.append(f"  {i}. {step}")
        lines.append(f"Current: {self.current}")
        if self.goal is not None:
            status = "reached" if self.is_complete() else "open"
            lines.append(f"Goal: {self.goal} ({status})")
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        """Iterate over proof steps."""
        return iter(self.steps)

    def __bool__(self) -> bool:
        """True if any rule was applied."""
        return len(self.steps) > 0

    def to_dict(self) -> Dict:
        """Convert derivation to dictionary for JSON serialization."""
        return {
            "premise": str(self.premise),
            "goal": str(self.goal) if self.goal is not None else None,
            "current": str(self.current),
            "steps": [step.to_dict() for step in self.steps],
            "step_count": len(self.steps),
            "complete": self.is_complete(),
        }

    def summary(self) -> str:
        """Get a brief summary of the derivation."""
        if not self.steps:
            return "No rules applied"
        counts: Dict[str, int] = {}
        for step in self.steps:
            counts[step.rule] = counts.get(step.rule, 0) + 1
        used = ", ".join(f"{rule} x{n}" for rule, n in counts.items())
        return f"{len(self.steps)} steps: {used}"
