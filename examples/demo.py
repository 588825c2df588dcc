#!/usr/bin/env python3
"""
PEIRCE Feature Demonstration

This script walks through parsing, the rule queries and a small proof.
"""

from peirce import Graph, Proof, GraphSyntaxError


def section(title: str):
    """Print a section header."""
    print(f"\n{'='*60}")
    print(f" {title}")
    print('='*60)


def demo_parsing():
    """Demonstrate parsing and canonical serialization."""
    section("Parsing")

    examples = [
        "(A, B)",
        "(B, A)",
        "(A, [B, C], [[D]])",
        "( [C] , [ B,A ] )",
        "()",
    ]

    for text in examples:
        g = Graph.parse(text)
        print(f"  {text:24} => {g}  (size {g.size()})")

    for text in ["(A, [B)", "(A,,B)", "[A)"]:
        try:
            Graph.parse(text)
        except GraphSyntaxError as e:
            print(f"  {text:24} => error: {e}")


def demo_queries():
    """Demonstrate rule site queries."""
    section("Rule Sites")

    g = Graph.parse("(A, [A, B], [[C]])")
    print(f"  Graph: {g}")
    print(f"  Double cuts:  {g.possible_double_cuts()}")
    print(f"  Erasures:     {g.possible_erasures()}")
    print(f"  Deiterations: {g.possible_deiterations()}")

    for path in g.possible_deiterations():
        print(f"  {path} addresses {g.element_at(path)!r}")


def demo_rules():
    """Demonstrate each rule."""
    section("Applying Rules")

    g = Graph.parse("(A, [A, B], [[C]])")
    print(f"  double_cut([1]):   {g} => {g.double_cut([1])}")
    print(f"  erase([2]):        {g} => {g.erase([2])}")
    print(f"  deiterate([0, 0]): {g} => {g.deiterate([0, 0])}")


def demo_proof():
    """Demonstrate a derivation of modus ponens."""
    section("Proof: P, P -> Q |- Q")

    proof = Proof("(P, [P, [Q]])", goal="(Q)")
    proof.apply("deiteration", [0, 1])
    proof.apply("double-cut", [0])
    proof.apply("erasure", [0])

    print(proof.format("chain"))
    print()
    print(f"  {proof.summary()}")
    print(f"  Complete: {proof.is_complete()}")


def main():
    """Run all demonstrations."""
    print("PEIRCE - Alpha existential graphs")

    demo_parsing()
    demo_queries()
    demo_rules()
    demo_proof()

    print("\n" + "="*60)
    print(" Demo complete!")
    print("="*60)


if __name__ == "__main__":
    main()
