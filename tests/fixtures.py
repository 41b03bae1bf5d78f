"""
Test fixtures for graphgen.

This module provides deterministic random sources and small hand-built
graphs for testing the generator and the exporter.
"""

import random

from graphgen.graph import Graph


class AlwaysAccept(random.Random):
    """Random source whose Bernoulli trials succeed whenever the chance is positive."""

    def random(self) -> float:
        return 0.0

    def choice(self, seq):
        return seq[0]


class FixedRandom(random.Random):
    """Random source whose every draw is the same value."""

    def __init__(self, value: float) -> None:
        super().__init__()
        self.value = value

    def random(self) -> float:
        return self.value

    def choice(self, seq):
        return seq[0]


class NeverAccept(random.Random):
    """Random source whose Bernoulli trials never succeed."""

    def random(self) -> float:
        return 1.0

    def choice(self, seq):
        return seq[0]


def build_three_layer_graph() -> Graph:
    """
    Build a small graph by hand.

    Layout:
        0 (depth 1) → 1, 2 (depth 2)
        1 → 3 (depth 3)

    Edges 0, 1, 2 are grey.
    """
    graph = Graph()
    root = graph.add_vertex()
    left = graph.add_vertex()
    graph.add_edge(root, left)
    right = graph.add_vertex()
    graph.add_edge(root, right)
    leaf = graph.add_vertex()
    graph.add_edge(left, leaf)
    return graph
