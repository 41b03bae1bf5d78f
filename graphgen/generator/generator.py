"""
Layered Graph Generator for graphgen

This module grows a random layered graph from a single root vertex. The
structure is produced by four passes that always run in the same order,
each adding one color of edge.

Passes:
    GREY: Structural growth. Every vertex of a layer gets up to
          new_vertices_count children one layer deeper, with a chance
          that shrinks linearly from 1 at the root layer to 0 at the
          requested depth.

    GREEN: Self-loops, with a fixed chance per vertex.

    YELLOW: Links to an unconnected vertex one layer deeper. The chance
            grows with the depth of the source vertex.

    RED: Links to any vertex two layers deeper, with a fixed chance.

Design Decisions:
    - One random.Random instance per generator, injectable or seeded
    - The graph is only mutated through its own operations
    - Every pass degrades to "no edge" when no target is eligible
"""

import logging
import random
import time
from typing import Optional

from graphgen.graph import Graph
from graphgen.models import (
    BASE_DEPTH,
    PROBABILITY_GREEN,
    PROBABILITY_RED,
    RED_DEPTH_DIFFERENCE,
    YELLOW_DEPTH_DIFFERENCE,
    Depth,
    GenerationParams,
    GenerationReport,
    VertexId,
)

logger = logging.getLogger(__name__)


def layer_probability(current_depth: Depth, max_depth: Depth) -> float:
    """
    Linear falloff from 1.0 at the base layer to 0.0 at max_depth.

    Args:
        current_depth: Layer being considered
        max_depth: Deepest layer of the range

    Returns:
        1 - (current_depth - BASE_DEPTH) / (max_depth - BASE_DEPTH),
        or 1.0 when the range holds a single layer
    """
    if max_depth == BASE_DEPTH:
        return 1.0
    return 1.0 - (current_depth - BASE_DEPTH) / (max_depth - BASE_DEPTH)


class GraphGenerator:
    """
    Builds a random layered graph.

    Usage:
        generator = GraphGenerator(GenerationParams(depth=4, new_vertices_count=3))
        graph = generator.generate()

        # Reproducible runs
        generator = GraphGenerator(params, seed=42)
    """

    def __init__(
        self,
        params: GenerationParams,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the generator.

        Args:
            params: Depth bound and branching factor
            rng: Random source to draw from. Takes precedence over seed.
            seed: Seed for a private random source, for reproducible runs
        """
        self._params = params
        self._rng = rng if rng is not None else random.Random(seed)

    @property
    def params(self) -> GenerationParams:
        return self._params

    def generate(self) -> Graph:
        """
        Generate a new graph.

        Returns:
            An empty graph when depth is 0, otherwise a rooted layered graph
        """
        graph = Graph()
        if self._params.depth == 0:
            logger.debug("Depth is 0, returning an empty graph")
            return graph

        graph.add_vertex()
        self._generate_grey_edges(graph)
        self._generate_green_edges(graph)
        self._generate_yellow_edges(graph)
        self._generate_red_edges(graph)

        logger.info(
            "Generated graph: %d vertices, %d edges, depth %d",
            graph.vertex_count,
            graph.edge_count,
            graph.depth(),
        )
        return graph

    def generate_with_report(self) -> tuple[Graph, GenerationReport]:
        """
        Generate a new graph and collect statistics about it.

        Returns:
            The graph and a GenerationReport describing it
        """
        start_time = time.time()
        graph = self.generate()

        report = GenerationReport(params=self._params)
        report.depth = graph.depth()
        report.vertex_count = graph.vertex_count
        for edge in graph.get_edges():
            report.color_counts[edge.color] += 1
        report.generation_time_seconds = time.time() - start_time

        return graph, report

    def _check_probability(self, chance: float) -> bool:
        """Bernoulli trial with the given chance of success."""
        return self._rng.random() < chance

    def _generate_grey_edges(self, graph: Graph) -> None:
        max_depth = self._params.depth
        for current_depth in range(BASE_DEPTH, max_depth + 1):
            # A layer that received no vertices ends the growth
            if graph.depth() != current_depth:
                break

            probability = layer_probability(current_depth, max_depth)
            for vertex_id in graph.get_vertices_with_depth(current_depth):
                for _ in range(self._params.new_vertices_count):
                    if self._check_probability(probability):
                        new_vertex_id = graph.add_vertex()
                        graph.add_edge(vertex_id, new_vertex_id)

        logger.debug("Grey pass done: %d layers", graph.depth())

    def _generate_green_edges(self, graph: Graph) -> None:
        added = 0
        for vertex in graph.get_vertices():
            if self._check_probability(PROBABILITY_GREEN):
                graph.add_edge(vertex.id, vertex.id)
                added += 1

        logger.debug("Green pass done: %d self-loops", added)

    def _generate_yellow_edges(self, graph: Graph) -> None:
        added = 0
        graph_depth = graph.depth()
        for vertex in graph.get_vertices():
            vertex_depth = graph.vertex_depth(vertex.id)
            probability = layer_probability(vertex_depth, graph_depth)
            if self._check_probability(probability):
                continue

            candidates = self._get_unconnected_vertex_ids(
                graph,
                vertex.id,
                graph.get_vertices_with_depth(vertex_depth + YELLOW_DEPTH_DIFFERENCE),
            )
            if candidates:
                graph.add_edge(vertex.id, self._rng.choice(candidates))
                added += 1

        logger.debug("Yellow pass done: %d edges", added)

    def _generate_red_edges(self, graph: Graph) -> None:
        added = 0
        for vertex in graph.get_vertices():
            if not self._check_probability(PROBABILITY_RED):
                continue

            vertex_depth = graph.vertex_depth(vertex.id)
            candidates = graph.get_vertices_with_depth(vertex_depth + RED_DEPTH_DIFFERENCE)
            if candidates:
                graph.add_edge(vertex.id, self._rng.choice(candidates))
                added += 1

        logger.debug("Red pass done: %d edges", added)

    @staticmethod
    def _get_unconnected_vertex_ids(
        graph: Graph,
        from_vertex_id: VertexId,
        vertex_ids: list[VertexId],
    ) -> list[VertexId]:
        return [
            vertex_id
            for vertex_id in vertex_ids
            if not graph.is_connected(from_vertex_id, vertex_id)
        ]
