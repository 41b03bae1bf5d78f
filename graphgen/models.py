"""
Core Data Models for graphgen

This module defines the canonical data structures used throughout the system:
- Vertex: A node of the layered graph (identity only)
- Edge: A directed, colored connection between two vertices
- EdgeColor: Classification of an edge by the depths of its endpoints
- GenerationParams: Configuration of a single generation run
- GenerationReport: Statistics collected while generating

These models are designed to be:
- Immutable where possible (using frozen dataclasses)
- Trivially serializable to the flat JSON export
- Clear in their semantic meaning
"""

from dataclasses import dataclass, field
from enum import Enum


VertexId = int
EdgeId = int
Depth = int

# Layering constants
BASE_DEPTH: Depth = 1
YELLOW_DEPTH_DIFFERENCE: Depth = 1
RED_DEPTH_DIFFERENCE: Depth = 2

# Generation probabilities for the fixed-chance passes
PROBABILITY_GREEN = 0.1
PROBABILITY_RED = 0.33

# Default location of the exported document
DEFAULT_OUTPUT_PATH = "graph.json"


class EdgeColor(Enum):
    """
    Classification of an edge at the moment it is created.

    States:
        GREY: Structural edge to a vertex that had no incident edges yet.
              This is how the layered skeleton grows.

        GREEN: Self-loop.

        YELLOW: Edge to a vertex exactly one layer deeper that the
                source was not connected to.

        RED: Edge to a vertex exactly two layers deeper.
    """

    GREY = "grey"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class GraphInvariantError(RuntimeError):
    """Raised when a graph operation violates one of its preconditions."""


class VertexNotFoundError(GraphInvariantError):
    """An operation referenced a vertex that does not exist."""

    def __init__(self, vertex_id: VertexId) -> None:
        super().__init__(f"Vertex {vertex_id} does not exist")
        self.vertex_id = vertex_id


class UnclassifiableEdgeError(GraphInvariantError):
    """No color rule matches the endpoints of a prospective edge."""

    def __init__(
        self,
        from_vertex_id: VertexId,
        to_vertex_id: VertexId,
        from_depth: Depth,
        to_depth: Depth,
    ) -> None:
        super().__init__(
            f"Failed to determine color of edge {from_vertex_id} -> {to_vertex_id} "
            f"(depths {from_depth} -> {to_depth})"
        )
        self.from_vertex_id = from_vertex_id
        self.to_vertex_id = to_vertex_id
        self.from_depth = from_depth
        self.to_depth = to_depth


@dataclass(frozen=True)
class Vertex:
    """
    A vertex of the layered graph.

    Vertices carry identity only; their depth and incident edges are
    tracked by the owning Graph.

    Attributes:
        id: Sequential identifier, starting at 0
    """

    id: VertexId


@dataclass(frozen=True)
class Edge:
    """
    A directed edge between two vertices.

    Attributes:
        id: Sequential identifier, independent of vertex ids
        from_vertex_id: Source vertex
        to_vertex_id: Target vertex
        color: Color assigned when the edge was created

    Invariants:
        - color is never recomputed after creation
        - color is GREEN iff from_vertex_id == to_vertex_id
    """

    id: EdgeId
    from_vertex_id: VertexId
    to_vertex_id: VertexId
    color: EdgeColor

    @property
    def vertex_ids(self) -> tuple[VertexId, VertexId]:
        """Return the (from, to) endpoint pair."""
        return (self.from_vertex_id, self.to_vertex_id)

    @property
    def is_self_loop(self) -> bool:
        return self.from_vertex_id == self.to_vertex_id


@dataclass(frozen=True)
class GenerationParams:
    """
    Configuration of a generation run.

    Attributes:
        depth: Upper bound on the number of layers (0 yields an empty graph)
        new_vertices_count: Number of grey-edge trials per vertex and layer
    """

    depth: Depth
    new_vertices_count: int

    def __post_init__(self) -> None:
        """Validate that both parameters are non-negative."""
        if self.depth < 0:
            raise ValueError(f"depth must be non-negative, got {self.depth}")
        if self.new_vertices_count < 0:
            raise ValueError(
                f"new_vertices_count must be non-negative, got {self.new_vertices_count}"
            )


@dataclass
class GenerationReport:
    """
    Summary of a single generation run.

    Attributes:
        params: The configuration the run used
        depth: Number of depth buckets in the generated graph
        vertex_count: Number of vertices generated
        color_counts: Number of edges of each color
        generation_time_seconds: Wall time spent generating
    """

    params: GenerationParams
    depth: Depth = 0
    vertex_count: int = 0
    color_counts: dict[EdgeColor, int] = field(
        default_factory=lambda: {color: 0 for color in EdgeColor}
    )
    generation_time_seconds: float = 0.0

    @property
    def edge_count(self) -> int:
        """Total number of edges of all colors."""
        return sum(self.color_counts.values())
