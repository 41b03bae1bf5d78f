"""
Layered Graph for graphgen

This module implements the append-only directed multigraph that the
generator populates. Vertices live in depth buckets, and every edge is
colored once, at creation time, by the relative depths of its endpoints.

Design Decisions:
    - Uses a NetworkX MultiDiGraph as the store of vertices and edges
    - Vertex depth is a node attribute; the Edge object is an edge attribute
    - Edge keys are the edge ids, so parallel edges stay distinguishable
    - Creation order and incident-edge order are kept in explicit indices,
      since the export must preserve them

Graph Properties:
    - Directed, parallel edges and self-loops allowed
    - Append-only: no removal API
    - Vertex ids and edge ids are independent sequential counters
"""

from typing import Iterator

import networkx as nx

from graphgen.models import (
    BASE_DEPTH,
    RED_DEPTH_DIFFERENCE,
    YELLOW_DEPTH_DIFFERENCE,
    Depth,
    Edge,
    EdgeColor,
    EdgeId,
    UnclassifiableEdgeError,
    Vertex,
    VertexId,
    VertexNotFoundError,
)


class Graph:
    """
    A directed multigraph organized into depth layers.

    Wraps a NetworkX MultiDiGraph to provide:
    - Sequential vertex and edge identifiers
    - Depth bookkeeping with per-depth buckets
    - Ordered incident-edge lookup per vertex
    - Edge color classification

    Attributes:
        graph: Frozen copy of the underlying NetworkX MultiDiGraph

    Usage:
        graph = Graph()
        root = graph.add_vertex()
        child = graph.add_vertex()
        graph.add_edge(root, child)   # grey, child moves to depth 2
    """

    def __init__(self) -> None:
        """Initialize an empty graph."""
        self._graph: nx.MultiDiGraph = nx.MultiDiGraph()
        self._edge_endpoints: dict[EdgeId, tuple[VertexId, VertexId]] = {}
        self._adjacency: dict[VertexId, list[EdgeId]] = {}
        self._depth_to_vertices: dict[Depth, list[VertexId]] = {}
        self._next_vertex_id: VertexId = 0
        self._next_edge_id: EdgeId = 0

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Frozen copy of the underlying NetworkX graph."""
        return nx.freeze(self._graph.copy())

    @property
    def vertex_count(self) -> int:
        """Return the number of vertices in the graph."""
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        """Return the number of edges in the graph."""
        return self._graph.number_of_edges()

    def add_vertex(self) -> VertexId:
        """
        Add a new vertex at base depth.

        Returns:
            The id of the new vertex
        """
        vertex_id = self._next_vertex_id
        self._next_vertex_id += 1

        self._graph.add_node(vertex_id, vertex=Vertex(vertex_id), depth=BASE_DEPTH)
        self._adjacency[vertex_id] = []
        self._depth_to_vertices.setdefault(BASE_DEPTH, []).append(vertex_id)
        return vertex_id

    def add_edge(self, from_vertex_id: VertexId, to_vertex_id: VertexId) -> EdgeId:
        """
        Add a directed edge and color it.

        A grey edge also assigns the target its real depth, one layer below
        the source.

        Args:
            from_vertex_id: Source vertex
            to_vertex_id: Target vertex

        Returns:
            The id of the new edge

        Raises:
            VertexNotFoundError: If either endpoint does not exist
            UnclassifiableEdgeError: If no color rule matches the endpoints
        """
        self._require_vertex(from_vertex_id)
        self._require_vertex(to_vertex_id)

        color = self.get_edge_color(from_vertex_id, to_vertex_id)
        if color == EdgeColor.GREY:
            self.set_vertex_depth(to_vertex_id, self.vertex_depth(from_vertex_id) + 1)

        edge_id = self._next_edge_id
        self._next_edge_id += 1

        edge = Edge(
            id=edge_id,
            from_vertex_id=from_vertex_id,
            to_vertex_id=to_vertex_id,
            color=color,
        )
        self._graph.add_edge(from_vertex_id, to_vertex_id, key=edge_id, edge=edge)
        self._edge_endpoints[edge_id] = edge.vertex_ids

        # A self-loop is registered only once
        if from_vertex_id != to_vertex_id:
            self._adjacency[from_vertex_id].append(edge_id)
        self._adjacency[to_vertex_id].append(edge_id)

        return edge_id

    def has_vertex(self, vertex_id: VertexId) -> bool:
        return vertex_id in self._adjacency

    def get_vertices(self) -> list[Vertex]:
        """Return all vertices in creation order."""
        return [self._graph.nodes[vertex_id]["vertex"] for vertex_id in self._graph.nodes]

    def get_edges(self) -> list[Edge]:
        """Return all edges in creation order."""
        return [self.get_edge(edge_id) for edge_id in self._edge_endpoints]

    def get_edge(self, edge_id: EdgeId) -> Edge:
        """
        Retrieve an edge by its id.

        Raises:
            KeyError: If no edge has this id
        """
        from_vertex_id, to_vertex_id = self._edge_endpoints[edge_id]
        return self._graph.edges[from_vertex_id, to_vertex_id, edge_id]["edge"]

    def get_edges_by_color(self, color: EdgeColor) -> Iterator[Edge]:
        """
        Get all edges of a specific color.

        Yields:
            Each Edge with the given color, in creation order
        """
        for edge in self.get_edges():
            if edge.color == color:
                yield edge

    def connected_edges_ids(self, vertex_id: VertexId) -> list[EdgeId]:
        """
        Get ids of all edges incident to a vertex, in insertion order.

        Returns an empty list for unknown vertices.
        """
        return list(self._adjacency.get(vertex_id, []))

    def set_vertex_depth(self, vertex_id: VertexId, depth: Depth) -> None:
        """
        Move a vertex into the bucket of a new depth.

        The vertex leaves whichever bucket it currently occupies; buckets
        left empty are dropped so that depth() counts layers in use.

        Args:
            vertex_id: The vertex to move
            depth: Its new depth

        Raises:
            VertexNotFoundError: If the vertex does not exist
        """
        current_depth = self.vertex_depth(vertex_id)
        bucket = self._depth_to_vertices[current_depth]
        bucket.remove(vertex_id)
        if not bucket:
            del self._depth_to_vertices[current_depth]

        self._depth_to_vertices.setdefault(depth, []).append(vertex_id)
        self._graph.nodes[vertex_id]["depth"] = depth

    def is_connected(self, from_vertex_id: VertexId, to_vertex_id: VertexId) -> bool:
        """
        Check whether any edge incident to one vertex touches another.

        Direction is ignored.

        Raises:
            VertexNotFoundError: If from_vertex_id does not exist
        """
        self._require_vertex(from_vertex_id)
        for edge_id in self._adjacency[from_vertex_id]:
            if to_vertex_id in self._edge_endpoints[edge_id]:
                return True
        return False

    def get_edge_color(self, from_vertex_id: VertexId, to_vertex_id: VertexId) -> EdgeColor:
        """
        Classify a prospective edge by the current state of its endpoints.

        Classification Rules:
            1. Same vertex → GREEN
            2. Target has no incident edges → GREY
            3. Target one layer deeper and not connected → YELLOW
            4. Target two layers deeper → RED
            5. Otherwise → UnclassifiableEdgeError

        Args:
            from_vertex_id: Source vertex
            to_vertex_id: Target vertex

        Returns:
            The EdgeColor the edge would receive

        Raises:
            VertexNotFoundError: If either endpoint does not exist
            UnclassifiableEdgeError: If no rule matches
        """
        from_depth = self.vertex_depth(from_vertex_id)
        to_depth = self.vertex_depth(to_vertex_id)

        if from_vertex_id == to_vertex_id:
            return EdgeColor.GREEN
        if not self._adjacency[to_vertex_id]:
            return EdgeColor.GREY
        if to_depth - from_depth == YELLOW_DEPTH_DIFFERENCE and not self.is_connected(
            from_vertex_id, to_vertex_id
        ):
            return EdgeColor.YELLOW
        if to_depth - from_depth == RED_DEPTH_DIFFERENCE:
            return EdgeColor.RED

        raise UnclassifiableEdgeError(from_vertex_id, to_vertex_id, from_depth, to_depth)

    def vertex_depth(self, vertex_id: VertexId) -> Depth:
        """
        Return the depth of a vertex.

        Raises:
            VertexNotFoundError: If the vertex does not exist
        """
        self._require_vertex(vertex_id)
        return self._graph.nodes[vertex_id]["depth"]

    def get_vertices_with_depth(self, depth: Depth) -> list[VertexId]:
        """
        Get ids of all vertices at a depth, in the order they arrived there.

        Returns an empty list for depths with no vertices.
        """
        return list(self._depth_to_vertices.get(depth, []))

    def depth(self) -> int:
        """Return the number of depth layers in use."""
        return len(self._depth_to_vertices)

    def _require_vertex(self, vertex_id: VertexId) -> None:
        if not self.has_vertex(vertex_id):
            raise VertexNotFoundError(vertex_id)
