"""
Tests for the graph module.

Tests Graph operations, depth bookkeeping and edge color classification.
"""

import networkx as nx
import pytest
from graphgen.graph import Graph
from graphgen.models import (
    BASE_DEPTH,
    EdgeColor,
    GraphInvariantError,
    UnclassifiableEdgeError,
    VertexNotFoundError,
)

from tests.fixtures import build_three_layer_graph


class TestVertices:
    """Tests for adding and querying vertices."""

    def test_add_vertex_assigns_sequential_ids(self):
        """Test that vertex ids start at 0 and increase by one."""
        graph = Graph()

        ids = [graph.add_vertex() for _ in range(4)]

        assert ids == [0, 1, 2, 3]
        assert [vertex.id for vertex in graph.get_vertices()] == ids
        assert graph.vertex_count == 4

    def test_new_vertex_has_base_depth(self):
        """Test that a fresh vertex sits in the base bucket."""
        graph = Graph()

        vertex_id = graph.add_vertex()

        assert graph.vertex_depth(vertex_id) == BASE_DEPTH
        assert graph.get_vertices_with_depth(BASE_DEPTH) == [vertex_id]
        assert graph.connected_edges_ids(vertex_id) == []
        assert graph.depth() == 1

    def test_has_vertex(self):
        """Test vertex existence checks."""
        graph = Graph()
        graph.add_vertex()

        assert graph.has_vertex(0)
        assert not graph.has_vertex(1)
        assert not graph.has_vertex(-1)

    def test_empty_graph(self):
        """Test the accessors of a graph with no vertices."""
        graph = Graph()

        assert graph.depth() == 0
        assert graph.get_vertices() == []
        assert graph.get_edges() == []
        assert graph.vertex_count == 0
        assert graph.edge_count == 0

    def test_unknown_keys_give_empty_results(self):
        """Test that read accessors do not fail for unknown keys."""
        graph = Graph()
        graph.add_vertex()

        assert graph.connected_edges_ids(42) == []
        assert graph.get_vertices_with_depth(7) == []

    def test_vertex_depth_of_unknown_vertex(self):
        """Test that the depth of an unknown vertex is an error."""
        graph = Graph()

        with pytest.raises(VertexNotFoundError):
            graph.vertex_depth(0)


class TestEdges:
    """Tests for adding edges."""

    def test_grey_edge_sets_depth(self):
        """Test that a grey edge places its target one layer deeper."""
        graph = Graph()
        root = graph.add_vertex()
        child = graph.add_vertex()

        edge_id = graph.add_edge(root, child)

        assert edge_id == 0
        assert graph.get_edge(edge_id).color == EdgeColor.GREY
        assert graph.vertex_depth(child) == BASE_DEPTH + 1
        assert graph.get_vertices_with_depth(BASE_DEPTH) == [root]
        assert graph.get_vertices_with_depth(BASE_DEPTH + 1) == [child]
        assert graph.depth() == 2

    def test_grey_edge_from_deep_vertex(self):
        """Test depth assignment below an existing layer."""
        graph = build_three_layer_graph()
        new_vertex = graph.add_vertex()

        graph.add_edge(3, new_vertex)

        assert graph.vertex_depth(new_vertex) == 4
        assert graph.depth() == 4

    def test_adjacency_lists_both_endpoints(self):
        """Test that an edge is listed for its source and its target."""
        graph = build_three_layer_graph()

        assert graph.connected_edges_ids(0) == [0, 1]
        assert graph.connected_edges_ids(1) == [0, 2]
        assert graph.connected_edges_ids(2) == [1]
        assert graph.connected_edges_ids(3) == [2]

    def test_self_loop_registered_once(self):
        """Test that a self-loop appears once in its vertex's edge list."""
        graph = Graph()
        vertex_id = graph.add_vertex()

        edge_id = graph.add_edge(vertex_id, vertex_id)

        assert graph.get_edge(edge_id).color == EdgeColor.GREEN
        assert graph.connected_edges_ids(vertex_id) == [edge_id]
        assert graph.vertex_depth(vertex_id) == BASE_DEPTH

    def test_source_whose_id_equals_edge_id(self):
        """Test that a source vertex numbered like the new edge still lists it."""
        graph = build_three_layer_graph()
        new_vertex = graph.add_vertex()

        # Next edge id is 3, same as the source vertex id
        edge_id = graph.add_edge(3, new_vertex)

        assert edge_id == 3
        assert graph.connected_edges_ids(3) == [2, 3]
        assert graph.connected_edges_ids(new_vertex) == [3]

    def test_edge_ids_independent_of_vertex_ids(self):
        """Test that edge ids count from 0 regardless of vertices."""
        graph = Graph()
        for _ in range(5):
            graph.add_vertex()

        assert graph.add_edge(0, 4) == 0
        assert graph.add_edge(0, 3) == 1
        assert [edge.id for edge in graph.get_edges()] == [0, 1]

    def test_edges_keep_creation_order(self):
        """Test that get_edges returns edges in the order they were added."""
        graph = build_three_layer_graph()
        graph.add_edge(2, 3)
        graph.add_edge(0, 0)

        edges = graph.get_edges()

        assert [edge.vertex_ids for edge in edges] == [(0, 1), (0, 2), (1, 3), (2, 3), (0, 0)]
        assert [edge.color for edge in edges] == [
            EdgeColor.GREY,
            EdgeColor.GREY,
            EdgeColor.GREY,
            EdgeColor.YELLOW,
            EdgeColor.GREEN,
        ]

    def test_parallel_edges_allowed(self):
        """Test that two red edges between the same vertices are both kept."""
        graph = build_three_layer_graph()

        first = graph.add_edge(0, 3)
        second = graph.add_edge(0, 3)

        assert first != second
        assert graph.edge_count == 5
        assert len(list(graph.get_edges_by_color(EdgeColor.RED))) == 2

    def test_add_edge_unknown_source(self):
        """Test that an edge from an unknown vertex is rejected."""
        graph = Graph()
        graph.add_vertex()

        with pytest.raises(VertexNotFoundError) as exc_info:
            graph.add_edge(5, 0)

        assert exc_info.value.vertex_id == 5
        assert graph.edge_count == 0

    def test_add_edge_unknown_target(self):
        """Test that an edge to an unknown vertex is rejected."""
        graph = Graph()
        graph.add_vertex()

        with pytest.raises(GraphInvariantError):
            graph.add_edge(0, 1)

    def test_add_unclassifiable_edge(self):
        """Test that an edge with no matching color rule is rejected."""
        graph = build_three_layer_graph()

        with pytest.raises(UnclassifiableEdgeError):
            graph.add_edge(1, 0)

        assert graph.edge_count == 3


class TestEdgeColor:
    """Tests for edge color classification."""

    def test_green_for_self_loop(self):
        """Test that the same endpoint twice is green."""
        graph = build_three_layer_graph()

        assert graph.get_edge_color(2, 2) == EdgeColor.GREEN

    def test_grey_for_isolated_target(self):
        """Test that a target with no edges is grey."""
        graph = build_three_layer_graph()
        isolated = graph.add_vertex()

        assert graph.get_edge_color(3, isolated) == EdgeColor.GREY

    def test_yellow_for_unconnected_next_layer(self):
        """Test that an unconnected vertex one layer deeper is yellow."""
        graph = build_three_layer_graph()

        assert graph.get_edge_color(2, 3) == EdgeColor.YELLOW

    def test_red_for_two_layers_deeper(self):
        """Test that a vertex two layers deeper is red."""
        graph = build_three_layer_graph()

        assert graph.get_edge_color(0, 3) == EdgeColor.RED

    def test_connected_next_layer_is_unclassifiable(self):
        """Test that an already connected vertex one layer deeper has no color."""
        graph = build_three_layer_graph()

        with pytest.raises(UnclassifiableEdgeError) as exc_info:
            graph.get_edge_color(0, 1)

        assert exc_info.value.from_depth == 1
        assert exc_info.value.to_depth == 2

    @pytest.mark.parametrize(
        "from_vertex, to_vertex",
        [
            (1, 0),  # one layer up
            (3, 0),  # two layers up
            (1, 2),  # same layer
        ],
    )
    def test_other_depth_differences_are_unclassifiable(self, from_vertex, to_vertex):
        """Test that depth differences outside 0, +1, +2 are rejected."""
        graph = build_three_layer_graph()

        with pytest.raises(UnclassifiableEdgeError):
            graph.get_edge_color(from_vertex, to_vertex)

    def test_classification_is_deterministic(self):
        """Test that classifying twice gives the same answer."""
        graph = build_three_layer_graph()

        assert graph.get_edge_color(2, 3) == graph.get_edge_color(2, 3)
        assert graph.get_edge_color(0, 3) == graph.get_edge_color(0, 3)

    def test_classification_does_not_mutate(self):
        """Test that classifying leaves the graph unchanged."""
        graph = build_three_layer_graph()

        graph.get_edge_color(2, 3)

        assert graph.edge_count == 3
        assert graph.connected_edges_ids(2) == [1]

    def test_unknown_vertex(self):
        """Test that classifying with an unknown endpoint is an error."""
        graph = build_three_layer_graph()

        with pytest.raises(VertexNotFoundError):
            graph.get_edge_color(0, 99)


class TestConnectivity:
    """Tests for is_connected."""

    def test_connected_in_both_directions(self):
        """Test that direction does not matter."""
        graph = build_three_layer_graph()

        assert graph.is_connected(0, 1)
        assert graph.is_connected(1, 0)

    def test_not_connected(self):
        """Test vertices with no edge between them."""
        graph = build_three_layer_graph()

        assert not graph.is_connected(2, 3)
        assert not graph.is_connected(0, 3)

    def test_connected_after_yellow_edge(self):
        """Test that a new edge makes its endpoints connected."""
        graph = build_three_layer_graph()

        graph.add_edge(2, 3)

        assert graph.is_connected(2, 3)
        assert graph.is_connected(3, 2)


class TestDepthIndex:
    """Tests for depth buckets."""

    def test_buckets_after_growth(self):
        """Test the contents of every bucket of a small graph."""
        graph = build_three_layer_graph()

        assert graph.get_vertices_with_depth(1) == [0]
        assert graph.get_vertices_with_depth(2) == [1, 2]
        assert graph.get_vertices_with_depth(3) == [3]
        assert graph.depth() == 3

    def test_get_vertices_with_depth_is_idempotent(self):
        """Test that reading a bucket twice gives identical lists."""
        graph = build_three_layer_graph()

        assert graph.get_vertices_with_depth(2) == graph.get_vertices_with_depth(2)

    def test_returned_bucket_is_a_copy(self):
        """Test that modifying a returned bucket does not affect the graph."""
        graph = build_three_layer_graph()

        bucket = graph.get_vertices_with_depth(2)
        bucket.append(99)

        assert graph.get_vertices_with_depth(2) == [1, 2]

    def test_reassignment_leaves_previous_bucket(self):
        """Test that moving a vertex twice leaves no stale entry behind."""
        graph = Graph()
        graph.add_vertex()
        vertex_id = graph.add_vertex()

        graph.set_vertex_depth(vertex_id, 2)
        graph.set_vertex_depth(vertex_id, 3)

        assert graph.vertex_depth(vertex_id) == 3
        assert graph.get_vertices_with_depth(2) == []
        assert graph.get_vertices_with_depth(3) == [vertex_id]
        assert graph.depth() == 2

    def test_set_depth_of_unknown_vertex(self):
        """Test that moving an unknown vertex is an error."""
        graph = Graph()

        with pytest.raises(VertexNotFoundError):
            graph.set_vertex_depth(3, 2)

    def test_networkx_view_carries_depth(self):
        """Test that the underlying graph stores depths as node attributes."""
        graph = build_three_layer_graph()

        depths = dict(graph.graph.nodes(data="depth"))

        assert depths == {0: 1, 1: 2, 2: 2, 3: 3}
        assert graph.graph.number_of_edges() == 3

    def test_networkx_view_is_frozen(self):
        """Test that the exposed NetworkX graph cannot change the Graph."""
        graph = build_three_layer_graph()
        view = graph.graph

        with pytest.raises(nx.NetworkXError):
            view.add_edge(3, 0)
        with pytest.raises(nx.NetworkXError):
            view.add_node(99)
        view.nodes[1]["depth"] = 7

        assert graph.vertex_depth(1) == 2
        assert graph.edge_count == 3
        assert graph.vertex_count == 4
