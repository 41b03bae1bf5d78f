"""
JSON Export for graphgen

This module renders a finished Graph as a flat JSON document and moves
that document to and from disk.

Document Shape:
    {"depth": <number of layers>,
     "vertices": [{"id": int, "edge_ids": [int, ...], "depth": int}, ...],
     "edges": [{"id": int, "vertex_ids": [from, to], "color": str}, ...]}

Design Decisions:
    - Compact separators, no whitespace between tokens
    - Vertices and edges keep creation order
    - The rendered string ends with a newline
"""

import json
import logging
from pathlib import Path
from typing import Any

from graphgen.graph import Graph
from graphgen.models import Edge, Vertex

logger = logging.getLogger(__name__)

_SEPARATORS = (",", ":")
_REQUIRED_KEYS = ("depth", "vertices", "edges")
_VERTEX_KEYS = ("id", "edge_ids", "depth")
_EDGE_KEYS = ("id", "vertex_ids", "color")


def vertex_to_dict(vertex: Vertex, graph: Graph) -> dict[str, Any]:
    return {
        "id": vertex.id,
        "edge_ids": graph.connected_edges_ids(vertex.id),
        "depth": graph.vertex_depth(vertex.id),
    }


def edge_to_dict(edge: Edge) -> dict[str, Any]:
    return {
        "id": edge.id,
        "vertex_ids": [edge.from_vertex_id, edge.to_vertex_id],
        "color": print_edge_color(edge),
    }


def graph_to_dict(graph: Graph) -> dict[str, Any]:
    """
    Build the export document for a graph as plain Python data.

    Args:
        graph: A fully generated graph

    Returns:
        Dictionary with "depth", "vertices" and "edges" keys
    """
    return {
        "depth": graph.depth(),
        "vertices": [vertex_to_dict(vertex, graph) for vertex in graph.get_vertices()],
        "edges": [edge_to_dict(edge) for edge in graph.get_edges()],
    }


def print_edge_color(edge: Edge) -> str:
    """Return the export label of an edge's color."""
    return edge.color.value


def print_vertex(vertex: Vertex, graph: Graph) -> str:
    return json.dumps(vertex_to_dict(vertex, graph), separators=_SEPARATORS)


def print_edge(edge: Edge) -> str:
    return json.dumps(edge_to_dict(edge), separators=_SEPARATORS)


def print_graph(graph: Graph) -> str:
    """
    Render a graph as a compact JSON document.

    Args:
        graph: A fully generated graph

    Returns:
        The JSON document followed by a newline

    Example:
        >>> graph = Graph()
        >>> _ = graph.add_vertex()
        >>> print_graph(graph)
        '{"depth":1,"vertices":[{"id":0,"edge_ids":[],"depth":1}],"edges":[]}\\n'
    """
    return json.dumps(graph_to_dict(graph), separators=_SEPARATORS) + "\n"


def write_to_file(graph_json: str, file_path: str | Path) -> Path:
    """
    Write a rendered document verbatim.

    Parent directories are created if needed.

    Args:
        graph_json: The rendered document
        file_path: Destination path

    Returns:
        The path that was written
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(graph_json, encoding="utf-8")
    logger.info("Graph written to %s", path)
    return path


def read_graph_file(file_path: str | Path) -> dict[str, Any]:
    """
    Load a previously exported document.

    Args:
        file_path: Path to the JSON document

    Returns:
        The parsed document

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a graph document
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(document, dict):
        raise ValueError(f"Not a graph document: {path}")
    missing = [key for key in _REQUIRED_KEYS if key not in document]
    if missing:
        raise ValueError(f"Graph document {path} is missing keys: {', '.join(missing)}")

    for key in ("vertices", "edges"):
        if not isinstance(document[key], list):
            raise ValueError(f"Graph document {path}: {key} is not a list")

    for position, vertex in enumerate(document["vertices"]):
        _require_item_keys(vertex, _VERTEX_KEYS, f"vertex {position}", path)
    for position, edge in enumerate(document["edges"]):
        _require_item_keys(edge, _EDGE_KEYS, f"edge {position}", path)

    return document


def _require_item_keys(item: Any, keys: tuple[str, ...], label: str, path: Path) -> None:
    if not isinstance(item, dict):
        raise ValueError(f"Graph document {path}: {label} is not an object")
    missing = [key for key in keys if key not in item]
    if missing:
        raise ValueError(f"Graph document {path}: {label} is missing keys: {', '.join(missing)}")
