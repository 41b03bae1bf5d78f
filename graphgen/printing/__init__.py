"""
Printing module for graphgen.

This module renders generated graphs as JSON and writes and reads the
exported documents.
"""

from graphgen.printing.json_printer import (
    graph_to_dict,
    print_edge,
    print_edge_color,
    print_graph,
    print_vertex,
    read_graph_file,
    write_to_file,
)

__all__ = [
    "graph_to_dict",
    "print_edge",
    "print_edge_color",
    "print_graph",
    "print_vertex",
    "read_graph_file",
    "write_to_file",
]
