"""
Graph module for graphgen.

This module provides the NetworkX-based layered multigraph with depth
buckets and edge color classification.
"""

from graphgen.graph.layered import Graph

__all__ = ["Graph"]
