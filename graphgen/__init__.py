"""
graphgen

Random generator of layered directed graphs whose edges are colored by
the relative depths of their endpoints.
"""

from graphgen.models import Edge, EdgeColor, GenerationParams, Vertex

__all__ = ["Edge", "EdgeColor", "GenerationParams", "Vertex"]
__version__ = "0.1.0"
