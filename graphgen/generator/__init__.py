"""
Generator module for graphgen.

This module provides the randomized, layer-by-layer graph generator.
"""

from graphgen.generator.generator import GraphGenerator, layer_probability

__all__ = [
    "GraphGenerator",
    "layer_probability",
]
