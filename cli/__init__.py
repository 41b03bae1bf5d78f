"""
CLI module for graphgen.

The command-line interface providing generate and inspect commands.
"""

from cli.main import app

__all__ = ["app"]
