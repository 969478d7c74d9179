"""Graph export helpers."""

from .export import reachable_graph

__all__ = ['reachable_graph']
