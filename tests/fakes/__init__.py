"""Test fakes for testing without a real triple store.

Example:
    from tests.fakes import InMemoryPropertyGraph

    graph = InMemoryPropertyGraph()
    engine = TemplateEngine(graph)
"""

from .graph import InMemoryPropertyGraph
from . import vocab

__all__ = [
    "InMemoryPropertyGraph",
    "vocab",
]
