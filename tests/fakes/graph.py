"""In-memory property graph fake for testing.

Implements the PropertyGraph protocol with plain dicts and counts calls
per method, so tests can assert how many queries a render issued.

Usage:
    from tests.fakes import InMemoryPropertyGraph

    graph = InMemoryPropertyGraph()
    graph.add(RES, TITLE, LiteralValue("Title", "en"))
    graph.add_label("https://vocab.example/de", "German", "en")
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from oaimeta.core.types import LiteralValue, ReferenceValue, Value


@dataclass
class InMemoryPropertyGraph:
    """In-memory PropertyGraph for testing."""

    _values: dict[tuple[str, str], list[Value]] = field(default_factory=dict)
    _labels: dict[str, list[Value]] = field(default_factory=dict)
    _documents: dict[str, str] = field(default_factory=dict)
    calls: Counter = field(default_factory=Counter)

    def add(self, resource: str, prop: str, *values: Value) -> "InMemoryPropertyGraph":
        """Append values of a property (kept in insertion order)."""
        self._values.setdefault((resource, prop), []).extend(values)
        return self

    def add_label(self, reference: str, text: str, language: str = "") -> "InMemoryPropertyGraph":
        """Add a label for the entity identified by a reference."""
        self._labels.setdefault(reference, []).append(LiteralValue(text, language))
        return self

    def set_document(self, resource: str, rdfxml: str) -> None:
        """Set the RDF/XML returned by serialize()."""
        self._documents[resource] = rdfxml

    def values_of(self, resource: str, prop: str) -> list[Value]:
        self.calls["values_of"] += 1
        return list(self._values.get((resource, prop), []))

    def self_reference(self, resource: str, prop: str) -> ReferenceValue | None:
        self.calls["self_reference"] += 1
        for value in self._values.get((resource, prop), []):
            if isinstance(value, ReferenceValue):
                return value
        return None

    def label_values(self, reference: str, id_prop: str, label_prop: str) -> list[Value]:
        self.calls["label_values"] += 1
        return list(self._labels.get(reference, []))

    def serialize(self, resource: str) -> str:
        self.calls["serialize"] += 1
        return self._documents[resource]
