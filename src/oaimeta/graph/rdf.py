"""In-memory property graph backed by rdflib."""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from rdflib import Graph, Literal, URIRef
from rdflib.term import Node

from ..core.types import LiteralValue, ReferenceValue, Value
from .query import LABEL_QUERY, bind_query


def to_value(node: Node) -> Value:
    """Convert an rdflib term to a property value."""
    if isinstance(node, Literal):
        return LiteralValue(text=str(node), language=node.language or "")
    return ReferenceValue(uri=str(node))


class RdfPropertyGraph:
    """PropertyGraph over an rdflib Graph.

    Example:
        graph = RdfPropertyGraph.from_file("metadata.ttl")
        titles = graph.values_of(resource_uri, "https://vocabs.example/hasTitle")
    """

    def __init__(self, graph: Graph):
        """Initialize with an existing rdflib graph.

        Args:
            graph: Graph holding the metadata of all resources.
        """
        self.graph = graph

    @classmethod
    def from_file(cls, path: Path | str, format: str | None = None) -> "RdfPropertyGraph":
        """Load a graph from an RDF file.

        Args:
            path: RDF file path.
            format: rdflib parser name; guessed from the extension when None.
        """
        graph = Graph()
        graph.parse(str(path), format=format)
        logger.debug(f"Loaded {len(graph)} triples from {path}")
        return cls(graph)

    def values_of(self, resource: str, prop: str) -> list[Value]:
        return [
            to_value(o) for o in self.graph.objects(URIRef(resource), URIRef(prop))
        ]

    def self_reference(self, resource: str, prop: str) -> ReferenceValue | None:
        for o in self.graph.objects(URIRef(resource), URIRef(prop)):
            if not isinstance(o, Literal):
                return ReferenceValue(uri=str(o))
        return None

    def label_values(
        self,
        reference: str,
        id_prop: str,
        label_prop: str,
    ) -> list[Value]:
        query = bind_query(LABEL_QUERY, [reference, id_prop, label_prop])
        logger.debug(f"Label query: {query}")
        return [to_value(row.label) for row in self.graph.query(query)]

    def serialize(self, resource: str) -> str:
        """Serialize the triples describing a resource as RDF/XML."""
        subject = URIRef(resource)
        described = Graph()
        for prefix, namespace in self.graph.namespaces():
            described.bind(prefix, namespace)
        for triple in self.graph.triples((subject, None, None)):
            described.add(triple)
        return described.serialize(format="xml")
