"""Property graph access for oaimeta.

- PropertyGraph: protocol every graph backend satisfies
- RdfPropertyGraph: in-memory rdflib graph
- SparqlPropertyGraph: remote SPARQL endpoint over HTTP
"""

from .protocols import PropertyGraph
from .query import bind_query, format_iri, format_literal
from .rdf import RdfPropertyGraph
from .sparql import SparqlPropertyGraph

__all__ = [
    "PropertyGraph",
    "RdfPropertyGraph",
    "SparqlPropertyGraph",
    "bind_query",
    "format_iri",
    "format_literal",
]
