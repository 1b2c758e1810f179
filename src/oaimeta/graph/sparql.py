"""Property graph backed by a remote SPARQL endpoint."""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from ..core.config import SparqlConfig
from ..core.exceptions import PropertyGraphError
from ..core.types import LiteralValue, ReferenceValue, Value
from .query import DESCRIBE_QUERY, LABEL_QUERY, VALUES_QUERY, bind_query

SPARQL_JSON = "application/sparql-results+json"
RDF_XML = "application/rdf+xml"


def binding_to_value(binding: dict[str, Any]) -> Value:
    """Convert a SPARQL JSON result binding to a property value."""
    if binding.get("type") in ("literal", "typed-literal"):
        return LiteralValue(text=binding["value"], language=binding.get("xml:lang", ""))
    return ReferenceValue(uri=binding["value"])


class SparqlPropertyGraph:
    """PropertyGraph issuing SPARQL queries over HTTP.

    Failures are raised as PropertyGraphError and never retried.

    Example:
        with SparqlPropertyGraph(config.sparql) as graph:
            values = graph.values_of(resource_uri, title_prop)
    """

    def __init__(self, config: SparqlConfig, client: httpx.Client | None = None):
        """Initialize the endpoint client.

        Args:
            config: Endpoint URL and timeout.
            client: Optional preconfigured HTTP client.
        """
        self.config = config
        self._client = client or httpx.Client(timeout=config.timeout)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "SparqlPropertyGraph":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def values_of(self, resource: str, prop: str) -> list[Value]:
        query = bind_query(VALUES_QUERY, [resource, prop])
        return [binding_to_value(row["value"]) for row in self.select(query) if "value" in row]

    def self_reference(self, resource: str, prop: str) -> ReferenceValue | None:
        for value in self.values_of(resource, prop):
            if isinstance(value, ReferenceValue):
                return value
        return None

    def label_values(
        self,
        reference: str,
        id_prop: str,
        label_prop: str,
    ) -> list[Value]:
        query = bind_query(LABEL_QUERY, [reference, id_prop, label_prop])
        return [binding_to_value(row["label"]) for row in self.select(query) if "label" in row]

    def serialize(self, resource: str) -> str:
        query = bind_query(DESCRIBE_QUERY, [resource, resource])
        return self._post(query, RDF_XML).text

    def select(self, query: str) -> list[dict[str, Any]]:
        """Run a SELECT query and return its result bindings.

        Raises:
            PropertyGraphError: On transport errors, error responses or
                undecodable results.
        """
        response = self._post(query, SPARQL_JSON)
        try:
            return response.json()["results"]["bindings"]
        except (ValueError, KeyError, TypeError) as e:
            raise PropertyGraphError(query, f"Malformed result: {e}") from e

    def _post(self, query: str, accept: str) -> httpx.Response:
        logger.debug(f"SPARQL query to {self.config.endpoint}: {query}")
        try:
            response = self._client.post(
                self.config.endpoint,
                data={"query": query},
                headers={"Accept": accept},
            )
        except httpx.HTTPError as e:
            raise PropertyGraphError(query, str(e)) from e

        if response.status_code != 200:
            raise PropertyGraphError(
                query, f"HTTP {response.status_code}: {response.text[:200]}"
            )
        return response
