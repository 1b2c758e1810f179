"""Protocol definition for the resource property graph.

Renderers depend on this interface rather than a concrete store so that
they can run against an in-memory rdflib graph, a remote SPARQL endpoint
or a test fake.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..core.types import ReferenceValue, Value


@runtime_checkable
class PropertyGraph(Protocol):
    """Read access to repository resources' metadata."""

    def values_of(self, resource: str, prop: str) -> list["Value"]:
        """Get all values of a property of a resource.

        Args:
            resource: Resource URI.
            prop: Property URI.

        Returns:
            Values in the order the store returns them (never re-sorted).
        """
        ...

    def self_reference(self, resource: str, prop: str) -> "ReferenceValue | None":
        """Get the single reference value of a property, if any."""
        ...

    def label_values(
        self,
        reference: str,
        id_prop: str,
        label_prop: str,
    ) -> list["Value"]:
        """Get the labels of the entity identified by a reference.

        Follows the join "entity whose `id_prop` equals `reference`,
        through `label_prop`".
        """
        ...

    def serialize(self, resource: str) -> str:
        """Serialize a resource's own metadata graph as RDF/XML."""
        ...
