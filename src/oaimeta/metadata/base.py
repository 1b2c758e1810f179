"""Metadata producer contract.

A metadata producer renders the OAI-PMH ``<metadata>`` payload of one
repository resource. Every producer:

- is constructed from (resource, search result row, format, context)
- renders its element with ``produce()``
- exposes two class-level hooks, run once per search before any resource
  is rendered, returning SPARQL fragments spliced into the
  resource-selection query: ``extend_search_filter_query`` narrows which
  resources are selected, ``extend_search_data_query`` adds data to each
  result row

The set of producers is closed (see ``ProducerKind`` and
``oaimeta.metadata.registry``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable
from xml.etree.ElementTree import Element

from .engine import TemplateEngine
from .templates import TemplateLoader

if TYPE_CHECKING:
    import fsspec

    from ..core.config import MetadataFormat
    from ..core.types import SearchResultRow
    from ..graph.protocols import PropertyGraph


@dataclass
class ProducerContext:
    """Collaborators shared by all producers of a worker process.

    Attributes:
        graph: Property graph of the repository.
        engine: Template engine (owns the label cache).
        loader: Template loader (owns the template cache).
        fs: Filesystem holding templates; inferred from paths when None.
    """

    graph: "PropertyGraph"
    engine: TemplateEngine | None = None
    loader: TemplateLoader = field(default_factory=TemplateLoader)
    fs: "fsspec.AbstractFileSystem | None" = None

    def __post_init__(self) -> None:
        if self.engine is None:
            self.engine = TemplateEngine(self.graph)


@runtime_checkable
class MetadataProducer(Protocol):
    """Capability interface of metadata producers."""

    def produce(self) -> Element:
        """Render the resource's metadata element."""
        ...

    def append_to(self, parent: Element) -> Element:
        """Render the metadata element and append it to a response element."""
        ...

    @classmethod
    def extend_search_filter_query(cls, format: "MetadataFormat", res_var: str = "?res") -> str:
        """Get a filter fragment for the resource-selection query."""
        ...

    @classmethod
    def extend_search_data_query(cls, format: "MetadataFormat", res_var: str = "?res") -> str:
        """Get a data fragment for the resource-selection query."""
        ...


class BaseMetadata(ABC):
    """Shared implementation of metadata producers."""

    def __init__(
        self,
        resource: str,
        row: "SearchResultRow",
        format: "MetadataFormat",
        context: ProducerContext,
    ):
        """Create a producer for a repository resource.

        Args:
            resource: Resource URI.
            row: The resource's row of the resource-selection query.
            format: Metadata format descriptor.
            context: Shared collaborators.
        """
        self.resource = resource
        self.row = row
        self.format = format
        self.context = context

    @abstractmethod
    def produce(self) -> Element:
        """Render the resource's metadata element."""
        pass

    def append_to(self, parent: Element) -> Element:
        element = self.produce()
        parent.append(element)
        return element

    @classmethod
    def extend_search_filter_query(cls, format: "MetadataFormat", res_var: str = "?res") -> str:
        return ""

    @classmethod
    def extend_search_data_query(cls, format: "MetadataFormat", res_var: str = "?res") -> str:
        return ""
