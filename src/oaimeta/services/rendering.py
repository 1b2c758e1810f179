"""Rendering metadata records for batches of resources."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable
from xml.etree.ElementTree import Element

from loguru import logger

from ..core.exceptions import TemplateNotFoundError
from ..metadata.base import ProducerContext
from ..metadata.engine import TemplateEngine
from ..metadata.labels import LabelCache
from ..metadata.registry import create_producer, producer_class
from ..metadata.templates import TemplateLoader

if TYPE_CHECKING:
    import fsspec

    from ..core.config import MetadataFormat
    from ..core.types import SearchResultRow
    from ..graph.protocols import PropertyGraph


@dataclass
class RenderedRecord:
    """A resource's rendered metadata element."""

    resource: str
    element: Element


class RenderingService:
    """Renders metadata records with shared caches.

    One service instance should live as long as the worker process: its
    label cache and template cache are reused by every render.

    Example:
        service = RenderingService(RdfPropertyGraph.from_file("repo.ttl"))
        records = service.render_many(resource_uris, config.get_format("cmdi"))
    """

    def __init__(
        self,
        graph: "PropertyGraph",
        label_cache: LabelCache | None = None,
        loader: TemplateLoader | None = None,
        fs: "fsspec.AbstractFileSystem | None" = None,
    ):
        """Initialize the service.

        Args:
            graph: Property graph of the repository.
            label_cache: Label cache to share; a new one when None.
            loader: Template loader to share; a new one when None.
            fs: Filesystem holding templates; inferred from paths when None.
        """
        self.context = ProducerContext(
            graph=graph,
            engine=TemplateEngine(graph, label_cache),
            loader=loader or TemplateLoader(fs),
            fs=fs,
        )

    def search_filter(self, format: "MetadataFormat", res_var: str = "?res") -> str:
        """Get the format's resource-selection filter fragment."""
        return producer_class(format.producer).extend_search_filter_query(format, res_var)

    def search_data(self, format: "MetadataFormat", res_var: str = "?res") -> str:
        """Get the format's resource-selection data fragment."""
        return producer_class(format.producer).extend_search_data_query(format, res_var)

    def render(
        self,
        resource: str,
        format: "MetadataFormat",
        row: "SearchResultRow | None" = None,
    ) -> Element:
        """Render one resource.

        Raises:
            TemplateNotFoundError: If no template applies to the resource.
            StructuredLiteralError: If a structured literal is malformed.
            PropertyGraphError: If a graph query fails.
        """
        producer = create_producer(resource, row or {}, format, self.context)
        return producer.produce()

    def render_many(
        self,
        resources: Iterable[str],
        format: "MetadataFormat",
    ) -> list[RenderedRecord]:
        """Render many resources, skipping those without a template.

        Resources without a matching template are left out of the result;
        any other error aborts the batch.
        """
        records = []
        skipped = 0
        for resource in resources:
            try:
                element = self.render(resource, format)
            except TemplateNotFoundError as e:
                logger.warning(f"Skipping {resource}: {e}")
                skipped += 1
                continue
            records.append(RenderedRecord(resource=resource, element=element))

        logger.info(
            f"Rendered {len(records)} {format.metadata_prefix} records, skipped {skipped}"
        )
        return records


def to_string(element: Element) -> str:
    """Serialize a rendered element as XML text."""
    return ET.tostring(element, encoding="unicode")
