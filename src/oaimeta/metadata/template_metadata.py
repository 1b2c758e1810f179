"""Metadata rendered from an XML template (e.g. CMDI).

Required format settings: ``uri_prop``, ``id_prop``, ``label_prop``,
``schema_prop``, ``template_dir`` and ``default_lang``. Optional:
``prop_nmsp``, ``schema_default`` and ``schema_enforce``.

Without ``schema_default``, resources lacking the schema property are
excluded from searches; with ``schema_enforce``, only resources whose
profile matches it are selected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element

from loguru import logger

from .base import BaseMetadata, ProducerContext
from .schema import SchemaSelector, extend_search_filter_query

if TYPE_CHECKING:
    from ..core.config import MetadataFormat
    from ..core.types import SearchResultRow


class TemplateMetadata(BaseMetadata):
    """Fills the template matching the resource's profile."""

    def __init__(
        self,
        resource: str,
        row: "SearchResultRow",
        format: "MetadataFormat",
        context: ProducerContext,
    ):
        """Create the producer and pick its template.

        Raises:
            TemplateNotFoundError: If no template applies to the resource.
        """
        super().__init__(resource, row, format, context)
        profiles = context.graph.values_of(resource, format.schema_prop)
        self.template_path = SchemaSelector(format, context.fs).select(profiles, resource)

    def produce(self) -> Element:
        template = self.context.loader.load(self.template_path, self.format.prop_nmsp)
        logger.debug(f"Rendering {self.resource} with {self.template_path}")
        return self.context.engine.render(template, self.resource, self.format)

    @classmethod
    def extend_search_filter_query(cls, format: "MetadataFormat", res_var: str = "?res") -> str:
        return extend_search_filter_query(format, res_var)
