"""Producer lookup by kind."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.exceptions import UnknownProducerError
from ..core.types import ProducerKind
from .base import BaseMetadata, ProducerContext
from .rdfxml import RdfXmlMetadata
from .template_metadata import TemplateMetadata

if TYPE_CHECKING:
    from ..core.config import MetadataFormat
    from ..core.types import SearchResultRow


PRODUCERS: dict[ProducerKind, type[BaseMetadata]] = {
    ProducerKind.TEMPLATE: TemplateMetadata,
    ProducerKind.RDFXML: RdfXmlMetadata,
}


def producer_class(kind: ProducerKind | str) -> type[BaseMetadata]:
    """Get the producer class of a kind.

    Raises:
        UnknownProducerError: If the kind has no producer.
    """
    try:
        return PRODUCERS[ProducerKind(kind)]
    except (KeyError, ValueError):
        raise UnknownProducerError(str(getattr(kind, "value", kind))) from None


def create_producer(
    resource: str,
    row: "SearchResultRow",
    format: "MetadataFormat",
    context: ProducerContext,
) -> BaseMetadata:
    """Create the format's producer for a resource."""
    return producer_class(format.producer)(resource, row, format, context)
