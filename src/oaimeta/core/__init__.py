"""Core types, configuration and errors for oaimeta."""

from .config import Config, MetadataFormat, SparqlConfig
from .exceptions import (
    ConfigError,
    OaiMetaError,
    PropertyGraphError,
    StructuredLiteralError,
    TemplateError,
    TemplateNotFoundError,
    TemplateParseError,
    UnknownProducerError,
)
from .types import (
    Cardinality,
    LiteralValue,
    ProducerKind,
    ReferenceValue,
    SearchResultRow,
    Value,
)

__all__ = [
    "Config",
    "MetadataFormat",
    "SparqlConfig",
    "OaiMetaError",
    "ConfigError",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateParseError",
    "StructuredLiteralError",
    "PropertyGraphError",
    "UnknownProducerError",
    "Cardinality",
    "LiteralValue",
    "ReferenceValue",
    "Value",
    "ProducerKind",
    "SearchResultRow",
]
