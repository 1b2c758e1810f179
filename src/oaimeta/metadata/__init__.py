"""Metadata rendering for oaimeta.

Modules
-------
selectors
    Template attributes parsed into selectors, compiled template nodes
templates
    Template loading (fsspec) and caching
schema
    Template selection by resource profile, search filter hook
labels
    Reference -> label resolution with a process-wide cache
injection
    Property value grouping, cardinality and language selection
engine
    Post-order template rendering
base, template_metadata, rdfxml, registry
    Metadata producers and their lookup

Example
-------
>>> from oaimeta.metadata import ProducerContext, create_producer
>>> context = ProducerContext(graph)
>>> element = create_producer(resource, {}, fmt, context).produce()
"""

from .base import BaseMetadata, MetadataProducer, ProducerContext
from .engine import TemplateEngine, oai_record_url
from .injection import ValueInjector, lookup_subkey
from .labels import LabelCache, LabelResolver
from .rdfxml import RdfXmlMetadata
from .registry import PRODUCERS, create_producer, producer_class
from .schema import (
    SchemaSelector,
    extend_search_filter_query,
    extract_schema_id,
    template_path,
)
from .selectors import (
    XML_LANG,
    NowSelector,
    OaiUriSelector,
    PropertyPath,
    PropertySelector,
    Selector,
    SelfUriSelector,
    TemplateNode,
    UnknownSelector,
    compile_element,
    parse_selector,
)
from .template_metadata import TemplateMetadata
from .templates import Template, TemplateLoader, parse_template

__all__ = [
    # Producers
    "BaseMetadata",
    "MetadataProducer",
    "ProducerContext",
    "TemplateMetadata",
    "RdfXmlMetadata",
    "PRODUCERS",
    "create_producer",
    "producer_class",
    # Engine
    "TemplateEngine",
    "oai_record_url",
    "ValueInjector",
    "lookup_subkey",
    # Labels
    "LabelCache",
    "LabelResolver",
    # Schema
    "SchemaSelector",
    "extend_search_filter_query",
    "extract_schema_id",
    "template_path",
    # Templates
    "Template",
    "TemplateLoader",
    "parse_template",
    "TemplateNode",
    "compile_element",
    "parse_selector",
    "Selector",
    "NowSelector",
    "SelfUriSelector",
    "OaiUriSelector",
    "PropertySelector",
    "PropertyPath",
    "UnknownSelector",
    "XML_LANG",
]
