"""Template rendering engine.

Renders a compiled template for one resource into a fresh element tree.
The walk is post-order: an element's children are rendered (and dropped
or expanded) before the element's own selector is evaluated. The compiled
template itself is never modified, so one template can be rendered for
many resources, concurrently.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Callable
from urllib.parse import quote_plus
from xml.etree.ElementTree import Element

from loguru import logger

from .injection import ValueInjector
from .labels import LabelCache, LabelResolver
from .selectors import (
    NowSelector,
    OaiUriSelector,
    PropertySelector,
    SelfUriSelector,
    TemplateNode,
    UnknownSelector,
)
from .templates import Template

if TYPE_CHECKING:
    from ..core.config import MetadataFormat
    from ..graph.protocols import PropertyGraph


def oai_record_url(base_url: str, metadata_prefix: str, identifier: str) -> str:
    """Build the OAI-PMH GetRecord URL of a record."""
    return (
        f"{base_url}?verb=GetRecord"
        f"&metadataPrefix={quote_plus(metadata_prefix, safe='')}"
        f"&identifier={quote_plus(identifier, safe='')}"
    )


def _set_text(element: Element, text: str) -> None:
    """Replace an element's content with text."""
    element[:] = []
    element.text = text


def _keep_tail(parent: Element, tail: str) -> None:
    """Keep the text that followed a dropped child."""
    if len(parent):
        last = parent[-1]
        last.tail = (last.tail or "") + tail
    else:
        parent.text = (parent.text or "") + tail


class TemplateEngine:
    """Fills templates with resource metadata.

    The engine owns the label cache; keep one engine per worker process to
    share resolved labels across renders.

    Example:
        engine = TemplateEngine(graph)
        element = engine.render(loader.load(path, fmt.prop_nmsp), resource_uri, fmt)
    """

    def __init__(
        self,
        graph: "PropertyGraph",
        label_cache: LabelCache | None = None,
        *,
        today: Callable[[], date] = date.today,
    ):
        """Initialize the engine.

        Args:
            graph: Graph to read resource metadata from.
            label_cache: Label cache to use; a new one when None.
            today: Clock for ``NOW`` values.
        """
        self.graph = graph
        self.labels = LabelResolver(graph, label_cache)
        self.injector = ValueInjector(graph, self.labels)
        self._today = today

    @property
    def label_cache(self) -> LabelCache:
        return self.labels.cache

    def render(self, template: Template | TemplateNode, resource: str, format: "MetadataFormat") -> Element:
        """Render a template for a resource.

        Args:
            template: Compiled template (or template subtree).
            resource: Resource URI.
            format: Metadata format.

        Returns:
            The populated root element.
        """
        root = template.root if isinstance(template, Template) else template
        rendered = self._render_node(root, resource, format)
        if rendered:
            return rendered[0]
        # A removable root still yields an (empty) element
        return Element(root.tag, dict(root.attrib))

    def _render_node(self, node: TemplateNode, resource: str, format: "MetadataFormat") -> list[Element]:
        element = Element(node.tag, dict(node.attrib))
        element.text = node.text
        element.tail = node.tail
        for child in node.children:
            rendered = self._render_node(child, resource, format)
            if rendered:
                element.extend(rendered)
            elif child.tail:
                _keep_tail(element, child.tail)

        selector = node.selector
        if selector is None:
            return [element]
        if isinstance(selector, NowSelector):
            _set_text(element, self._today().isoformat())
        elif isinstance(selector, SelfUriSelector):
            _set_text(element, self._self_uri(resource, format))
        elif isinstance(selector, OaiUriSelector):
            url = oai_record_url(format.base_url, format.metadata_prefix, self._self_uri(resource, format))
            _set_text(element, url)
        elif isinstance(selector, PropertySelector):
            return self.injector.inject(element, selector, resource, format)
        elif isinstance(selector, UnknownSelector):
            return []
        return [element]

    def _self_uri(self, resource: str, format: "MetadataFormat") -> str:
        reference = self.graph.self_reference(resource, format.uri_prop)
        if reference is None:
            logger.warning(f"Resource {resource} has no {format.uri_prop} value")
            return ""
        return reference.uri
