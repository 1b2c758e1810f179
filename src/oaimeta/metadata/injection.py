"""Injecting property values into template elements.

A property selector turns one template element into zero or more copies,
one per emitted value, according to its cardinality:

- ``*``: one copy per value; no values removes the element
- ``+``: one copy per value; no values leaves one empty element
- ``1``: exactly one element holding the first value of the preferred
  language group (default language, then no language, then the first
  group found)

Values are grouped by language in the order each language is first seen.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element

import yaml

from ..core.exceptions import StructuredLiteralError
from ..core.types import Cardinality, LiteralValue
from .selectors import XML_LANG, PropertySelector

if TYPE_CHECKING:
    from ..core.config import MetadataFormat
    from ..graph.protocols import PropertyGraph
    from .labels import LabelResolver


def lookup_subkey(text: str, key: str) -> str:
    """Read one key of a YAML-encoded mapping literal.

    Returns:
        The key's value as text; empty when the key is absent.

    Raises:
        StructuredLiteralError: If the text isn't a YAML mapping.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise StructuredLiteralError(text, key, str(e)) from e
    if not isinstance(data, dict):
        raise StructuredLiteralError(text, key, "not a mapping")
    value = data.get(key)
    if value is None and key.lstrip("-").isdigit():
        value = data.get(int(key))
    # Booleans read as 1 and empty, like numeric flags
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


class ValueInjector:
    """Collects property values and expands elements for them."""

    def __init__(self, graph: "PropertyGraph", labels: "LabelResolver"):
        self.graph = graph
        self.labels = labels

    def collect(
        self,
        selector: PropertySelector,
        resource: str,
        format: "MetadataFormat",
    ) -> list[LiteralValue]:
        """Get the values to emit for a selector, in output order."""
        groups: dict[str, list[str]] = {}
        for value in self.graph.values_of(resource, selector.path.prop):
            if isinstance(value, LiteralValue):
                text, language = value.text, value.language
            elif selector.get_label:
                text = self.labels.resolve(value.uri, format, format.default_lang)
                language = format.default_lang
            else:
                text, language = value.uri, ""

            if selector.path.subkey is not None:
                text = lookup_subkey(text, selector.path.subkey)
            groups.setdefault(language, []).append(text)

        if not groups and selector.count is not Cardinality.ANY:
            groups[""] = [""]

        if selector.count is Cardinality.ONE:
            groups = self._pick_one(groups, format.default_lang)

        return [
            LiteralValue(text=text, language=language)
            for language, texts in groups.items()
            for text in texts
        ]

    @staticmethod
    def _pick_one(groups: dict[str, list[str]], default_lang: str) -> dict[str, list[str]]:
        if default_lang in groups:
            return {default_lang: groups[default_lang][:1]}
        if "" in groups:
            return {"": groups[""][:1]}
        # Neither preferred group exists: first group in graph order, untagged
        first = next(iter(groups.values()))
        return {"": first[:1]}

    def inject(
        self,
        element: Element,
        selector: PropertySelector,
        resource: str,
        format: "MetadataFormat",
    ) -> list[Element]:
        """Expand an element into one copy per collected value.

        Args:
            element: The rendered element carrying the selector.
            selector: The element's property selector.
            resource: Resource URI.
            format: Metadata format.

        Returns:
            Copies to put in the element's place; empty when the element
            should be removed.
        """
        clones = []
        for value in self.collect(selector, resource, format):
            clone = Element(element.tag, dict(element.attrib))
            clone.text = value.text
            if selector.lang and value.language:
                clone.set(XML_LANG, value.language)
            clones.append(clone)
        if clones:
            # Text following the template element follows the last copy only
            clones[-1].tail = element.tail
        return clones
