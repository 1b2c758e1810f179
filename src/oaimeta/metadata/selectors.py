"""Compiled template nodes and value selectors.

Template elements can carry these attributes:

- ``val``: ``NOW``, ``URI``, ``OAIURI`` or ``/propertyPath``; a path may use
  a namespace prefix (``/acdh:hasTitle``) and a trailing ``[key]`` to read
  one key of a YAML-encoded literal (``/acdh:hasExtent[pages]``)
- ``count``: ``1`` (default), ``+`` or ``*``
- ``lang``: ``true`` to emit ``xml:lang`` on values that have a language
- ``getLabel``: ``true`` to replace reference values with their labels

Selectors are parsed once when a template is loaded, so rendering never
looks at raw attribute strings.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Mapping, Union
from xml.etree.ElementTree import Element

from loguru import logger

from ..core.types import Cardinality

RECOGNIZED_ATTRIBUTES = ("val", "count", "lang", "getLabel")

XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"


@dataclass(frozen=True)
class PropertyPath:
    """Property to read values from.

    Attributes:
        prop: Full property URI.
        subkey: Key to look up in YAML-encoded literal values, if any.
    """

    prop: str
    subkey: str | None = None

    @classmethod
    def parse(cls, text: str, prefixes: Mapping[str, str]) -> "PropertyPath":
        """Parse a property path (without its leading slash).

        Args:
            text: Path such as ``acdh:hasTitle`` or ``acdh:hasExtent[pages]``.
            prefixes: Namespace prefix table; unknown prefixes stay verbatim.
        """
        prop = text
        prefix, sep, rest = prop.partition(":")
        if sep and prefix and prefix in prefixes:
            prop = prefixes[prefix] + rest

        subkey = None
        i = prop.find("[")
        if i >= 0:
            subkey = prop[i + 1 : -1]
            prop = prop[:i]
        return cls(prop=prop, subkey=subkey)


@dataclass(frozen=True)
class NowSelector:
    """Current date."""


@dataclass(frozen=True)
class SelfUriSelector:
    """The resource's own URI."""


@dataclass(frozen=True)
class OaiUriSelector:
    """The resource's OAI-PMH GetRecord URL."""


@dataclass(frozen=True)
class PropertySelector:
    """Values of a resource property."""

    path: PropertyPath
    count: Cardinality = Cardinality.ONE
    lang: bool = False
    get_label: bool = False


@dataclass(frozen=True)
class UnknownSelector:
    """Unrecognized ``val`` token; the element is dropped from the output."""

    token: str


Selector = Union[NowSelector, SelfUriSelector, OaiUriSelector, PropertySelector, UnknownSelector]

_SPECIAL_SELECTORS = {
    "NOW": NowSelector(),
    "URI": SelfUriSelector(),
    "OAIURI": OaiUriSelector(),
}


def parse_selector(attrib: Mapping[str, str], prefixes: Mapping[str, str]) -> Selector | None:
    """Parse the recognized attributes of a template element.

    Returns:
        The element's selector, or None if it has no ``val`` attribute.
    """
    val = attrib.get("val")
    if val is None:
        return None
    if val in _SPECIAL_SELECTORS:
        return _SPECIAL_SELECTORS[val]
    if val.startswith("/"):
        return PropertySelector(
            path=PropertyPath.parse(val[1:], prefixes),
            count=Cardinality.parse(attrib.get("count")),
            lang=attrib.get("lang") == "true",
            get_label=attrib.get("getLabel") == "true",
        )
    logger.warning(f"Unrecognized template value selector: {val!r}")
    return UnknownSelector(token=val)


@dataclass(frozen=True)
class TemplateNode:
    """A template element with its selector parsed out.

    ``attrib`` never contains the recognized selector attributes.
    """

    tag: str
    attrib: dict[str, str] = field(default_factory=dict)
    text: str | None = None
    tail: str | None = None
    selector: Selector | None = None
    children: tuple["TemplateNode", ...] = ()


def _strip_whitespace(text: str | None) -> str | None:
    if text is None or not text.strip():
        return None
    return text


def compile_element(element: Element, prefixes: Mapping[str, str]) -> TemplateNode:
    """Compile a parsed template element (and its subtree).

    Whitespace-only text is dropped, except in comments.
    """
    text = element.text if element.tag is ET.Comment else _strip_whitespace(element.text)
    attrib = {k: v for k, v in element.attrib.items() if k not in RECOGNIZED_ATTRIBUTES}
    return TemplateNode(
        tag=element.tag,
        attrib=attrib,
        text=text,
        tail=_strip_whitespace(element.tail),
        selector=parse_selector(element.attrib, prefixes),
        children=tuple(compile_element(child, prefixes) for child in element),
    )
