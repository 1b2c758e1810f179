"""Template loading and caching.

Templates are read with fsspec, so the template directory can be a local
path or any fsspec URL (``memory://``, ``s3://``, ...). Compiled templates
are read-only and cached per loader.

Comments are kept, and the namespace prefixes a template declares are
registered with ElementTree so rendered records are written with the same
prefixes (``cmd:CMD`` rather than ``ns0:CMD``).
"""

from __future__ import annotations

import re
import threading
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Mapping

import fsspec
from loguru import logger

from ..core.exceptions import TemplateParseError
from .selectors import TemplateNode, compile_element

# Prefixes ElementTree reserves for generated names
_RESERVED_PREFIX = re.compile(r"^(ns\d+|xml)$")


@dataclass(frozen=True)
class Template:
    """A compiled metadata template.

    Attributes:
        path: Where the template was read from.
        root: Compiled root element.
        namespaces: Namespace prefixes declared in the template.
    """

    path: str
    root: TemplateNode
    namespaces: dict[str, str] = field(default_factory=dict)


class _TemplateTarget:
    """Parser target building the tree with comments and recording prefixes."""

    def __init__(self) -> None:
        self._builder = ET.TreeBuilder(insert_comments=True)
        self.namespaces: dict[str, str] = {}

    def start(self, tag, attrib):
        return self._builder.start(tag, attrib)

    def end(self, tag):
        return self._builder.end(tag)

    def data(self, data):
        self._builder.data(data)

    def comment(self, text):
        return self._builder.comment(text)

    def start_ns(self, prefix, uri):
        self.namespaces.setdefault(prefix, uri)

    def close(self):
        return self._builder.close()


def _register_namespaces(namespaces: Mapping[str, str]) -> None:
    for prefix, uri in namespaces.items():
        # Default namespaces stay unregistered: templates mix them with unqualified names
        if prefix and not _RESERVED_PREFIX.match(prefix):
            ET.register_namespace(prefix, uri)


def parse_template(source: str | bytes, prefixes: Mapping[str, str], path: str = "<string>") -> Template:
    """Compile a template from XML text.

    Raises:
        TemplateParseError: If the XML is not well-formed.
    """
    target = _TemplateTarget()
    parser = ET.XMLParser(target=target)
    try:
        parser.feed(source)
        element = parser.close()
    except ET.ParseError as e:
        raise TemplateParseError(path, str(e)) from e

    _register_namespaces(target.namespaces)
    return Template(path=path, root=compile_element(element, prefixes), namespaces=target.namespaces)


class TemplateLoader:
    """Loads and caches compiled templates.

    Example:
        loader = TemplateLoader()
        template = loader.load("templates/clarin.eu:cr1:p_1290431694580.xml", format.prop_nmsp)
    """

    def __init__(self, fs: fsspec.AbstractFileSystem | None = None):
        """Initialize the loader.

        Args:
            fs: Filesystem to read from; inferred from each path when None.
        """
        self._fs = fs
        self._cache: dict[tuple[str, tuple[tuple[str, str], ...]], Template] = {}
        self._lock = threading.Lock()

    def load(self, path: str, prefixes: Mapping[str, str] | None = None) -> Template:
        """Load a template, compiling it on first use.

        Args:
            path: Template file path or URL.
            prefixes: Namespace prefix table for property paths.

        Raises:
            TemplateParseError: If the file is not well-formed XML.
            OSError: If the file cannot be read.
        """
        prefixes = prefixes or {}
        key = (path, tuple(sorted(prefixes.items())))
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached

        template = parse_template(self._read(path), prefixes, path)
        logger.debug(f"Compiled template {path}")
        with self._lock:
            return self._cache.setdefault(key, template)

    def clear(self) -> None:
        """Drop all cached templates."""
        with self._lock:
            self._cache.clear()

    def _read(self, path: str) -> bytes:
        if self._fs is not None:
            with self._fs.open(path, "rb") as f:
                return f.read()
        with fsspec.open(path, "rb") as f:
            return f.read()
