"""Resolving references to human-readable labels.

Labels are looked up once per reference and kept for the lifetime of the
LabelCache, which normally lives as long as the worker process. Entries
are never evicted: repository labels are assumed stable while a process
runs.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from loguru import logger

from ..core.types import LiteralValue

if TYPE_CHECKING:
    from ..core.config import MetadataFormat
    from ..graph.protocols import PropertyGraph


class LabelCache:
    """Thread-safe map of reference URI -> language tag -> label."""

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, str]] = {}
        self._lock = threading.Lock()

    def get(self, uri: str) -> dict[str, str] | None:
        """Get the cached labels of a reference, or None on a miss."""
        with self._lock:
            return self._entries.get(uri)

    def store(self, uri: str, labels: dict[str, str]) -> dict[str, str]:
        """Cache the labels of a reference.

        The first stored map wins; later calls for the same reference
        return the already cached map unchanged.
        """
        with self._lock:
            return self._entries.setdefault(uri, dict(labels))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, uri: object) -> bool:
        with self._lock:
            return uri in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class LabelResolver:
    """Resolves reference URIs to labels through the property graph."""

    def __init__(self, graph: "PropertyGraph", cache: LabelCache | None = None):
        """Initialize the resolver.

        Args:
            graph: Graph used for label lookups.
            cache: Cache shared across renders; a private one when None.
        """
        self.graph = graph
        self.cache = cache if cache is not None else LabelCache()

    def resolve(self, reference: str, format: "MetadataFormat", language: str = "") -> str:
        """Get the label of a reference.

        Args:
            reference: URI to resolve.
            format: Format providing the id and label properties.
            language: Preferred label language.

        Returns:
            The label in the requested language, else the label without a
            language, else the reference itself.
        """
        labels = self.cache.get(reference)
        if labels is None:
            labels = self.cache.store(reference, self._fetch(reference, format))
        return labels.get(language, labels.get("", reference))

    def _fetch(self, reference: str, format: "MetadataFormat") -> dict[str, str]:
        logger.debug(f"Label cache miss: {reference}")
        labels: dict[str, str] = {}
        for value in self.graph.label_values(reference, format.id_prop, format.label_prop):
            if isinstance(value, LiteralValue):
                labels[value.language] = value.text
            else:
                labels[""] = str(value)
        return labels
