"""Parameter binding for SPARQL query fragments.

Templates use two placeholders, filled positionally:

- ``?@`` - an IRI, written as ``<iri>``
- ``?#`` - a string literal, written quoted and escaped

Example:
    bind_query("?res ?@ ?schemaUri .", ["https://vocabs.example/hasSchema"])
    # '?res <https://vocabs.example/hasSchema> ?schemaUri .'
"""

from __future__ import annotations

import re
from typing import Sequence

_PLACEHOLDER = re.compile(r"\?[@#]")

# Characters not allowed inside a SPARQL IRIREF
_INVALID_IRI = re.compile(r'[\x00-\x20<>"{}|^`\\]')

_LITERAL_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def format_iri(iri: str) -> str:
    """Write an IRI in SPARQL syntax.

    Raises:
        ValueError: If the IRI contains characters SPARQL forbids.
    """
    if not iri or _INVALID_IRI.search(iri):
        raise ValueError(f"Invalid IRI: {iri!r}")
    return f"<{iri}>"


def format_literal(text: str) -> str:
    """Write a string literal in SPARQL syntax."""
    escaped = "".join(_LITERAL_ESCAPES.get(ch, ch) for ch in text)
    return f'"{escaped}"'


def bind_query(template: str, params: Sequence[str]) -> str:
    """Fill ``?@`` and ``?#`` placeholders with params, in order.

    Args:
        template: Query text with placeholders.
        params: One value per placeholder.

    Returns:
        The query with all placeholders replaced.

    Raises:
        ValueError: If the number of params doesn't match the placeholders.
    """
    placeholders = _PLACEHOLDER.findall(template)
    if len(placeholders) != len(params):
        raise ValueError(
            f"Query expects {len(placeholders)} parameters, got {len(params)}"
        )

    values = iter(params)

    def _substitute(match: re.Match[str]) -> str:
        value = next(values)
        if match.group(0) == "?@":
            return format_iri(value)
        return format_literal(value)

    return _PLACEHOLDER.sub(_substitute, template)


# Label of the entity whose id property equals the reference
LABEL_QUERY = "SELECT ?label WHERE { ?@ ^?@ / ?@ ?label . }"

VALUES_QUERY = "SELECT ?value WHERE { ?@ ?@ ?value . }"

DESCRIBE_QUERY = "CONSTRUCT { ?@ ?p ?o . } WHERE { ?@ ?p ?o . }"
