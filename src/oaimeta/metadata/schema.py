"""Template selection by a resource's declared profile.

Each template file is named after a profile id, e.g.
``clarin.eu:cr1:p_1290431694580.xml``. A resource's profile URIs are
reduced to that id and the first existing template wins; otherwise the
format's default profile is used.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Sequence

import fsspec
from loguru import logger

from ..core.exceptions import TemplateNotFoundError
from ..core.types import ReferenceValue, Value
from ..graph.query import bind_query

if TYPE_CHECKING:
    from ..core.config import MetadataFormat

# Greedy prefix: the last clarin.eu token in the URI is used
_SCHEMA_ID_PATTERN = re.compile(r"^.*(clarin\.eu:[^/]+).*$")


def extract_schema_id(value: str) -> str:
    """Get the profile id from a profile URI.

    Example:
        extract_schema_id("https://catalog.clarin.eu/ds/ComponentRegistry/rest/registry/profiles/clarin.eu:cr1:p_1290431694580/xsd")
        # "clarin.eu:cr1:p_1290431694580"

    Values without a ``clarin.eu:`` token are returned unchanged.
    """
    match = _SCHEMA_ID_PATTERN.match(value)
    return match.group(1) if match else value


def template_path(template_dir: str, schema_id: str) -> str:
    """Build the template path for a profile id."""
    return f"{template_dir.rstrip('/')}/{schema_id}.xml"


class SchemaSelector:
    """Picks the template file for a resource."""

    def __init__(self, format: "MetadataFormat", fs: fsspec.AbstractFileSystem | None = None):
        """Initialize the selector.

        Args:
            format: Format providing template_dir and schema_default.
            fs: Filesystem holding templates; inferred from paths when None.
        """
        self.format = format
        self._fs = fs

    def select(self, profiles: Sequence[Value], resource: str = "") -> str:
        """Choose the template for a resource.

        Args:
            profiles: Values of the resource's schema property; only
                references are considered.
            resource: Resource URI, for error reporting.

        Returns:
            Path of the template to render.

        Raises:
            TemplateNotFoundError: If no profile has a template and no
                default profile is configured.
        """
        candidates = []
        for profile in profiles:
            if not isinstance(profile, ReferenceValue):
                continue
            schema_id = extract_schema_id(profile.uri)
            path = template_path(self.format.template_dir, schema_id)
            if self._exists(schema_id):
                logger.debug(f"Template for {resource}: {path}")
                return path
            candidates.append(path)

        if self.format.schema_default:
            path = template_path(self.format.template_dir, self.format.schema_default)
            logger.debug(f"Default template for {resource}: {path}")
            return path

        raise TemplateNotFoundError(resource, candidates)

    def _exists(self, schema_id: str) -> bool:
        # Resolved from the directory so that URI-shaped ids stay plain file names
        if self._fs is not None:
            fs, root = self._fs, self.format.template_dir
        else:
            fs, root = fsspec.core.url_to_fs(self.format.template_dir)
        try:
            return fs.exists(template_path(root, schema_id))
        except (ValueError, OSError) as e:
            logger.debug(f"No template for {schema_id!r}: {e}")
            return False


def extend_search_filter_query(format: "MetadataFormat", res_var: str = "?res") -> str:
    """Build the search filter restricting resources to servable ones.

    Returns:
        A pattern matching the enforced profile when ``schema_enforce`` is
        set; a pattern requiring the schema property when there is no
        default profile; an empty string otherwise.
    """
    if format.schema_enforce:
        return bind_query(
            "{" + res_var + " ?@ ?schemaUri . FILTER regex(str(?schemaUri), ?#)}",
            [format.schema_prop, format.schema_enforce],
        )
    if not format.schema_default:
        return bind_query(res_var + " ?@ ?schemaUri .", [format.schema_prop])
    return ""
