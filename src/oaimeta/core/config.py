"""Configuration management for oaimeta."""

import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from .exceptions import ConfigError
from .types import ProducerKind


@dataclass
class SparqlConfig:
    """SPARQL endpoint configuration."""

    endpoint: str = "http://localhost:8890/sparql"
    timeout: float = 30.0


@dataclass(frozen=True)
class MetadataFormat:
    """Metadata format descriptor.

    Attributes:
        metadata_prefix: OAI-PMH metadataPrefix of the format.
        schema: XML schema (namespace) URI of the format.
        producer: Which producer renders records in this format.
        schema_prop: Property storing a resource's profile (schema) URI.
        id_prop: Property identifying a repository resource.
        uri_prop: Property storing a resource's OAI-PMH identifier.
        label_prop: Property storing a resource's label.
        template_dir: Directory (local path or fsspec URL) holding templates.
        default_lang: Language used when a template doesn't pick one.
        prop_nmsp: Namespace prefix table for property paths in templates.
        schema_default: Profile id used when no profile template matches.
        schema_enforce: Only resources whose profile matches this are served.
        base_url: OAI-PMH endpoint URL used to build OAIURI values.
    """

    metadata_prefix: str
    schema: str = ""
    producer: ProducerKind = ProducerKind.TEMPLATE
    schema_prop: str = ""
    id_prop: str = ""
    uri_prop: str = ""
    label_prop: str = ""
    template_dir: str = "templates"
    default_lang: str = "en"
    prop_nmsp: dict[str, str] = field(default_factory=dict)
    schema_default: str | None = None
    schema_enforce: str | None = None
    base_url: str = ""

    @classmethod
    def from_dict(cls, prefix: str, data: dict[str, Any]) -> "MetadataFormat":
        """Build a format descriptor from a configuration table.

        Args:
            prefix: The metadata prefix (table name).
            data: Table contents.

        Returns:
            MetadataFormat instance.

        Raises:
            ConfigError: If the producer name or a key is unknown.
        """
        data = dict(data)
        producer = data.pop("producer", ProducerKind.TEMPLATE.value)
        try:
            kind = ProducerKind(producer)
        except ValueError:
            raise ConfigError(
                f"Unknown producer {producer!r} for format {prefix!r}"
            ) from None

        known = set(cls.__dataclass_fields__) - {"metadata_prefix", "producer"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(
                f"Unknown keys for format {prefix!r}: {', '.join(unknown)}"
            )

        return cls(metadata_prefix=prefix, producer=kind, **data)


def _default_template_dir() -> str:
    """Get default template directory."""
    return str(Path.cwd() / "templates")


@dataclass
class Config:
    """Main application configuration."""

    base_url: str = "http://localhost/oai"
    template_dir: str = field(default_factory=_default_template_dir)
    sparql: SparqlConfig = field(default_factory=SparqlConfig)
    formats: dict[str, MetadataFormat] = field(default_factory=dict)

    def get_format(self, prefix: str) -> MetadataFormat:
        """Get a metadata format by prefix.

        Raises:
            ConfigError: If no such format is configured.
        """
        try:
            return self.formats[prefix]
        except KeyError:
            available = ", ".join(sorted(self.formats)) or "(none)"
            raise ConfigError(
                f"Unknown metadata format {prefix!r}. Available: {available}"
            ) from None

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()
        config._apply_env()
        return config

    @classmethod
    def from_file(cls, path: Path | str) -> "Config":
        """Load configuration from a TOML file, then apply env overrides.

        Args:
            path: Path to the TOML configuration file.

        Raises:
            ConfigError: If the file cannot be read or parsed.
        """
        path = Path(path)
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config {path}: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e

        config = cls()
        if "base_url" in data:
            config.base_url = data["base_url"]
        if "template_dir" in data:
            config.template_dir = data["template_dir"]

        sparql = data.get("sparql", {})
        if "endpoint" in sparql:
            config.sparql.endpoint = sparql["endpoint"]
        if "timeout" in sparql:
            config.sparql.timeout = float(sparql["timeout"])

        for prefix, table in data.get("formats", {}).items():
            table = dict(table)
            # Formats inherit repository-wide settings they don't override
            table.setdefault("base_url", config.base_url)
            table.setdefault("template_dir", config.template_dir)
            config.formats[prefix] = MetadataFormat.from_dict(prefix, table)

        config._apply_env()
        return config

    @classmethod
    def from_env_or_file(cls, path: Path | str | None = None) -> "Config":
        """Load from an explicit path, OAI_CONFIG, or the environment."""
        if path is None:
            path = os.environ.get("OAI_CONFIG")
        if path:
            return cls.from_file(path)
        return cls.from_env()

    def _apply_env(self) -> None:
        """Apply environment variable overrides."""
        if url := os.environ.get("OAI_BASE_URL"):
            self.base_url = url
            self.formats = {
                k: replace(v, base_url=url) for k, v in self.formats.items()
            }

        if template_dir := os.environ.get("OAI_TEMPLATE_DIR"):
            self.template_dir = template_dir
            self.formats = {
                k: replace(v, template_dir=template_dir)
                for k, v in self.formats.items()
            }

        if endpoint := os.environ.get("OAI_SPARQL_ENDPOINT"):
            self.sparql.endpoint = endpoint
