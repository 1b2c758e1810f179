"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from oaimeta.core.config import MetadataFormat
from oaimeta.metadata import LabelCache, TemplateEngine
from tests.fakes import InMemoryPropertyGraph, vocab


@pytest.fixture
def fixtures_dir() -> Path:
    """Provide path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def template_dir(fixtures_dir: Path) -> Path:
    """Provide path to the fixture templates."""
    return fixtures_dir / "templates"


@pytest.fixture
def fmt(template_dir: Path) -> MetadataFormat:
    """Provide a template-based metadata format."""
    return MetadataFormat(
        metadata_prefix="cmdi",
        schema="http://www.clarin.eu/cmd/1",
        schema_prop=vocab.SCHEMA_PROP,
        id_prop=vocab.ID_PROP,
        uri_prop=vocab.URI_PROP,
        label_prop=vocab.LABEL_PROP,
        template_dir=str(template_dir),
        default_lang="en",
        prop_nmsp={"acdh": vocab.ACDH},
        base_url="https://repo.example/oai",
    )


@pytest.fixture
def graph() -> InMemoryPropertyGraph:
    """Provide an empty in-memory property graph."""
    return InMemoryPropertyGraph()


@pytest.fixture
def label_cache() -> LabelCache:
    """Provide an empty label cache."""
    return LabelCache()


@pytest.fixture
def engine(graph: InMemoryPropertyGraph, label_cache: LabelCache) -> TemplateEngine:
    """Provide a TemplateEngine over the in-memory graph."""
    return TemplateEngine(graph, label_cache)
