"""oaimeta - OAI-PMH metadata records rendered from repository metadata.

Fills XML metadata templates (e.g. CMDI profiles) with values from a
repository resource's RDF metadata.
"""

from .core import Config, MetadataFormat
from .metadata import ProducerContext, TemplateEngine, create_producer
from .services import RenderingService

__version__ = "1.0.0"

__all__ = [
    "Config",
    "MetadataFormat",
    "ProducerContext",
    "RenderingService",
    "TemplateEngine",
    "create_producer",
]
